"""Unit-attached quantities and explicit conversion to canonical frame units."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np


# CODATA 2018 constants (SI).
BOHR_M = 5.29177210903e-11
ELECTRON_MASS_KG = 9.1093837015e-31
AMU_KG = 1.66053906660e-27
EV_J = 1.602176634e-19
ELEMENTARY_CHARGE_C = 1.602176634e-19
HARTREE_J = 4.3597447222071e-18
AVOGADRO = 6.02214076e23
ATOMIC_TIME_S = 2.4188843265857e-17


class Dimension(str, Enum):
    LENGTH = "length"
    VELOCITY = "velocity"
    MASS = "mass"
    CHARGE = "charge"
    TIME = "time"
    ENERGY = "energy"


@dataclass(frozen=True)
class Unit:
    """A unit tag: ``scale`` multiplies a value into the reference unit of ``dimension``.

    Reference units are Å, Å/ps, u, e, ps and eV.
    """

    symbol: str
    dimension: Dimension
    scale: float

    def __str__(self) -> str:
        return self.symbol


ANGSTROM = Unit("Å", Dimension.LENGTH, 1.0)
NANOMETER = Unit("nm", Dimension.LENGTH, 10.0)
PICOMETER = Unit("pm", Dimension.LENGTH, 0.01)
METER = Unit("m", Dimension.LENGTH, 1.0e10)
BOHR = Unit("bohr", Dimension.LENGTH, BOHR_M * 1.0e10)

ANGSTROM_PER_PS = Unit("Å/ps", Dimension.VELOCITY, 1.0)
ANGSTROM_PER_FS = Unit("Å/fs", Dimension.VELOCITY, 1.0e3)
NANOMETER_PER_PS = Unit("nm/ps", Dimension.VELOCITY, 10.0)
METER_PER_S = Unit("m/s", Dimension.VELOCITY, 1.0e-2)
BOHR_PER_ATOMIC_TIME = Unit("bohr/t_au", Dimension.VELOCITY, BOHR_M * 1.0e10 / (ATOMIC_TIME_S * 1.0e12))

DALTON = Unit("u", Dimension.MASS, 1.0)
KILOGRAM = Unit("kg", Dimension.MASS, 1.0 / AMU_KG)
ELECTRON_MASS = Unit("m_e", Dimension.MASS, ELECTRON_MASS_KG / AMU_KG)

ELEMENTARY_CHARGE = Unit("e", Dimension.CHARGE, 1.0)
COULOMB = Unit("C", Dimension.CHARGE, 1.0 / ELEMENTARY_CHARGE_C)

PICOSECOND = Unit("ps", Dimension.TIME, 1.0)
FEMTOSECOND = Unit("fs", Dimension.TIME, 1.0e-3)

ELECTRONVOLT = Unit("eV", Dimension.ENERGY, 1.0)
HARTREE = Unit("Eh", Dimension.ENERGY, HARTREE_J / EV_J)
KJ_PER_MOL = Unit("kJ/mol", Dimension.ENERGY, 1.0e3 / AVOGADRO / EV_J)

# Canonical units of the frame schema, by dimension.
CANONICAL_UNITS: dict[Dimension, Unit] = {
    Dimension.LENGTH: ANGSTROM,
    Dimension.VELOCITY: ANGSTROM_PER_PS,
    Dimension.MASS: DALTON,
    Dimension.CHARGE: ELEMENTARY_CHARGE,
}

_SYMBOLS: dict[str, Unit] = {
    unit.symbol: unit
    for unit in (
        ANGSTROM,
        NANOMETER,
        PICOMETER,
        METER,
        BOHR,
        ANGSTROM_PER_PS,
        ANGSTROM_PER_FS,
        NANOMETER_PER_PS,
        METER_PER_S,
        BOHR_PER_ATOMIC_TIME,
        DALTON,
        KILOGRAM,
        ELECTRON_MASS,
        ELEMENTARY_CHARGE,
        COULOMB,
        PICOSECOND,
        FEMTOSECOND,
        ELECTRONVOLT,
        HARTREE,
        KJ_PER_MOL,
    )
}
_ALIASES = {"A": "Å", "angstrom": "Å", "A/ps": "Å/ps", "A/fs": "Å/fs", "amu": "u", "Da": "u", "e_au": "e"}


def unit_from_symbol(symbol: str) -> Unit:
    key = _ALIASES.get(symbol.strip(), symbol.strip())
    try:
        return _SYMBOLS[key]
    except KeyError as exc:
        available = ", ".join(sorted(_SYMBOLS))
        raise KeyError(f"Unknown unit '{symbol}'. Known units: {available}") from exc


@dataclass(frozen=True)
class Quantity:
    """A scalar or array value tagged with a physical unit."""

    value: float | np.ndarray
    unit: Unit

    def __post_init__(self) -> None:
        if not isinstance(self.unit, Unit):
            raise TypeError("Quantity.unit must be a Unit instance.")

    @property
    def dimension(self) -> Dimension:
        return self.unit.dimension

    @property
    def is_scalar(self) -> bool:
        return np.ndim(self.value) == 0

    def to(self, target: Unit) -> Quantity:
        return Quantity(to_canonical(self, target), target)

    def __repr__(self) -> str:
        return f"Quantity({self.value!r}, {self.unit.symbol!r})"


def to_canonical(quantity: Quantity, target_unit: Unit) -> float | np.ndarray:
    """Strip ``quantity`` to a bare number expressed in ``target_unit``."""

    if quantity.unit.dimension is not target_unit.dimension:
        raise ValueError(
            f"Cannot convert {quantity.unit.dimension.value} quantity "
            f"({quantity.unit.symbol}) to {target_unit.dimension.value} unit {target_unit.symbol}."
        )
    factor = quantity.unit.scale / target_unit.scale
    if quantity.is_scalar:
        return float(quantity.value) * factor
    return np.asarray(quantity.value, dtype=float) * factor


def attach_unit(number: float | np.ndarray, unit: Unit) -> Quantity:
    if np.ndim(number) == 0:
        return Quantity(float(number), unit)
    return Quantity(np.array(number, dtype=float), unit)


def canonical_unit(dimension: Dimension) -> Unit | None:
    return CANONICAL_UNITS.get(dimension)
