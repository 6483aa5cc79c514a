import numpy as np
import pytest

from atomsframe import AbstractSystem, Atom, IsolatedCell, PeriodicCell
from atomsframe.modeling.units import (
    ANGSTROM,
    ANGSTROM_PER_FS,
    ANGSTROM_PER_PS,
    DALTON,
    ELEMENTARY_CHARGE,
    NANOMETER,
    Quantity,
)


SPECIES = ("H", "H", "C", "N", "He")
MASSES = (1.00784, 1.00784, 12.011, 14.007, 4.0026)


def _atoms(with_velocity: bool, extra_atom_properties: dict) -> tuple[Atom, ...]:
    rng = np.random.default_rng(7)
    atoms = []
    for i, (symbol, mass) in enumerate(zip(SPECIES, MASSES)):
        velocity = None
        if with_velocity:
            # Mixed velocity units exercise canonical conversion.
            unit = ANGSTROM_PER_FS if i % 2 else ANGSTROM_PER_PS
            velocity = Quantity(rng.normal(size=3) * (1e-3 if i % 2 else 1.0), unit)
        properties = {"magnetic_moment": float(rng.normal())}
        properties.update(extra_atom_properties.get(i, {}))
        atoms.append(
            Atom(
                species=symbol,
                position=Quantity(rng.uniform(0.0, 0.5, size=3), NANOMETER),
                mass=Quantity(mass, DALTON),
                charge=Quantity(float(rng.uniform(-1.0, 1.0)), ELEMENTARY_CHARGE),
                velocity=velocity,
                properties=properties,
            )
        )
    return tuple(atoms)


def _triclinic_vectors() -> tuple[Quantity, Quantity, Quantity]:
    return (
        Quantity(np.array([5.0, 0.0, 0.0]), ANGSTROM),
        Quantity(np.array([1.0, 6.0, 0.0]), ANGSTROM),
        Quantity(np.array([0.5, 0.5, 7.0]), ANGSTROM),
    )


@pytest.fixture
def triclinic_vectors():
    return _triclinic_vectors()


@pytest.fixture
def make_system():
    """Factory for sample systems; keyword arguments toggle the lossy features."""

    def _make(
        *,
        infinite: bool = False,
        with_velocity: bool = True,
        periodicity: tuple[bool, bool, bool] = (True, True, True),
        cell_vectors=None,
        extra_atom_properties: dict | None = None,
        extra_system_properties: dict | None = None,
    ) -> AbstractSystem:
        if infinite:
            cell = IsolatedCell(3)
        else:
            cell = PeriodicCell(cell_vectors or _triclinic_vectors(), periodicity)
        properties = {
            "charge": Quantity(-1.0, ELEMENTARY_CHARGE),
            "multiplicity": 2,
            "extra_data": 42.0,
            "label": "sample",
            "relaxed": True,
        }
        properties.update(extra_system_properties or {})
        return AbstractSystem(_atoms(with_velocity, extra_atom_properties or {}), cell, properties)

    return _make
