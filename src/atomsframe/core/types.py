"""Open-side data structures: atoms, cells and systems with property maps."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from atomsframe.core.elements import atomic_number as _lookup_atomic_number
from atomsframe.modeling.units import ELEMENTARY_CHARGE, Dimension, Quantity


Array = np.ndarray
Periodicity = tuple[bool, bool, bool]


def _zero_charge() -> Quantity:
    return Quantity(0.0, ELEMENTARY_CHARGE)


@dataclass(frozen=True)
class Atom:
    """One atom: mandatory schema fields plus an open property map.

    ``mass`` and ``position`` are allowed to be ``None`` here so that an
    incomplete atom can be represented; converters reject it.
    """

    species: str
    position: Quantity | None
    mass: Quantity | None
    charge: Quantity | None = field(default_factory=_zero_charge)
    velocity: Quantity | None = None
    properties: Mapping[str, Any] = field(default_factory=dict)
    atomic_number: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.species, str):
            raise TypeError("Atom.species must be a string symbol.")
        if not isinstance(self.properties, Mapping):
            raise TypeError("Atom.properties must be a mapping.")
        if self.atomic_number is None:
            object.__setattr__(self, "atomic_number", _lookup_atomic_number(self.species))
        elif self.atomic_number < 0:
            raise ValueError("Atom.atomic_number must be non-negative.")


@dataclass(frozen=True)
class IsolatedCell:
    """Non-periodic cell of a given dimensionality."""

    dimensionality: int = 3
    periodicity: Periodicity = (False, False, False)

    def __post_init__(self) -> None:
        if self.dimensionality <= 0:
            raise ValueError("IsolatedCell.dimensionality must be positive.")
        if len(self.periodicity) != 3:
            raise ValueError("IsolatedCell.periodicity must have three flags.")


@dataclass(frozen=True)
class PeriodicCell:
    """Cell spanned by three lattice vectors with per-axis periodicity flags."""

    lattice_vectors: tuple[Quantity, Quantity, Quantity]
    periodicity: Periodicity = (True, True, True)

    def __post_init__(self) -> None:
        if len(self.lattice_vectors) != 3:
            raise ValueError("PeriodicCell needs exactly three lattice vectors.")
        for vector in self.lattice_vectors:
            if not isinstance(vector, Quantity) or vector.dimension is not Dimension.LENGTH:
                raise TypeError("Lattice vectors must be length quantities.")
            if np.shape(vector.value) != (3,):
                raise ValueError("Each lattice vector must have shape (3,).")
        if len(self.periodicity) != 3:
            raise ValueError("PeriodicCell.periodicity must have three flags.")
        object.__setattr__(self, "periodicity", tuple(bool(p) for p in self.periodicity))

    @property
    def is_fully_periodic(self) -> bool:
        return all(self.periodicity)


Cell = IsolatedCell | PeriodicCell


@dataclass(frozen=True)
class AbstractSystem:
    """Ordered atoms, a cell and system-level properties."""

    atoms: tuple[Atom, ...]
    cell: Cell = field(default_factory=IsolatedCell)
    properties: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "atoms", tuple(self.atoms))
        for atom in self.atoms:
            if not isinstance(atom, Atom):
                raise TypeError("AbstractSystem.atoms must contain Atom instances.")
        if not isinstance(self.cell, (IsolatedCell, PeriodicCell)):
            raise TypeError("AbstractSystem.cell must be an IsolatedCell or PeriodicCell.")
        if not isinstance(self.properties, Mapping):
            raise TypeError("AbstractSystem.properties must be a mapping.")

    def __len__(self) -> int:
        return len(self.atoms)

    def has_velocities(self) -> bool:
        return any(atom.velocity is not None for atom in self.atoms)
