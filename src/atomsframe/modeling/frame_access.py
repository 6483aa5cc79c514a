"""Thin adapter over ``chemfiles`` frames.

This is the only module that mutates chemfiles objects. Property setters
report an explicit :class:`SetResult` instead of raising, so converters can
turn rejected mutations into diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from chemfiles import Atom as FrameAtom
from chemfiles import CellShape, ChemfilesError, Frame, UnitCell


Array = np.ndarray


@dataclass(frozen=True)
class SetResult:
    applied: bool
    reason: str = ""

    @classmethod
    def ok(cls) -> SetResult:
        return cls(True)

    @classmethod
    def rejected(cls, reason: str) -> SetResult:
        return cls(False, reason)


def new_frame() -> Frame:
    """Empty frame that always carries a (zero-initialised) velocity array."""

    frame = Frame()
    frame.add_velocities()
    return frame


def make_atom(name: str, element: str, mass: float, charge: float) -> FrameAtom:
    atom = FrameAtom(name, element)
    atom.mass = float(mass)
    atom.charge = float(charge)
    return atom


def add_atom(frame: Frame, atom: FrameAtom, position: Array, velocity: Array | None) -> None:
    pos = tuple(float(x) for x in np.asarray(position, dtype=float))
    vel = (0.0, 0.0, 0.0) if velocity is None else tuple(float(x) for x in np.asarray(velocity, dtype=float))
    frame.add_atom(atom, pos, vel)


def _set_read_only(atom: FrameAtom, key: str, value: Any) -> SetResult:
    current = getattr(atom, key)
    if isinstance(value, float) and np.isclose(current, value, rtol=1e-12, atol=0.0):
        return SetResult.ok()
    try:
        setattr(atom, key, value)
    except AttributeError:
        return SetResult.rejected(f"{key} is derived from the atom type and cannot be mutated")
    return SetResult.ok()


def set_atom_property(
    atom: FrameAtom, key: str, value: str | float | bool, *, read_only: bool = False
) -> SetResult:
    """Set an atom property; ``read_only`` keys only accept their derived value."""

    if read_only:
        return _set_read_only(atom, key, value)
    try:
        atom[key] = value
    except (ChemfilesError, TypeError, ValueError) as exc:
        return SetResult.rejected(str(exc))
    return SetResult.ok()


def set_frame_property(frame: Frame, key: str, value: str | float | bool) -> SetResult:
    try:
        frame[key] = value
    except (ChemfilesError, TypeError, ValueError) as exc:
        return SetResult.rejected(str(exc))
    return SetResult.ok()


def set_cell_matrix(frame: Frame, matrix: Array) -> CellShape:
    """Install a cell from a 3x3 matrix whose columns are the lattice vectors.

    The shape is derived by chemfiles: diagonal matrices are orthorhombic,
    all-zero matrices infinite, anything else triclinic.
    """

    matrix = np.asarray(matrix, dtype=float)
    if matrix.shape != (3, 3):
        raise ValueError("Cell matrix must have shape (3, 3).")
    if not np.any(matrix):
        if frame.cell.shape != CellShape.Infinite:
            frame.cell = UnitCell([0.0, 0.0, 0.0])
    else:
        frame.cell = UnitCell(matrix)
    return frame.cell.shape


def cell_shape(frame: Frame) -> CellShape:
    return frame.cell.shape


def cell_matrix(frame: Frame) -> Array:
    return np.array(frame.cell.matrix, dtype=float)


def n_atoms(frame: Frame) -> int:
    return len(frame.atoms)


def positions(frame: Frame) -> Array:
    if n_atoms(frame) == 0:
        return np.zeros((0, 3), dtype=float)
    return np.array(frame.positions, dtype=float)


def velocities(frame: Frame) -> Array | None:
    if not frame.has_velocities():
        return None
    if n_atoms(frame) == 0:
        return np.zeros((0, 3), dtype=float)
    return np.array(frame.velocities, dtype=float)


def _plain(value: Any) -> Any:
    if isinstance(value, (bool, str)):
        return value
    if np.ndim(value) > 0:
        return np.asarray(value, dtype=float)
    return float(value)


def atom_properties(atom: FrameAtom) -> dict[str, Any]:
    return {name: _plain(atom[name]) for name in atom.list_properties()}


def frame_properties(frame: Frame) -> dict[str, Any]:
    return {name: _plain(frame[name]) for name in frame.list_properties()}


def read_only_attributes(atom: FrameAtom, keys: tuple[str, ...]) -> dict[str, float]:
    return {key: float(getattr(atom, key)) for key in keys}
