"""Mapping between open-side cells and frame unit cells.

Convention: the frame cell matrix stores the lattice vectors as columns,
``matrix[:, i] == lattice_vectors[i]`` in Å. The reverse mapping reads the
columns back, so any matrix round-trips unchanged.
"""

from __future__ import annotations

import numpy as np

from atomsframe.core.diagnostics import DiagnosticKind, Diagnostics
from atomsframe.core.types import Cell, IsolatedCell, PeriodicCell
from atomsframe.modeling.units import ANGSTROM, attach_unit, to_canonical


Array = np.ndarray
FULL_PERIODICITY = (True, True, True)


def cell_to_matrix(
    cell: Cell,
    diagnostics: Diagnostics,
    *,
    expected_dimensionality: int = 3,
    strict: bool = False,
) -> Array:
    """Frame cell matrix for ``cell``; all zeros stands for an infinite cell."""

    if isinstance(cell, IsolatedCell):
        problems = []
        if any(cell.periodicity):
            problems.append(f"periodicity {tuple(cell.periodicity)} on an isolated cell")
        if cell.dimensionality != expected_dimensionality:
            problems.append(
                f"isolated dimensionality {cell.dimensionality} (expected {expected_dimensionality})"
            )
        if problems:
            diagnostics.warn(
                DiagnosticKind.BOUNDARY_CONDITIONS,
                "Ignoring specified boundary conditions: " + "; ".join(problems),
                key="cell",
            )
        return np.zeros((3, 3), dtype=float)

    if not cell.is_fully_periodic:
        return _unrepresentable(
            diagnostics,
            f"Ignoring specified boundary conditions: periodicity {cell.periodicity} "
            "is not representable in a frame, using an infinite cell",
            strict,
        )

    columns = [np.asarray(to_canonical(v, ANGSTROM), dtype=float) for v in cell.lattice_vectors]
    matrix = np.column_stack(columns)
    scale = float(np.prod(np.linalg.norm(matrix, axis=0)))
    if abs(float(np.linalg.det(matrix))) <= 1e-12 * scale:
        return _unrepresentable(
            diagnostics,
            "Ignoring specified boundary conditions: lattice vectors span a zero-volume cell, "
            "using an infinite cell",
            strict,
        )
    return matrix


def _unrepresentable(diagnostics: Diagnostics, message: str, strict: bool) -> Array:
    if strict:
        raise diagnostics.fail(DiagnosticKind.BOUNDARY_CONDITIONS, message, key="cell")
    diagnostics.warn(DiagnosticKind.BOUNDARY_CONDITIONS, message, key="cell")
    return np.zeros((3, 3), dtype=float)


def matrix_to_cell(matrix: Array, infinite: bool) -> Cell:
    if infinite:
        return IsolatedCell(3)
    matrix = np.asarray(matrix, dtype=float)
    vectors = tuple(attach_unit(matrix[:, i].copy(), ANGSTROM) for i in range(3))
    return PeriodicCell(vectors, FULL_PERIODICITY)
