"""Approximate comparison of abstract systems, used for round-trip checks."""

from __future__ import annotations

from collections.abc import Collection, Mapping
from typing import Any

import numpy as np

from atomsframe.core.types import AbstractSystem, Cell, IsolatedCell, PeriodicCell
from atomsframe.modeling.units import Quantity, to_canonical


def _close(a: Any, b: Any, rtol: float, atol: float) -> bool:
    if isinstance(a, Quantity) or isinstance(b, Quantity):
        if not (isinstance(a, Quantity) and isinstance(b, Quantity)):
            return False
        if a.dimension is not b.dimension:
            return False
        a, b = a.value, to_canonical(b, a.unit)
    if isinstance(a, (bool, str, np.bool_)) or isinstance(b, (bool, str, np.bool_)):
        return type(a) is type(b) and a == b
    try:
        av = np.asarray(a, dtype=float)
        bv = np.asarray(b, dtype=float)
    except (TypeError, ValueError):
        return a == b
    return av.shape == bv.shape and bool(np.allclose(av, bv, rtol=rtol, atol=atol))


def _compare_cells(a: Cell, b: Cell, rtol: float, atol: float) -> list[str]:
    if isinstance(a, IsolatedCell) and isinstance(b, IsolatedCell):
        if a.dimensionality != b.dimensionality:
            return [f"cell: isolated dimensionality {a.dimensionality} != {b.dimensionality}"]
        return []
    if isinstance(a, PeriodicCell) and isinstance(b, PeriodicCell):
        diffs = []
        if a.periodicity != b.periodicity:
            diffs.append(f"cell: periodicity {a.periodicity} != {b.periodicity}")
        for i, (va, vb) in enumerate(zip(a.lattice_vectors, b.lattice_vectors)):
            if not _close(va, vb, rtol, atol):
                diffs.append(f"cell: lattice vector {i} differs ({va!r} vs {vb!r})")
        return diffs
    return [f"cell: {type(a).__name__} != {type(b).__name__}"]


def _compare_properties(
    where: str, a: Mapping[str, Any], b: Mapping[str, Any], ignore: Collection[str], rtol: float, atol: float
) -> list[str]:
    keys_a = set(a) - set(ignore)
    keys_b = set(b) - set(ignore)
    diffs = [f"{where}: property {key} only in first system" for key in sorted(keys_a - keys_b)]
    diffs += [f"{where}: property {key} only in second system" for key in sorted(keys_b - keys_a)]
    for key in sorted(keys_a & keys_b):
        if not _close(a[key], b[key], rtol, atol):
            diffs.append(f"{where}: property {key} differs ({a[key]!r} vs {b[key]!r})")
    return diffs


def compare_systems(
    a: AbstractSystem,
    b: AbstractSystem,
    *,
    rtol: float = 1e-12,
    atol: float = 1e-12,
    ignore_atom_properties: Collection[str] = (),
    ignore_system_properties: Collection[str] = (),
) -> list[str]:
    """Human-readable differences between two systems; empty when they match."""

    if len(a) != len(b):
        return [f"atom count {len(a)} != {len(b)}"]

    diffs = _compare_cells(a.cell, b.cell, rtol, atol)
    for i, (atom_a, atom_b) in enumerate(zip(a.atoms, b.atoms)):
        where = f"atom {i}"
        if atom_a.species != atom_b.species:
            diffs.append(f"{where}: species {atom_a.species!r} != {atom_b.species!r}")
        if atom_a.atomic_number != atom_b.atomic_number:
            diffs.append(f"{where}: atomic number {atom_a.atomic_number} != {atom_b.atomic_number}")
        for name in ("position", "velocity", "mass", "charge"):
            va, vb = getattr(atom_a, name), getattr(atom_b, name)
            if va is None and vb is None:
                continue
            if va is None or vb is None or not _close(va, vb, rtol, atol):
                diffs.append(f"{where}: {name} differs ({va!r} vs {vb!r})")
        diffs += _compare_properties(where, atom_a.properties, atom_b.properties, ignore_atom_properties, rtol, atol)
    diffs += _compare_properties("system", a.properties, b.properties, ignore_system_properties, rtol, atol)
    return diffs


def systems_approx_equal(a: AbstractSystem, b: AbstractSystem, **kwargs: Any) -> bool:
    return not compare_systems(a, b, **kwargs)
