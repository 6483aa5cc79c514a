"""Validation of the mandatory atom schema before a frame is built."""

from __future__ import annotations

import numpy as np

from atomsframe.core.diagnostics import DiagnosticKind, Diagnostics
from atomsframe.core.types import AbstractSystem
from atomsframe.modeling.units import Dimension, Quantity


_MANDATORY_FIELDS = {
    "position": (Dimension.LENGTH, (3,)),
    "velocity": (Dimension.VELOCITY, (3,)),
    "mass": (Dimension.MASS, ()),
    "charge": (Dimension.CHARGE, ()),
}


def _field_problem(name: str, value: object) -> str | None:
    dimension, shape = _MANDATORY_FIELDS[name]
    if value is None:
        return None if name == "velocity" else f"is missing mandatory field {name}"
    if not isinstance(value, Quantity) or value.dimension is not dimension:
        return f"field {name} must be a {dimension.value} quantity"
    if np.shape(value.value) != shape:
        return f"field {name} must have shape {shape}, got {np.shape(value.value)}"
    if not np.all(np.isfinite(np.asarray(value.value, dtype=float))):
        return f"field {name} contains non-finite values"
    return None


def validate_system(system: AbstractSystem, diagnostics: Diagnostics | None = None) -> None:
    """Raise :class:`ConversionError` on the first atom whose schema is unfillable."""

    diagnostics = Diagnostics() if diagnostics is None else diagnostics
    for index, atom in enumerate(system.atoms):
        if not atom.species.strip():
            raise diagnostics.fail(
                DiagnosticKind.STRUCTURE,
                f"Atom {index} has an empty species symbol.",
                key="species",
                atom_index=index,
            )
        for name in _MANDATORY_FIELDS:
            problem = _field_problem(name, getattr(atom, name))
            if problem is not None:
                raise diagnostics.fail(
                    DiagnosticKind.STRUCTURE,
                    f"Atom {index} {problem}.",
                    key=name,
                    atom_index=index,
                )
