"""Abstract system -> chemfiles frame conversion."""

from __future__ import annotations

import logging
from typing import Any

from chemfiles import Frame

from atomsframe.core.catalog import (
    MANDATORY_ATOM_FIELDS,
    READ_ONLY_ATOM_PROPERTIES,
    FilterOutcome,
    filter_value,
    property_spec,
    quantity_in,
)
from atomsframe.core.cell import cell_to_matrix
from atomsframe.core.diagnostics import DiagnosticKind, Diagnostics
from atomsframe.core.elements import element_symbol
from atomsframe.core.types import AbstractSystem, Atom
from atomsframe.modeling import frame_access
from atomsframe.modeling.schema import ConversionConfig
from atomsframe.modeling.units import Dimension
from atomsframe.modeling.validators import validate_system


logger = logging.getLogger(__name__)

_UNSUPPORTED_KIND = {
    FilterOutcome.UNSUPPORTED_TYPE: DiagnosticKind.UNSUPPORTED_TYPE,
    FilterOutcome.UNSUPPORTED_UNIT: DiagnosticKind.UNSUPPORTED_UNIT,
}


def _filtered(
    key: str, raw: Any, diagnostics: Diagnostics, *, atom: bool, atom_index: int | None = None
) -> tuple[bool, Any]:
    spec = property_spec(key, atom=atom)
    result = filter_value(key, raw, spec)
    suffix = "" if atom_index is None else f" (atom {atom_index})"
    if not result.supported:
        diagnostics.warn(_UNSUPPORTED_KIND[result.outcome], result.reason + suffix, key=key, atom_index=atom_index)
        return False, None
    # Read-only keys are only compared, never stored, so no unit is assumed for them.
    if result.outcome is FilterOutcome.UNIT_ASSUMED and spec.mutable:
        diagnostics.warn(DiagnosticKind.UNIT_ASSUMED, result.reason + suffix, key=key, atom_index=atom_index)
    return True, result.value


def _frame_atom(atom: Atom, index: int, diagnostics: Diagnostics):
    element = element_symbol(atom.atomic_number) or atom.species
    frame_atom = frame_access.make_atom(
        atom.species,
        element,
        quantity_in(atom.mass, Dimension.MASS),
        quantity_in(atom.charge, Dimension.CHARGE),
    )
    for key, raw in atom.properties.items():
        if key in MANDATORY_ATOM_FIELDS:
            continue
        ok, value = _filtered(key, raw, diagnostics, atom=True, atom_index=index)
        if not ok:
            continue
        read_only = key in READ_ONLY_ATOM_PROPERTIES
        outcome = frame_access.set_atom_property(frame_atom, key, value, read_only=read_only)
        if outcome.applied:
            continue
        if read_only:
            diagnostics.warn(
                DiagnosticKind.READ_ONLY_PROPERTY,
                f"Atom {key} in the frame cannot be mutated (atom {index}): {outcome.reason}",
                key=key,
                atom_index=index,
            )
        else:
            diagnostics.warn(
                DiagnosticKind.UNSUPPORTED_TYPE,
                f"Frame rejected atom property {key} (atom {index}): {outcome.reason}",
                key=key,
                atom_index=index,
            )
    return frame_atom


def convert_to_frame(
    system: AbstractSystem, config: ConversionConfig | None = None
) -> tuple[Frame, Diagnostics]:
    """Build a new frame from ``system``.

    Lossy steps are returned as warnings; a structurally incomplete atom raises
    :class:`ConversionError` and no frame is returned.
    """

    config = ConversionConfig() if config is None else config
    diagnostics = Diagnostics()
    validate_system(system, diagnostics)

    matrix = cell_to_matrix(
        system.cell,
        diagnostics,
        expected_dimensionality=config.expected_dimensionality,
        strict=config.strict_boundaries,
    )

    frame = frame_access.new_frame()
    frame_access.set_cell_matrix(frame, matrix)
    for index, atom in enumerate(system.atoms):
        frame_atom = _frame_atom(atom, index, diagnostics)
        velocity = None if atom.velocity is None else quantity_in(atom.velocity, Dimension.VELOCITY)
        frame_access.add_atom(frame, frame_atom, quantity_in(atom.position, Dimension.LENGTH), velocity)

    for key, raw in system.properties.items():
        ok, value = _filtered(key, raw, diagnostics, atom=False)
        if not ok:
            continue
        outcome = frame_access.set_frame_property(frame, key, value)
        if not outcome.applied:
            diagnostics.warn(
                DiagnosticKind.UNSUPPORTED_TYPE,
                f"Frame rejected system property {key}: {outcome.reason}",
                key=key,
            )

    logger.debug("Converted system with %d atoms to frame (%d diagnostics).", len(system), len(diagnostics))
    return frame, diagnostics
