"""Chemfiles frame -> abstract system conversion."""

from __future__ import annotations

import logging

import numpy as np
from chemfiles import CellShape, Frame

from atomsframe.core.catalog import ATOM_PROPERTIES, READ_ONLY_ATOM_PROPERTIES, property_spec, restore_value
from atomsframe.core.cell import matrix_to_cell
from atomsframe.core.diagnostics import Diagnostics
from atomsframe.core.types import AbstractSystem, Atom
from atomsframe.modeling import frame_access
from atomsframe.modeling.schema import ConversionConfig
from atomsframe.modeling.units import ANGSTROM, ANGSTROM_PER_PS, DALTON, ELEMENTARY_CHARGE, attach_unit


logger = logging.getLogger(__name__)


def convert_to_system(
    frame: Frame, config: ConversionConfig | None = None
) -> tuple[AbstractSystem, Diagnostics]:
    """Build a new abstract system from ``frame``.

    Every frame value kind is representable on the open side, so the returned
    diagnostics are normally empty. Numeric properties come back without
    units unless the property catalog knows their dimension.
    """

    config = ConversionConfig() if config is None else config
    diagnostics = Diagnostics()

    cell = matrix_to_cell(
        frame_access.cell_matrix(frame),
        infinite=frame_access.cell_shape(frame) == CellShape.Infinite,
    )
    positions = frame_access.positions(frame)
    velocities = frame_access.velocities(frame)
    if velocities is not None and not config.keep_zero_velocities and not np.any(velocities):
        velocities = None

    atoms = []
    for index in range(frame_access.n_atoms(frame)):
        frame_atom = frame.atoms[index]
        properties = {
            key: restore_value(value, property_spec(key, atom=True))
            for key, value in frame_access.atom_properties(frame_atom).items()
        }
        for key, radius in frame_access.read_only_attributes(frame_atom, READ_ONLY_ATOM_PROPERTIES).items():
            if key not in properties and radius > 0.0:
                properties[key] = restore_value(radius, ATOM_PROPERTIES[key])
        atoms.append(
            Atom(
                species=frame_atom.name,
                position=attach_unit(positions[index], ANGSTROM),
                velocity=None if velocities is None else attach_unit(velocities[index], ANGSTROM_PER_PS),
                mass=attach_unit(frame_atom.mass, DALTON),
                charge=attach_unit(frame_atom.charge, ELEMENTARY_CHARGE),
                properties=properties,
                atomic_number=int(frame_atom.atomic_number),
            )
        )

    system_properties = {
        key: restore_value(value, property_spec(key, atom=False))
        for key, value in frame_access.frame_properties(frame).items()
    }
    system = AbstractSystem(tuple(atoms), cell, system_properties)
    logger.debug("Converted frame with %d atoms to system (%d diagnostics).", len(atoms), len(diagnostics))
    return system, diagnostics
