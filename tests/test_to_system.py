import numpy as np
from chemfiles import Atom as FrameAtom
from chemfiles import Frame, UnitCell

from atomsframe import ConversionConfig, IsolatedCell, PeriodicCell, convert_to_system
from atomsframe.modeling.units import ANGSTROM, ANGSTROM_PER_PS, DALTON, ELEMENTARY_CHARGE, Quantity


def _water_frame(with_velocities: bool = False) -> Frame:
    frame = Frame()
    if with_velocities:
        frame.add_velocities()
    for name, position in (("O", (0.0, 0.0, 0.0)), ("H", (0.76, 0.59, 0.0)), ("H", (-0.76, 0.59, 0.0))):
        if with_velocities:
            frame.add_atom(FrameAtom(name), position, (0.1, 0.0, -0.1))
        else:
            frame.add_atom(FrameAtom(name), position)
    return frame


def test_infinite_frame_maps_to_isolated_cell() -> None:
    system, diagnostics = convert_to_system(_water_frame())
    assert len(diagnostics) == 0
    assert system.cell == IsolatedCell(3)
    assert len(system) == 3
    assert [atom.species for atom in system.atoms] == ["O", "H", "H"]
    assert [atom.atomic_number for atom in system.atoms] == [8, 1, 1]


def test_mandatory_fields_get_canonical_units() -> None:
    system, _ = convert_to_system(_water_frame(with_velocities=True))
    atom = system.atoms[1]
    assert atom.position.unit is ANGSTROM
    assert np.allclose(atom.position.value, [0.76, 0.59, 0.0])
    assert atom.velocity.unit is ANGSTROM_PER_PS
    assert np.allclose(atom.velocity.value, [0.1, 0.0, -0.1])
    assert atom.mass.unit is DALTON
    assert atom.mass.value > 1.0
    assert atom.charge.unit is ELEMENTARY_CHARGE


def test_zero_velocities_are_omitted_unless_requested() -> None:
    frame = _water_frame()
    frame.add_velocities()
    system, _ = convert_to_system(frame)
    assert not system.has_velocities()

    system, _ = convert_to_system(frame, ConversionConfig(keep_zero_velocities=True))
    assert all(np.all(atom.velocity.value == 0.0) for atom in system.atoms)


def test_periodic_frame_maps_to_periodic_cell() -> None:
    frame = _water_frame()
    frame.cell = UnitCell([10.0, 11.0, 12.0])
    system, _ = convert_to_system(frame)
    assert isinstance(system.cell, PeriodicCell)
    assert system.cell.periodicity == (True, True, True)
    lengths = [float(np.linalg.norm(v.value)) for v in system.cell.lattice_vectors]
    assert np.allclose(lengths, [10.0, 11.0, 12.0])


def test_properties_come_back_without_units_except_catalog_keys() -> None:
    frame = _water_frame()
    frame.atoms[0]["spin"] = 0.5
    frame.atoms[0]["label"] = "oxygen"
    frame["charge"] = 1.0
    frame["multiplicity"] = 3.0
    frame["temperature"] = 300.0
    frame["converged"] = False
    system, diagnostics = convert_to_system(frame)

    assert len(diagnostics) == 0
    oxygen = system.atoms[0]
    assert oxygen.properties["spin"] == 0.5
    assert oxygen.properties["label"] == "oxygen"
    assert oxygen.properties["vdw_radius"].unit is ANGSTROM
    assert oxygen.properties["covalent_radius"].value > 0.0

    assert system.properties["charge"] == Quantity(1.0, ELEMENTARY_CHARGE)
    assert system.properties["multiplicity"] == 3
    assert system.properties["temperature"] == 300.0
    assert system.properties["converged"] is False


def test_vector_properties_read_back_as_float_arrays() -> None:
    frame = _water_frame()
    frame.atoms[0]["dipole"] = (0.1, 0.2, 0.3)
    frame.atoms[1]["vdw_radius"] = (1.0, 1.0, 1.0)
    frame["box_shift"] = (1.0, 2.0, 3.0)
    frame["charge"] = (1.0, 2.0, 3.0)
    frame["multiplicity"] = (1.0, 1.0, 1.0)
    system, diagnostics = convert_to_system(frame)

    assert len(diagnostics) == 0
    for value, expected in (
        (system.atoms[0].properties["dipole"], [0.1, 0.2, 0.3]),
        (system.atoms[1].properties["vdw_radius"], [1.0, 1.0, 1.0]),
        (system.properties["box_shift"], [1.0, 2.0, 3.0]),
        (system.properties["charge"], [1.0, 2.0, 3.0]),
        (system.properties["multiplicity"], [1.0, 1.0, 1.0]),
    ):
        assert isinstance(value, np.ndarray)
        assert np.allclose(value, expected)


def test_stored_radius_property_is_not_replaced_by_table_value() -> None:
    frame = _water_frame()
    frame.atoms[0]["vdw_radius"] = 9.0
    system, _ = convert_to_system(frame)
    assert system.atoms[0].properties["vdw_radius"] == Quantity(9.0, ANGSTROM)
    assert system.atoms[1].properties["vdw_radius"].value != 9.0
