from chemfiles import CellShape

from atomsframe import (
    DiagnosticKind,
    compare_systems,
    convert_to_frame,
    convert_to_system,
    systems_approx_equal,
)
from atomsframe.modeling.units import ELEMENTARY_CHARGE, Quantity

LOSSY_ATOM_PROPERTIES = ("vdw_radius", "covalent_radius")


def test_periodic_round_trip(make_system) -> None:
    system = make_system()
    frame, forward = convert_to_frame(system)
    restored, backward = convert_to_system(frame)
    assert len(forward) == 0
    assert len(backward) == 0
    diffs = compare_systems(system, restored, rtol=1e-12, ignore_atom_properties=LOSSY_ATOM_PROPERTIES)
    assert diffs == []


def test_infinite_round_trip_without_velocity(make_system) -> None:
    system = make_system(infinite=True, with_velocity=False)
    frame, _ = convert_to_frame(system)
    assert frame.cell.shape == CellShape.Infinite
    restored, _ = convert_to_system(frame)
    assert not restored.has_velocities()
    assert systems_approx_equal(system, restored, ignore_atom_properties=LOSSY_ATOM_PROPERTIES)


def test_read_only_radii_survive_a_second_pass(make_system) -> None:
    restored, _ = convert_to_system(convert_to_frame(make_system())[0])
    assert "vdw_radius" in restored.atoms[0].properties
    _, diagnostics = convert_to_frame(restored)
    assert len(diagnostics) == 0


def test_dropped_property_shows_up_in_comparison(make_system) -> None:
    system = make_system(extra_system_properties={"steps": 10})
    restored, _ = convert_to_system(convert_to_frame(system)[0])
    diffs = compare_systems(system, restored, ignore_atom_properties=LOSSY_ATOM_PROPERTIES)
    assert diffs == ["system: property steps only in first system"]


def test_non_whole_multiplicity_round_trips(make_system) -> None:
    system = make_system(extra_system_properties={"multiplicity": 2.5})
    frame, forward = convert_to_frame(system)
    restored, _ = convert_to_system(frame)
    assert len(forward) == 0
    assert restored.properties["multiplicity"] == 2.5
    assert compare_systems(system, restored, ignore_atom_properties=LOSSY_ATOM_PROPERTIES) == []


def test_bare_charge_gains_a_unit_with_a_warning(make_system) -> None:
    system = make_system(extra_system_properties={"charge": -1.0})
    frame, forward = convert_to_frame(system)
    assert frame["charge"] == -1.0
    assumed = forward.of_kind(DiagnosticKind.UNIT_ASSUMED)
    assert len(forward) == 1
    assert len(assumed) == 1
    assert assumed[0].key == "charge"

    restored, _ = convert_to_system(frame)
    assert restored.properties["charge"] == Quantity(-1.0, ELEMENTARY_CHARGE)
    diffs = compare_systems(system, restored, ignore_atom_properties=LOSSY_ATOM_PROPERTIES)
    assert len(diffs) == 1
    assert diffs[0].startswith("system: property charge differs")
