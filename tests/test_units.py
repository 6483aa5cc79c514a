import numpy as np
import pytest

from atomsframe.modeling.units import (
    ANGSTROM,
    ANGSTROM_PER_PS,
    COULOMB,
    DALTON,
    ELECTRONVOLT,
    ELEMENTARY_CHARGE,
    METER_PER_S,
    NANOMETER,
    Dimension,
    Quantity,
    attach_unit,
    canonical_unit,
    to_canonical,
    unit_from_symbol,
)


def test_length_conversion_to_angstrom() -> None:
    assert np.isclose(to_canonical(Quantity(0.5, NANOMETER), ANGSTROM), 5.0, rtol=0.0, atol=1e-12)
    vec = to_canonical(Quantity(np.array([1.0, 2.0, 3.0]), NANOMETER), ANGSTROM)
    assert np.allclose(vec, [10.0, 20.0, 30.0], rtol=0.0, atol=1e-12)


def test_velocity_and_charge_conversion() -> None:
    assert np.isclose(to_canonical(Quantity(100.0, METER_PER_S), ANGSTROM_PER_PS), 1.0, rtol=1e-12)
    electrons = to_canonical(Quantity(1.602176634e-19, COULOMB), ELEMENTARY_CHARGE)
    assert np.isclose(electrons, 1.0, rtol=1e-12)


def test_dimension_mismatch_is_rejected() -> None:
    with pytest.raises(ValueError, match="Cannot convert"):
        to_canonical(Quantity(1.0, DALTON), ANGSTROM)


def test_attach_unit_copies_arrays() -> None:
    raw = np.array([1.0, 2.0, 3.0])
    quantity = attach_unit(raw, ANGSTROM)
    raw[0] = 99.0
    assert quantity.value[0] == 1.0
    assert attach_unit(2, DALTON).value == 2.0


def test_canonical_units_and_symbols() -> None:
    assert canonical_unit(Dimension.LENGTH) is ANGSTROM
    assert canonical_unit(Dimension.ENERGY) is None
    assert unit_from_symbol("A/ps") is ANGSTROM_PER_PS
    assert unit_from_symbol("eV") is ELECTRONVOLT
    with pytest.raises(KeyError, match="Unknown unit"):
        unit_from_symbol("furlong")


def test_quantity_to_returns_converted_quantity() -> None:
    converted = Quantity(1.5, NANOMETER).to(ANGSTROM)
    assert converted.unit is ANGSTROM
    assert np.isclose(converted.value, 15.0, rtol=1e-12)
