"""Property catalog and type filter between the open and frame schemas."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np

from atomsframe.core.values import (
    BoolValue,
    FloatValue,
    PropertyValue,
    QuantityValue,
    StringValue,
    UnsupportedValue,
    classify_value,
)
from atomsframe.modeling.units import Dimension, Quantity, attach_unit, canonical_unit, to_canonical


MANDATORY_ATOM_FIELDS = frozenset({"species", "position", "velocity", "mass", "charge"})


@dataclass(frozen=True)
class PropertySpec:
    """Declared semantics of a named property."""

    name: str
    dimension: Dimension | None = None
    integer: bool = False
    mutable: bool = True


ATOM_PROPERTIES: dict[str, PropertySpec] = {
    "vdw_radius": PropertySpec("vdw_radius", Dimension.LENGTH, mutable=False),
    "covalent_radius": PropertySpec("covalent_radius", Dimension.LENGTH, mutable=False),
}
SYSTEM_PROPERTIES: dict[str, PropertySpec] = {
    "charge": PropertySpec("charge", Dimension.CHARGE),
    "multiplicity": PropertySpec("multiplicity", integer=True),
}
READ_ONLY_ATOM_PROPERTIES = tuple(key for key, spec in ATOM_PROPERTIES.items() if not spec.mutable)


class FilterOutcome(str, Enum):
    AS_IS = "as_is"
    UNIT_CONVERTED = "unit_converted"
    UNIT_ASSUMED = "unit_assumed"
    UNSUPPORTED_TYPE = "unsupported_type"
    UNSUPPORTED_UNIT = "unsupported_unit"


@dataclass(frozen=True)
class Filtered:
    outcome: FilterOutcome
    value: str | float | bool | None = None
    reason: str = ""

    @property
    def supported(self) -> bool:
        return self.outcome in (FilterOutcome.AS_IS, FilterOutcome.UNIT_CONVERTED, FilterOutcome.UNIT_ASSUMED)


def _is_schema_integer(raw: Any, spec: PropertySpec | None) -> bool:
    if spec is None or not spec.integer:
        return False
    return isinstance(raw, UnsupportedValue) and isinstance(raw.value, (int, np.integer))


def filter_value(key: str, raw: Any, spec: PropertySpec | None = None) -> Filtered:
    """Classify ``raw`` and reduce it to a bare frame value when representable."""

    tagged: PropertyValue = classify_value(raw)
    if _is_schema_integer(tagged, spec):
        return Filtered(FilterOutcome.AS_IS, float(tagged.value))
    if isinstance(tagged, FloatValue) and spec is not None and spec.dimension is not None:
        unit = canonical_unit(spec.dimension)
        return Filtered(
            FilterOutcome.UNIT_ASSUMED,
            tagged.value,
            reason=f"Property {key} has no unit attached; it is stored in {unit} and reads back as a quantity",
        )
    if isinstance(tagged, (StringValue, FloatValue, BoolValue)):
        return Filtered(FilterOutcome.AS_IS, tagged.value)
    if isinstance(tagged, QuantityValue):
        quantity = tagged.value
        target = canonical_unit(quantity.dimension)
        if spec is not None and spec.dimension is not None:
            if quantity.dimension is not spec.dimension:
                return Filtered(
                    FilterOutcome.UNSUPPORTED_UNIT,
                    reason=(
                        f"Ignoring property {key}: expected a {spec.dimension.value} quantity, "
                        f"got unit {quantity.unit.symbol}"
                    ),
                )
        if target is None:
            return Filtered(
                FilterOutcome.UNSUPPORTED_UNIT,
                reason=(
                    f"Ignoring property {key} with unit {quantity.unit.symbol}: "
                    f"no canonical frame unit for {quantity.dimension.value}"
                ),
            )
        return Filtered(FilterOutcome.UNIT_CONVERTED, float(to_canonical(quantity, target)))
    if isinstance(tagged, UnsupportedValue):
        return Filtered(
            FilterOutcome.UNSUPPORTED_TYPE,
            reason=f"Ignoring unsupported property type {tagged.type_name} for key {key}",
        )
    raise TypeError(f"Unhandled property variant {type(tagged).__name__}.")


def restore_value(value: Any, spec: PropertySpec | None = None) -> Any:
    """Rebuild an open-side value from a bare frame value.

    Scalars under catalog-known keys get their canonical unit back, and whole
    numbers under integer keys come back as ``int``. Vector values and any
    other number stay unit-less.
    """

    if isinstance(value, (bool, str)):
        return value
    if np.ndim(value) > 0:
        return np.asarray(value, dtype=float)
    if spec is not None and spec.integer:
        number = float(value)
        return int(number) if number.is_integer() else number
    if spec is not None and spec.dimension is not None:
        unit = canonical_unit(spec.dimension)
        if unit is not None:
            return attach_unit(float(value), unit)
    return value


def property_spec(key: str, *, atom: bool) -> PropertySpec | None:
    return (ATOM_PROPERTIES if atom else SYSTEM_PROPERTIES).get(key)


def quantity_in(quantity: Quantity, dimension: Dimension) -> Any:
    """Strip a mandatory-field quantity to the canonical unit of ``dimension``."""

    unit = canonical_unit(dimension)
    if unit is None:
        raise ValueError(f"No canonical frame unit for {dimension.value}.")
    return to_canonical(quantity, unit)
