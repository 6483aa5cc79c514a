"""Tagged property values for the open side of the conversion.

Every raw property value is classified once into a closed set of variants so
that the type filter can dispatch on the variant instead of inspecting raw
Python types:

- ``StringValue``, ``FloatValue``, ``BoolValue``: scalar kinds the frame stores.
- ``QuantityValue``: a scalar number with a unit attached.
- ``UnsupportedValue``: anything else, including integers and arrays.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from atomsframe.modeling.units import Quantity


@dataclass(frozen=True)
class StringValue:
    value: str


@dataclass(frozen=True)
class FloatValue:
    value: float


@dataclass(frozen=True)
class BoolValue:
    value: bool


@dataclass(frozen=True)
class QuantityValue:
    value: Quantity


@dataclass(frozen=True)
class UnsupportedValue:
    value: Any
    type_name: str


PropertyValue = StringValue | FloatValue | BoolValue | QuantityValue | UnsupportedValue


def _type_name(raw: Any) -> str:
    if isinstance(raw, np.generic):
        return type(raw).__name__
    if isinstance(raw, np.ndarray):
        return f"ndarray[{raw.dtype}]"
    return type(raw).__name__


def classify_value(raw: Any) -> PropertyValue:
    # bool before numbers: bool is an int subclass.
    if isinstance(raw, (bool, np.bool_)):
        return BoolValue(bool(raw))
    if isinstance(raw, str):
        return StringValue(raw)
    if isinstance(raw, (float, np.floating)):
        return FloatValue(float(raw))
    if isinstance(raw, Quantity):
        if raw.is_scalar:
            return QuantityValue(raw)
        return UnsupportedValue(raw, f"Quantity[{raw.unit.symbol}, shape={np.shape(raw.value)}]")
    return UnsupportedValue(raw, _type_name(raw))
