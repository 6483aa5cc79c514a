from .compare import compare_systems, systems_approx_equal
from .diagnostics import ConversionError, Diagnostic, DiagnosticKind, Diagnostics, Severity
from .to_frame import convert_to_frame
from .to_system import convert_to_system
from .types import AbstractSystem, Atom, IsolatedCell, PeriodicCell
from .values import BoolValue, FloatValue, QuantityValue, StringValue, UnsupportedValue, classify_value

__all__ = [
    "AbstractSystem",
    "Atom",
    "IsolatedCell",
    "PeriodicCell",
    "convert_to_frame",
    "convert_to_system",
    "compare_systems",
    "systems_approx_equal",
    "ConversionError",
    "Diagnostic",
    "DiagnosticKind",
    "Diagnostics",
    "Severity",
    "StringValue",
    "FloatValue",
    "BoolValue",
    "QuantityValue",
    "UnsupportedValue",
    "classify_value",
]
