from .core import (
    AbstractSystem,
    Atom,
    ConversionError,
    Diagnostic,
    DiagnosticKind,
    Diagnostics,
    IsolatedCell,
    PeriodicCell,
    Severity,
    compare_systems,
    convert_to_frame,
    convert_to_system,
    systems_approx_equal,
)
from .modeling import ConversionConfig, Quantity, attach_unit, to_canonical

__all__ = [
    "AbstractSystem",
    "Atom",
    "IsolatedCell",
    "PeriodicCell",
    "convert_to_frame",
    "convert_to_system",
    "ConversionConfig",
    "ConversionError",
    "Diagnostic",
    "DiagnosticKind",
    "Diagnostics",
    "Severity",
    "Quantity",
    "attach_unit",
    "to_canonical",
    "compare_systems",
    "systems_approx_equal",
]
