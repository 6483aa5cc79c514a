from .frame_access import SetResult
from .schema import ConversionConfig
from .units import (
    ANGSTROM,
    ANGSTROM_PER_PS,
    CANONICAL_UNITS,
    DALTON,
    ELEMENTARY_CHARGE,
    Dimension,
    Quantity,
    Unit,
    attach_unit,
    canonical_unit,
    to_canonical,
    unit_from_symbol,
)

__all__ = [
    "ConversionConfig",
    "SetResult",
    "Dimension",
    "Unit",
    "Quantity",
    "ANGSTROM",
    "ANGSTROM_PER_PS",
    "DALTON",
    "ELEMENTARY_CHARGE",
    "CANONICAL_UNITS",
    "to_canonical",
    "attach_unit",
    "canonical_unit",
    "unit_from_symbol",
]
