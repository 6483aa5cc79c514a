from .system_validator import validate_system

__all__ = ["validate_system"]
