from .conversion_config import ConversionConfig

__all__ = ["ConversionConfig"]
