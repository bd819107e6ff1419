from .formatter import SIZE_UNITS, format_size, scale_size

__all__ = ['SIZE_UNITS', 'format_size', 'scale_size']
