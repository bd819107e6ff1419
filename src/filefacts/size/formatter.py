"""Human-readable byte counts.

Sizes scale by 1024 and stop at terabytes; anything larger is reported as a
TB value of 1024 or more.  Rounding follows Python's float formatting, which
rounds the exact binary value half-to-even.
"""

from __future__ import annotations

from typing import Tuple

SIZE_UNITS = ('B', 'KB', 'MB', 'GB', 'TB')


def scale_size(byte_count: int) -> Tuple[float, str]:
    """Return ``(value, unit)`` for ``byte_count`` before rounding."""
    value = float(byte_count)
    order = 0
    while value >= 1024 and order < len(SIZE_UNITS) - 1:
        order += 1
        value /= 1024
    return value, SIZE_UNITS[order]


def format_size(byte_count: int, decimals: int = 2) -> str:
    """Format ``byte_count`` as ``"<value> <unit>"``.

    >>> format_size(1536)
    '1.50 KB'
    """
    if decimals < 0:
        raise ValueError(f'decimals must be non-negative, got {decimals}')
    value, unit = scale_size(byte_count)
    return f'{value:.{decimals}f} {unit}'
