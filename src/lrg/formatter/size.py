"""Human-readable byte counts using conventional binary units."""

from __future__ import annotations

from typing import Final

_BASE: Final[int] = 1024
_UNITS: Final[tuple[str, ...]] = ("B", "KB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")


def format_size(size: int, *, decimal_places: int = 2) -> str:
    """Format a byte count with 1024-based units.

    Values below 1024 are printed as whole bytes. Larger values are scaled
    to the biggest unit that keeps them under 1024 and printed with at most
    ``decimal_places`` decimals, trailing zeros dropped.

    Examples:
        >>> format_size(11)
        '11 B'
        >>> format_size(1536)
        '1.5 KB'
        >>> format_size(1024000)
        '1000 KB'

    Args:
        size: Number of bytes. Negative values keep their sign.
        decimal_places: Maximum number of decimals for scaled values.

    Returns:
        str: Formatted size such as ``"1.46 MB"``.
    """
    if size < 0:
        return "-" + format_size(-size, decimal_places=decimal_places)
    if size < _BASE:
        return f"{size} B"

    value = float(size)
    unit_index = 0
    while value >= _BASE and unit_index < len(_UNITS) - 1:
        value /= _BASE
        unit_index += 1

    number = f"{value:.{decimal_places}f}"
    if "." in number:
        number = number.rstrip("0").rstrip(".")
    return f"{number} {_UNITS[unit_index]}"
