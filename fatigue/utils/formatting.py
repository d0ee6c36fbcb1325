"""
Number and size formatting helpers shared by the pipeline and exports.
"""

import math
from decimal import ROUND_HALF_UP, Decimal

_TWO_PLACES = Decimal("0.01")
_SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]


def round2(value: float) -> float:
    """
    Round half away from zero to two decimal places.

    Works on the shortest decimal representation of the float, so 1.005
    rounds to 1.01 rather than suffering binary representation error.
    """
    if not math.isfinite(value):
        return value
    return float(Decimal(repr(value)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def format_number(value: int | float) -> str:
    """Render whole floats without a trailing ``.0`` (45.0 -> "45")."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_file_size(num_bytes: int) -> str:
    if num_bytes <= 0:
        return "0 Byte"

    index = 0
    scaled = float(num_bytes)
    while scaled >= 1024 and index < len(_SIZE_UNITS) - 1:
        scaled /= 1024
        index += 1
    return f"{format_number(round2(scaled))} {_SIZE_UNITS[index]}"
