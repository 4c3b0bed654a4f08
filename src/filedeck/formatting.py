"""Display helpers for entries."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext

_UNITS = ("B", "KB", "MB", "GB")


def format_size(size: int | float | None) -> str:
    """Format a byte count for display.

    ``None`` and 0 render as ``-``. Values are scaled by 1024 up to GB
    (never beyond, so very large sizes stay in GB). Bytes and values
    >= 10 get no decimals, everything else one. Halves round up.

    >>> format_size(1536)
    '1.5 KB'
    >>> format_size(15 * 1024 * 1024)
    '15 MB'
    """
    if not size:
        return "-"

    value = float(size)
    unit_index = 0
    while value >= 1024 and unit_index < len(_UNITS) - 1:
        value /= 1024
        unit_index += 1

    step = Decimal("1") if value >= 10 or unit_index == 0 else Decimal("0.1")
    if not math.isfinite(value):
        return f"{value} {_UNITS[unit_index]}"
    exact = Decimal(value)
    with localcontext() as ctx:
        # quantize needs room for every integer digit of huge GB counts
        ctx.prec = max(ctx.prec, exact.adjusted() + 3)
        rounded = exact.quantize(step, rounding=ROUND_HALF_UP)
    return f"{rounded} {_UNITS[unit_index]}"
