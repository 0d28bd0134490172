"""Human-readable size formatting for reclaim."""

from decimal import ROUND_DOWN, Decimal, DecimalException, localcontext

from reclaim.errors import InvalidArgumentError
from reclaim.models import PrecisionMode

UNITS = ("B", "KB", "MB", "GB", "TB", "PB")
STEP = 1024


def detect_precision_mode() -> PrecisionMode:
    """
    Check once whether decimal arithmetic is usable on this host.

    Returns:
        PrecisionMode.EXACT when decimal division behaves, INTEGER otherwise
    """
    try:
        with localcontext() as ctx:
            ctx.prec = 28
            if Decimal(1536) / STEP != Decimal("1.5"):
                return PrecisionMode.INTEGER
    except DecimalException:
        return PrecisionMode.INTEGER
    return PrecisionMode.EXACT


def format_bytes(
    size_bytes: int | None,
    precision: int = 2,
    mode: PrecisionMode = PrecisionMode.EXACT,
) -> str:
    """
    Format a byte count as "<value> <unit>" using 1024-based units.

    Values that stay below 1 KB are printed as whole bytes. Larger values are
    truncated (not rounded) to `precision` decimals in exact mode, or to whole
    units in integer mode.

    Args:
        size_bytes: Byte count; None or negative yields "0 B"
        precision: Decimal places for scaled values
        mode: Arithmetic to use, from detect_precision_mode()

    Returns:
        Human-readable size string
    """
    if size_bytes is None or size_bytes < 0:
        return "0 B"
    if precision < 0:
        raise InvalidArgumentError(f"Invalid precision: {precision}")

    if mode == PrecisionMode.INTEGER:
        return _format_integer(int(size_bytes))

    with localcontext() as ctx:
        ctx.prec = 60
        value = Decimal(int(size_bytes))
        unit_index = 0
        while value >= STEP and unit_index < len(UNITS) - 1:
            value /= STEP
            unit_index += 1

        if unit_index == 0:
            return f"{int(value)} B"

        quantum = Decimal(1).scaleb(-precision)
        return f"{value.quantize(quantum, rounding=ROUND_DOWN)} {UNITS[unit_index]}"


def _format_integer(size_bytes: int) -> str:
    """Integer-only scaling, used when decimal arithmetic is unavailable."""
    unit_index = 0
    while size_bytes >= STEP and unit_index < len(UNITS) - 1:
        size_bytes //= STEP
        unit_index += 1
    return f"{size_bytes} {UNITS[unit_index]}"


def size_in_mb(size_bytes: int) -> int:
    """Whole megabytes (1024-based, floored)."""
    return max(size_bytes, 0) // (STEP * STEP)


def truncate_path(path: str, width: int) -> str:
    """
    Shorten a path to `width` characters, keeping its tail.

    Example: truncate_path("/very/long/path/to/file", 11) == ".../to/file"
    """
    if len(path) <= width:
        return path
    keep = max(width - 3, 0)
    return "..." + (path[-keep:] if keep else "")
