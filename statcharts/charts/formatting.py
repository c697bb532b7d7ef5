"""
Value formatting for tooltips and labels.
"""

import math

from statcharts.data.schemas import RadarAxis


def round_half_away(value: float | int) -> int:
    """Round to the nearest integer, ties away from zero (12.5 -> 13)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def format_number(value: float | int, decimals: int = 0) -> str:
    """Format number with thousand separators."""
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if decimals == 0:
        return f"{round_half_away(value):,}"
    return f"{value:,.{decimals}f}"


def format_currency(value: float | int, decimals: int = 0) -> str:
    """Format as dollars; cents are dropped unless decimals is given."""
    return f"${format_number(value, decimals)}"


def format_plain(value: float | int) -> str:
    """Render a raw value the way it was supplied (10.0 -> "10")."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_rating(value: float) -> str:
    """One decimal place, e.g. 4.25 -> "4.2"."""
    return f"{value:.1f}"


def format_axis_value(axis: RadarAxis, value: float) -> str:
    """Format a radar value according to the unit of its axis."""
    if axis is RadarAxis.RATING:
        return format_rating(value)
    return format_currency(value)


def truncate_label(text: str, width: float, *, threshold: float, keep: int = 3) -> str:
    """Shorten a label to ``keep`` characters plus an ellipsis in narrow cells."""
    if width < threshold:
        return text[:keep] + "..."
    return text


def format_locale(value: float) -> str:
    """Thousand separators with up to three decimals, trailing zeros dropped."""
    if not math.isfinite(value):
        return str(value)
    text = f"{value:,.3f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text
