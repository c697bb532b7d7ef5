"""
Module: squarify

Purpose: Squarified treemap tiling.

Splits a rectangle into sub-rectangles whose areas are proportional to the
given values, laying nodes out in rows whose aspect ratio stays close to the
golden ratio. Rows alternate between horizontal and vertical strips depending
on which side of the remaining rectangle is shorter.

Values are tiled in the order given; callers sort them (largest first) for
the best aspect ratios.
"""

import math
from collections.abc import Sequence

PHI = (1 + math.sqrt(5)) / 2

Rect = tuple[float, float, float, float]


def _div(a: float, b: float) -> float:
    """Float division with IEEE semantics for a zero divisor."""
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _dice(values: Sequence[float], total: float, x0: float, y0: float, x1: float, y1: float) -> list[Rect]:
    """Lay values out left to right across the full height."""
    k = (x1 - x0) / total if total else 0.0
    rects: list[Rect] = []
    for value in values:
        right = x0 + value * k
        rects.append((x0, y0, right, y1))
        x0 = right
    return rects


def _slice(values: Sequence[float], total: float, x0: float, y0: float, x1: float, y1: float) -> list[Rect]:
    """Lay values out top to bottom across the full width."""
    k = (y1 - y0) / total if total else 0.0
    rects: list[Rect] = []
    for value in values:
        bottom = y0 + value * k
        rects.append((x0, y0, x1, bottom))
        y0 = bottom
    return rects


def squarify(
    values: Sequence[float],
    x0: float,
    y0: float,
    x1: float,
    y1: float,
    *,
    ratio: float = PHI,
) -> list[Rect]:
    """
    Tile a rectangle proportionally to values.

    Args:
        values: Non-negative weights, one per output rectangle
        x0, y0, x1, y1: Rectangle to fill
        ratio: Target aspect ratio of the rows

    Returns:
        One (x0, y0, x1, y1) rectangle per value, in input order
    """
    n = len(values)
    remaining = float(sum(values))
    rects: list[Rect] = []
    i0 = i1 = 0

    while i0 < n:
        dx, dy = x1 - x0, y1 - y0

        # Skip over leading zero-valued nodes so each row starts non-empty
        sum_value = values[i1]
        i1 += 1
        while not sum_value and i1 < n:
            sum_value = values[i1]
            i1 += 1

        min_value = max_value = sum_value
        alpha = _div(max(_div(dy, dx), _div(dx, dy)), remaining * ratio)
        beta = sum_value * sum_value * alpha
        min_ratio = max(_div(max_value, beta), _div(beta, min_value))

        # Keep adding nodes while the worst aspect ratio in the row improves
        while i1 < n:
            node_value = values[i1]
            sum_value += node_value
            min_value = min(min_value, node_value)
            max_value = max(max_value, node_value)
            beta = sum_value * sum_value * alpha
            new_ratio = max(_div(max_value, beta), _div(beta, min_value))
            if new_ratio > min_ratio:
                sum_value -= node_value
                break
            min_ratio = new_ratio
            i1 += 1

        row = values[i0:i1]
        if dx < dy:
            bottom = y0 + dy * sum_value / remaining if remaining else y1
            rects.extend(_dice(row, sum_value, x0, y0, x1, bottom))
            if remaining:
                y0 = bottom
        else:
            right = x0 + dx * sum_value / remaining if remaining else x1
            rects.extend(_slice(row, sum_value, x0, y0, right, y1))
            if remaining:
                x0 = right

        remaining -= sum_value
        i0 = i1

    return rects
