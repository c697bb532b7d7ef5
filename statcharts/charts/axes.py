"""
Axis, gridline and title primitives shared by the bar and line charts.
"""

import math

from statcharts.charts.formatting import format_number
from statcharts.charts.primitives import Primitive, ShapeKind, frozen_attrs
from statcharts.charts.scales import BandScale, LinearScale
from statcharts.config import Theme

TICK_SIZE = 6.0
TICK_PADDING = 3.0


def tick_decimals(values: list[float]) -> int:
    """Decimals needed to print evenly spaced ticks without losing precision."""
    if len(values) < 2:
        return 0
    step = abs(values[1] - values[0])
    if step == 0 or step >= 1:
        return 0
    return max(0, math.ceil(-math.log10(step) - 1e-9))


def x_band_axis(
    scale: BandScale,
    *,
    left: float,
    baseline: float,
    theme: Theme,
    rotate: float = -45.0,
) -> list[Primitive]:
    """Domain line plus one tick and rotated label per band."""
    primitives = [
        Primitive(
            id="x-axis-domain",
            kind=ShapeKind.LINE,
            group="axis",
            x=left + scale.range[0],
            y=baseline,
            x2=left + scale.range[1],
            y2=baseline,
            stroke=theme.text_color,
        )
    ]
    for i, label in enumerate(scale.domain):
        cx = left + scale.center(label)
        primitives.append(Primitive(
            id=f"x-axis-tick-{i}",
            kind=ShapeKind.LINE,
            group="axis",
            x=cx,
            y=baseline,
            x2=cx,
            y2=baseline + TICK_SIZE,
            stroke=theme.text_color,
        ))
        tx, ty = cx - 10, baseline + TICK_SIZE + TICK_PADDING
        primitives.append(Primitive(
            id=f"x-axis-label-{i}",
            kind=ShapeKind.TEXT,
            group="axis",
            x=tx,
            y=ty,
            text=str(label),
            fill=theme.text_color,
            style=frozen_attrs(**{
                "text-anchor": "end",
                "dy": "0.71em",
                "font-size": f"{theme.font_size}px",
                "transform": f"rotate({rotate:g},{tx:g},{ty:g})",
            }),
        ))
    return primitives


def y_linear_axis(
    scale: LinearScale,
    *,
    left: float,
    top: float,
    tick_count: int,
    theme: Theme,
) -> list[Primitive]:
    """Vertical domain line with labelled ticks on the left side."""
    r0, r1 = scale.range
    primitives = [
        Primitive(
            id="y-axis-domain",
            kind=ShapeKind.LINE,
            group="axis",
            x=left,
            y=top + r1,
            x2=left,
            y2=top + r0,
            stroke=theme.text_color,
        )
    ]
    values = scale.ticks(tick_count)
    decimals = tick_decimals(values)
    for i, value in enumerate(values):
        y = top + scale(value)
        primitives.append(Primitive(
            id=f"y-axis-tick-{i}",
            kind=ShapeKind.LINE,
            group="axis",
            x=left - TICK_SIZE,
            y=y,
            x2=left,
            y2=y,
            stroke=theme.text_color,
        ))
        primitives.append(Primitive(
            id=f"y-axis-label-{i}",
            kind=ShapeKind.TEXT,
            group="axis",
            x=left - TICK_SIZE - TICK_PADDING,
            y=y,
            text=format_number(value, decimals),
            fill=theme.text_color,
            style=frozen_attrs(**{
                "text-anchor": "end",
                "dy": "0.32em",
                "font-size": f"{theme.font_size}px",
            }),
        ))
    return primitives


def horizontal_gridlines(
    scale: LinearScale,
    *,
    left: float,
    top: float,
    width: float,
    tick_count: int,
    theme: Theme,
) -> list[Primitive]:
    """Faint dashed line across the plot at every y tick."""
    return [
        Primitive(
            id=f"grid-{i}",
            kind=ShapeKind.LINE,
            group="grid",
            x=left,
            y=top + scale(value),
            x2=left + width,
            y2=top + scale(value),
            stroke=theme.grid_color,
            style=frozen_attrs(**{"stroke-dasharray": "3,3", "stroke-opacity": 0.2}),
        )
        for i, value in enumerate(scale.ticks(tick_count))
    ]


def y_axis_title(text: str, *, x: float, y: float, theme: Theme) -> Primitive:
    """Axis title rotated to read bottom to top, centred on (x, y)."""
    return Primitive(
        id="y-axis-title",
        kind=ShapeKind.TEXT,
        group="axis",
        x=x,
        y=y,
        text=text,
        fill=theme.text_color,
        style=frozen_attrs(**{
            "text-anchor": "middle",
            "dy": "1em",
            "font-size": f"{theme.font_size}px",
            "transform": f"rotate(-90,{x:g},{y:g})",
        }),
    )
