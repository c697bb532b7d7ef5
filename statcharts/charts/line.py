"""
Module: line

Purpose: Lay out the monthly sales line chart.

Each record becomes a point centred in its month's band; the points are
joined by one straight-segment path and marked with a small circle.
"""

import logging
from collections.abc import Sequence

from statcharts.charts.axes import (
    horizontal_gridlines,
    x_band_axis,
    y_axis_title,
    y_linear_axis,
)
from statcharts.charts.formatting import format_plain
from statcharts.charts.primitives import (
    ChartGeometry,
    Primitive,
    ShapeKind,
    SourceKind,
    SourceRef,
    Transition,
    frozen_attrs,
)
from statcharts.charts.scales import BandScale, linear_extent_scale
from statcharts.config import LineSettings, Theme
from statcharts.data.schemas import ChartType, MonthlyRecord

logger = logging.getLogger(__name__)


def linear_path(points: Sequence[tuple[float, float]], *, closed: bool = False) -> str:
    """SVG path data joining points with straight segments."""
    if not points:
        return ""
    head, *rest = points
    parts = [f"M{head[0]:g},{head[1]:g}"]
    parts.extend(f"L{x:g},{y:g}" for x, y in rest)
    if closed:
        parts.append("Z")
    return "".join(parts)


def layout_line_chart(
    records: Sequence[MonthlyRecord] | None,
    width: float,
    height: float,
    *,
    settings: LineSettings | None = None,
    theme: Theme | None = None,
) -> ChartGeometry:
    """
    Compute the line chart geometry for a viewport.

    Args:
        records: Monthly records in plotting order
        width: Canvas width in pixels
        height: Canvas height in pixels
        settings: Layout constants (defaults to LineSettings())
        theme: Colours and fonts (defaults to Theme())

    Returns:
        ChartGeometry with gridlines, axes, the line path and one marker
        per record; empty when there are no records
    """
    if not records:
        return ChartGeometry.empty(ChartType.LINE, width, height)

    settings = settings or LineSettings()
    theme = theme or Theme()
    margin = settings.margin

    inner_width = width - margin.left - margin.right
    inner_height = height - margin.top - margin.bottom
    left, top = margin.left, margin.top

    x = BandScale.from_values((r.month for r in records), inner_width, padding=settings.padding)
    y = linear_extent_scale((r.value for r in records), (inner_height, 0.0))

    points = [
        (left + x(r.month) + x.bandwidth / 2, top + y(r.value))
        for r in records
    ]
    logger.debug(f"Line layout: {len(points)} points, y domain={y.domain}")

    primitives: list[Primitive] = []
    primitives.extend(x_band_axis(x, left=left, baseline=top + inner_height, theme=theme))
    primitives.extend(y_linear_axis(y, left=left, top=top, tick_count=settings.y_ticks, theme=theme))
    primitives.extend(horizontal_gridlines(
        y, left=left, top=top, width=inner_width, tick_count=settings.y_ticks, theme=theme
    ))

    primitives.append(Primitive(
        id="line",
        kind=ShapeKind.PATH,
        group="line",
        path=linear_path(points),
        points=tuple(points),
        fill="none",
        stroke=theme.line_color,
        style=frozen_attrs(**{"stroke-width": settings.stroke_width}),
        transition=Transition(duration_ms=settings.draw_duration_ms),
    ))

    for i, (record, (px, py)) in enumerate(zip(records, points)):
        primitives.append(Primitive(
            id=f"marker-{i}",
            kind=ShapeKind.CIRCLE,
            group="marker",
            x=px,
            y=py,
            radius=settings.marker_radius,
            fill=theme.line_color,
            source=SourceRef(SourceKind.RECORD, i),
            tooltip=(record.month, f"Value: {format_plain(record.value)}"),
            interactive=True,
            hover=frozen_attrs(r=settings.hover_radius, fill=theme.primary),
            hover_transition_ms=settings.hover_transition_ms,
            initial=frozen_attrs(r=0.0),
            transition=Transition(
                duration_ms=settings.marker_duration_ms,
                delay_ms=i * settings.marker_stagger_ms,
            ),
        ))

    primitives.append(y_axis_title(settings.axis_title, x=0.0, y=top + inner_height / 2, theme=theme))

    return ChartGeometry(
        chart_type=ChartType.LINE,
        width=width,
        height=height,
        primitives=tuple(primitives),
        sources=tuple(records),
    )
