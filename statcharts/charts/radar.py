"""
Radar chart layout for per-category comparison.

Compares average rating, price and value across product categories. Each
category is a translucent triangle over three fixed axes (rating at the top,
then price and value clockwise); every vertex carries a marker with a tooltip.
"""

import logging
import math
from collections.abc import Sequence

from statcharts.charts.aggregate import aggregate_by_category
from statcharts.charts.formatting import format_axis_value
from statcharts.charts.line import linear_path
from statcharts.charts.primitives import (
    ChartGeometry,
    Primitive,
    ShapeKind,
    SourceKind,
    SourceRef,
    frozen_attrs,
)
from statcharts.charts.scales import LinearScale, OrdinalColorScale, nan_max
from statcharts.config import RadarSettings, Theme
from statcharts.data.schemas import AggregatedCategory, ChartType, ProductRecord, RadarAxis

logger = logging.getLogger(__name__)

RADAR_AXES: tuple[RadarAxis, ...] = (RadarAxis.RATING, RadarAxis.PRICE, RadarAxis.VALUE)

# Used when an axis maximum is zero or missing
FALLBACK_MAX: dict[RadarAxis, float] = {
    RadarAxis.RATING: 5.0,
    RadarAxis.PRICE: 500.0,
    RadarAxis.VALUE: 10_000.0,
}


def axis_angle(k: int, n_axes: int = len(RADAR_AXES)) -> float:
    """Angle of axis k in radians; axis 0 points straight up."""
    return (2 * math.pi / n_axes) * k - math.pi / 2


def polar_to_cartesian(r: float, angle: float, cx: float = 0.0, cy: float = 0.0) -> tuple[float, float]:
    return cx + r * math.cos(angle), cy + r * math.sin(angle)


def radar_axis_scales(
    aggregates: Sequence[AggregatedCategory],
    radius: float,
    *,
    headroom: float = 1.1,
) -> dict[RadarAxis, LinearScale]:
    """One linear scale per axis with domain [0, headroom * max]."""
    scales: dict[RadarAxis, LinearScale] = {}
    for axis in RADAR_AXES:
        maximum = nan_max(a.average(axis) for a in aggregates)
        if not maximum or math.isnan(maximum):
            maximum = FALLBACK_MAX[axis]
        scales[axis] = LinearScale(domain=(0.0, maximum * headroom), range=(0.0, radius))
    return scales


def layout_radar_chart(
    records: Sequence[ProductRecord] | None,
    width: float,
    height: float,
    *,
    settings: RadarSettings | None = None,
    theme: Theme | None = None,
) -> ChartGeometry:
    """Create the radar chart geometry.

    Args:
        records: Product records; averaged per category before plotting
        width: Canvas width in pixels
        height: Canvas height in pixels
        settings: Layout constants (defaults to RadarSettings())
        theme: Colours and fonts (defaults to Theme())

    Returns:
        ChartGeometry with grid, axes, one polygon plus markers per
        category, legend and title; empty when there are no records
    """
    if not records:
        return ChartGeometry.empty(ChartType.RADAR, width, height)

    settings = settings or RadarSettings()
    theme = theme or Theme()
    margin = settings.margin

    inner_width = width - margin.left - margin.right
    inner_height = height - margin.top - margin.bottom
    radius = min(inner_width, inner_height) / 2
    cx, cy = width / 2, height / 2

    aggregates = aggregate_by_category(records)
    scales = radar_axis_scales(aggregates, radius, headroom=settings.headroom)
    color = OrdinalColorScale.from_values((a.category for a in aggregates), theme.radar_palette)

    domains = {axis.value: scale.domain for axis, scale in scales.items()}
    logger.debug(f"Radar layout: {len(aggregates)} categories, radius={radius:.1f}, domains={domains}")

    primitives: list[Primitive] = []

    # Concentric reference circles
    for level in range(settings.levels):
        primitives.append(Primitive(
            id=f"grid-level-{level}",
            kind=ShapeKind.CIRCLE,
            group="grid",
            x=cx,
            y=cy,
            radius=radius * (level + 1) / settings.levels,
            fill="none",
            stroke=theme.grid_color,
            style=frozen_attrs(**{"stroke-dasharray": "4 4"}),
        ))

    # Spokes and axis labels
    for k, axis in enumerate(RADAR_AXES):
        angle = axis_angle(k)
        end_x, end_y = polar_to_cartesian(radius, angle, cx, cy)
        label_x, label_y = polar_to_cartesian(radius + settings.label_offset, angle, cx, cy)
        primitives.append(Primitive(
            id=f"axis-{axis.value}",
            kind=ShapeKind.LINE,
            group="axis",
            x=cx,
            y=cy,
            x2=end_x,
            y2=end_y,
            stroke=theme.grid_color,
            style=frozen_attrs(**{"stroke-width": "1px"}),
        ))
        primitives.append(Primitive(
            id=f"axis-label-{axis.value}",
            kind=ShapeKind.TEXT,
            group="axis",
            x=label_x,
            y=label_y,
            text=axis.label,
            fill=theme.text_color,
            style=frozen_attrs(**{
                "text-anchor": "middle",
                "dy": "0.35em",
                "font-size": f"{theme.font_size}px",
                "font-weight": "500",
            }),
        ))

    # One area plus vertex markers per category
    for index, aggregate in enumerate(aggregates):
        fill = color(aggregate.category)
        vertices = [
            polar_to_cartesian(scales[axis](aggregate.average(axis)), axis_angle(k), cx, cy)
            for k, axis in enumerate(RADAR_AXES)
        ]
        primitives.append(Primitive(
            id=f"area-{index}",
            kind=ShapeKind.PATH,
            group="area",
            path=linear_path(vertices, closed=True),
            points=tuple(vertices),
            closed=True,
            fill=fill,
            stroke=fill,
            source=SourceRef(SourceKind.AGGREGATE, index),
            style=frozen_attrs(**{
                "fill-opacity": settings.area_opacity,
                "stroke-width": settings.stroke_width,
            }),
        ))
        for axis, (vx, vy) in zip(RADAR_AXES, vertices):
            value = aggregate.average(axis)
            primitives.append(Primitive(
                id=f"marker-{index}-{axis.value}",
                kind=ShapeKind.CIRCLE,
                group="marker",
                x=vx,
                y=vy,
                radius=settings.dot_radius,
                fill=fill,
                stroke="#fff",
                style=frozen_attrs(**{"stroke-width": 1}),
                source=SourceRef(SourceKind.AGGREGATE, index, key=axis.value),
                tooltip=(f"{aggregate.category} - {axis.label}: {format_axis_value(axis, value)}",),
                interactive=True,
                hover=frozen_attrs(r=settings.hover_radius),
                hover_transition_ms=settings.hover_transition_ms,
            ))

    # Legend in the top-left corner
    legend_x = cx - inner_width / 2 + margin.left / 2
    legend_y = cy - inner_height / 2 + margin.top / 2
    for index, aggregate in enumerate(aggregates):
        row_y = legend_y + index * settings.legend_row_height
        primitives.append(Primitive(
            id=f"legend-swatch-{index}",
            kind=ShapeKind.RECT,
            group="legend",
            x=legend_x,
            y=row_y,
            width=12.0,
            height=12.0,
            fill=color(aggregate.category),
            style=frozen_attrs(rx=2),
        ))
        primitives.append(Primitive(
            id=f"legend-label-{index}",
            kind=ShapeKind.TEXT,
            group="legend",
            x=legend_x + 18,
            y=row_y + 10,
            text=aggregate.category,
            fill=theme.text_color,
            style=frozen_attrs(**{"font-size": f"{theme.font_size}px"}),
        ))

    primitives.append(Primitive(
        id="title",
        kind=ShapeKind.TEXT,
        group="title",
        x=cx,
        y=cy - inner_height / 2 - 35,
        text=settings.title,
        fill=theme.text_color,
        style=frozen_attrs(**{
            "text-anchor": "middle",
            "font-size": "16px",
            "font-weight": "600",
        }),
    ))

    return ChartGeometry(
        chart_type=ChartType.RADAR,
        width=width,
        height=height,
        primitives=tuple(primitives),
        sources=tuple(records),
        aggregates=aggregates,
    )
