"""
Module: bar

Purpose: Lay out the category sales bar chart.

One rectangle per record: x from a band scale over the categories, height
from a niced linear scale over the values. Bars start at zero height and grow
to their final size; the final geometry is what the primitives describe.
"""

import logging
from collections.abc import Sequence

from statcharts.charts.axes import x_band_axis, y_axis_title, y_linear_axis
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
from statcharts.charts.scales import BandScale, OrdinalColorScale, linear_extent_scale
from statcharts.config import BarSettings, Theme
from statcharts.data.schemas import ChartType, SalesRecord

logger = logging.getLogger(__name__)


def layout_bar_chart(
    records: Sequence[SalesRecord] | None,
    width: float,
    height: float,
    *,
    settings: BarSettings | None = None,
    theme: Theme | None = None,
) -> ChartGeometry:
    """
    Compute the bar chart geometry for a viewport.

    Args:
        records: Sales records, one bar each
        width: Canvas width in pixels
        height: Canvas height in pixels
        settings: Layout constants (defaults to BarSettings())
        theme: Colours and fonts (defaults to Theme())

    Returns:
        ChartGeometry with axes, bars and the y axis title; empty when
        there are no records
    """
    if not records:
        return ChartGeometry.empty(ChartType.BAR, width, height)

    settings = settings or BarSettings()
    theme = theme or Theme()
    margin = settings.margin

    inner_width = width - margin.left - margin.right
    inner_height = height - margin.top - margin.bottom
    left = margin.left
    top = margin.top + settings.plot_offset_y

    categories = [r.category for r in records]
    x = BandScale.from_values(categories, inner_width, padding=settings.padding)
    y = linear_extent_scale((r.value for r in records), (inner_height, 0.0))
    color = OrdinalColorScale.from_values(categories, theme.category10)

    logger.debug(
        f"Bar layout: {len(records)} bars, bandwidth={x.bandwidth:.2f}, y domain={y.domain}"
    )

    primitives: list[Primitive] = []
    primitives.extend(x_band_axis(x, left=left, baseline=top + inner_height, theme=theme))
    primitives.extend(y_linear_axis(y, left=left, top=top, tick_count=settings.y_ticks, theme=theme))

    for i, record in enumerate(records):
        bar_y = y(record.value)
        primitives.append(Primitive(
            id=f"bar-{i}",
            kind=ShapeKind.RECT,
            group="bar",
            x=left + x(record.category),
            y=top + bar_y,
            width=x.bandwidth,
            height=inner_height - bar_y,
            fill=color(record.category),
            source=SourceRef(SourceKind.RECORD, i),
            tooltip=(record.category, f"Value: {format_plain(record.value)}"),
            interactive=True,
            hover=frozen_attrs(opacity=settings.hover_opacity),
            hover_transition_ms=settings.hover_transition_ms,
            initial=frozen_attrs(y=top + inner_height, height=0.0),
            transition=Transition(duration_ms=settings.grow_duration_ms),
        ))

    primitives.append(y_axis_title(
        settings.axis_title, x=0.0, y=top + inner_height / 2, theme=theme
    ))

    return ChartGeometry(
        chart_type=ChartType.BAR,
        width=width,
        height=height,
        primitives=tuple(primitives),
        sources=tuple(records),
    )
