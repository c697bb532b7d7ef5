"""
Geometry builders for each chart type.

Every builder is a pure function ``(records, width, height, *, settings,
theme) -> ChartGeometry``. layout_chart dispatches on ChartType so callers
such as ChartView never import a builder directly.
"""

from collections.abc import Callable, Sequence
from typing import Any

from statcharts.charts.bar import layout_bar_chart
from statcharts.charts.line import layout_line_chart
from statcharts.charts.primitives import ChartGeometry, Primitive, ShapeKind, SourceRef
from statcharts.charts.radar import layout_radar_chart
from statcharts.charts.treemap import layout_treemap_chart
from statcharts.config import ChartSettings
from statcharts.data.schemas import ChartType
from statcharts.exceptions import UnknownChartTypeError

LayoutFn = Callable[..., ChartGeometry]

RENDERERS: dict[ChartType, LayoutFn] = {
    ChartType.BAR: layout_bar_chart,
    ChartType.LINE: layout_line_chart,
    ChartType.RADAR: layout_radar_chart,
    ChartType.TREEMAP: layout_treemap_chart,
}


def resolve_chart_type(chart_type: ChartType | str) -> ChartType:
    """Coerce a chart type name to ChartType.

    Raises:
        UnknownChartTypeError: If no builder is registered for chart_type
    """
    try:
        return ChartType(chart_type)
    except ValueError:
        raise UnknownChartTypeError(
            f"Unknown chart type: {chart_type}",
            chart_type=str(chart_type),
            available=[t.value for t in RENDERERS],
        ) from None


def layout_chart(
    chart_type: ChartType | str,
    records: Sequence[Any] | None,
    width: float,
    height: float,
    settings: ChartSettings | None = None,
) -> ChartGeometry:
    """Lay out any supported chart type.

    Args:
        chart_type: ChartType or its string value ("bar", "line", ...)
        records: Records for that chart type, or None
        width: Canvas width in pixels
        height: Canvas height in pixels
        settings: Theme and per-chart settings (defaults to ChartSettings())

    Returns:
        ChartGeometry for the chart

    Raises:
        UnknownChartTypeError: If no builder is registered for chart_type
    """
    kind = resolve_chart_type(chart_type)
    settings = settings or ChartSettings()
    layout = RENDERERS[kind]
    return layout(
        records,
        width,
        height,
        settings=getattr(settings, kind.value),
        theme=settings.theme,
    )


__all__ = [
    "ChartGeometry",
    "Primitive",
    "RENDERERS",
    "ShapeKind",
    "SourceRef",
    "layout_bar_chart",
    "layout_chart",
    "layout_line_chart",
    "layout_radar_chart",
    "layout_treemap_chart",
    "resolve_chart_type",
]
