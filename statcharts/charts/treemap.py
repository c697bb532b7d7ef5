"""
Module: treemap

Purpose: Lay out the product treemap.

Key Functions:
- layout_hierarchy: position every node of a summed hierarchy
- layout_treemap_chart: full chart geometry (category headers + product cells)

Architecture Notes:
- Areas come from HierarchyNode.sum(), never from a separately computed total
- Categories tile the canvas first; products then tile each category below
  its header band
- Padding follows the usual treemap convention: outer padding around the
  children of a node, a top inset for the header, and half the inner padding
  trimmed from each side of every child so neighbours end up inner-padding
  apart
"""

import logging
import math
from collections.abc import Sequence

from statcharts.charts.aggregate import HierarchyNode, build_hierarchy
from statcharts.charts.colors import brighter
from statcharts.charts.formatting import format_locale, format_plain, truncate_label
from statcharts.charts.primitives import (
    ChartGeometry,
    Primitive,
    ShapeKind,
    SourceKind,
    SourceRef,
    frozen_attrs,
)
from statcharts.charts.scales import OrdinalColorScale, unique_in_order
from statcharts.charts.squarify import squarify
from statcharts.config import Theme, TreemapSettings
from statcharts.data.schemas import ChartType, ProductRecord

logger = logging.getLogger(__name__)

HEADER_LABEL_OFFSET = (8.0, 16.0)
NAME_LABEL_OFFSET = (6.0, 14.0)
VALUE_LABEL_OFFSET = (6.0, 28.0)


def _round_half_up(value: float) -> float:
    if not math.isfinite(value):
        return value
    return float(math.floor(value + 0.5))


def _collapse(lo: float, hi: float) -> tuple[float, float]:
    """Collapse an inverted interval to its midpoint."""
    if hi < lo:
        lo = hi = (lo + hi) / 2
    return lo, hi


def layout_hierarchy(
    root: HierarchyNode,
    width: float,
    height: float,
    *,
    padding_outer: float,
    padding_top: float,
    padding_inner: float,
    round_coords: bool = True,
) -> HierarchyNode:
    """
    Assign x0/y0/x1/y1 to every node of a summed, sorted hierarchy.

    Args:
        root: Hierarchy after sum() (and usually sort_by_value())
        width: Width of the area to fill
        height: Height of the area to fill
        padding_outer: Gap between a parent's edge and its children
        padding_top: Top inset of every parent, reserved for its label
        padding_inner: Gap between sibling rectangles
        round_coords: Round every coordinate to whole pixels

    Returns:
        The same root, positioned in place
    """
    root.x0, root.y0, root.x1, root.y1 = 0.0, 0.0, float(width), float(height)
    padding_stack: dict[int, float] = {0: 0.0}

    for node in root.descendants():
        p = padding_stack[node.depth]
        x0, x1 = _collapse(node.x0 + p, node.x1 - p)
        y0, y1 = _collapse(node.y0 + p, node.y1 - p)
        node.x0, node.y0, node.x1, node.y1 = x0, y0, x1, y1

        if node.children:
            p = padding_stack[node.depth + 1] = padding_inner / 2
            x0, x1 = _collapse(x0 + padding_outer - p, x1 - (padding_outer - p))
            y0, y1 = _collapse(y0 + padding_top - p, y1 - (padding_outer - p))
            tiles = squarify([child.value for child in node.children], x0, y0, x1, y1)
            for child, (cx0, cy0, cx1, cy1) in zip(node.children, tiles):
                child.x0, child.y0, child.x1, child.y1 = cx0, cy0, cx1, cy1

    if round_coords:
        for node in root.descendants():
            node.x0 = _round_half_up(node.x0)
            node.y0 = _round_half_up(node.y0)
            node.x1 = _round_half_up(node.x1)
            node.y1 = _round_half_up(node.y1)

    return root


def treemap_hierarchy(
    records: Sequence[ProductRecord],
    width: float,
    height: float,
    *,
    settings: TreemapSettings | None = None,
) -> HierarchyNode:
    """Summed, sorted and positioned hierarchy for a canvas size.

    Coordinates are relative to the plot area, i.e. the canvas minus the
    chart margins.
    """
    settings = settings or TreemapSettings()
    margin = settings.margin
    root = build_hierarchy(records).sum().sort_by_value()
    return layout_hierarchy(
        root,
        width - margin.left - margin.right,
        height - margin.top - margin.bottom,
        padding_outer=settings.padding_outer,
        padding_top=settings.padding_top,
        padding_inner=settings.padding_inner,
        round_coords=settings.round,
    )


def leaf_font_size(width: float, height: float, maximum: float) -> float:
    """Label font size shrinking with the cell, capped at maximum."""
    return min(width / 10, height / 10, maximum)


def _leaf_tooltip(record: ProductRecord) -> tuple[str, ...]:
    return (
        record.name,
        f"Category: {record.category}",
        f"Value: ${format_locale(record.value)}",
        f"Price: ${format_plain(record.price)}",
        f"Rating: {format_plain(record.rating)} / 5",
    )


def layout_treemap_chart(
    records: Sequence[ProductRecord] | None,
    width: float,
    height: float,
    *,
    settings: TreemapSettings | None = None,
    theme: Theme | None = None,
) -> ChartGeometry:
    """
    Compute the treemap geometry for a viewport.

    Args:
        records: Product records, one cell each
        width: Canvas width in pixels
        height: Canvas height in pixels
        settings: Layout constants (defaults to TreemapSettings())
        theme: Colours and fonts (defaults to Theme())

    Returns:
        ChartGeometry with a header per category and a cell per product;
        empty when there are no records
    """
    if not records:
        return ChartGeometry.empty(ChartType.TREEMAP, width, height)

    settings = settings or TreemapSettings()
    theme = theme or Theme()
    margin = settings.margin

    root = treemap_hierarchy(records, width, height, settings=settings)
    logger.debug(f"Treemap layout: {len(root.children)} categories, total value={root.value}")

    color = OrdinalColorScale.from_values(
        unique_in_order(r.category for r in records), theme.treemap_palette
    )
    left, top = margin.left, margin.top
    primitives: list[Primitive] = []

    for i, category in enumerate(root.children):
        x0, y0 = left + category.x0, top + category.y0
        primitives.append(Primitive(
            id=f"category-{i}",
            kind=ShapeKind.RECT,
            group="category",
            x=x0,
            y=y0,
            width=category.width,
            height=settings.padding_top,
            fill=color(category.name),
            stroke="#fff",
            style=frozen_attrs(**{"stroke-width": 1, "rx": 3}),
        ))
        primitives.append(Primitive(
            id=f"category-label-{i}",
            kind=ShapeKind.TEXT,
            group="category",
            x=x0 + HEADER_LABEL_OFFSET[0],
            y=y0 + HEADER_LABEL_OFFSET[1],
            text=category.name,
            fill="#fff",
            style=frozen_attrs(**{"font-weight": "600", "font-size": "12px"}),
        ))

    for i, leaf in enumerate(root.leaves()):
        record = records[leaf.record_index]
        base = color(leaf.parent.name)
        x0, y0 = left + leaf.x0, top + leaf.y0
        cell_width, cell_height = leaf.width, leaf.height

        primitives.append(Primitive(
            id=f"cell-{i}",
            kind=ShapeKind.RECT,
            group="cell",
            x=x0,
            y=y0,
            width=cell_width,
            height=cell_height,
            fill=brighter(base, settings.brighten),
            stroke=base,
            style=frozen_attrs(**{
                "stroke-width": 1,
                "rx": 2,
                "fill-opacity": settings.fill_opacity,
            }),
            source=SourceRef(SourceKind.RECORD, leaf.record_index),
            tooltip=_leaf_tooltip(record),
            interactive=True,
            hover=frozen_attrs(**{
                "fill-opacity": settings.hover_fill_opacity,
                "stroke-width": settings.hover_stroke_width,
            }),
            hover_transition_ms=settings.hover_transition_ms,
        ))

        font_size = leaf_font_size(cell_width, cell_height, settings.max_font_size)
        primitives.append(Primitive(
            id=f"cell-name-{i}",
            kind=ShapeKind.TEXT,
            group="cell-label",
            x=x0 + NAME_LABEL_OFFSET[0],
            y=y0 + NAME_LABEL_OFFSET[1],
            text=truncate_label(leaf.name, cell_width, threshold=settings.truncate_below),
            fill="#000",
            style=frozen_attrs(**{"font-size": f"{font_size:g}px", "font-weight": "700"}),
        ))

        if cell_width > settings.value_label_above:
            primitives.append(Primitive(
                id=f"cell-value-{i}",
                kind=ShapeKind.TEXT,
                group="cell-label",
                x=x0 + VALUE_LABEL_OFFSET[0],
                y=y0 + VALUE_LABEL_OFFSET[1],
                text=f"${format_locale(record.value)}",
                fill=theme.muted_text_color,
                style=frozen_attrs(**{"font-size": "13px", "font-weight": "400"}),
            ))

    return ChartGeometry(
        chart_type=ChartType.TREEMAP,
        width=width,
        height=height,
        primitives=tuple(primitives),
        sources=tuple(records),
    )
