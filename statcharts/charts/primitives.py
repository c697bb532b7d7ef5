"""
Module: primitives

Purpose: Read-only drawable shapes produced by the geometry builders.

Key Components:
- ShapeKind: rectangle, circle, path, line, text
- SourceRef: index (and optional key) into ChartGeometry.sources
- Primitive: one drawable shape with style, tooltip and hover emphasis
- ChartGeometry: the full, ordered primitive set for one chart

Architecture Notes:
- Primitives never hold the source record itself, only a SourceRef
- Draw order is the order of ChartGeometry.primitives; later is on top
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from statcharts.data.schemas import AggregatedCategory, ChartType, RadarAxis


def frozen_attrs(**attrs: Any) -> Mapping[str, Any]:
    """Read-only attribute mapping, dropping None values."""
    return MappingProxyType({k: v for k, v in attrs.items() if v is not None})


class ShapeKind(str, Enum):
    """Kinds of drawable shapes."""

    RECT = "rect"
    CIRCLE = "circle"
    PATH = "path"
    LINE = "line"
    TEXT = "text"


class SourceKind(str, Enum):
    """What a SourceRef index points into."""

    RECORD = "record"
    AGGREGATE = "aggregate"


@dataclass(frozen=True)
class SourceRef:
    """Non-owning reference from a primitive to the datum it was built from."""

    kind: SourceKind
    index: int
    key: str | None = None  # radar markers: the axis name


@dataclass(frozen=True)
class Transition:
    """Animation from Primitive.initial to the final attributes."""

    duration_ms: int
    delay_ms: int = 0


@dataclass(frozen=True)
class Primitive:
    """A single drawable shape.

    Coordinates are absolute canvas pixels. For RECT, (x, y) is the top-left
    corner; for CIRCLE and TEXT it is the centre / anchor; for LINE it is the
    start point and (x2, y2) the end point. PATH shapes carry SVG path data
    plus the vertex list used for hit testing.
    """

    id: str
    kind: ShapeKind
    group: str = ""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    x2: float = 0.0
    y2: float = 0.0
    radius: float = 0.0
    path: str = ""
    points: tuple[tuple[float, float], ...] = ()
    closed: bool = False
    text: str = ""

    fill: str | None = None
    stroke: str | None = None
    style: Mapping[str, Any] = field(default_factory=frozen_attrs)

    source: SourceRef | None = None
    tooltip: tuple[str, ...] = ()
    interactive: bool = False
    hover: Mapping[str, Any] = field(default_factory=frozen_attrs)
    hover_transition_ms: int = 0

    initial: Mapping[str, Any] = field(default_factory=frozen_attrs)
    transition: Transition | None = None

    def contains(self, px: float, py: float) -> bool:
        """Whether a pointer position falls on this shape."""
        if self.kind is ShapeKind.RECT:
            return self.x <= px <= self.x + self.width and self.y <= py <= self.y + self.height
        if self.kind is ShapeKind.CIRCLE:
            return math.hypot(px - self.x, py - self.y) <= self.radius
        if self.kind is ShapeKind.PATH and self.closed:
            return _point_in_polygon(px, py, self.points)
        return False


def _point_in_polygon(px: float, py: float, points: tuple[tuple[float, float], ...]) -> bool:
    """Even-odd ray casting test."""
    inside = False
    n = len(points)
    for i in range(n):
        x1, y1 = points[i]
        x2, y2 = points[(i + 1) % n]
        if (y1 > py) != (y2 > py):
            x_cross = x1 + (py - y1) * (x2 - x1) / (y2 - y1)
            if px < x_cross:
                inside = not inside
    return inside


# =============================================================================
# CHART GEOMETRY
# =============================================================================


@dataclass(frozen=True)
class ChartGeometry:
    """Everything needed to draw one chart, in draw order."""

    chart_type: ChartType
    width: float
    height: float
    primitives: tuple[Primitive, ...] = ()
    sources: tuple[Any, ...] = ()
    aggregates: tuple[AggregatedCategory, ...] = ()

    @classmethod
    def empty(cls, chart_type: ChartType, width: float = 0.0, height: float = 0.0) -> "ChartGeometry":
        """Geometry with nothing to draw."""
        return cls(chart_type=chart_type, width=width, height=height)

    @property
    def is_empty(self) -> bool:
        return not self.primitives

    def find(self, primitive_id: str) -> Primitive | None:
        """Look up a primitive by id."""
        for primitive in self.primitives:
            if primitive.id == primitive_id:
                return primitive
        return None

    def in_group(self, group: str) -> list[Primitive]:
        """Primitives of one layer (e.g. "bar", "marker"), in draw order."""
        return [p for p in self.primitives if p.group == group]

    def interactive(self) -> list[Primitive]:
        """Primitives that respond to pointer events."""
        return [p for p in self.primitives if p.interactive]

    def hit_test(self, px: float, py: float) -> Primitive | None:
        """Topmost interactive primitive under the pointer."""
        for primitive in reversed(self.primitives):
            if primitive.interactive and primitive.contains(px, py):
                return primitive
        return None

    def resolve(self, ref: SourceRef | None) -> Any:
        """Return the record or aggregate a SourceRef points to."""
        if ref is None:
            return None
        if ref.kind is SourceKind.AGGREGATE:
            return self.aggregates[ref.index]
        return self.sources[ref.index]

    def payload(self, primitive: Primitive) -> tuple[str, float] | None:
        """(category, value) of the datum behind a primitive."""
        source = self.resolve(primitive.source)
        if source is None:
            return None
        if isinstance(source, AggregatedCategory):
            axis = RadarAxis(primitive.source.key) if primitive.source.key else RadarAxis.VALUE
            return source.category, source.average(axis)
        return source.category, source.value
