"""
Tests for the radar chart geometry builder.

Tests cover:
- Axis angles and polar conversion
- Per-axis scale domains with headroom and fallbacks
- Vertex placement, markers, tooltips and legend
"""

import math
import random

import pytest

from statcharts.charts.aggregate import aggregate_by_category
from statcharts.charts.primitives import ShapeKind, SourceKind
from statcharts.charts.radar import (
    FALLBACK_MAX,
    RADAR_AXES,
    axis_angle,
    layout_radar_chart,
    polar_to_cartesian,
    radar_axis_scales,
)
from statcharts.config import RADAR_PALETTE
from statcharts.data.schemas import ProductRecord, RadarAxis

# Default margins are 50 top/bottom and 80 left/right: 400 x 300 plot,
# radius 150, centre (280, 200).
WIDTH = 560
HEIGHT = 400
CX, CY, RADIUS = 280, 200, 150


def make_product(pid: str, category: str, *, rating: float, price: float, value: float) -> ProductRecord:
    return ProductRecord(
        id=pid,
        name=f"Product {pid}",
        category=category,
        value=value,
        price=price,
        rating=rating,
        year="2024",
    )


@pytest.fixture
def records() -> list[ProductRecord]:
    return [
        make_product("p1", "X", rating=4, price=100, value=1000),
        make_product("p2", "Y", rating=2, price=50, value=500),
    ]


# =============================================================================
# POLAR HELPERS
# =============================================================================


class TestPolarHelpers:
    """Tests for axis_angle and polar_to_cartesian."""

    def test_first_axis_points_up(self) -> None:
        assert axis_angle(0) == pytest.approx(-math.pi / 2)
        x, y = polar_to_cartesian(10, axis_angle(0))
        assert x == pytest.approx(0, abs=1e-9)
        assert y == pytest.approx(-10)

    def test_axes_evenly_spaced(self) -> None:
        step = 2 * math.pi / len(RADAR_AXES)
        assert axis_angle(1) - axis_angle(0) == pytest.approx(step)
        assert axis_angle(2) - axis_angle(1) == pytest.approx(step)

    def test_axis_order(self) -> None:
        assert RADAR_AXES == (RadarAxis.RATING, RadarAxis.PRICE, RadarAxis.VALUE)


# =============================================================================
# SCALES
# =============================================================================


class TestRadarScales:
    """Tests for radar_axis_scales."""

    def test_domains_have_ten_percent_headroom(self, records: list[ProductRecord]) -> None:
        scales = radar_axis_scales(aggregate_by_category(records), RADIUS)

        assert scales[RadarAxis.PRICE].domain == pytest.approx((0, 110))
        assert scales[RadarAxis.RATING].domain == pytest.approx((0, 4.4))
        assert scales[RadarAxis.VALUE].domain == pytest.approx((0, 1100))

    def test_zero_maximum_uses_fallback(self) -> None:
        aggregates = aggregate_by_category([make_product("p1", "Z", rating=0, price=0, value=0)])
        scales = radar_axis_scales(aggregates, RADIUS)

        for axis in RADAR_AXES:
            assert scales[axis].domain[1] == pytest.approx(FALLBACK_MAX[axis] * 1.1)

    def test_nan_maximum_uses_fallback(self) -> None:
        aggregates = aggregate_by_category(
            [make_product("p1", "Z", rating=math.nan, price=10, value=10)]
        )
        scales = radar_axis_scales(aggregates, RADIUS)
        assert scales[RadarAxis.RATING].domain[1] == pytest.approx(5.5)

    def test_every_value_within_radius(self, records: list[ProductRecord]) -> None:
        aggregates = aggregate_by_category(records)
        scales = radar_axis_scales(aggregates, RADIUS)
        for aggregate in aggregates:
            for axis in RADAR_AXES:
                assert 0 <= scales[axis](aggregate.average(axis)) <= RADIUS


# =============================================================================
# LAYOUT
# =============================================================================


class TestRadarLayout:
    """Tests for layout_radar_chart."""

    def test_one_area_per_category(self, records: list[ProductRecord]) -> None:
        geometry = layout_radar_chart(records, WIDTH, HEIGHT)

        areas = geometry.in_group("area")
        assert len(areas) == 2
        assert all(a.kind is ShapeKind.PATH and a.closed for a in areas)
        assert all(len(a.points) == 3 for a in areas)
        assert [a.category for a in geometry.aggregates] == ["X", "Y"]

    def test_rating_vertex_straight_up(self, records: list[ProductRecord]) -> None:
        geometry = layout_radar_chart(records, WIDTH, HEIGHT)
        marker = geometry.find("marker-0-rating")

        assert marker.x == pytest.approx(CX)
        assert marker.y == pytest.approx(CY - 4 / 4.4 * RADIUS)

    def test_largest_value_reaches_radius_over_headroom(self, records: list[ProductRecord]) -> None:
        geometry = layout_radar_chart(records, WIDTH, HEIGHT)
        marker = geometry.find("marker-0-price")
        distance = math.hypot(marker.x - CX, marker.y - CY)
        assert distance == pytest.approx(RADIUS / 1.1)

    def test_marker_tooltips(self, records: list[ProductRecord]) -> None:
        geometry = layout_radar_chart(records, WIDTH, HEIGHT)

        assert geometry.find("marker-0-rating").tooltip == ("X - Rating: 4.0",)
        assert geometry.find("marker-0-price").tooltip == ("X - Price: $100",)
        assert geometry.find("marker-0-value").tooltip == ("X - Value: $1,000",)

    def test_marker_source_points_to_aggregate(self, records: list[ProductRecord]) -> None:
        geometry = layout_radar_chart(records, WIDTH, HEIGHT)
        marker = geometry.find("marker-1-price")

        assert marker.source.kind is SourceKind.AGGREGATE
        assert marker.source.key == "price"
        assert geometry.payload(marker) == ("Y", 50)

    def test_hover_emphasis(self, records: list[ProductRecord]) -> None:
        marker = layout_radar_chart(records, WIDTH, HEIGHT).find("marker-0-value")
        assert marker.hover["r"] == 6
        assert marker.hover_transition_ms == 200

    def test_area_colours_and_legend(self, records: list[ProductRecord]) -> None:
        geometry = layout_radar_chart(records, WIDTH, HEIGHT)

        assert geometry.find("area-0").fill == RADAR_PALETTE[0]
        assert geometry.find("area-1").fill == RADAR_PALETTE[1]
        assert geometry.find("legend-label-1").text == "Y"
        assert geometry.find("legend-swatch-1").fill == RADAR_PALETTE[1]

    def test_grid_levels(self, records: list[ProductRecord]) -> None:
        geometry = layout_radar_chart(records, WIDTH, HEIGHT)
        levels = geometry.in_group("grid")
        assert len(levels) == 5
        assert levels[-1].radius == pytest.approx(RADIUS)

    def test_axis_labels(self, records: list[ProductRecord]) -> None:
        geometry = layout_radar_chart(records, WIDTH, HEIGHT)
        assert geometry.find("axis-label-rating").text == "Rating"
        assert geometry.find("axis-label-value").text == "Value"

    def test_areas_not_interactive(self, records: list[ProductRecord]) -> None:
        geometry = layout_radar_chart(records, WIDTH, HEIGHT)
        assert {p.group for p in geometry.interactive()} == {"marker"}

    def test_empty_dataset(self) -> None:
        assert layout_radar_chart([], WIDTH, HEIGHT).is_empty
        assert layout_radar_chart(None, WIDTH, HEIGHT).is_empty

    def test_axis_order_independent_of_record_order(self) -> None:
        shuffled = [
            make_product(f"p{i}", category, rating=1 + i % 4, price=10 + i, value=100 + 7 * i)
            for i, category in enumerate(["X", "Y", "Z"] * 4)
        ]
        random.Random(7).shuffle(shuffled)
        geometry = layout_radar_chart(shuffled, WIDTH, HEIGHT)

        for index in range(len(geometry.aggregates)):
            markers = [p for p in geometry.in_group("marker") if p.id.startswith(f"marker-{index}-")]
            assert [m.id for m in markers] == [
                f"marker-{index}-rating",
                f"marker-{index}-price",
                f"marker-{index}-value",
            ]
            for k, marker in enumerate(markers):
                angle = math.atan2(marker.y - CY, marker.x - CX)
                assert math.cos(angle) == pytest.approx(math.cos(axis_angle(k)))
                assert math.sin(angle) == pytest.approx(math.sin(axis_angle(k)))
