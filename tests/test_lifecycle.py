"""
Tests for chart view lifecycle management.

Tests cover:
- mount / set_data / resize rebuild triggers
- Early-exit guard for missing or disposed canvases
- Scoped resize subscriptions via activated()
- Failure containment and last_error
- Interaction reset on rebuild
"""

import logging

import pytest

from statcharts.canvas import Canvas
from statcharts.data.sample_data import generate_product_records
from statcharts.data.schemas import ChartType, SalesRecord
from statcharts.exceptions import ChartRenderError, UnknownChartTypeError
from statcharts.interaction import InteractionState
from statcharts.lifecycle import ChartView, Container, ResizeEvents


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def records() -> list[SalesRecord]:
    return [
        SalesRecord(category="A", value=10, year="2024"),
        SalesRecord(category="B", value=20, year="2024"),
    ]


@pytest.fixture
def resize_events() -> ResizeEvents:
    return ResizeEvents()


@pytest.fixture
def view(records: list[SalesRecord], resize_events: ResizeEvents) -> ChartView:
    return ChartView(ChartType.BAR, Container(180, 200), records, resize_events=resize_events)


# =============================================================================
# SUBSCRIPTIONS
# =============================================================================


class TestResizeEvents:
    """Tests for ResizeEvents and Subscription."""

    def test_emit_calls_subscribers(self) -> None:
        events = ResizeEvents()
        calls: list[str] = []
        events.subscribe(lambda: calls.append("a"))
        events.subscribe(lambda: calls.append("b"))

        events.emit()
        assert calls == ["a", "b"]

    def test_close_is_idempotent(self) -> None:
        events = ResizeEvents()
        subscription = events.subscribe(lambda: None)

        subscription.close()
        subscription.close()

        assert subscription.closed
        assert events.subscriber_count == 0

    def test_close_only_removes_own_callback(self) -> None:
        events = ResizeEvents()
        first = events.subscribe(lambda: None)
        events.subscribe(lambda: None)

        first.close()
        assert events.subscriber_count == 1


# =============================================================================
# REBUILD TRIGGERS
# =============================================================================


class TestRebuildTriggers:
    """Tests for mount, set_data and resize."""

    def test_mount_draws(self, view: ChartView) -> None:
        canvas = Canvas()
        view.mount(canvas)

        assert view.rebuild_count == 1
        assert canvas.get("bar-0") is not None
        assert len(canvas) == len(view.geometry.primitives)

    def test_same_dataset_does_not_rebuild(self, view: ChartView, records: list[SalesRecord]) -> None:
        view.mount(Canvas())
        view.set_data(records)
        assert view.rebuild_count == 1

    def test_new_dataset_rebuilds(self, view: ChartView, records: list[SalesRecord]) -> None:
        canvas = Canvas()
        view.mount(canvas)
        view.set_data(list(records) + [SalesRecord(category="C", value=5, year="2024")])

        assert view.rebuild_count == 2
        assert canvas.get("bar-2") is not None

    def test_rebuild_replaces_elements(self, view: ChartView) -> None:
        canvas = Canvas()
        view.mount(canvas)
        view.rebuild()
        assert len(canvas) == len(view.geometry.primitives)

    def test_resize_recomputes_geometry(self, view: ChartView) -> None:
        view.mount(Canvas())
        narrow = view.geometry.find("bar-0").width

        view.resize(width=280)
        assert view.geometry.find("bar-0").width == pytest.approx(2 * narrow)
        assert view.canvas.width == 280

    def test_empty_dataset_clears(self, view: ChartView) -> None:
        canvas = Canvas()
        view.mount(canvas)
        view.set_data(None)

        assert len(canvas) == 0
        assert view.last_error is None
        assert view.geometry.is_empty


# =============================================================================
# GUARDS AND TEARDOWN
# =============================================================================


class TestGuards:
    """Tests for the missing-canvas guard and teardown."""

    def test_rebuild_without_canvas_skipped(self, view: ChartView, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="statcharts.lifecycle"):
            view.rebuild()
        assert view.rebuild_count == 0
        assert "no attached canvas" in caplog.text

    def test_rebuild_after_dispose_skipped(self, view: ChartView) -> None:
        canvas = Canvas()
        view.mount(canvas)
        view.teardown()
        view.resize(width=500)

        assert view.rebuild_count == 1
        assert len(canvas) == 0

    def test_activated_scopes_subscription(self, view: ChartView, resize_events: ResizeEvents) -> None:
        canvas = Canvas()
        with view.activated(canvas) as active:
            assert active is view
            assert resize_events.subscriber_count == 1
            resize_events.emit()
            assert view.rebuild_count == 2

        assert resize_events.subscriber_count == 0
        assert not canvas.attached
        resize_events.emit()
        assert view.rebuild_count == 2

    def test_activated_tears_down_on_error(self, view: ChartView, resize_events: ResizeEvents) -> None:
        canvas = Canvas()
        with pytest.raises(RuntimeError):
            with view.activated(canvas):
                raise RuntimeError("boom")

        assert resize_events.subscriber_count == 0
        assert not canvas.attached


# =============================================================================
# FAILURE CONTAINMENT
# =============================================================================


class TestFailureContainment:
    """Tests for contained layout failures."""

    def test_bad_records_recorded_not_raised(self, caplog: pytest.LogCaptureFixture) -> None:
        view = ChartView(ChartType.BAR, Container(180, 200), [object()])
        canvas = Canvas()

        with caplog.at_level(logging.ERROR, logger="statcharts.lifecycle"):
            view.mount(canvas)

        assert isinstance(view.last_error, ChartRenderError)
        assert view.last_error.chart_type == "bar"
        assert len(canvas) == 0
        assert view.interaction is None
        assert "Failed to lay out bar chart" in caplog.text

    def test_sibling_view_unaffected(self, records: list[SalesRecord]) -> None:
        broken = ChartView(ChartType.BAR, Container(180, 200), [object()])
        healthy = ChartView(ChartType.BAR, Container(180, 200), records)
        broken.mount(Canvas())
        healthy.mount(Canvas())

        assert broken.last_error is not None
        assert healthy.last_error is None
        assert len(healthy.geometry.in_group("bar")) == 2

    def test_error_cleared_after_recovery(self, records: list[SalesRecord]) -> None:
        view = ChartView(ChartType.BAR, Container(180, 200), [object()])
        view.mount(Canvas())
        view.set_data(records)
        assert view.last_error is None


# =============================================================================
# INTERACTION RESET
# =============================================================================


class TestInteractionReset:
    """Tests for resetting hover state on rebuild."""

    def test_resize_resets_hover(self, view: ChartView) -> None:
        canvas = Canvas()
        view.mount(canvas)
        view.interaction.pointer_enter("bar-0", 70, 100)
        assert canvas.tooltip.visible

        view.resize(width=300)

        assert view.interaction.state is InteractionState.IDLE
        assert not canvas.tooltip.visible
        assert not any(e.is_emphasized for e in canvas.elements)

    def test_controller_tracks_new_geometry(self, view: ChartView) -> None:
        view.mount(Canvas())
        view.set_data([SalesRecord(category="Z", value=1, year="2024")])

        view.interaction.pointer_enter("bar-0", 0, 0)
        assert view.canvas.tooltip.lines == ("Z", "Value: 1")


class TestOtherChartTypes:
    """Smoke tests for ChartView with product charts."""

    @pytest.mark.parametrize("chart_type", [ChartType.RADAR, ChartType.TREEMAP, "treemap"])
    def test_product_charts(self, chart_type: ChartType | str) -> None:
        view = ChartView(chart_type, Container(640, 480), generate_product_records(seed=3))
        canvas = Canvas()
        view.mount(canvas)

        assert view.last_error is None
        assert len(canvas) > 0
        assert view.interaction.geometry is view.geometry

    def test_unknown_chart_type_rejected(self) -> None:
        with pytest.raises(UnknownChartTypeError):
            ChartView("pie", Container(100, 100))
