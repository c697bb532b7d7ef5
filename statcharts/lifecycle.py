"""
Module: lifecycle

Purpose: Keep a chart's canvas in sync with its data and viewport.

Key Components:
- Container: the viewport size, read at every rebuild
- ResizeEvents / Subscription: resize notifications with idempotent close
- ChartView: mount, set_data, resize and teardown for one chart

Architecture Notes:
- Single threaded; every rebuild is clear -> layout -> draw -> reset hover
- A rebuild on a detached (or missing) canvas is skipped silently
- Layout failures are contained: logged, canvas cleared, stored in last_error
"""

import logging
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from statcharts.canvas import Canvas
from statcharts.charts import layout_chart, resolve_chart_type
from statcharts.charts.primitives import ChartGeometry
from statcharts.config import ChartSettings
from statcharts.data.schemas import ChartType
from statcharts.exceptions import ChartRenderError
from statcharts.interaction import EmphasisStyle, InteractionController, Notifier

logger = logging.getLogger(__name__)


@dataclass
class Container:
    """Mutable viewport dimensions."""

    width: float
    height: float


# =============================================================================
# RESIZE EVENTS
# =============================================================================


class Subscription:
    """Handle returned by ResizeEvents.subscribe."""

    def __init__(self, events: "ResizeEvents", callback: Callable[[], None]) -> None:
        self._events = events
        self._callback = callback
        self.closed = False

    def close(self) -> None:
        """Unsubscribe; calling again does nothing."""
        if self.closed:
            return
        self._events._remove(self._callback)
        self.closed = True


class ResizeEvents:
    """Broadcasts viewport resizes to subscribers."""

    def __init__(self) -> None:
        self._callbacks: list[Callable[[], None]] = []

    def subscribe(self, callback: Callable[[], None]) -> Subscription:
        self._callbacks.append(callback)
        return Subscription(self, callback)

    def _remove(self, callback: Callable[[], None]) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    @property
    def subscriber_count(self) -> int:
        return len(self._callbacks)

    def emit(self) -> None:
        """Notify every subscriber."""
        for callback in list(self._callbacks):
            callback()


# =============================================================================
# CHART VIEW
# =============================================================================


class ChartView:
    """One chart bound to a dataset, a container and (when mounted) a canvas.

    Args:
        chart_type: Which chart to lay out
        container: Viewport read at every rebuild
        records: Initial dataset (may be None)
        settings: Theme and per-chart settings
        resize_events: Source of resize notifications used by activated()
        notifier: Click notifier passed to the interaction controller
        emphasis: Optional emphasis override for every hovered primitive
    """

    def __init__(
        self,
        chart_type: ChartType | str,
        container: Container,
        records: Sequence[Any] | None = None,
        *,
        settings: ChartSettings | None = None,
        resize_events: ResizeEvents | None = None,
        notifier: Notifier | None = None,
        emphasis: EmphasisStyle | None = None,
    ) -> None:
        self.chart_type = resolve_chart_type(chart_type)
        self.container = container
        self.records = records
        self.settings = settings or ChartSettings()
        self.resize_events = resize_events or ResizeEvents()
        self.notifier = notifier
        self.emphasis = emphasis

        self.canvas: Canvas | None = None
        self.geometry = ChartGeometry.empty(self.chart_type)
        self.interaction: InteractionController | None = None
        self.last_error: ChartRenderError | None = None
        self.rebuild_count = 0
        self._subscription: Subscription | None = None

    def mount(self, canvas: Canvas) -> None:
        """Attach a canvas and draw into it."""
        self.canvas = canvas
        self.rebuild()

    def set_data(self, records: Sequence[Any] | None) -> None:
        """Replace the dataset; only a new object triggers a rebuild."""
        if records is self.records:
            return
        self.records = records
        self.rebuild()

    def resize(self, width: float | None = None, height: float | None = None) -> None:
        """Update the container (if sizes are given) and rebuild."""
        if width is not None:
            self.container.width = width
        if height is not None:
            self.container.height = height
        self.rebuild()

    def rebuild(self) -> None:
        """Clear, lay out, draw and reset interaction."""
        canvas = self.canvas
        if canvas is None or not canvas.attached:
            logger.debug(f"Skipping {self.chart_type.value} rebuild: no attached canvas")
            return

        self.rebuild_count += 1
        canvas.clear()
        if self.interaction is not None:
            self.interaction.reset()

        try:
            geometry = layout_chart(
                self.chart_type,
                self.records,
                self.container.width,
                self.container.height,
                self.settings,
            )
        except Exception as e:
            logger.exception(f"Failed to lay out {self.chart_type.value} chart")
            canvas.clear()
            self.geometry = ChartGeometry.empty(
                self.chart_type, self.container.width, self.container.height
            )
            self.interaction = None
            self.last_error = ChartRenderError(
                f"Layout failed: {e}",
                chart_type=self.chart_type.value,
                context={"error_type": type(e).__name__},
            )
            return

        canvas.draw(geometry)
        self.geometry = geometry
        self.last_error = None
        self.interaction = InteractionController(
            geometry, canvas, notifier=self.notifier, emphasis=self.emphasis
        )

    def teardown(self) -> None:
        """Unsubscribe from resizes and dispose of the canvas."""
        if self._subscription is not None:
            self._subscription.close()
            self._subscription = None
        if self.canvas is not None:
            self.canvas.dispose()
        self.interaction = None

    @contextmanager
    def activated(self, canvas: Canvas) -> Iterator["ChartView"]:
        """Mount and listen for resizes for the duration of a block."""
        self._subscription = self.resize_events.subscribe(self.rebuild)
        try:
            self.mount(canvas)
            yield self
        finally:
            self.teardown()
