"""
Module: interaction

Purpose: Hover and click behaviour layered on a drawn chart.

Key Components:
- InteractionState: IDLE or HOVERING one primitive
- EmphasisStyle: hover overrides plus their transition duration
- Notification: payload emitted when a primitive is clicked
- InteractionController: state machine driving canvas emphasis and tooltip

Architecture Notes:
- At most one primitive is hovered per controller
- The canvas tooltip is visible exactly when the state is HOVERING
- Clicks notify but never change state
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from statcharts.canvas import Canvas, Tooltip
from statcharts.charts.formatting import format_plain
from statcharts.charts.primitives import ChartGeometry, Primitive, frozen_attrs

logger = logging.getLogger(__name__)


class InteractionState(str, Enum):
    """States of the per-chart interaction machine."""

    IDLE = "idle"
    HOVERING = "hovering"


@dataclass(frozen=True)
class EmphasisStyle:
    """Attributes applied to a hovered primitive."""

    attrs: Mapping[str, Any] = field(default_factory=frozen_attrs)
    transition_ms: int = 0

    @classmethod
    def for_primitive(cls, primitive: Primitive) -> "EmphasisStyle":
        """The emphasis a chart builder attached to a primitive."""
        return cls(attrs=primitive.hover, transition_ms=primitive.hover_transition_ms)


@dataclass(frozen=True)
class Notification:
    """Click payload, delivered fire-and-forget."""

    category: str
    value: float

    @property
    def message(self) -> str:
        return f"Value: {format_plain(self.value)} and Category: {self.category}"


Notifier = Callable[[Notification], None]


def log_notifier(notification: Notification) -> None:
    """Default notifier: write the message to the log."""
    logger.info(notification.message)


class InteractionController:
    """Hover/click state machine for one chart instance.

    Args:
        geometry: Geometry currently drawn on the canvas
        canvas: Canvas holding the drawn elements and the tooltip
        notifier: Called with a Notification on click (defaults to logging)
        emphasis: Override applied to every hovered primitive instead of
            each primitive's own hover attributes
    """

    def __init__(
        self,
        geometry: ChartGeometry,
        canvas: Canvas,
        notifier: Notifier | None = None,
        emphasis: EmphasisStyle | None = None,
    ) -> None:
        self.geometry = geometry
        self.canvas = canvas
        self.notifier = notifier or log_notifier
        self.emphasis = emphasis
        self.state = InteractionState.IDLE
        self.hovered: str | None = None

    @property
    def tooltip(self) -> Tooltip:
        return self.canvas.tooltip

    def _emphasis_for(self, primitive: Primitive) -> EmphasisStyle:
        return self.emphasis or EmphasisStyle.for_primitive(primitive)

    def _lookup(self, primitive_id: str) -> Primitive | None:
        primitive = self.geometry.find(primitive_id)
        if primitive is None or not primitive.interactive:
            logger.debug(f"Ignoring event for non-interactive primitive {primitive_id!r}")
            return None
        return primitive

    # -------------------------------------------------------------------------
    # Pointer events
    # -------------------------------------------------------------------------

    def pointer_enter(self, primitive_id: str, x: float, y: float) -> None:
        """Start hovering a primitive, leaving any current one first."""
        if self.hovered == primitive_id:
            self.pointer_move(x, y)
            return

        primitive = self._lookup(primitive_id)
        if primitive is None:
            return
        if self.state is InteractionState.HOVERING:
            self.pointer_leave()

        style = self._emphasis_for(primitive)
        self.canvas.set_emphasis(primitive.id, dict(style.attrs), style.transition_ms)
        self.tooltip.show(primitive.tooltip, x, y)
        self.state = InteractionState.HOVERING
        self.hovered = primitive.id

    def pointer_move(self, x: float, y: float) -> None:
        """Reposition the tooltip while hovering."""
        if self.state is InteractionState.HOVERING:
            self.tooltip.move(x, y)

    def pointer_leave(self) -> None:
        """Return to idle, reverting emphasis and hiding the tooltip."""
        if self.state is not InteractionState.HOVERING:
            return
        primitive = self.geometry.find(self.hovered) if self.hovered else None
        if primitive is not None:
            self.canvas.clear_emphasis(primitive.id, self._emphasis_for(primitive).transition_ms)
        self.tooltip.hide()
        self.state = InteractionState.IDLE
        self.hovered = None

    def handle_pointer(self, x: float, y: float) -> None:
        """Dispatch a raw pointer position; the topmost primitive wins."""
        target = self.geometry.hit_test(x, y)
        if target is None:
            self.pointer_leave()
        elif target.id == self.hovered:
            self.pointer_move(x, y)
        else:
            self.pointer_enter(target.id, x, y)

    def click(self, primitive_id: str) -> Notification | None:
        """Notify with the clicked primitive's category and value."""
        primitive = self._lookup(primitive_id)
        if primitive is None:
            return None
        payload = self.geometry.payload(primitive)
        if payload is None:
            return None
        notification = Notification(category=payload[0], value=payload[1])
        self.notifier(notification)
        return notification

    def reset(self) -> None:
        """Force idle state, e.g. after the canvas was redrawn."""
        self.tooltip.hide()
        self.state = InteractionState.IDLE
        self.hovered = None
