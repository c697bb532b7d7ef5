"""
statcharts: layout engine for interactive statistical charts.

Turns flat record sequences into positioned primitives for bar, line, radar
and treemap charts, draws them onto a retained canvas and layers hover and
click behaviour on top.
"""

from statcharts.canvas import Canvas
from statcharts.charts import layout_chart
from statcharts.config import ChartSettings, Theme, load_settings, load_settings_safe
from statcharts.data.schemas import ChartType
from statcharts.interaction import InteractionController, Notification
from statcharts.lifecycle import ChartView, Container, ResizeEvents

__version__ = "0.1.0"

__all__ = [
    "Canvas",
    "ChartSettings",
    "ChartType",
    "ChartView",
    "Container",
    "InteractionController",
    "Notification",
    "ResizeEvents",
    "Theme",
    "layout_chart",
    "load_settings",
    "load_settings_safe",
]
