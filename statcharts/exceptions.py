"""
Module: exceptions

Purpose: Domain-specific exception hierarchy for the chart layout engine.

All exceptions carry a message plus a context dictionary so that callers
containing a failure (see lifecycle.ChartView) can log what went wrong.
"""

from typing import Any


class ChartEngineError(Exception):
    """Base exception for all chart engine errors."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, context={self.context!r})"


class ScaleError(ChartEngineError):
    """Raised when a scale cannot be constructed from its arguments."""

    def __init__(
        self,
        message: str,
        *,
        scale_type: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        ctx["scale_type"] = scale_type
        super().__init__(message, context=ctx)
        self.scale_type = scale_type


class ChartRenderError(ChartEngineError):
    """Raised (or recorded) when laying out or drawing a chart fails."""

    def __init__(
        self,
        message: str,
        *,
        chart_type: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if chart_type is not None:
            ctx["chart_type"] = chart_type
        super().__init__(message, context=ctx)
        self.chart_type = chart_type


class UnknownChartTypeError(ChartRenderError):
    """Raised when no renderer is registered for a chart type."""

    def __init__(
        self,
        message: str,
        *,
        chart_type: str,
        available: list[str] | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if available is not None:
            ctx["available"] = available
        super().__init__(message, chart_type=chart_type, context=ctx)
        self.available = available or []


class ConfigurationError(ChartEngineError):
    """Raised when a settings file has an invalid shape or unknown keys."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        section: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if path is not None:
            ctx["path"] = path
        if section is not None:
            ctx["section"] = section
        super().__init__(message, context=ctx)
        self.path = path
        self.section = section


class DataLoadError(ChartEngineError):
    """Raised when a record file cannot be read or validated."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        row: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if path is not None:
            ctx["path"] = path
        if row is not None:
            ctx["row"] = row
        super().__init__(message, context=ctx)
        self.path = path
        self.row = row
