"""
Module: config

Purpose: Theme and per-chart layout settings.

Key Components:
- Theme: colours and fonts passed explicitly into every renderer
- BarSettings / LineSettings / RadarSettings / TreemapSettings: layout constants
- ChartSettings: container for all of the above
- load_settings: read overrides from a YAML file

Architecture Notes:
- Renderers never look up global styles; everything comes from Theme
- Hover transition durations stay per chart type (bar 800ms, treemap 200ms)
- YAML sections mirror the dataclass names: theme, bar, line, radar, treemap
"""

import dataclasses
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from statcharts.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


# =============================================================================
# PALETTES
# =============================================================================

CATEGORY10 = [
    "#1f77b4",
    "#ff7f0e",
    "#2ca02c",
    "#d62728",
    "#9467bd",
    "#8c564b",
    "#e377c2",
    "#7f7f7f",
    "#bcbd22",
    "#17becf",
]

RADAR_PALETTE = [
    "#3B82F6",  # blue
    "#10B981",  # green
    "#F59E0B",  # amber
    "#EF4444",  # red
    "#8B5CF6",  # purple
]

TREEMAP_PALETTE = [
    "#3B82F6",  # blue
    "#10B981",  # green
    "#F59E0B",  # amber
    "#EF4444",  # red
    "#8B5CF6",  # purple
    "#EC4899",  # pink
    "#06B6D4",  # cyan
    "#F97316",  # orange
    "#14B8A6",  # teal
    "#6366F1",  # indigo
]

FONT_FAMILY = "'Inter', 'SF Pro Display', -apple-system, BlinkMacSystemFont, sans-serif"


# =============================================================================
# SETTINGS DATACLASSES
# =============================================================================


@dataclass(frozen=True)
class Margin:
    """Space reserved around the plot area, in pixels."""

    top: float
    right: float
    bottom: float
    left: float


@dataclass(frozen=True)
class Theme:
    """Colours and fonts for all chart types."""

    category10: list[str] = field(default_factory=lambda: list(CATEGORY10))
    radar_palette: list[str] = field(default_factory=lambda: list(RADAR_PALETTE))
    treemap_palette: list[str] = field(default_factory=lambda: list(TREEMAP_PALETTE))

    primary: str = "#7c3aed"
    line_color: str = "#7F00FF"
    grid_color: str = "#ddd"
    text_color: str = "#333"
    muted_text_color: str = "#555"
    background: str = "none"
    font_family: str = FONT_FAMILY
    font_size: int = 12

    tooltip_background: str = "white"
    tooltip_border: str = "#ddd"
    tooltip_text_color: str = "black"


@dataclass(frozen=True)
class BarSettings:
    """Layout constants for the bar chart."""

    margin: Margin = Margin(top=20, right=20, bottom=40, left=60)
    padding: float = 0.3
    plot_offset_y: float = -15.0
    y_ticks: int = 5
    axis_title: str = "Sales ($)"
    grow_duration_ms: int = 800

    hover_opacity: float = 0.8
    hover_transition_ms: int = 800


@dataclass(frozen=True)
class LineSettings:
    """Layout constants for the line chart."""

    margin: Margin = Margin(top=20, right=20, bottom=40, left=60)
    padding: float = 0.5
    y_ticks: int = 5
    axis_title: str = "Sales ($)"
    stroke_width: float = 2.0
    marker_radius: float = 4.0
    draw_duration_ms: int = 1000
    marker_duration_ms: int = 500
    marker_stagger_ms: int = 50

    hover_radius: float = 6.0
    hover_transition_ms: int = 0


@dataclass(frozen=True)
class RadarSettings:
    """Layout constants for the radar chart."""

    margin: Margin = Margin(top=50, right=80, bottom=50, left=80)
    levels: int = 5
    headroom: float = 1.1
    label_offset: float = 20.0
    dot_radius: float = 4.0
    area_opacity: float = 0.3
    stroke_width: float = 2.0
    legend_row_height: float = 20.0
    title: str = "Category Comparison - Rating, Price, Value"

    hover_radius: float = 6.0
    hover_transition_ms: int = 200


@dataclass(frozen=True)
class TreemapSettings:
    """Layout constants for the treemap chart."""

    margin: Margin = Margin(top=10, right=10, bottom=10, left=10)
    padding_outer: float = 8.0
    padding_top: float = 24.0
    padding_inner: float = 4.0
    round: bool = True
    truncate_below: float = 60.0
    value_label_above: float = 40.0
    max_font_size: float = 11.0
    fill_opacity: float = 0.85
    brighten: float = 0.7

    hover_fill_opacity: float = 1.0
    hover_stroke_width: float = 2.0
    hover_transition_ms: int = 200


@dataclass(frozen=True)
class ChartSettings:
    """All settings needed to lay out any chart type."""

    theme: Theme = field(default_factory=Theme)
    bar: BarSettings = field(default_factory=BarSettings)
    line: LineSettings = field(default_factory=LineSettings)
    radar: RadarSettings = field(default_factory=RadarSettings)
    treemap: TreemapSettings = field(default_factory=TreemapSettings)


# =============================================================================
# YAML LOADING
# =============================================================================


def _apply_section(current: Any, values: dict[str, Any], *, section: str, path: str) -> Any:
    """Return a copy of a settings dataclass with YAML values applied."""
    known = {f.name for f in dataclasses.fields(current)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ConfigurationError(
            f"Unknown keys in '{section}' section: {', '.join(unknown)}",
            path=path,
            section=section,
            context={"unknown_keys": unknown},
        )

    updates = dict(values)
    if "margin" in updates:
        margin = updates["margin"]
        if not isinstance(margin, dict):
            raise ConfigurationError(
                f"'{section}.margin' must be a mapping of top/right/bottom/left",
                path=path,
                section=section,
            )
        updates["margin"] = dataclasses.replace(current.margin, **margin)

    return dataclasses.replace(current, **updates)


def settings_from_dict(data: dict[str, Any] | None, *, source: str = "<dict>") -> ChartSettings:
    """Build ChartSettings from a parsed mapping.

    Args:
        data: Mapping with optional theme/bar/line/radar/treemap sections
        source: Label used in error messages

    Returns:
        ChartSettings with defaults for everything not overridden

    Raises:
        ConfigurationError: If a section contains unknown keys
    """
    settings = ChartSettings()
    if not data:
        return settings

    updates: dict[str, Any] = {}
    for section in ("theme", "bar", "line", "radar", "treemap"):
        values = data.get(section)
        if values is None:
            continue
        if not isinstance(values, dict):
            logger.warning(f"Invalid '{section}' section in {source}, expected dict")
            continue
        try:
            updates[section] = _apply_section(
                getattr(settings, section), values, section=section, path=source
            )
        except TypeError as e:
            raise ConfigurationError(
                f"Invalid values in '{section}' section: {e}", path=source, section=section
            ) from e

    return dataclasses.replace(settings, **updates)


def load_settings(path: Path | str) -> ChartSettings:
    """Load chart settings from a YAML file.

    Expected YAML format:
    ```yaml
    theme:
      primary: "#2563eb"
    bar:
      padding: 0.2
      margin: {left: 40}
    treemap:
      hover_transition_ms: 150
    ```

    Args:
        path: Path to the YAML settings file

    Returns:
        ChartSettings

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If the YAML is invalid
        ConfigurationError: If the settings have an invalid shape
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is not None and not isinstance(data, dict):
        raise ConfigurationError("Settings file must contain a mapping", path=str(path))

    return settings_from_dict(data, source=str(path))


def load_settings_safe(path: Path | str | None) -> ChartSettings:
    """Load settings, returning defaults on any error.

    Args:
        path: Path to settings file, or None

    Returns:
        Loaded settings, or defaults if the path is None or unreadable
    """
    if path is None:
        return ChartSettings()

    try:
        return load_settings(path)
    except FileNotFoundError:
        logger.info(f"No settings file found at {path}")
    except yaml.YAMLError as e:
        logger.warning(f"Invalid YAML in settings file {path}: {e}")
    except ConfigurationError as e:
        logger.warning(f"Ignoring settings file {path}: {e.message}")
    return ChartSettings()
