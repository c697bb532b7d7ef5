"""
Tests for chart settings and the layout registry.

Tests cover:
- Default settings values
- settings_from_dict overrides, margin merging and validation
- load_settings / load_settings_safe YAML handling
- layout_chart dispatch and unknown chart types
"""

import logging
from pathlib import Path

import pytest
import yaml

from statcharts.charts import RENDERERS, layout_chart
from statcharts.config import (
    ChartSettings,
    Margin,
    load_settings,
    load_settings_safe,
    settings_from_dict,
)
from statcharts.data.schemas import ChartType, SalesRecord
from statcharts.exceptions import ConfigurationError, UnknownChartTypeError


# =============================================================================
# DEFAULTS
# =============================================================================


class TestDefaults:
    """Tests for default settings."""

    def test_hover_durations_per_chart_type(self) -> None:
        settings = ChartSettings()
        assert settings.bar.hover_transition_ms == 800
        assert settings.treemap.hover_transition_ms == 200

    def test_treemap_padding(self) -> None:
        treemap = ChartSettings().treemap
        assert (treemap.padding_outer, treemap.padding_top, treemap.padding_inner) == (8, 24, 4)

    def test_palette_sizes(self) -> None:
        theme = ChartSettings().theme
        assert len(theme.category10) == 10
        assert len(theme.radar_palette) == 5
        assert len(theme.treemap_palette) == 10


# =============================================================================
# DICT / YAML LOADING
# =============================================================================


class TestSettingsFromDict:
    """Tests for settings_from_dict."""

    def test_empty_returns_defaults(self) -> None:
        assert settings_from_dict(None) == ChartSettings()
        assert settings_from_dict({}) == ChartSettings()

    def test_section_override(self) -> None:
        settings = settings_from_dict({"bar": {"padding": 0.2}, "theme": {"primary": "#000"}})
        assert settings.bar.padding == 0.2
        assert settings.theme.primary == "#000"
        assert settings.line == ChartSettings().line

    def test_partial_margin_merges(self) -> None:
        settings = settings_from_dict({"radar": {"margin": {"left": 10}}})
        assert settings.radar.margin == Margin(top=50, right=80, bottom=50, left=10)

    def test_unknown_key_raises(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            settings_from_dict({"treemap": {"paddingg": 3}})
        assert exc_info.value.section == "treemap"
        assert exc_info.value.context["unknown_keys"] == ["paddingg"]

    def test_bad_margin_key_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            settings_from_dict({"bar": {"margin": {"middle": 3}}})

    def test_non_mapping_margin_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            settings_from_dict({"bar": {"margin": 5}})

    def test_non_mapping_section_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="statcharts.config"):
            settings = settings_from_dict({"line": [1, 2]})
        assert settings.line == ChartSettings().line
        assert "Invalid 'line' section" in caplog.text


class TestLoadSettings:
    """Tests for YAML settings files."""

    def test_load_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "charts.yaml"
        path.write_text(yaml.safe_dump({"treemap": {"hover_transition_ms": 150}}), encoding="utf-8")

        settings = load_settings(path)
        assert settings.treemap.hover_transition_ms == 150

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_settings(path) == ChartSettings()

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "missing.yaml")

    def test_list_document_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_settings(path)

    def test_safe_returns_defaults_on_missing(self, tmp_path: Path) -> None:
        assert load_settings_safe(tmp_path / "missing.yaml") == ChartSettings()
        assert load_settings_safe(None) == ChartSettings()

    def test_safe_returns_defaults_on_bad_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("bar: [unclosed\n", encoding="utf-8")
        assert load_settings_safe(path) == ChartSettings()

    def test_safe_returns_defaults_on_unknown_keys(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        path = tmp_path / "unknown.yaml"
        path.write_text("bar:\n  colour: red\n", encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="statcharts.config"):
            assert load_settings_safe(path) == ChartSettings()
        assert "Ignoring settings file" in caplog.text


# =============================================================================
# LAYOUT REGISTRY
# =============================================================================


class TestLayoutChart:
    """Tests for layout_chart."""

    def test_registry_covers_every_chart_type(self) -> None:
        assert set(RENDERERS) == set(ChartType)

    def test_dispatch_uses_chart_settings(self) -> None:
        records = [SalesRecord(category="A", value=10, year="2024")]
        settings = settings_from_dict({"bar": {"hover_transition_ms": 123}})

        geometry = layout_chart("bar", records, 180, 200, settings)
        assert geometry.chart_type is ChartType.BAR
        assert geometry.find("bar-0").hover_transition_ms == 123

    def test_unknown_chart_type(self) -> None:
        with pytest.raises(UnknownChartTypeError) as exc_info:
            layout_chart("pie", [], 100, 100)
        assert exc_info.value.chart_type == "pie"
        assert "bar" in exc_info.value.available
