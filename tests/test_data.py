"""
Tests for record schemas, the record loader and sample data.

Tests cover:
- Frozen, strict pydantic record models
- load_records for JSON and YAML files and its error cases
- Reproducible sample data generators
"""

import json
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from statcharts.data import (
    RECORD_MODELS,
    AggregatedCategory,
    ChartType,
    MonthlyRecord,
    ProductRecord,
    RadarAxis,
    SalesRecord,
    generate_monthly_records,
    generate_product_records,
    generate_sales_records,
    load_records,
)
from statcharts.exceptions import DataLoadError


# =============================================================================
# SCHEMAS
# =============================================================================


class TestSchemas:
    """Tests for record models."""

    def test_records_are_frozen(self) -> None:
        record = SalesRecord(category="A", value=1, year="2024")
        with pytest.raises(ValidationError):
            record.value = 2

    def test_extra_fields_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SalesRecord(category="A", value=1, year="2024", colour="red")

    def test_whitespace_stripped(self) -> None:
        assert SalesRecord(category="  A ", value=1, year="2024").category == "A"

    def test_monthly_category_is_month(self) -> None:
        assert MonthlyRecord(month="Mar", value=3, year="2024").category == "Mar"

    def test_radar_axis_labels(self) -> None:
        assert [a.label for a in RadarAxis] == ["Rating", "Price", "Value"]

    def test_aggregate_average(self) -> None:
        agg = AggregatedCategory(category="X", avg_rating=4, avg_price=10, avg_value=100, count=2)
        assert agg.average(RadarAxis.PRICE) == 10

    def test_record_models_cover_chart_types(self) -> None:
        assert set(RECORD_MODELS) == set(ChartType)
        assert RECORD_MODELS[ChartType.TREEMAP] is ProductRecord


# =============================================================================
# LOADER
# =============================================================================


class TestLoadRecords:
    """Tests for load_records."""

    def test_json_list(self, tmp_path: Path) -> None:
        path = tmp_path / "sales.json"
        path.write_text(json.dumps([
            {"category": "A", "value": 10, "year": "2024"},
            {"category": "B", "value": 20.5, "year": "2024"},
        ]), encoding="utf-8")

        records = load_records(path, SalesRecord)
        assert [r.category for r in records] == ["A", "B"]
        assert records[1].value == 20.5

    def test_yaml_records_key(self, tmp_path: Path) -> None:
        path = tmp_path / "months.yaml"
        path.write_text(yaml.safe_dump({"records": [{"month": "Jan", "value": 5, "year": "2024"}]}))

        (record,) = load_records(path, MonthlyRecord)
        assert record.month == "Jan"

    def test_empty_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yml"
        path.write_text("", encoding="utf-8")
        assert load_records(path, SalesRecord) == []

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DataLoadError) as exc_info:
            load_records(tmp_path / "nope.json", SalesRecord)
        assert exc_info.value.path.endswith("nope.json")

    def test_unparsable_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(DataLoadError):
            load_records(path, SalesRecord)

    def test_non_list_document(self, tmp_path: Path) -> None:
        path = tmp_path / "scalar.yaml"
        path.write_text("42\n", encoding="utf-8")
        with pytest.raises(DataLoadError):
            load_records(path, SalesRecord)

    def test_invalid_row_reports_index(self, tmp_path: Path) -> None:
        path = tmp_path / "rows.json"
        path.write_text(json.dumps([
            {"category": "A", "value": 1, "year": "2024"},
            {"category": "B", "year": "2024"},
        ]), encoding="utf-8")

        with pytest.raises(DataLoadError) as exc_info:
            load_records(path, SalesRecord)
        assert exc_info.value.row == 1
        assert exc_info.value.context["errors"]


# =============================================================================
# SAMPLE DATA
# =============================================================================


class TestSampleData:
    """Tests for the sample data generators."""

    def test_sales_one_per_category(self) -> None:
        records = generate_sales_records(categories=["A", "B", "C"])
        assert [r.category for r in records] == ["A", "B", "C"]
        assert all(1_000 <= r.value < 10_000 for r in records)

    def test_monthly_series(self) -> None:
        records = generate_monthly_records(months=6)
        assert [r.month for r in records] == ["Jan", "Feb", "Mar", "Apr", "May", "Jun"]
        assert all(r.value >= 0 for r in records)

    def test_products(self) -> None:
        records = generate_product_records(categories=["Tools", "Books"], products_per_category=3)

        assert len(records) == 6
        assert [r.id for r in records[:3]] == ["p001", "p002", "p003"]
        assert all(2.5 <= r.rating <= 5.0 for r in records)
        assert all(r.value == pytest.approx(r.price * round(r.value / r.price)) for r in records)

    def test_seed_is_reproducible(self) -> None:
        assert generate_product_records(seed=11) == generate_product_records(seed=11)
        assert generate_sales_records(seed=1) != generate_sales_records(seed=2)
