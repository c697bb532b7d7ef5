"""
Module: schemas

Purpose: Pydantic models for the records the chart renderers consume.

All input records are frozen: renderers and geometry primitives only ever
read them. Numeric fields are deliberately left unconstrained (negative and
NaN values are accepted) so that malformed data shows up in the drawing
rather than being silently dropped.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict


# =============================================================================
# ENUMS
# =============================================================================


class ChartType(str, Enum):
    """Chart types supported by the layout engine."""

    BAR = "bar"
    LINE = "line"
    RADAR = "radar"
    TREEMAP = "treemap"


class RadarAxis(str, Enum):
    """Axes of the category comparison radar, in drawing order."""

    RATING = "rating"
    PRICE = "price"
    VALUE = "value"

    @property
    def label(self) -> str:
        """Human readable axis label."""
        return self.value.capitalize()


# =============================================================================
# BASE MODELS
# =============================================================================


class BaseSchema(BaseModel):
    """Base model with common configuration."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        str_strip_whitespace=True,
    )


# =============================================================================
# INPUT RECORDS
# =============================================================================


class SalesRecord(BaseSchema):
    """One bar of the sales bar chart."""

    category: str
    value: float
    year: str

    def __repr__(self) -> str:
        return f"SalesRecord(category={self.category!r}, value={self.value})"


class MonthlyRecord(BaseSchema):
    """One point of the monthly sales line chart."""

    month: str
    value: float
    year: str

    @property
    def category(self) -> str:
        """The month doubles as the band category of the line chart."""
        return self.month

    def __repr__(self) -> str:
        return f"MonthlyRecord(month={self.month!r}, value={self.value})"


class ProductRecord(BaseSchema):
    """A product row used by the radar and treemap charts."""

    id: str
    name: str
    category: str
    value: float
    price: float
    rating: float
    year: str

    def __repr__(self) -> str:
        return (
            f"ProductRecord(id={self.id!r}, name={self.name!r}, "
            f"category={self.category!r}, value={self.value})"
        )


# =============================================================================
# DERIVED SCHEMAS
# =============================================================================


class AggregatedCategory(BaseSchema):
    """Per-category averages plotted on the radar chart."""

    category: str
    avg_rating: float
    avg_price: float
    avg_value: float
    count: int = 1

    def average(self, axis: RadarAxis) -> float:
        """Return the average for a radar axis."""
        return {
            RadarAxis.RATING: self.avg_rating,
            RadarAxis.PRICE: self.avg_price,
            RadarAxis.VALUE: self.avg_value,
        }[axis]


Record = SalesRecord | MonthlyRecord | ProductRecord

RECORD_MODELS: dict[ChartType, type[BaseSchema]] = {
    ChartType.BAR: SalesRecord,
    ChartType.LINE: MonthlyRecord,
    ChartType.RADAR: ProductRecord,
    ChartType.TREEMAP: ProductRecord,
}
