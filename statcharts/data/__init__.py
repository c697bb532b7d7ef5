"""
Data module for the chart engine.

Contains the record schemas, a file loader and sample dataset generators.
"""

from statcharts.data.loader import load_records
from statcharts.data.sample_data import (
    generate_monthly_records,
    generate_product_records,
    generate_sales_records,
)
from statcharts.data.schemas import (
    RECORD_MODELS,
    AggregatedCategory,
    ChartType,
    MonthlyRecord,
    ProductRecord,
    RadarAxis,
    Record,
    SalesRecord,
)

__all__ = [
    # Schemas
    "AggregatedCategory",
    "ChartType",
    "MonthlyRecord",
    "ProductRecord",
    "RadarAxis",
    "Record",
    "RECORD_MODELS",
    "SalesRecord",
    # Loading
    "load_records",
    # Sample data
    "generate_monthly_records",
    "generate_product_records",
    "generate_sales_records",
]
