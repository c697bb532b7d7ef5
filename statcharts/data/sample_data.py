"""
Module: sample_data

Purpose: Generate sample datasets for demos and tests.

Generates:
- Sales per category for the bar chart
- Monthly sales for the line chart
- Product rows for the radar and treemap charts

Generation is deterministic for a given seed.
"""

import numpy as np

from statcharts.data.schemas import MonthlyRecord, ProductRecord, SalesRecord


# =============================================================================
# CONSTANTS
# =============================================================================

PRODUCT_CATEGORIES = [
    "Electronics",
    "Clothing",
    "Home & Garden",
    "Sports",
    "Books",
    "Beauty",
]

PRODUCT_NAMES = {
    "Electronics": ["Laptop Pro", "Wireless Earbuds", "Smart Watch", "4K TV", "Gaming Console"],
    "Clothing": ["Winter Jacket", "Running Shoes", "Denim Jeans", "Silk Dress", "Wool Sweater"],
    "Home & Garden": ["Coffee Maker", "Garden Tools Set", "Bed Sheets", "Air Purifier", "Plant Pot"],
    "Sports": ["Yoga Mat", "Dumbbells Set", "Tennis Racket", "Running Belt", "Bicycle Helmet"],
    "Books": ["Bestseller Novel", "Cookbook", "Self-Help Guide", "History Book", "Science Text"],
    "Beauty": ["Face Cream", "Perfume", "Makeup Kit", "Hair Dryer", "Skincare Set"],
}

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


# =============================================================================
# GENERATORS
# =============================================================================


def generate_sales_records(
    *,
    categories: list[str] | None = None,
    year: str = "2024",
    seed: int = 42,
) -> list[SalesRecord]:
    """Generate one sales total per category.

    Args:
        categories: Category labels (defaults to PRODUCT_CATEGORIES)
        year: Year label stamped on every record
        seed: Random seed for reproducibility

    Returns:
        One SalesRecord per category, in category order
    """
    rng = np.random.default_rng(seed)
    categories = categories or PRODUCT_CATEGORIES
    values = rng.integers(1_000, 10_000, size=len(categories))
    return [
        SalesRecord(category=category, value=float(value), year=year)
        for category, value in zip(categories, values)
    ]


def generate_monthly_records(
    *,
    months: int = 12,
    year: str = "2024",
    base: float = 4_000.0,
    seed: int = 42,
) -> list[MonthlyRecord]:
    """Generate a random-walk monthly sales series.

    Args:
        months: Number of months (1-12)
        year: Year label
        base: Starting sales level
        seed: Random seed for reproducibility

    Returns:
        MonthlyRecord list in calendar order
    """
    rng = np.random.default_rng(seed)
    steps = rng.normal(loc=150.0, scale=600.0, size=months)
    levels = np.maximum(base + np.cumsum(steps), 0.0)
    return [
        MonthlyRecord(month=month, value=round(float(level), 2), year=year)
        for month, level in zip(MONTHS[:months], levels)
    ]


def generate_product_records(
    *,
    categories: list[str] | None = None,
    products_per_category: int = 4,
    year: str = "2024",
    seed: int = 42,
) -> list[ProductRecord]:
    """Generate product rows with price, rating and sales value.

    Args:
        categories: Category labels (defaults to PRODUCT_CATEGORIES)
        products_per_category: Products generated for each category
        year: Year label
        seed: Random seed for reproducibility

    Returns:
        ProductRecord list grouped by category
    """
    rng = np.random.default_rng(seed)
    categories = categories or PRODUCT_CATEGORIES

    records: list[ProductRecord] = []
    counter = 0
    for category in categories:
        names = PRODUCT_NAMES.get(category) or [f"{category} Item {i + 1}" for i in range(5)]
        for i in range(products_per_category):
            counter += 1
            price = float(rng.integers(10, 500))
            units = int(rng.integers(5, 60))
            records.append(ProductRecord(
                id=f"p{counter:03d}",
                name=names[i % len(names)],
                category=category,
                value=price * units,
                price=price,
                rating=round(float(rng.uniform(2.5, 5.0)), 1),
                year=year,
            ))
    return records
