"""
Module: aggregate

Purpose: Reduce raw product records into chart-ready summaries.

Key Functions:
- group_by_category: ordered grouping of records by category
- aggregate_by_category: per-category averages for the radar chart
- build_hierarchy: root -> category -> product tree for the treemap

Pure functions; every call builds fresh objects from the records.
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import TypedDict

from statcharts.data.schemas import AggregatedCategory, ProductRecord


class CategoryTotals(TypedDict):
    """Running sums for one category."""

    total_rating: float
    total_price: float
    total_value: float
    count: int


def group_by_category(records: Sequence[ProductRecord]) -> dict[str, list[int]]:
    """Group record indices by category, categories in first-seen order."""
    groups: dict[str, list[int]] = {}
    for i, record in enumerate(records):
        groups.setdefault(record.category, []).append(i)
    return groups


def aggregate_by_category(records: Sequence[ProductRecord]) -> tuple[AggregatedCategory, ...]:
    """
    Average rating, price and value per category.

    Every category comes from at least one record, so the count used as the
    divisor is always >= 1.

    Args:
        records: Product records in input order

    Returns:
        One AggregatedCategory per category, in first-seen order
    """
    totals: dict[str, CategoryTotals] = {}
    for record in records:
        current = totals.setdefault(
            record.category,
            {"total_rating": 0.0, "total_price": 0.0, "total_value": 0.0, "count": 0},
        )
        current["total_rating"] += record.rating
        current["total_price"] += record.price
        current["total_value"] += record.value
        current["count"] += 1

    return tuple(
        AggregatedCategory(
            category=category,
            avg_rating=t["total_rating"] / t["count"],
            avg_price=t["total_price"] / t["count"],
            avg_value=t["total_value"] / t["count"],
            count=t["count"],
        )
        for category, t in totals.items()
    )


# =============================================================================
# TREEMAP HIERARCHY
# =============================================================================


@dataclass(eq=False)
class HierarchyNode:
    """Node of the treemap tree.

    Leaves point at their record by index. ``value`` is only meaningful after
    sum() has run; the layout fills in x0/y0/x1/y1.
    """

    name: str
    depth: int = 0
    record_index: int | None = None
    leaf_value: float = 0.0
    children: list["HierarchyNode"] = field(default_factory=list)
    parent: "HierarchyNode | None" = field(default=None, repr=False)

    value: float = 0.0
    x0: float = 0.0
    y0: float = 0.0
    x1: float = 0.0
    y1: float = 0.0

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    @property
    def height(self) -> float:
        return self.y1 - self.y0

    def add_child(self, child: "HierarchyNode") -> "HierarchyNode":
        child.parent = self
        child.depth = self.depth + 1
        self.children.append(child)
        return child

    def descendants(self) -> Iterator["HierarchyNode"]:
        """This node and everything below it, parents before children."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def leaves(self) -> list["HierarchyNode"]:
        return [node for node in self.descendants() if node.is_leaf]

    def sum(self) -> "HierarchyNode":
        """Set every node's value to the sum of its subtree's leaf values."""
        for node in reversed(list(self.descendants())):
            if node.is_leaf:
                node.value = node.leaf_value
            else:
                node.value = sum(child.value for child in node.children)
        return self

    def sort_by_value(self) -> "HierarchyNode":
        """Order all children by descending value (stable for ties)."""
        for node in self.descendants():
            node.children.sort(key=lambda child: child.value, reverse=True)
        return self


def build_hierarchy(records: Sequence[ProductRecord]) -> HierarchyNode:
    """
    Build the root -> category -> product tree.

    Category values are not computed here; call sum() on the result so that
    each parent's value is always the sum of its children.

    Args:
        records: Product records in input order

    Returns:
        Unsummed root node with one child per category
    """
    root = HierarchyNode(name="root")
    for category, indices in group_by_category(records).items():
        category_node = root.add_child(HierarchyNode(name=category))
        for i in indices:
            category_node.add_child(HierarchyNode(
                name=records[i].name,
                record_index=i,
                leaf_value=records[i].value,
            ))
    return root
