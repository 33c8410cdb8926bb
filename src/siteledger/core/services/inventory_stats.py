"""Aggregate figures over a reconciled project inventory snapshot."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from siteledger.core.entities.ledger import CurrentInventoryItem


@dataclass
class InventoryStats:
    """Headline numbers for a project's inventory tab."""

    total_items: int = 0
    total_quantity: float = 0.0
    total_value: float = 0.0
    total_cost: float = 0.0
    total_transferred_in: float = 0.0
    total_returned_out: float = 0.0
    low_stock_items: int = 0
    out_of_stock_items: int = 0
    categories: dict[str, int] = field(default_factory=dict)


@dataclass
class CategoryGroup:
    """Items of one category with their totals."""

    category: str
    items: list[CurrentInventoryItem] = field(default_factory=list)
    total_quantity: float = 0.0
    total_value: float = 0.0
    total_cost: float = 0.0
    low_stock_items: int = 0
    items_with_reorder_point: int = 0

    @property
    def item_count(self) -> int:
        return len(self.items)


def compute_stats(items: Iterable[CurrentInventoryItem]) -> InventoryStats:
    """Totals, low/out-of-stock counts and per-category item counts."""
    stats = InventoryStats()
    for item in items:
        stats.total_items += 1
        stats.total_quantity += item.current_quantity
        stats.total_value += item.total_value
        stats.total_cost += item.total_cost
        stats.total_transferred_in += item.total_transferred_in
        stats.total_returned_out += item.total_returned_out
        if item.is_low_stock:
            stats.low_stock_items += 1
        if item.current_quantity == 0:
            stats.out_of_stock_items += 1
        stats.categories[item.category] = stats.categories.get(item.category, 0) + 1
    return stats


def group_by_category(items: Iterable[CurrentInventoryItem]) -> list[CategoryGroup]:
    """Group items by category, preserving first-seen category order."""
    groups: dict[str, CategoryGroup] = {}
    for item in items:
        category = item.category or "Uncategorized"
        group = groups.get(category)
        if group is None:
            group = groups[category] = CategoryGroup(category=category)
        group.items.append(item)
        group.total_quantity += item.current_quantity
        group.total_value += item.total_value
        group.total_cost += item.total_cost
        if item.is_low_stock:
            group.low_stock_items += 1
        if item.has_reorder_point:
            group.items_with_reorder_point += 1
    return list(groups.values())
