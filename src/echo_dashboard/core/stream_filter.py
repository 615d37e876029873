"""Filtered views of the inbox for the side stream."""

from collections.abc import Iterable
from typing import Optional

from echo_dashboard.core.entities import (
    AnalysisResult,
    Category,
    InboxItem,
    SourceType,
)


def filter_stream(
    items: Iterable[InboxItem],
    analysis: Optional[AnalysisResult] = None,
    category: Optional[Category] = None,
    source: Optional[SourceType] = None,
) -> list[InboxItem]:
    """
    Select the items matching both the category and the source filter.

    Args:
        items: Items in store order
        analysis: Classification run used to resolve the category filter
        category: Category to keep (None keeps every category)
        source: Source to keep (None keeps every source)

    Returns:
        Matching items, store order preserved
    """
    filtered = list(items)

    # The category filter needs classifications to resolve against
    if category is not None and analysis is not None:
        category_ids = {
            c.item_id for c in analysis.item_classifications if c.category == category
        }
        filtered = [item for item in filtered if item.id in category_ids]

    if source is not None:
        filtered = [item for item in filtered if item.source == source]

    return filtered


def category_lookup(analysis: Optional[AnalysisResult]) -> dict[str, Category]:
    """Map item id to its category for badge display."""
    if analysis is None:
        return {}
    return {c.item_id: c.category for c in analysis.item_classifications}
