"""In-memory store of the inbox items of one session."""

from collections.abc import Iterator
from typing import Optional

from echo_dashboard.core.entities import InboxItem, SourceType


class ItemStore:
    """Flat list of inbox items with lookup by id.

    The store is never edited in place: a refresh builds a new store and the
    session swaps it in together with the new analysis result.
    """

    def __init__(self, items: Optional[list[InboxItem]] = None) -> None:
        self._items: tuple[InboxItem, ...] = ()
        self._by_id: dict[str, InboxItem] = {}
        self.replace(items or [])

    def replace(self, items: list[InboxItem]) -> None:
        """Replace the whole content of the store."""
        by_id: dict[str, InboxItem] = {}
        for item in items:
            # First occurrence wins when a source repeats an id
            by_id.setdefault(item.id, item)
        self._items = tuple(items)
        self._by_id = by_id

    def get(self, item_id: str) -> Optional[InboxItem]:
        return self._by_id.get(item_id)

    @property
    def items(self) -> list[InboxItem]:
        return list(self._items)

    def by_source(self, source: SourceType) -> list[InboxItem]:
        return [item for item in self._items if item.source == source]

    def source_counts(self) -> dict[SourceType, int]:
        counts = {source: 0 for source in SourceType}
        for item in self._items:
            counts[item.source] += 1
        return counts

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._by_id

    def __iter__(self) -> Iterator[InboxItem]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)
