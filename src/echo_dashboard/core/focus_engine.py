"""Focus tier workflow: the ranked work queue of the current tier."""

from typing import Optional

from echo_dashboard.core.entities import (
    WORK_TIERS,
    AnalysisResult,
    Category,
    InboxItem,
    PrioritizedTask,
    TaskCategory,
    TaskOrigin,
)
from echo_dashboard.core.item_store import ItemStore
from echo_dashboard.core.session_history import SessionHistory

# (urgency, importance) assumed for items the classifier did not elevate
SYNTHETIC_SCORES: dict[Category, tuple[int, int]] = {
    Category.URGENT: (8, 9),
    Category.IMPORTANT: (6, 8),
    Category.ROUTINE: (3, 4),
}

SYNTHETIC_ID_PREFIX = "synthetic-"
UNTITLED_PLACEHOLDER = "Untitled Item"
EMPTY_CONTENT_PLACEHOLDER = "No content available."


def synthesize_task(item: InboxItem, tier: Category) -> PrioritizedTask:
    """Build a heuristic task for an item that has no oracle-authored task."""
    if tier not in SYNTHETIC_SCORES:
        raise ValueError(f"Cannot synthesize a task for tier {tier.value}")

    urgency, importance = SYNTHETIC_SCORES[tier]
    return PrioritizedTask(
        id=f"{SYNTHETIC_ID_PREFIX}{item.id}",
        original_item_id=item.id,
        title=item.subject or UNTITLED_PLACEHOLDER,
        summary=item.content or EMPTY_CONTENT_PLACEHOLDER,
        urgency_score=urgency,
        importance_score=importance,
        reason=f"Classified as {tier.value} based on initial analysis.",
        suggested_action="Review and process.",
        category=TaskCategory.INTERNAL,
        origin=TaskOrigin.SYNTHETIC,
    )


def resolve_task(
    item_id: str,
    tier: Category,
    analysis: AnalysisResult,
    store: ItemStore,
) -> Optional[PrioritizedTask]:
    """Prefer the rich task for the item, fall back to a synthetic one.

    Returns None when the item is not in the store.
    """
    rich = analysis.rich_task_for(item_id)
    if rich is not None:
        return rich

    item = store.get(item_id)
    if item is None:
        return None
    return synthesize_task(item, tier)


class FocusTierEngine:
    """State machine driving the task queue through Urgent, Important, Routine.

    Two independent reactions keep the queue consistent:

    * derivation rebuilds the queue when the analysis or the tier changes;
    * the advance check moves to the next tier when the queue runs empty.

    Completing a task never re-derives, so a manual ordering survives until
    the next derivation.
    """

    def __init__(self, history: Optional[SessionHistory] = None) -> None:
        self.history = history if history is not None else SessionHistory()
        self.refreshing = False
        self._analysis: Optional[AnalysisResult] = None
        self._store = ItemStore()
        self._tier = Category.URGENT
        self._queue: list[PrioritizedTask] = []
        self._completed: set[str] = set()

    @property
    def current_tier(self) -> Category:
        return self._tier

    @property
    def live_queue(self) -> list[PrioritizedTask]:
        return list(self._queue)

    @property
    def completed_original_ids(self) -> frozenset[str]:
        return frozenset(self._completed)

    @property
    def analysis(self) -> Optional[AnalysisResult]:
        return self._analysis

    @property
    def is_all_clear(self) -> bool:
        """True when no work tier has anything left."""
        return all(self.remaining_count(tier) == 0 for tier in WORK_TIERS)

    def load(self, analysis: AnalysisResult, store: ItemStore) -> None:
        """Install a fresh analysis: reset the session and derive the queue."""
        self._analysis = analysis
        self._store = store
        self.reset()
        self._derive()
        self._on_queue_changed()

    def reset(self) -> None:
        """Discard all session progress and return to the Urgent tier."""
        self._completed.clear()
        self.history.clear()
        self._queue = []
        self._tier = Category.URGENT

    def select_tier(self, tier: Category) -> None:
        """Switch the focus tier manually."""
        if tier not in WORK_TIERS:
            raise ValueError(f"{tier.value} is not a work tier")
        if tier == self._tier:
            return
        self._tier = tier
        self._derive()
        self._on_queue_changed()

    def remaining_count(self, tier: Category) -> int:
        """Classified items of the tier that are not completed yet."""
        if self._analysis is None:
            return 0
        return sum(
            1
            for c in self._analysis.item_classifications
            if c.category == tier and c.item_id not in self._completed
        )

    def complete_task(self, task_id: str) -> Optional[PrioritizedTask]:
        """Mark a queued task as done.

        Returns the recorded snapshot, or None when the task is not queued.
        """
        index = self._index_of(task_id)
        if index is None:
            return None

        task = self._queue.pop(index)
        self._completed.add(task.original_item_id)
        snapshot = self.history.record(task)
        self._on_queue_changed()
        return snapshot

    def reorder(self, task_id: str, target_task_id: str) -> bool:
        """Move a task to the position currently held by another task."""
        if task_id == target_task_id:
            return False

        from_index = self._index_of(task_id)
        to_index = self._index_of(target_task_id)
        if from_index is None or to_index is None:
            return False

        moved = self._queue.pop(from_index)
        self._queue.insert(to_index, moved)
        return True

    def advance_tier_if_empty(self) -> bool:
        """Move to the next tier with remaining work once the queue is empty.

        Returns True when the tier changed.
        """
        if self._analysis is None or self.refreshing or self._queue:
            return False

        next_tier = self._next_tier()
        if next_tier is None:
            return False

        self._tier = next_tier
        self._derive()
        return True

    def _next_tier(self) -> Optional[Category]:
        important = self.remaining_count(Category.IMPORTANT)
        routine = self.remaining_count(Category.ROUTINE)

        if self._tier == Category.URGENT and self.remaining_count(Category.URGENT) == 0:
            if important > 0:
                return Category.IMPORTANT
            if routine > 0:
                return Category.ROUTINE
        elif self._tier == Category.IMPORTANT and important == 0:
            if routine > 0:
                return Category.ROUTINE
        # Routine is terminal
        return None

    def _on_queue_changed(self) -> None:
        # Tiers only move forward, so this settles after at most two steps
        while not self._queue and self.advance_tier_if_empty():
            pass

    def _derive(self) -> None:
        if self._analysis is None:
            self._queue = []
            return

        tasks: list[PrioritizedTask] = []
        seen: set[str] = set()
        for classification in self._analysis.item_classifications:
            item_id = classification.item_id
            if classification.category != self._tier or item_id in self._completed:
                continue
            if item_id in seen:
                continue
            seen.add(item_id)

            task = resolve_task(item_id, self._tier, self._analysis, self._store)
            if task is not None:
                tasks.append(task)

        # sorted() is stable, ties keep classification order
        self._queue = sorted(tasks, key=lambda t: t.urgency_score, reverse=True)

    def _index_of(self, task_id: str) -> Optional[int]:
        for index, task in enumerate(self._queue):
            if task.id == task_id:
                return index
        return None
