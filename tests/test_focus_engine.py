"""Tests for the focus tier engine."""

from datetime import datetime, timezone

import pytest

from echo_dashboard.core import (
    AnalysisResult,
    Category,
    Distribution,
    FocusTierEngine,
    InboxItem,
    ItemClassification,
    ItemStore,
    PrioritizedTask,
    SourceType,
    TaskCategory,
    TaskOrigin,
    resolve_task,
    synthesize_task,
)


def make_item(item_id: str, subject: str = "Subject", content: str = "Content") -> InboxItem:
    return InboxItem(
        id=item_id,
        source=SourceType.EMAIL,
        sender="someone@example.com",
        subject=subject,
        content=content,
        timestamp=datetime(2025, 3, 10, 9, 0, tzinfo=timezone.utc),
    )


def make_task(item_id: str, urgency: int = 9, task_id: str = "") -> PrioritizedTask:
    return PrioritizedTask(
        id=task_id or f"task-{item_id}",
        original_item_id=item_id,
        title=f"Handle {item_id}",
        summary="Rich summary",
        urgency_score=urgency,
        importance_score=7,
        reason="Deadline today",
        suggested_action="Reply immediately",
        category=TaskCategory.CLIENT,
    )


def make_analysis(
    classes: list[tuple[str, Category]],
    top: tuple[PrioritizedTask, ...] = (),
) -> AnalysisResult:
    classifications = [ItemClassification(item_id=i, category=c) for i, c in classes]
    return AnalysisResult(
        top_priorities=top,
        productivity_score=70,
        distribution=Distribution.from_classifications(classifications),
        item_classifications=tuple(classifications),
    )


def loaded_engine(
    classes: list[tuple[str, Category]],
    top: tuple[PrioritizedTask, ...] = (),
) -> FocusTierEngine:
    store = ItemStore([make_item(item_id) for item_id, _ in classes])
    engine = FocusTierEngine()
    engine.load(make_analysis(classes, top), store)
    return engine


def queue_ids(engine: FocusTierEngine) -> list[str]:
    return [task.original_item_id for task in engine.live_queue]


def test_synthetic_task_scores_per_tier() -> None:
    """Synthetic tasks use the fixed per-tier heuristic."""
    item = make_item("a")

    assert (synthesize_task(item, Category.URGENT).urgency_score,
            synthesize_task(item, Category.URGENT).importance_score) == (8, 9)
    assert (synthesize_task(item, Category.IMPORTANT).urgency_score,
            synthesize_task(item, Category.IMPORTANT).importance_score) == (6, 8)
    assert (synthesize_task(item, Category.ROUTINE).urgency_score,
            synthesize_task(item, Category.ROUTINE).importance_score) == (3, 4)


def test_synthetic_task_fields() -> None:
    """Synthetic tasks take their text from the item."""
    task = synthesize_task(make_item("a", subject="Budget", content="Send numbers"), Category.IMPORTANT)

    assert task.id == "synthetic-a"
    assert task.original_item_id == "a"
    assert task.title == "Budget"
    assert task.summary == "Send numbers"
    assert task.reason == "Classified as Important based on initial analysis."
    assert task.suggested_action == "Review and process."
    assert task.category == TaskCategory.INTERNAL
    assert task.origin == TaskOrigin.SYNTHETIC


def test_synthetic_task_placeholders() -> None:
    """Empty subject and content fall back to placeholders."""
    task = synthesize_task(make_item("a", subject="", content=""), Category.ROUTINE)

    assert task.title == "Untitled Item"
    assert task.summary == "No content available."


def test_synthetic_task_rejects_noise() -> None:
    with pytest.raises(ValueError):
        synthesize_task(make_item("a"), Category.NOISE)


def test_resolve_prefers_rich_task() -> None:
    """A rich task for the item wins over synthesis."""
    rich = make_task("a", urgency=10)
    analysis = make_analysis([("a", Category.URGENT)], top=(rich,))
    store = ItemStore([make_item("a")])

    assert resolve_task("a", Category.URGENT, analysis, store) is rich


def test_resolve_missing_item_returns_none() -> None:
    analysis = make_analysis([("ghost", Category.URGENT)])

    assert resolve_task("ghost", Category.URGENT, analysis, ItemStore()) is None


def test_important_item_without_rich_task_is_synthetic() -> None:
    """An Important item absent from the top priorities gets 6/8 scores."""
    engine = loaded_engine([("a", Category.IMPORTANT)])

    assert engine.current_tier == Category.IMPORTANT
    task = engine.live_queue[0]
    assert task.urgency_score == 6
    assert task.importance_score == 8
    assert task.is_synthetic


def test_derivation_selects_current_tier_only() -> None:
    engine = loaded_engine([
        ("u1", Category.URGENT),
        ("i1", Category.IMPORTANT),
        ("u2", Category.URGENT),
        ("n1", Category.NOISE),
    ])

    assert engine.current_tier == Category.URGENT
    assert sorted(queue_ids(engine)) == ["u1", "u2"]


def test_derivation_sorts_by_urgency_stable() -> None:
    """Higher urgency first; ties keep classification order."""
    top = (make_task("b", urgency=10), make_task("d", urgency=5))
    engine = loaded_engine(
        [
            ("a", Category.URGENT),
            ("b", Category.URGENT),
            ("c", Category.URGENT),
            ("d", Category.URGENT),
        ],
        top=top,
    )

    # b=10, a=8 (synthetic), c=8 (synthetic), d=5
    assert queue_ids(engine) == ["b", "a", "c", "d"]


def test_derivation_drops_items_missing_from_store() -> None:
    classes = [("a", Category.URGENT), ("ghost", Category.URGENT)]
    store = ItemStore([make_item("a")])
    engine = FocusTierEngine()
    engine.load(make_analysis(classes), store)

    assert queue_ids(engine) == ["a"]


def test_rich_task_kept_even_without_store_item() -> None:
    """Rich tasks do not need the underlying item."""
    engine = FocusTierEngine()
    engine.load(make_analysis([("a", Category.URGENT)], top=(make_task("a"),)), ItemStore())

    assert queue_ids(engine) == ["a"]


def test_complete_task_records_history_and_preserves_order() -> None:
    engine = loaded_engine([
        ("a", Category.URGENT),
        ("b", Category.URGENT),
        ("c", Category.URGENT),
    ])
    middle = engine.live_queue[1]

    snapshot = engine.complete_task(middle.id)

    assert snapshot == middle
    assert queue_ids(engine) == ["a", "c"]
    assert "b" in engine.completed_original_ids
    assert engine.history.entries == [middle]


def test_complete_unknown_task_is_noop() -> None:
    engine = loaded_engine([("a", Category.URGENT)])

    assert engine.complete_task("nope") is None
    assert queue_ids(engine) == ["a"]
    assert len(engine.history) == 0


def test_reorder_moves_task_to_target_position() -> None:
    """[A, B, C] reorder(C, A) gives [C, A, B]."""
    engine = loaded_engine([
        ("a", Category.URGENT),
        ("b", Category.URGENT),
        ("c", Category.URGENT),
    ])
    a, _, c = engine.live_queue

    assert engine.reorder(c.id, a.id)
    assert queue_ids(engine) == ["c", "a", "b"]


def test_reorder_forward() -> None:
    engine = loaded_engine([
        ("a", Category.URGENT),
        ("b", Category.URGENT),
        ("c", Category.URGENT),
    ])
    a, _, c = engine.live_queue

    assert engine.reorder(a.id, c.id)
    assert queue_ids(engine) == ["b", "c", "a"]


def test_reorder_rejects_same_or_unknown_ids() -> None:
    engine = loaded_engine([("a", Category.URGENT), ("b", Category.URGENT)])
    a = engine.live_queue[0]

    assert not engine.reorder(a.id, a.id)
    assert not engine.reorder(a.id, "missing")
    assert not engine.reorder("missing", a.id)
    assert queue_ids(engine) == ["a", "b"]


def test_manual_order_survives_completion() -> None:
    """Completing a task does not re-derive and lose the manual order."""
    engine = loaded_engine([
        ("a", Category.URGENT),
        ("b", Category.URGENT),
        ("c", Category.URGENT),
        ("d", Category.URGENT),
    ])
    a, b, c, d = engine.live_queue
    engine.reorder(d.id, a.id)  # d, a, b, c

    engine.complete_task(b.id)

    assert queue_ids(engine) == ["d", "a", "c"]


def test_completed_items_never_requeued() -> None:
    engine = loaded_engine([
        ("u1", Category.URGENT),
        ("i1", Category.IMPORTANT),
        ("i2", Category.IMPORTANT),
    ])
    engine.complete_task(engine.live_queue[0].id)
    engine.complete_task(engine.live_queue[0].id)

    engine.select_tier(Category.URGENT)
    engine.select_tier(Category.IMPORTANT)

    for task in engine.live_queue:
        assert task.original_item_id not in engine.completed_original_ids


def test_advance_from_urgent_to_important() -> None:
    """0 Urgent, 2 Important, 0 Routine remaining lands on Important."""
    engine = loaded_engine([
        ("u1", Category.URGENT),
        ("i1", Category.IMPORTANT),
        ("i2", Category.IMPORTANT),
    ])

    engine.complete_task(engine.live_queue[0].id)

    assert engine.current_tier == Category.IMPORTANT
    assert sorted(queue_ids(engine)) == ["i1", "i2"]


def test_advance_skips_empty_important() -> None:
    engine = loaded_engine([("u1", Category.URGENT), ("r1", Category.ROUTINE)])

    engine.complete_task(engine.live_queue[0].id)

    assert engine.current_tier == Category.ROUTINE
    assert queue_ids(engine) == ["r1"]


def test_load_advances_past_empty_urgent() -> None:
    engine = loaded_engine([("r1", Category.ROUTINE), ("n1", Category.NOISE)])

    assert engine.current_tier == Category.ROUTINE
    assert queue_ids(engine) == ["r1"]


def test_routine_is_terminal() -> None:
    """With nothing left anywhere the engine stays on Routine."""
    engine = loaded_engine([("r1", Category.ROUTINE)])

    engine.complete_task(engine.live_queue[0].id)

    assert engine.current_tier == Category.ROUTINE
    assert engine.live_queue == []
    assert engine.is_all_clear
    assert not engine.advance_tier_if_empty()
    assert engine.current_tier == Category.ROUTINE


def test_all_clear_on_urgent_stays_put() -> None:
    engine = loaded_engine([("n1", Category.NOISE)])

    assert engine.current_tier == Category.URGENT
    assert engine.is_all_clear


def test_no_advance_while_refreshing() -> None:
    engine = loaded_engine([("u1", Category.URGENT), ("i1", Category.IMPORTANT)])
    engine.refreshing = True

    engine.complete_task(engine.live_queue[0].id)

    assert engine.current_tier == Category.URGENT
    assert engine.live_queue == []

    engine.refreshing = False
    assert engine.advance_tier_if_empty()
    assert engine.current_tier == Category.IMPORTANT


def test_no_advance_when_urgent_items_remain_unresolvable() -> None:
    """An urgent item missing from the store still counts as remaining."""
    classes = [("ghost", Category.URGENT), ("i1", Category.IMPORTANT)]
    engine = FocusTierEngine()
    engine.load(make_analysis(classes), ItemStore([make_item("i1")]))

    assert engine.current_tier == Category.URGENT
    assert engine.live_queue == []


def test_select_tier_rederives_and_rejects_noise() -> None:
    engine = loaded_engine([("u1", Category.URGENT), ("r1", Category.ROUTINE)])

    engine.select_tier(Category.ROUTINE)
    assert queue_ids(engine) == ["r1"]

    with pytest.raises(ValueError):
        engine.select_tier(Category.NOISE)
    assert engine.current_tier == Category.ROUTINE


def test_remaining_count_excludes_completed() -> None:
    engine = loaded_engine([("u1", Category.URGENT), ("u2", Category.URGENT)])

    engine.complete_task(engine.live_queue[0].id)

    assert engine.remaining_count(Category.URGENT) == 1


def test_reset_clears_session_progress() -> None:
    engine = loaded_engine([("u1", Category.URGENT), ("i1", Category.IMPORTANT)])
    engine.complete_task(engine.live_queue[0].id)

    engine.reset()

    assert engine.current_tier == Category.URGENT
    assert engine.live_queue == []
    assert engine.completed_original_ids == frozenset()
    assert len(engine.history) == 0


def test_load_new_analysis_restarts_workflow() -> None:
    engine = loaded_engine([("u1", Category.URGENT), ("i1", Category.IMPORTANT)])
    engine.complete_task(engine.live_queue[0].id)
    assert engine.current_tier == Category.IMPORTANT

    classes = [("u1", Category.URGENT), ("u2", Category.URGENT)]
    engine.load(make_analysis(classes), ItemStore([make_item("u1"), make_item("u2")]))

    assert engine.current_tier == Category.URGENT
    assert sorted(queue_ids(engine)) == ["u1", "u2"]
    assert len(engine.history) == 0


def test_history_snapshot_outlives_tier_change() -> None:
    engine = loaded_engine([("u1", Category.URGENT), ("i1", Category.IMPORTANT)])
    first = engine.live_queue[0]

    engine.complete_task(first.id)

    assert engine.current_tier == Category.IMPORTANT
    assert engine.history.recent(1) == [first]
    assert engine.history.recent(1)[0].urgency_score == 8


def test_completing_second_rich_task_leaves_first() -> None:
    top = (make_task("a", task_id="1"), make_task("b", task_id="2"))
    engine = loaded_engine([("a", Category.URGENT), ("b", Category.URGENT)], top)

    done = engine.complete_task(engine.live_queue[1].id)

    assert done.original_item_id == "b"
    assert [t.original_item_id for t in engine.live_queue] == ["a"]
