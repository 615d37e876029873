"""Log of tasks completed during the session."""

from dataclasses import replace

from echo_dashboard.core.entities import PrioritizedTask


class SessionHistory:
    """Append-only log of completed task snapshots."""

    def __init__(self, achievement_goal: int = 5) -> None:
        self.achievement_goal = achievement_goal
        self._entries: list[PrioritizedTask] = []

    def record(self, task: PrioritizedTask) -> PrioritizedTask:
        """Store a snapshot of the task as it was at completion time."""
        snapshot = replace(task)
        self._entries.append(snapshot)
        return snapshot

    def recent(self, limit: int = 3) -> list[PrioritizedTask]:
        """Most recently completed tasks, newest first."""
        if limit <= 0:
            return []
        return list(reversed(self._entries[-limit:]))

    @property
    def entries(self) -> list[PrioritizedTask]:
        return list(self._entries)

    @property
    def progress(self) -> int:
        """Achievement progress in percent, capped at 100."""
        if self.achievement_goal <= 0:
            return 100
        return min(int(len(self._entries) / self.achievement_goal * 100), 100)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
