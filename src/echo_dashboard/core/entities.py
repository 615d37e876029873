"""Core domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class SourceType(str, Enum):
    """Origin of an inbox item."""

    EMAIL = "EMAIL"
    SLACK = "SLACK"
    JIRA = "JIRA"
    CALENDAR = "CALENDAR"


class Category(str, Enum):
    """Priority tier assigned by the classifier."""

    URGENT = "Urgent"
    IMPORTANT = "Important"
    ROUTINE = "Routine"
    NOISE = "Noise"


# Actionable tiers in priority order; Noise is never queued
WORK_TIERS = (Category.URGENT, Category.IMPORTANT, Category.ROUTINE)


class TaskCategory(str, Enum):
    """Business-domain tag of a prioritized task."""

    CLIENT = "Client"
    INTERNAL = "Internal"
    PROJECT = "Project"
    ADMIN = "Admin"


class TaskOrigin(str, Enum):
    """How a prioritized task came to exist."""

    RICH = "rich"
    SYNTHETIC = "synthetic"


class PlanItemType(str, Enum):
    """Kind of block in a daily plan."""

    FOCUS = "focus"
    MEETING = "meeting"
    BREAK = "break"
    ROUTINE = "routine"


@dataclass(frozen=True)
class InboxItem:
    """Unit of incoming communication."""

    id: str
    source: SourceType
    sender: str
    subject: str
    content: str
    timestamp: datetime
    read: bool = False

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Item id cannot be empty")


@dataclass(frozen=True)
class ItemClassification:
    """Category assigned to a single inbox item."""

    item_id: str
    category: Category


@dataclass(frozen=True)
class PrioritizedTask:
    """Work unit derived from one inbox item."""

    id: str
    original_item_id: str
    title: str
    summary: str
    urgency_score: int
    importance_score: int
    reason: str
    suggested_action: str
    category: TaskCategory
    origin: TaskOrigin = TaskOrigin.RICH

    def __post_init__(self) -> None:
        if not 1 <= self.urgency_score <= 10:
            raise ValueError(f"Urgency score out of range: {self.urgency_score}")
        if not 1 <= self.importance_score <= 10:
            raise ValueError(f"Importance score out of range: {self.importance_score}")

    @property
    def is_synthetic(self) -> bool:
        return self.origin is TaskOrigin.SYNTHETIC


@dataclass(frozen=True)
class Distribution:
    """Item counts per category."""

    urgent: int = 0
    important: int = 0
    routine: int = 0
    noise: int = 0

    @classmethod
    def from_classifications(cls, classifications: list[ItemClassification]) -> "Distribution":
        counts = {category: 0 for category in Category}
        for classification in classifications:
            counts[classification.category] += 1
        return cls(
            urgent=counts[Category.URGENT],
            important=counts[Category.IMPORTANT],
            routine=counts[Category.ROUTINE],
            noise=counts[Category.NOISE],
        )

    @property
    def total(self) -> int:
        return self.urgent + self.important + self.routine + self.noise

    def count(self, category: Category) -> int:
        return getattr(self, category.value.lower())


@dataclass(frozen=True)
class AnalysisResult:
    """Aggregate output of one classification run."""

    top_priorities: tuple[PrioritizedTask, ...]
    productivity_score: int
    distribution: Distribution
    item_classifications: tuple[ItemClassification, ...]

    def __post_init__(self) -> None:
        if not 0 <= self.productivity_score <= 100:
            raise ValueError(f"Productivity score out of range: {self.productivity_score}")
        task_ids = [task.id for task in self.top_priorities]
        if len(set(task_ids)) != len(task_ids):
            raise ValueError("Top priority ids must be unique")

    @classmethod
    def empty(cls) -> "AnalysisResult":
        """Zero state used when there is nothing to analyze."""
        return cls(
            top_priorities=(),
            productivity_score=100,
            distribution=Distribution(),
            item_classifications=(),
        )

    def category_of(self, item_id: str) -> Optional[Category]:
        for classification in self.item_classifications:
            if classification.item_id == item_id:
                return classification.category
        return None

    def rich_task_for(self, item_id: str) -> Optional[PrioritizedTask]:
        """First oracle-authored task referencing the item, if any."""
        for task in self.top_priorities:
            if task.original_item_id == item_id:
                return task
        return None


@dataclass(frozen=True)
class PlanItem:
    """One scheduled block of a daily plan."""

    time: str
    activity: str
    type: PlanItemType
    duration: str
    notes: Optional[str] = None


@dataclass(frozen=True)
class DailyPlan:
    """Schedule generated from the top priorities."""

    summary: str
    items: tuple[PlanItem, ...]


@dataclass(frozen=True)
class JiraCredentials:
    """Basic-auth settings for a Jira Cloud site."""

    domain: str
    email: str
    api_token: str


@dataclass
class UserCredentials:
    """Per-source tokens held in memory for one session."""

    google_token: Optional[str] = None
    slack_token: Optional[str] = None
    jira: Optional[JiraCredentials] = None

    @property
    def has_any(self) -> bool:
        return bool(
            self.google_token
            or self.slack_token
            or (self.jira and self.jira.api_token)
        )


@dataclass
class FetchResult:
    """Combined output of the integration adapter."""

    items: list[InboxItem] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
