"""Core domain layer."""

from echo_dashboard.core.entities import (
    WORK_TIERS,
    AnalysisResult,
    Category,
    DailyPlan,
    Distribution,
    FetchResult,
    InboxItem,
    ItemClassification,
    JiraCredentials,
    PlanItem,
    PlanItemType,
    PrioritizedTask,
    SourceType,
    TaskCategory,
    TaskOrigin,
    UserCredentials,
)
from echo_dashboard.core.errors import (
    ClassificationError,
    ConfigurationError,
    DashboardError,
    PlanGenerationError,
    SourceFetchError,
)
from echo_dashboard.core.focus_engine import (
    SYNTHETIC_ID_PREFIX,
    FocusTierEngine,
    resolve_task,
    synthesize_task,
)
from echo_dashboard.core.interfaces import (
    ChatAssistant,
    ClassificationOracle,
    DashboardRenderer,
    ItemSource,
    PlanGenerator,
)
from echo_dashboard.core.item_store import ItemStore
from echo_dashboard.core.session_history import SessionHistory
from echo_dashboard.core.stream_filter import category_lookup, filter_stream

__all__ = [
    "WORK_TIERS",
    "AnalysisResult",
    "Category",
    "DailyPlan",
    "Distribution",
    "FetchResult",
    "InboxItem",
    "ItemClassification",
    "JiraCredentials",
    "PlanItem",
    "PlanItemType",
    "PrioritizedTask",
    "SourceType",
    "TaskCategory",
    "TaskOrigin",
    "UserCredentials",
    "ClassificationError",
    "ConfigurationError",
    "DashboardError",
    "PlanGenerationError",
    "SourceFetchError",
    "SYNTHETIC_ID_PREFIX",
    "FocusTierEngine",
    "resolve_task",
    "synthesize_task",
    "ChatAssistant",
    "ClassificationOracle",
    "DashboardRenderer",
    "ItemSource",
    "PlanGenerator",
    "ItemStore",
    "SessionHistory",
    "category_lookup",
    "filter_stream",
]
