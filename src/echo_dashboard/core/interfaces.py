"""Core interfaces for adapters."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from typing import Optional

from echo_dashboard.core.entities import (
    AnalysisResult,
    Category,
    DailyPlan,
    InboxItem,
    PrioritizedTask,
    SourceType,
)


class ItemSource(ABC):
    """Interface for fetching items from an integration."""

    source_type: SourceType
    label: str

    @abstractmethod
    async def fetch_items(self) -> list[InboxItem]:
        """Fetch the latest items from the source."""
        pass


class ClassificationOracle(ABC):
    """Interface for classifying and prioritizing inbox items."""

    @abstractmethod
    async def analyze_priorities(self, items: list[InboxItem]) -> AnalysisResult:
        """Classify every item and pick the top priorities."""
        pass


class PlanGenerator(ABC):
    """Interface for turning top priorities into a schedule."""

    @abstractmethod
    async def generate_daily_plan(self, tasks: list[PrioritizedTask]) -> DailyPlan:
        """Generate a plan for the working day."""
        pass


class ChatAssistant(ABC):
    """Interface for a conversation about the current inbox."""

    @abstractmethod
    def send_message_stream(self, message: str) -> AsyncIterator[str]:
        """Send a message and yield the reply in chunks."""
        pass


class DashboardRenderer(ABC):
    """Interface for rendering dashboard views."""

    @abstractmethod
    def render_queue(
        self,
        tier: Category,
        tasks: list[PrioritizedTask],
        all_clear: bool,
    ) -> str:
        """Render the live task queue of the current tier."""
        pass

    @abstractmethod
    def render_stream(
        self,
        items: list[InboxItem],
        categories: dict[str, Category],
        selected_category: Optional[Category] = None,
        selected_source: Optional[SourceType] = None,
    ) -> str:
        """Render the filtered side stream."""
        pass

    @abstractmethod
    def render_plan(self, plan: DailyPlan) -> str:
        """Render a daily plan."""
        pass

    @abstractmethod
    def render_analytics(self, analysis: AnalysisResult) -> str:
        """Render the productivity score and category distribution."""
        pass

    @abstractmethod
    def render_history(self, recent: list[PrioritizedTask], total: int, progress: int) -> str:
        """Render completed tasks; empty when nothing is done yet."""
        pass
