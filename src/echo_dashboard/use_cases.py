"""Business logic use cases."""

import asyncio
from collections.abc import AsyncIterator, Callable
from typing import Optional

from echo_dashboard.adapters.sources import (
    CalendarSource,
    GmailSource,
    JiraSource,
    SlackSource,
    demo_items,
)
from echo_dashboard.config import IntegrationsConfig, Settings
from echo_dashboard.core import (
    WORK_TIERS,
    AnalysisResult,
    Category,
    ChatAssistant,
    ClassificationOracle,
    ConfigurationError,
    DailyPlan,
    DashboardError,
    FetchResult,
    FocusTierEngine,
    InboxItem,
    ItemSource,
    ItemStore,
    PlanGenerationError,
    PlanGenerator,
    PrioritizedTask,
    SessionHistory,
    SourceType,
    UserCredentials,
    category_lookup,
    filter_stream,
)

CLASSIFICATION_FAILED_MESSAGE = "Failed to analyze priorities. Please check API config or try again."
CRITICAL_FETCH_MESSAGE = "System Error: Unable to attempt connections."

# Sources that may be filled with demo items while the user has not connected them
DEMO_WHEN_UNCONFIGURED = (SourceType.SLACK, SourceType.JIRA)


class IntegrationService:
    """Service for fetching inbox items from the configured integrations."""

    def __init__(self, config: Optional[IntegrationsConfig] = None) -> None:
        self.config = config or IntegrationsConfig()

    def build_sources(self, credentials: UserCredentials) -> list[ItemSource]:
        """Create a source for every integration that has credentials."""
        timeout = self.config.request_timeout
        sources: list[ItemSource] = []

        if credentials.google_token:
            sources.append(
                GmailSource(credentials.google_token, self.config.gmail_max_results, timeout)
            )
            sources.append(
                CalendarSource(credentials.google_token, self.config.calendar_max_results, timeout)
            )

        if credentials.slack_token:
            sources.append(
                SlackSource(
                    credentials.slack_token,
                    channel_limit=self.config.slack_channel_limit,
                    history_limit=self.config.slack_history_limit,
                    timeout=timeout,
                )
            )

        if credentials.jira and credentials.jira.api_token:
            sources.append(JiraSource(credentials.jira, self.config.jira_max_results, timeout))

        return sources

    async def fetch_integrations_data(self, credentials: UserCredentials) -> FetchResult:
        """Fetch items from all configured sources."""
        sources = self.build_sources(credentials)
        result = await self.collect(sources)

        if self.config.pad_unconfigured_sources:
            configured = {source.source_type for source in sources}
            for source_type in DEMO_WHEN_UNCONFIGURED:
                if source_type not in configured:
                    print(f"  🎭 {source_type.value.title()}: not connected, showing demo data")
                    result.items.extend(demo_items(source_type))

        return result

    async def collect(self, sources: list[ItemSource]) -> FetchResult:
        """Fetch sources concurrently; a failing source falls back to demo data."""
        print("\n📡 Fetching integrations...")

        results = await asyncio.gather(
            *(source.fetch_items() for source in sources), return_exceptions=True
        )

        combined = FetchResult()
        for source, result in zip(sources, results):
            emoji = getattr(source, "emoji", "🔍")

            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                message = str(result) or "Unknown Error"
                print(f"  {emoji} {source.label}: ❌ {message} (switching to demo data)")
                combined.errors.append(f"{source.label}: {message}")
                combined.items.extend(demo_items(source.source_type))
                continue

            if not result and self.config.pad_empty_results:
                print(f"  {emoji} {source.label}: empty, showing demo data")
                combined.items.extend(demo_items(source.source_type))
                continue

            print(f"  {emoji} {source.label}: {len(result)} items")
            combined.items.extend(result)

        print(f"✓ Collected {len(combined.items)} items, {len(combined.errors)} errors")
        return combined


class DashboardSession:
    """Session-scoped state of one dashboard user.

    Created on connect with the user's credentials; every successful refresh
    replaces the items and the analysis together and starts the focus workflow
    over.
    """

    def __init__(
        self,
        settings: Settings,
        credentials: UserCredentials,
        oracle: ClassificationOracle,
        plan_generator: PlanGenerator,
        integration_service: Optional[IntegrationService] = None,
        chat_factory: Optional[Callable[[list[InboxItem]], ChatAssistant]] = None,
    ) -> None:
        self.settings = settings
        self.credentials = credentials
        self.oracle = oracle
        self.plan_generator = plan_generator
        self.integrations = integration_service or IntegrationService(settings.integrations)
        self.chat_factory = chat_factory

        self.store = ItemStore()
        self.analysis: Optional[AnalysisResult] = None
        self.engine = FocusTierEngine(SessionHistory(settings.focus.achievement_goal))
        self.plan: Optional[DailyPlan] = None

        self.loading = False
        self.planning = False
        self.error: Optional[str] = None
        self.connection_logs: list[str] = []
        self.is_demo_mode = False

        self.selected_category: Optional[Category] = None
        self.selected_source: Optional[SourceType] = None
        self._chat: Optional[ChatAssistant] = None

    async def refresh(self) -> bool:
        """Fetch and classify the inbox, then restart the focus workflow.

        Returns False when a refresh is already running or classification
        failed; in both cases the previous state is kept.
        """
        if self.loading:
            print("⏳ Refresh already in progress")
            return False

        if not self.settings.anthropic_api_key:
            raise ConfigurationError("API Key not found in environment variables.")

        self.loading = True
        self.engine.refreshing = True
        self.error = None
        self.connection_logs = []

        try:
            items, is_demo = await self._collect_items()

            if items:
                print(f"\n🧠 Classifying {len(items)} items...")
                analysis = await self.oracle.analyze_priorities(items)
            else:
                analysis = AnalysisResult.empty()
        except ConfigurationError:
            raise
        except DashboardError as e:
            print(f"❌ Classification failed: {e}")
            self.error = CLASSIFICATION_FAILED_MESSAGE
            return False
        finally:
            self.loading = False
            self.engine.refreshing = False

        self.store = ItemStore(items)
        self.analysis = analysis
        self.is_demo_mode = is_demo
        self.plan = None
        self._chat = None
        self.engine.load(analysis, self.store)

        print(
            f"✓ Analysis ready: score {analysis.productivity_score}, "
            f"{len(analysis.top_priorities)} top priorities"
        )
        return True

    async def _collect_items(self) -> tuple[list[InboxItem], bool]:
        """Items for this refresh and whether they are the demo set."""
        if not self.credentials.has_any:
            print("\n🎭 No credentials configured, using demo data")
            return demo_items(), True

        try:
            result = await self.integrations.fetch_integrations_data(self.credentials)
        except Exception as e:
            # Real credentials with a broken fetch: show nothing rather than demo data
            print(f"❌ Critical fetch failure: {e}")
            self.connection_logs = [CRITICAL_FETCH_MESSAGE]
            return [], False

        self.connection_logs = list(result.errors)
        return result.items, False

    @property
    def current_tier(self) -> Category:
        return self.engine.current_tier

    @property
    def live_queue(self) -> list[PrioritizedTask]:
        return self.engine.live_queue

    @property
    def history(self) -> SessionHistory:
        return self.engine.history

    def complete_task(self, task_id: str) -> Optional[PrioritizedTask]:
        return self.engine.complete_task(task_id)

    def reorder(self, task_id: str, target_task_id: str) -> bool:
        return self.engine.reorder(task_id, target_task_id)

    def select_tier(self, tier: Category) -> None:
        self.engine.select_tier(tier)

    def remaining_counts(self) -> dict[Category, int]:
        return {tier: self.engine.remaining_count(tier) for tier in WORK_TIERS}

    def set_stream_filter(
        self,
        category: Optional[Category] = None,
        source: Optional[SourceType] = None,
    ) -> None:
        self.selected_category = category
        self.selected_source = source

    def stream(self) -> list[InboxItem]:
        """Side-stream items matching the selected filters."""
        return filter_stream(self.store, self.analysis, self.selected_category, self.selected_source)

    def stream_categories(self) -> dict[str, Category]:
        return category_lookup(self.analysis)

    async def daily_plan(self) -> Optional[DailyPlan]:
        """Plan for the day, generated at most once per session.

        Returns None while a plan is being generated or when generation failed.
        """
        if self.plan is not None:
            return self.plan
        if self.planning:
            return None

        self.planning = True
        try:
            tasks = list(self.analysis.top_priorities) if self.analysis else []
            print(f"\n🗓️  Planning the day around {len(tasks)} priorities...")
            self.plan = await self.plan_generator.generate_daily_plan(tasks)
        except PlanGenerationError as e:
            print(f"⚠️  Could not generate plan: {e}")
        finally:
            self.planning = False

        return self.plan

    def open_chat(self) -> ChatAssistant:
        """Chat seeded with the current inbox, kept until the next refresh."""
        if self.chat_factory is None:
            raise DashboardError("Chat assistant is not configured")
        if self._chat is None:
            self._chat = self.chat_factory(self.store.items)
        return self._chat

    async def ask(self, message: str) -> AsyncIterator[str]:
        """Stream the assistant's reply to a question about the inbox."""
        async for chunk in self.open_chat().send_message_stream(message):
            yield chunk
