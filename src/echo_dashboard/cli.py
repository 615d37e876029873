"""CLI entry point for the Echo dashboard."""

import asyncio
from pathlib import Path
from typing import Optional

import httpx
import typer

from echo_dashboard.adapters.llm import ClaudeClient
from echo_dashboard.adapters.render import MarkdownDashboardRenderer
from echo_dashboard.config import get_credentials, get_settings
from echo_dashboard.core import (
    WORK_TIERS,
    Category,
    ConfigurationError,
    DashboardError,
    DashboardRenderer,
    PrioritizedTask,
    SourceType,
    UserCredentials,
)
from echo_dashboard.use_cases import DashboardSession

HELP_TEXT = """Commands:
  done N            complete task N
  move N M          move task N to position M
  tier NAME         focus on Urgent, Important or Routine
  filter [CATEGORY] [SOURCE]   filter the stream (no arguments clears)
  stream            show the stream
  plan              plan my day
  history           show completed tasks
  ask QUESTION      ask the assistant about your inbox
  refresh           fetch and analyze again
  quit              exit"""


def main(
    config: Path = typer.Option(Path("config.yaml"), help="Path to YAML config"),
    demo: bool = typer.Option(False, "--demo", help="Ignore credentials and use demo data"),
    plan: bool = typer.Option(False, "--plan", help="Generate a daily plan after loading"),
    once: bool = typer.Option(False, "--once", help="Print the dashboard and exit"),
    google_token: Optional[str] = typer.Option(None, help="OAuth token for Gmail and Calendar"),
    slack_token: Optional[str] = typer.Option(None, help="Slack bot token"),
    jira_domain: Optional[str] = typer.Option(None, help="Jira site, e.g. acme.atlassian.net"),
    jira_email: Optional[str] = typer.Option(None, help="Jira account email"),
    jira_token: Optional[str] = typer.Option(None, help="Jira API token"),
) -> None:
    """Prioritize email, Slack, Jira and calendar items into a focused task queue."""
    if demo:
        credentials = UserCredentials()
    else:
        credentials = get_credentials(
            google_token, slack_token, jira_domain, jira_email, jira_token
        )
    asyncio.run(async_run(config, credentials, plan, once))


def app() -> None:
    """CLI entry point."""
    typer.run(main)


async def async_run(config: Path, credentials: UserCredentials, plan: bool, once: bool) -> None:
    """Async implementation of the dashboard loop."""
    settings = get_settings(config)
    client = ClaudeClient(settings)
    renderer = MarkdownDashboardRenderer()

    session = DashboardSession(
        settings=settings,
        credentials=credentials,
        oracle=client,
        plan_generator=client,
        chat_factory=client.create_chat_session,
    )

    print("\n" + "=" * 70)
    print("🔊 ECHO - Focus Dashboard")
    print("=" * 70)

    print("\n🔑 Credentials:")
    print(f"  {'✓' if credentials.google_token else '✗'} Google (Gmail, Calendar)")
    print(f"  {'✓' if credentials.slack_token else '✗'} Slack")
    print(f"  {'✓' if credentials.jira else '✗'} Jira")

    try:
        await session.refresh()
    except ConfigurationError as e:
        print("\n" + "=" * 70)
        print("🔒 CONFIGURATION REQUIRED")
        print("=" * 70)
        print(f"{e}\nSet ANTHROPIC_API_KEY and start again.")
        raise typer.Exit(code=1)

    show_dashboard(session, renderer)

    if plan:
        await show_plan(session, renderer)

    if once:
        return

    print(f"\n{HELP_TEXT}")
    while True:
        command = typer.prompt("\necho", default="", show_default=False).strip()
        if not command:
            continue
        if command in ("quit", "exit", "q"):
            break
        try:
            await handle_command(session, renderer, command)
        except ConfigurationError as e:
            print(f"🔒 {e}")
            raise typer.Exit(code=1)


async def handle_command(
    session: DashboardSession,
    renderer: DashboardRenderer,
    command: str,
) -> None:
    """Dispatch one interactive command."""
    name, _, rest = command.partition(" ")
    args = rest.split()

    if name == "done" and len(args) == 1:
        task = _task_at(session, args[0])
        if task is None:
            return
        session.complete_task(task.id)
        print(f"🎉 Completed: {task.title}")
        print(renderer.render_queue(session.current_tier, session.live_queue, session.engine.is_all_clear))

    elif name == "move" and len(args) == 2:
        task = _task_at(session, args[0])
        target = _task_at(session, args[1])
        if task is None or target is None:
            return
        session.reorder(task.id, target.id)
        print(renderer.render_queue(session.current_tier, session.live_queue, session.engine.is_all_clear))

    elif name == "tier" and len(args) == 1:
        tier = _parse_category(args[0])
        if tier not in WORK_TIERS:
            print("⚠️  Choose one of: Urgent, Important, Routine")
            return
        session.select_tier(tier)
        print(renderer.render_queue(session.current_tier, session.live_queue, session.engine.is_all_clear))

    elif name == "filter":
        category = None
        source = None
        for arg in args:
            category = _parse_category(arg) or category
            source = _parse_source(arg) or source
        session.set_stream_filter(category, source)
        print(renderer.render_stream(
            session.stream(), session.stream_categories(), category, source
        ))

    elif name == "stream":
        print(renderer.render_stream(
            session.stream(),
            session.stream_categories(),
            session.selected_category,
            session.selected_source,
        ))

    elif name == "plan":
        await show_plan(session, renderer)

    elif name == "history":
        history = session.history
        panel = renderer.render_history(
            history.recent(session.settings.focus.history_display_limit),
            len(history),
            history.progress,
        )
        print(panel or "Nothing completed yet.")

    elif name == "ask" and rest:
        try:
            async for chunk in session.ask(rest):
                print(chunk, end="", flush=True)
            print()
        except (DashboardError, httpx.HTTPError) as e:
            print(f"\n⚠️  {e}")

    elif name == "refresh":
        if await session.refresh():
            show_dashboard(session, renderer)
        elif session.error:
            print(f"⚠️  {session.error}")

    else:
        print(HELP_TEXT)


def show_dashboard(session: DashboardSession, renderer: DashboardRenderer) -> None:
    """Print the full dashboard."""
    if session.error:
        print(f"\n⚠️  {session.error}")

    if session.is_demo_mode:
        print("\n🎭 Demo mode: showing sample data")

    if session.connection_logs:
        print("\n🔌 Integration issues:")
        for log in session.connection_logs:
            print(f"  • {log}")

    if session.analysis is None:
        return

    print()
    print(renderer.render_analytics(session.analysis))
    print()
    print(renderer.render_queue(session.current_tier, session.live_queue, session.engine.is_all_clear))

    remaining = session.remaining_counts()
    print("Remaining: " + " · ".join(f"{tier.value} {count}" for tier, count in remaining.items()))

    history = session.history
    panel = renderer.render_history(
        history.recent(session.settings.focus.history_display_limit),
        len(history),
        history.progress,
    )
    if panel:
        print()
        print(panel)


async def show_plan(session: DashboardSession, renderer: DashboardRenderer) -> None:
    """Generate (once) and print the daily plan."""
    daily_plan = await session.daily_plan()
    if daily_plan is None:
        print("⚠️  No plan available. Try again with `plan`.")
        return
    print()
    print(renderer.render_plan(daily_plan))


def _task_at(session: DashboardSession, position: str) -> Optional[PrioritizedTask]:
    queue = session.live_queue
    try:
        index = int(position) - 1
    except ValueError:
        print(f"⚠️  Not a task number: {position}")
        return None
    if not 0 <= index < len(queue):
        print(f"⚠️  No task number {position}")
        return None
    return queue[index]


def _parse_category(value: str) -> Optional[Category]:
    for category in Category:
        if category.value.lower() == value.lower():
            return category
    return None


def _parse_source(value: str) -> Optional[SourceType]:
    for source in SourceType:
        if source.value.lower() == value.lower():
            return source
    return None


if __name__ == "__main__":
    app()
