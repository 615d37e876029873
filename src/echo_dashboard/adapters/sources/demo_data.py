"""Fixed demo inbox used when live data is unavailable."""

from datetime import datetime, timezone
from typing import Optional

from echo_dashboard.core import InboxItem, SourceType


def _at(hour: int, minute: int = 0) -> datetime:
    return datetime(2025, 3, 10, hour, minute, tzinfo=timezone.utc)


DEMO_INBOX: tuple[InboxItem, ...] = (
    InboxItem(
        id="email-1",
        source=SourceType.EMAIL,
        sender="sarah.chen@acmecorp.com",
        subject="URGENT: Contract renewal deadline today",
        content=(
            "Hi, the Acme contract renewal needs your signature by 5 PM today "
            "or the pricing terms lapse. Legal has already approved the draft."
        ),
        timestamp=_at(8, 12),
    ),
    InboxItem(
        id="email-2",
        source=SourceType.EMAIL,
        sender="cfo@company.com",
        subject="Q3 budget review - input needed",
        content=(
            "Please send your team's revised Q3 budget numbers before "
            "Thursday's review meeting."
        ),
        timestamp=_at(7, 45),
    ),
    InboxItem(
        id="email-3",
        source=SourceType.EMAIL,
        sender="newsletter@techdigest.io",
        subject="This week in tech: 10 tools you should try",
        content="Our weekly roundup of productivity tools and industry news.",
        timestamp=_at(6, 30),
        read=True,
    ),
    InboxItem(
        id="email-4",
        source=SourceType.EMAIL,
        sender="hr@company.com",
        subject="Reminder: submit timesheets",
        content="Timesheets for last week are due by end of day Friday.",
        timestamp=_at(9, 5),
    ),
    InboxItem(
        id="slack-1",
        source=SourceType.SLACK,
        sender="devops-bot",
        subject="Message in #incidents",
        content="Production API latency above 2s for 15 minutes. On-call needs a decision on rollback.",
        timestamp=_at(8, 55),
    ),
    InboxItem(
        id="slack-2",
        source=SourceType.SLACK,
        sender="mike.ross",
        subject="Message in #design",
        content="Uploaded the new onboarding mockups, would love your feedback when you get a chance.",
        timestamp=_at(8, 20),
    ),
    InboxItem(
        id="slack-3",
        source=SourceType.SLACK,
        sender="jenny.lee",
        subject="Message in #random",
        content="Who's in for tacos at lunch? 🌮",
        timestamp=_at(10, 2),
    ),
    InboxItem(
        id="jira-1",
        source=SourceType.JIRA,
        sender="Priya Patel",
        subject="PAY-412",
        content="Checkout fails for customers using saved cards (blocker).",
        timestamp=_at(7, 10),
    ),
    InboxItem(
        id="jira-2",
        source=SourceType.JIRA,
        sender="Tom Baker",
        subject="WEB-88",
        content="Update marketing site footer links.",
        timestamp=_at(9, 40),
    ),
    InboxItem(
        id="jira-3",
        source=SourceType.JIRA,
        sender="Priya Patel",
        subject="PAY-415",
        content="Write migration plan for the new payment provider.",
        timestamp=_at(9, 48),
    ),
    InboxItem(
        id="cal-1",
        source=SourceType.CALENDAR,
        sender="ceo@company.com",
        subject="Board prep sync",
        content="Review slides for Friday's board meeting. Bring updated metrics.",
        timestamp=_at(14),
    ),
    InboxItem(
        id="cal-2",
        source=SourceType.CALENDAR,
        sender="Calendar",
        subject="Weekly team standup",
        content="Recurring standup with the platform team.",
        timestamp=_at(11),
    ),
)


def demo_items(source: Optional[SourceType] = None) -> list[InboxItem]:
    """Demo items, optionally restricted to one source."""
    if source is None:
        return list(DEMO_INBOX)
    return [item for item in DEMO_INBOX if item.source == source]
