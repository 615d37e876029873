"""Source adapters for fetching items."""

from echo_dashboard.adapters.sources.calendar_source import CalendarSource
from echo_dashboard.adapters.sources.demo_data import DEMO_INBOX, demo_items
from echo_dashboard.adapters.sources.gmail_source import GmailSource
from echo_dashboard.adapters.sources.jira_source import JiraSource
from echo_dashboard.adapters.sources.slack_source import SlackSource

__all__ = [
    "CalendarSource",
    "DEMO_INBOX",
    "GmailSource",
    "JiraSource",
    "SlackSource",
    "demo_items",
]
