"""Shared text utilities for sources."""

import json
from datetime import datetime, timezone

from bs4 import BeautifulSoup


def html_to_text(fragment: str) -> str:
    """
    Convert an HTML fragment to plain text.

    Args:
        fragment: HTML or plain text (entities are decoded either way)

    Returns:
        Text with tags removed and whitespace collapsed
    """
    if not fragment:
        return ""

    text = BeautifulSoup(fragment, "html.parser").get_text(" ")
    return " ".join(text.split())


def api_error_message(body: str) -> str:
    """
    Pull a readable message out of an API error body.

    Google APIs wrap the message as {"error": {"message": ...}}, Slack and
    others use {"error": "code"}. Anything else is returned as is.
    """
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, TypeError):
        return body

    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
    return body


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO 8601 timestamp as returned by the integration APIs.

    Date-only values and naive timestamps are taken as UTC; unparsable
    values fall back to the current time.
    """
    if not value:
        return datetime.now(timezone.utc)

    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        # Jira style: 2025-03-10T09:48:00.000+0000
        try:
            parsed = datetime.strptime(value, "%Y-%m-%dT%H:%M:%S.%f%z")
        except ValueError:
            return datetime.now(timezone.utc)

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
