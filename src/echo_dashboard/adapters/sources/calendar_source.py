"""Google Calendar source for upcoming events."""

from datetime import datetime, timezone

import httpx

from echo_dashboard.adapters.sources.filters import (
    api_error_message,
    html_to_text,
    parse_timestamp,
)
from echo_dashboard.core import InboxItem, ItemSource, SourceFetchError, SourceType


class CalendarSource(ItemSource):
    """Fetch the next events of the primary calendar."""

    emoji = "📅"
    name = "Google Calendar"
    label = "Calendar"
    source_type = SourceType.CALENDAR

    def __init__(self, token: str, max_results: int = 5, timeout: float = 30.0) -> None:
        self.token = token
        self.max_results = max_results
        self.timeout = timeout
        self.api_base = "https://www.googleapis.com/calendar/v3"

    async def fetch_items(self) -> list[InboxItem]:
        """Fetch upcoming single events ordered by start time."""
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(
                f"{self.api_base}/calendars/primary/events",
                headers={"Authorization": f"Bearer {self.token}"},
                params={
                    "timeMin": datetime.now(timezone.utc).isoformat(),
                    "maxResults": self.max_results,
                    "singleEvents": "true",
                    "orderBy": "startTime",
                },
            )

        if response.status_code != 200:
            raise SourceFetchError(
                f"API Request Failed ({response.status_code}): "
                f"{api_error_message(response.text)}"
            )

        items = [self._create_item(event) for event in response.json().get("items") or []]
        print(f"  └─ Calendar: {len(items)} events")
        return items

    def _create_item(self, event: dict) -> InboxItem:
        """Create item from an event resource."""
        start = event.get("start") or {}
        start_value = start.get("dateTime") or start.get("date") or ""
        starts_at = parse_timestamp(start_value)

        content = html_to_text(event.get("description") or "")
        if not content:
            content = f"Event at {starts_at.strftime('%I:%M %p')}"

        return InboxItem(
            id=f"cal-{event['id']}",
            source=SourceType.CALENDAR,
            sender=(event.get("organizer") or {}).get("email") or "Calendar",
            subject=event.get("summary") or "No Title",
            content=content,
            timestamp=starts_at,
            read=False,
        )
