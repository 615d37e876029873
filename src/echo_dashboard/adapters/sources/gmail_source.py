"""Gmail source for recent inbox messages."""

import asyncio
from datetime import datetime, timezone
from typing import Optional

import httpx

from echo_dashboard.adapters.sources.filters import api_error_message, html_to_text
from echo_dashboard.core import InboxItem, ItemSource, SourceFetchError, SourceType


class GmailSource(ItemSource):
    """Fetch the latest messages from the user's Gmail mailbox."""

    emoji = "📧"
    name = "Gmail"
    label = "Gmail"
    source_type = SourceType.EMAIL

    def __init__(self, token: str, max_results: int = 10, timeout: float = 30.0) -> None:
        self.token = token
        self.max_results = max_results
        self.timeout = timeout
        self.api_base = "https://gmail.googleapis.com/gmail/v1/users/me"

    async def fetch_items(self) -> list[InboxItem]:
        """List recent message ids, then fetch their details concurrently."""
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            headers = self._get_headers()

            response = await client.get(
                f"{self.api_base}/messages",
                headers=headers,
                params={"maxResults": self.max_results},
            )

            if response.status_code != 200:
                raise SourceFetchError(
                    f"API Request Failed ({response.status_code}): "
                    f"{api_error_message(response.text)}"
                )

            messages = response.json().get("messages") or []
            if not messages:
                return []

            results = await asyncio.gather(
                *(self._fetch_message(client, headers, msg["id"]) for msg in messages)
            )

        items = [item for item in results if item is not None]
        print(f"  └─ Gmail: {len(items)} messages")
        return items

    async def _fetch_message(
        self,
        client: httpx.AsyncClient,
        headers: dict[str, str],
        message_id: str,
    ) -> Optional[InboxItem]:
        """Fetch one message; failures skip the message."""
        response = await client.get(f"{self.api_base}/messages/{message_id}", headers=headers)
        if response.status_code != 200:
            return None

        try:
            return self._create_item(response.json())
        except (KeyError, ValueError, TypeError) as e:
            print(f"      ⚠️  Skipping message {message_id}: {e}")
            return None

    def _create_item(self, data: dict) -> InboxItem:
        """Create item from a message resource."""
        message_headers = data.get("payload", {}).get("headers", [])
        subject = self._header(message_headers, "Subject") or "(No Subject)"
        sender = self._header(message_headers, "From") or "Unknown"

        internal_date = data.get("internalDate")
        if internal_date:
            timestamp = datetime.fromtimestamp(int(internal_date) / 1000, tz=timezone.utc)
        else:
            timestamp = datetime.now(timezone.utc)

        return InboxItem(
            id=f"gmail-{data['id']}",
            source=SourceType.EMAIL,
            sender=sender,
            subject=subject,
            content=html_to_text(data.get("snippet", "")),
            timestamp=timestamp,
            read="UNREAD" not in data.get("labelIds", []),
        )

    @staticmethod
    def _header(headers: list[dict], name: str) -> Optional[str]:
        for header in headers:
            if header.get("name") == name:
                return header.get("value")
        return None

    def _get_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}
