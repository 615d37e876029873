"""Slack source reading the latest channel messages."""

from datetime import datetime, timezone

import httpx

from echo_dashboard.core import InboxItem, ItemSource, SourceFetchError, SourceType


class SlackSource(ItemSource):
    """Read recent messages from the first public channel of a workspace."""

    emoji = "💬"
    name = "Slack"
    label = "Slack"
    source_type = SourceType.SLACK

    def __init__(
        self,
        token: str,
        channel_limit: int = 5,
        history_limit: int = 10,
        timeout: float = 30.0,
    ) -> None:
        self.token = token
        self.channel_limit = channel_limit
        self.history_limit = history_limit
        self.timeout = timeout
        self.api_base = "https://slack.com/api"

    async def fetch_items(self) -> list[InboxItem]:
        """List public channels and read the history of the first one."""
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            headers = {"Authorization": f"Bearer {self.token}"}

            list_response = await client.get(
                f"{self.api_base}/conversations.list",
                headers=headers,
                params={"limit": self.channel_limit, "types": "public_channel"},
            )
            if list_response.status_code != 200:
                raise SourceFetchError(
                    f"Network Error during Channel List ({list_response.status_code})"
                )

            list_data = list_response.json()
            if not list_data.get("ok"):
                raise SourceFetchError(f"Slack Channel List Error: {list_data.get('error')}")

            channels = list_data.get("channels") or []
            if not channels:
                raise SourceFetchError("No public channels found in this Slack workspace.")

            channel = channels[0]
            history_response = await client.get(
                f"{self.api_base}/conversations.history",
                headers=headers,
                params={"channel": channel["id"], "limit": self.history_limit},
            )
            if history_response.status_code != 200:
                raise SourceFetchError(
                    f"Network Error during History Fetch ({history_response.status_code})"
                )

            history_data = history_response.json()
            if not history_data.get("ok"):
                raise SourceFetchError(f"Slack History Error: {history_data.get('error')}")

        items = [
            self._create_item(message, channel.get("name", channel["id"]))
            for message in history_data.get("messages") or []
        ]
        print(f"  └─ Slack #{channel.get('name', channel['id'])}: {len(items)} messages")
        return items

    def _create_item(self, message: dict, channel_name: str) -> InboxItem:
        """Create item from a history message."""
        ts = message["ts"]
        return InboxItem(
            id=f"slack-{ts}",
            source=SourceType.SLACK,
            sender=message.get("user") or "Slack User",
            subject=f"Message in #{channel_name}",
            content=message.get("text") or "",
            timestamp=datetime.fromtimestamp(float(ts), tz=timezone.utc),
            read=False,
        )
