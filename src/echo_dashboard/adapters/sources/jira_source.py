"""Jira source for unresolved issues assigned to the user."""

import httpx

from echo_dashboard.adapters.sources.filters import parse_timestamp
from echo_dashboard.core import (
    InboxItem,
    ItemSource,
    JiraCredentials,
    SourceFetchError,
    SourceType,
)


class JiraSource(ItemSource):
    """Search open issues assigned to the current user."""

    emoji = "🎫"
    name = "Jira"
    label = "Jira"
    source_type = SourceType.JIRA

    JQL = "assignee=currentUser() AND resolution=Unresolved"

    def __init__(
        self,
        credentials: JiraCredentials,
        max_results: int = 5,
        timeout: float = 30.0,
    ) -> None:
        self.credentials = credentials
        self.max_results = max_results
        self.timeout = timeout
        self.api_base = f"https://{credentials.domain}/rest/api/3"

    async def fetch_items(self) -> list[InboxItem]:
        """Run the assigned-issues search."""
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(
                f"{self.api_base}/search/jql",
                auth=(self.credentials.email, self.credentials.api_token),
                headers={"Accept": "application/json"},
                params={
                    "jql": self.JQL,
                    "maxResults": self.max_results,
                    "fields": "summary,reporter,created",
                },
            )

        if response.status_code != 200:
            raise SourceFetchError(f"Status {response.status_code} - Likely CORS or Auth block")

        items = [self._create_item(issue) for issue in response.json().get("issues") or []]
        print(f"  └─ Jira: {len(items)} issues")
        return items

    def _create_item(self, issue: dict) -> InboxItem:
        """Create item from an issue resource."""
        fields = issue.get("fields") or {}
        return InboxItem(
            id=f"jira-{issue['id']}",
            source=SourceType.JIRA,
            sender=(fields.get("reporter") or {}).get("displayName") or "Jira",
            subject=issue.get("key") or issue["id"],
            content=fields.get("summary") or "",
            timestamp=parse_timestamp(fields.get("created") or ""),
            read=False,
        )
