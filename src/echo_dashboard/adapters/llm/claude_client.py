"""Claude API client for classification, planning and chat."""

import json
import re
from collections.abc import AsyncIterator
from typing import Any

import httpx

from echo_dashboard.config import Settings
from echo_dashboard.core import (
    SYNTHETIC_ID_PREFIX,
    AnalysisResult,
    Category,
    ChatAssistant,
    ClassificationError,
    ClassificationOracle,
    ConfigurationError,
    DailyPlan,
    DashboardError,
    Distribution,
    InboxItem,
    ItemClassification,
    PlanGenerationError,
    PlanGenerator,
    PlanItem,
    PlanItemType,
    PrioritizedTask,
    TaskCategory,
    TaskOrigin,
)

# Raised while reading a 200 reply whose body is not the Messages API shape
UNREADABLE_BODY_ERRORS = (ValueError, KeyError, IndexError, TypeError, AttributeError)

ANALYSIS_SCHEMA = """{
  "topPriorities": [{
    "id": "unique id of the priority item",
    "originalItemId": "id of the input item",
    "title": "concise action-oriented title",
    "summary": "brief summary of the issue",
    "urgencyScore": 1-10,
    "importanceScore": 1-10,
    "reason": "why this is prioritized",
    "suggestedAction": "next step, e.g. 'Reply immediately'",
    "category": "Client" | "Internal" | "Project" | "Admin"
  }],
  "productivityScore": 0-100,
  "distribution": {"urgent": n, "important": n, "routine": n, "noise": n},
  "itemClassifications": [{
    "itemId": "id of the input item",
    "category": "Urgent" | "Important" | "Routine" | "Noise"
  }]
}"""

PLAN_SCHEMA = """{
  "summary": "short motivational summary of the plan",
  "items": [{
    "time": "e.g. '09:00 AM'",
    "activity": "main task or activity name",
    "type": "focus" | "meeting" | "break" | "routine",
    "duration": "e.g. '45 mins'",
    "notes": "optional short detail"
  }]
}"""


def build_chat_context(items: list[InboxItem], content_chars: int = 200) -> list[dict[str, str]]:
    """Condensed view of the inbox used to seed a chat session."""
    return [
        {
            "sender": item.sender,
            "subject": item.subject,
            "content": item.content[:content_chars],
            "time": item.timestamp.isoformat(),
            "source": item.source.value,
        }
        for item in items
    ]


class ClaudeClient(ClassificationOracle, PlanGenerator):
    """Claude API client implementation."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.api_key = settings.anthropic_api_key
        self.model = settings.claude_model
        self.max_tokens = settings.claude_max_tokens
        self.temperature = settings.claude_temperature
        self.timeout = settings.claude_timeout
        self.base_url = "https://api.anthropic.com/v1"

    async def analyze_priorities(self, items: list[InboxItem]) -> AnalysisResult:
        """Classify every item and pick the top priorities."""
        if not items:
            return AnalysisResult.empty()

        prompt_template = self.settings.prompts.analysis.get("user", "")
        system_prompt = self.settings.prompts.analysis.get("system", "")

        prompt = prompt_template.format(
            schema=ANALYSIS_SCHEMA,
            items_json=json.dumps(
                [self._serialize_item(item) for item in items],
                ensure_ascii=False,
                indent=2,
            ),
        )

        try:
            response = await self._call_api(prompt=prompt, system=system_prompt)
        except httpx.HTTPError as e:
            raise ClassificationError(f"Classification request failed: {e}") from e
        except UNREADABLE_BODY_ERRORS as e:
            raise ClassificationError(f"Unreadable classification response: {e}") from e

        json_text = self._extract_json(response)

        try:
            return self._parse_analysis(json.loads(json_text), items)
        except (json.JSONDecodeError, KeyError, ValueError, TypeError) as e:
            print("  ⚠️  Claude returned an unusable classification:")
            if len(response) > 500:
                print(f"     Response start: {response[:250]}...")
                print(f"     Response end: ...{response[-250:]}")
            else:
                print(f"     Full response: {response}")
            print(f"     Error: {type(e).__name__}: {e}")
            raise ClassificationError(f"Malformed classification response: {e}") from e

    async def generate_daily_plan(self, tasks: list[PrioritizedTask]) -> DailyPlan:
        """Turn the top priorities into an hour-by-hour plan."""
        prompt_template = self.settings.prompts.daily_plan.get("user", "")
        system_prompt = self.settings.prompts.daily_plan.get("system", "")

        prompt = prompt_template.format(
            schema=PLAN_SCHEMA,
            tasks_json=json.dumps(
                [self._serialize_task(task) for task in tasks],
                ensure_ascii=False,
                indent=2,
            ),
        )

        try:
            response = await self._call_api(prompt=prompt, system=system_prompt)
        except httpx.HTTPError as e:
            raise PlanGenerationError(f"Plan request failed: {e}") from e
        except UNREADABLE_BODY_ERRORS as e:
            raise PlanGenerationError(f"Unreadable plan response: {e}") from e

        json_text = self._extract_json(response)

        try:
            return self._parse_plan(json.loads(json_text))
        except (json.JSONDecodeError, KeyError, ValueError, TypeError) as e:
            print(f"  ⚠️  Failed to parse plan JSON: {e}")
            print(f"     Response: {response[:200]}...")
            raise PlanGenerationError(f"Malformed plan response: {e}") from e

    def create_chat_session(self, items: list[InboxItem]) -> "ClaudeChatSession":
        """Open a conversation seeded with the current inbox."""
        context = build_chat_context(items, self.settings.chat.context_content_chars)
        system_template = self.settings.prompts.chat.get("system", "")
        system_prompt = system_template.format(
            context_json=json.dumps(context, ensure_ascii=False),
        )
        return ClaudeChatSession(self, system_prompt, self.settings.chat.max_tokens)

    def _parse_analysis(self, data: dict[str, Any], items: list[InboxItem]) -> AnalysisResult:
        """Build the analysis result and check it against the input items."""
        input_ids = [item.id for item in items]
        known_ids = set(input_ids)

        classifications: list[ItemClassification] = []
        classified_ids: set[str] = set()
        for entry in data["itemClassifications"]:
            item_id = str(entry["itemId"])
            if item_id not in known_ids:
                raise ValueError(f"Classification for unknown item {item_id}")
            if item_id in classified_ids:
                raise ValueError(f"Item {item_id} classified more than once")
            classified_ids.add(item_id)
            classifications.append(
                ItemClassification(item_id=item_id, category=Category(entry["category"]))
            )

        missing = [item_id for item_id in input_ids if item_id not in classified_ids]
        if missing:
            raise ValueError(f"Items left unclassified: {', '.join(missing)}")

        top_priorities: list[PrioritizedTask] = []
        priority_ids: set[str] = set()
        for entry in data["topPriorities"]:
            original_id = str(entry["originalItemId"])
            if original_id not in known_ids:
                raise ValueError(f"Priority references unknown item {original_id}")

            # Queue actions address tasks by id
            task_id = str(entry["id"])
            if task_id in priority_ids:
                raise ValueError(f"Priority id {task_id} used more than once")
            if task_id.startswith(SYNTHETIC_ID_PREFIX):
                raise ValueError(f"Priority id {task_id} uses the reserved synthetic prefix")
            priority_ids.add(task_id)

            top_priorities.append(
                PrioritizedTask(
                    id=task_id,
                    original_item_id=original_id,
                    title=entry["title"],
                    summary=entry["summary"],
                    urgency_score=round(float(entry["urgencyScore"])),
                    importance_score=round(float(entry["importanceScore"])),
                    reason=entry["reason"],
                    suggested_action=entry["suggestedAction"],
                    category=TaskCategory(entry["category"]),
                    origin=TaskOrigin.RICH,
                )
            )

        return AnalysisResult(
            top_priorities=tuple(top_priorities),
            productivity_score=round(float(data["productivityScore"])),
            # Counted locally so the totals always match the input
            distribution=Distribution.from_classifications(classifications),
            item_classifications=tuple(classifications),
        )

    def _parse_plan(self, data: dict[str, Any]) -> DailyPlan:
        plan_items = tuple(
            PlanItem(
                time=entry["time"],
                activity=entry["activity"],
                type=PlanItemType(entry["type"]),
                duration=entry["duration"],
                notes=entry.get("notes") or None,
            )
            for entry in data["items"]
        )
        return DailyPlan(summary=data["summary"], items=plan_items)

    def _serialize_item(self, item: InboxItem) -> dict[str, Any]:
        return {
            "id": item.id,
            "source": item.source.value,
            "sender": item.sender,
            "subject": item.subject,
            "content": item.content,
            "timestamp": item.timestamp.isoformat(),
            "read": item.read,
        }

    def _serialize_task(self, task: PrioritizedTask) -> dict[str, Any]:
        return {
            "id": task.id,
            "originalItemId": task.original_item_id,
            "title": task.title,
            "summary": task.summary,
            "urgencyScore": task.urgency_score,
            "importanceScore": task.importance_score,
            "reason": task.reason,
            "suggestedAction": task.suggested_action,
            "category": task.category.value,
        }

    def _headers(self) -> dict[str, str]:
        if not self.api_key:
            raise ConfigurationError("API Key not found in environment variables.")
        return {
            "x-api-key": self.api_key,
            "anthropic-version": "2023-06-01",
            "content-type": "application/json",
        }

    async def _call_api(self, prompt: str, system: str) -> str:
        """Call Claude API once and return the text of the reply."""
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(
                f"{self.base_url}/messages",
                headers=self._headers(),
                json={
                    "model": self.model,
                    "max_tokens": self.max_tokens,
                    "temperature": self.temperature,
                    "system": system,
                    "messages": [
                        {"role": "user", "content": prompt}
                    ],
                },
            )

            if response.status_code != 200:
                response.raise_for_status()

            # An empty reply fails later as unparsable JSON
            content = response.json().get("content") or [{}]
            return content[0].get("text", "")

    async def _stream_api(
        self,
        messages: list[dict[str, str]],
        system: str,
        max_tokens: int,
    ) -> AsyncIterator[str]:
        """Stream a reply as text deltas from the server-sent events."""
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            async with client.stream(
                "POST",
                f"{self.base_url}/messages",
                headers=self._headers(),
                json={
                    "model": self.model,
                    "max_tokens": max_tokens,
                    "system": system,
                    "messages": messages,
                    "stream": True,
                },
            ) as response:
                if response.status_code != 200:
                    await response.aread()
                    response.raise_for_status()

                async for line in response.aiter_lines():
                    if not line.startswith("data:"):
                        continue
                    payload = line[len("data:"):].strip()
                    if not payload:
                        continue

                    event = json.loads(payload)
                    if event.get("type") == "content_block_delta":
                        delta = event.get("delta") or {}
                        if delta.get("type") == "text_delta" and delta.get("text"):
                            yield delta["text"]
                    elif event.get("type") == "error":
                        error = event.get("error") or {}
                        raise DashboardError(f"Chat stream error: {error.get('message', 'unknown')}")

    def _fix_json(self, text: str) -> str:
        """Try to fix common JSON issues."""
        # Remove trailing commas before } or ]
        text = re.sub(r',(\s*[}\]])', r'\1', text)
        return text

    def _extract_json(self, text: str) -> str:
        """Extract JSON from markdown code block or raw text."""
        # Strategy 1: JSON in a markdown code block
        code_block_match = re.search(r'```(?:json)?\s*\n(.*?)\n```', text, re.DOTALL)
        if code_block_match:
            candidate = code_block_match.group(1).strip()
            return self._fix_json(candidate)

        # Strategy 2: outermost object (responses nest arrays of objects)
        first = text.find("{")
        last = text.rfind("}")
        if first != -1 and last > first:
            candidate = self._fix_json(text[first:last + 1])
            try:
                json.loads(candidate)
                return candidate
            except json.JSONDecodeError:
                pass

        # Strategy 3: any JSON array
        json_array_match = re.search(r'\[[^\[\]]*(?:\[[^\[\]]*\][^\[\]]*)*\]', text, re.DOTALL)
        if json_array_match:
            candidate = self._fix_json(json_array_match.group(0))
            try:
                json.loads(candidate)
                return candidate
            except json.JSONDecodeError:
                pass

        # Strategy 4: return as is (last resort)
        return self._fix_json(text.strip())


class ClaudeChatSession(ChatAssistant):
    """Multi-turn conversation about the inbox."""

    def __init__(self, client: ClaudeClient, system: str, max_tokens: int = 1024) -> None:
        self.client = client
        self.system = system
        self.max_tokens = max_tokens
        self.messages: list[dict[str, str]] = []

    async def send_message_stream(self, message: str) -> AsyncIterator[str]:
        """Send a message and yield reply chunks as they arrive."""
        self.messages.append({"role": "user", "content": message})
        chunks: list[str] = []

        try:
            async for chunk in self.client._stream_api(self.messages, self.system, self.max_tokens):
                chunks.append(chunk)
                yield chunk
        finally:
            # Turns must alternate user/assistant; a stopped reply keeps what arrived
            if chunks:
                self.messages.append({"role": "assistant", "content": "".join(chunks)})
            else:
                self.messages.pop()
