"""Tests for JSON parsing in Claude client."""

import json

import pytest

from echo_dashboard.adapters.llm import ClaudeClient
from echo_dashboard.config import Settings


@pytest.fixture
def claude_client() -> ClaudeClient:
    """Create Claude client instance for testing."""
    settings = Settings(anthropic_api_key="test-key")
    return ClaudeClient(settings)


def test_extract_json_from_markdown(claude_client: ClaudeClient) -> None:
    """Test extracting JSON from markdown code block."""
    text = '```json\n{"productivityScore": 80, "topPriorities": []}\n```'
    result = claude_client._extract_json(text)
    parsed = json.loads(result)
    assert parsed["productivityScore"] == 80


def test_extract_json_from_markdown_without_language(claude_client: ClaudeClient) -> None:
    """Test extracting JSON from markdown code block without language tag."""
    text = '```\n{"summary": "Busy day", "items": []}\n```'
    result = claude_client._extract_json(text)
    parsed = json.loads(result)
    assert parsed["summary"] == "Busy day"


def test_extract_json_from_text_with_prefix(claude_client: ClaudeClient) -> None:
    """Test extracting JSON when there's text before it."""
    text = 'Here is the analysis:\n{"productivityScore": 65, "distribution": {"urgent": 2}}'
    result = claude_client._extract_json(text)
    parsed = json.loads(result)
    assert parsed["distribution"]["urgent"] == 2


def test_extract_json_deeply_nested(claude_client: ClaudeClient) -> None:
    """Objects inside arrays inside objects are kept whole."""
    text = (
        'Result: {"itemClassifications": [{"itemId": "a", "category": "Urgent"}, '
        '{"itemId": "b", "category": "Noise"}], "topPriorities": [{"id": "p1", '
        '"meta": {"tags": ["x"]}}]} Let me know if you need more.'
    )
    result = claude_client._extract_json(text)
    parsed = json.loads(result)
    assert len(parsed["itemClassifications"]) == 2
    assert parsed["topPriorities"][0]["meta"]["tags"] == ["x"]


def test_extract_json_array(claude_client: ClaudeClient) -> None:
    """Test extracting JSON array."""
    text = 'Here are the items:\n["first", "second", "third"]'
    result = claude_client._extract_json(text)
    parsed = json.loads(result)
    assert isinstance(parsed, list)
    assert len(parsed) == 3


def test_fix_json_trailing_comma(claude_client: ClaudeClient) -> None:
    """Test fixing trailing comma in JSON."""
    text = '{"summary": "ok", "items": [],}'
    result = claude_client._fix_json(text)
    parsed = json.loads(result)
    assert parsed["summary"] == "ok"


def test_fix_json_trailing_comma_in_array(claude_client: ClaudeClient) -> None:
    """Test fixing trailing comma in JSON array."""
    text = '["item1", "item2", "item3",]'
    result = claude_client._fix_json(text)
    parsed = json.loads(result)
    assert len(parsed) == 3


def test_extract_json_plain_text_fallback(claude_client: ClaudeClient) -> None:
    """Test fallback for plain text without JSON."""
    text = "This is just plain text"
    result = claude_client._extract_json(text)
    assert result == "This is just plain text"


def test_extract_json_with_newlines(claude_client: ClaudeClient) -> None:
    """Test extracting JSON with newlines."""
    text = '''```json
{
  "summary": "Deep work first",
  "items": [
    {"time": "09:00 AM", "activity": "Contract", "type": "focus", "duration": "60 mins"},
  ]
}
```'''
    result = claude_client._extract_json(text)
    parsed = json.loads(result)
    assert parsed["items"][0]["type"] == "focus"
