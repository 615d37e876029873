"""LLM adapters."""

from echo_dashboard.adapters.llm.claude_client import (
    ClaudeChatSession,
    ClaudeClient,
    build_chat_context,
)

__all__ = ["ClaudeChatSession", "ClaudeClient", "build_chat_context"]
