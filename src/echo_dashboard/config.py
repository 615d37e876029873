"""Configuration management."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from echo_dashboard.core import JiraCredentials, UserCredentials


@dataclass
class ClaudeConfig:
    """Claude API settings."""
    model: str = "claude-sonnet-4-20250514"
    max_tokens: int = 4096
    temperature: float = 0.2
    timeout: float = 60.0


@dataclass
class IntegrationsConfig:
    """Integration fetch settings."""
    request_timeout: float = 30.0
    gmail_max_results: int = 10
    calendar_max_results: int = 5
    slack_channel_limit: int = 5
    slack_history_limit: int = 10
    jira_max_results: int = 5
    pad_empty_results: bool = True
    pad_unconfigured_sources: bool = False


@dataclass
class FocusConfig:
    """Focus view settings."""
    history_display_limit: int = 3
    achievement_goal: int = 5


@dataclass
class ChatConfig:
    """Chat assistant settings."""
    context_content_chars: int = 200
    max_tokens: int = 1024


@dataclass
class PromptsConfig:
    """Prompts for LLM."""
    analysis: dict = field(default_factory=lambda: {
        "system": "You are an expert Executive Productivity Assistant.",
        "user": (
            "Analyze the following list of incoming communications "
            "(Emails, Slack messages, Jira tickets, Calendar events).\n\n"
            "Your goal is to:\n"
            "1. Identify the top 3-5 most critical tasks based on Urgency "
            "(time sensitivity) and Importance (business impact).\n"
            "2. Classify EVERY single input item into one of four categories: "
            "\"Urgent\", \"Important\", \"Routine\", or \"Noise\".\n"
            "3. Provide a reasoning for why the top items are prioritized.\n"
            "4. Suggest an immediate action for top items.\n"
            "5. Calculate a 'Productivity Score' (0-100) based on the volume "
            "of urgent vs noise.\n"
            "6. Provide distribution counts.\n\n"
            "Respond with JSON only, matching this shape:\n"
            "{schema}\n\n"
            "Input Data:\n{items_json}"
        ),
    })
    daily_plan: dict = field(default_factory=lambda: {
        "system": "You are a pragmatic planning assistant.",
        "user": (
            "Based on the following high-priority tasks, create a structured, "
            "realistic, hour-by-hour daily schedule (8-hour workday).\n\n"
            "Tasks to fit in:\n{tasks_json}\n\n"
            "Rules:\n"
            "- Start the day at 9:00 AM.\n"
            "- Allocate specific time blocks for \"Deep Work\" on the most urgent items.\n"
            "- Include short breaks.\n"
            "- Include a block for checking emails/routine comms.\n"
            "- Return valid JSON only, matching this shape:\n{schema}"
        ),
    })
    chat: dict = field(default_factory=lambda: {
        "system": (
            "You are Echo Assistant, a helpful AI that helps the user manage "
            "their tasks. You have read access to their current inbox and "
            "notifications: {context_json}.\n\n"
            "Answer the user's questions about their tasks, deadlines, or "
            "specific emails. If the user asks to \"find\" or \"search\" for "
            "something, look through the inbox data provided. Keep answers "
            "concise and use bullet points when listing items."
        ),
    })


@dataclass
class Settings:
    """Application settings."""

    # API Keys (from environment only)
    anthropic_api_key: str = ""

    # Config sections
    claude: ClaudeConfig = field(default_factory=ClaudeConfig)
    integrations: IntegrationsConfig = field(default_factory=IntegrationsConfig)
    focus: FocusConfig = field(default_factory=FocusConfig)
    chat: ChatConfig = field(default_factory=ChatConfig)
    prompts: PromptsConfig = field(default_factory=PromptsConfig)

    @property
    def claude_model(self) -> str:
        return self.claude.model

    @property
    def claude_max_tokens(self) -> int:
        return self.claude.max_tokens

    @property
    def claude_temperature(self) -> float:
        return self.claude.temperature

    @property
    def claude_timeout(self) -> float:
        return self.claude.timeout


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def get_settings(config_path: Path = Path("config.yaml")) -> Settings:
    """Get application settings from YAML config and environment."""
    config = load_config(config_path)

    settings = Settings(
        anthropic_api_key=os.getenv("ANTHROPIC_API_KEY", ""),
    )

    # Apply YAML config
    if "claude" in config:
        for key, value in config["claude"].items():
            setattr(settings.claude, key, value)

    if "integrations" in config:
        for key, value in config["integrations"].items():
            setattr(settings.integrations, key, value)

    if "focus" in config:
        for key, value in config["focus"].items():
            setattr(settings.focus, key, value)

    if "chat" in config:
        for key, value in config["chat"].items():
            setattr(settings.chat, key, value)

    if "prompts" in config:
        settings.prompts = PromptsConfig(**config["prompts"])

    return settings


def get_credentials(
    google_token: Optional[str] = None,
    slack_token: Optional[str] = None,
    jira_domain: Optional[str] = None,
    jira_email: Optional[str] = None,
    jira_token: Optional[str] = None,
) -> UserCredentials:
    """Collect per-source credentials from arguments, falling back to environment."""
    google_token = google_token or os.getenv("GOOGLE_TOKEN")
    slack_token = slack_token or os.getenv("SLACK_TOKEN")
    jira_domain = jira_domain or os.getenv("JIRA_DOMAIN")
    jira_email = jira_email or os.getenv("JIRA_EMAIL")
    jira_token = jira_token or os.getenv("JIRA_API_TOKEN")

    jira = None
    if jira_domain and jira_email and jira_token:
        jira = JiraCredentials(domain=jira_domain, email=jira_email, api_token=jira_token)

    return UserCredentials(
        google_token=google_token or None,
        slack_token=slack_token or None,
        jira=jira,
    )
