"""Markdown rendering of dashboard views."""

from typing import Optional

from echo_dashboard.core import (
    AnalysisResult,
    Category,
    DailyPlan,
    DashboardRenderer,
    InboxItem,
    PrioritizedTask,
    SourceType,
)

TIER_EMOJI = {
    Category.URGENT: "🚨",
    Category.IMPORTANT: "⚡",
    Category.ROUTINE: "✅",
    Category.NOISE: "🔇",
}

SOURCE_EMOJI = {
    SourceType.EMAIL: "📧",
    SourceType.SLACK: "💬",
    SourceType.JIRA: "🎫",
    SourceType.CALENDAR: "📅",
}

PLAN_EMOJI = {
    "focus": "🎯",
    "meeting": "👥",
    "break": "☕",
    "routine": "📥",
}


class MarkdownDashboardRenderer(DashboardRenderer):
    """Render dashboard views as markdown text."""

    def render_queue(
        self,
        tier: Category,
        tasks: list[PrioritizedTask],
        all_clear: bool,
    ) -> str:
        """Render the numbered task queue of the current tier."""
        lines = [f"## {TIER_EMOJI[tier]} {tier.value} Tasks", ""]

        if not tasks:
            lines.append(f"You've cleared all {tier.value.lower()} tasks.")
            if all_clear or tier == Category.ROUTINE:
                lines.append("All clear. Take a break!")
            else:
                lines.append("Switching to next tier...")
            return "\n".join(lines)

        for position, task in enumerate(tasks, 1):
            lines.extend(self._format_task(position, task))

        return "\n".join(lines)

    def render_stream(
        self,
        items: list[InboxItem],
        categories: dict[str, Category],
        selected_category: Optional[Category] = None,
        selected_source: Optional[SourceType] = None,
    ) -> str:
        """Render the side stream with the active filters in the header."""
        filters = []
        if selected_category:
            filters.append(selected_category.value)
        if selected_source:
            filters.append(selected_source.value.title())

        header = "## 📥 Stream"
        if filters:
            header += f" ({' · '.join(filters)})"

        lines = [header, ""]
        if not items:
            lines.append("No items match the current filters.")
            return "\n".join(lines)

        for item in items:
            category = categories.get(item.id)
            badge = f" `{category.value}`" if category else ""
            unread = "" if item.read else " •"
            lines.append(
                f"- {SOURCE_EMOJI[item.source]} **{item.subject or 'Untitled'}**{badge}{unread}"
            )
            lines.append(f"  {item.sender} · {item.timestamp.strftime('%d.%m %H:%M')}")

        return "\n".join(lines)

    def render_plan(self, plan: DailyPlan) -> str:
        """Render a daily plan as a schedule."""
        lines = ["## 🗓️ Daily Plan", "", plan.summary, ""]

        for entry in plan.items:
            emoji = PLAN_EMOJI.get(entry.type.value, "•")
            lines.append(f"- **{entry.time}** {emoji} {entry.activity} ({entry.duration})")
            if entry.notes:
                lines.append(f"  *{entry.notes}*")

        return "\n".join(lines)

    def render_analytics(self, analysis: AnalysisResult) -> str:
        """Render the productivity score and category distribution."""
        distribution = analysis.distribution
        lines = [
            "## 📊 Analytics",
            "",
            f"**Productivity Score:** {analysis.productivity_score}",
            "",
        ]
        for category in Category:
            lines.append(f"- {TIER_EMOJI[category]} {category.value}: {distribution.count(category)}")
        return "\n".join(lines)

    def render_history(self, recent: list[PrioritizedTask], total: int, progress: int) -> str:
        """Render the achievements panel."""
        if total == 0:
            return ""

        lines = [
            "## 🏆 Achievements",
            "",
            f"{total} tasks crushed today ({progress}% of daily goal)",
            "",
        ]
        for task in recent:
            lines.append(f"- ~~{task.title}~~")
        return "\n".join(lines)

    def _format_task(self, position: int, task: PrioritizedTask) -> list[str]:
        """Format single queue entry."""
        lines = [
            f"### {position}. {task.title}",
            "",
            f"**Urgency:** {task.urgency_score}/10 · **Importance:** {task.importance_score}/10"
            f" · *{task.category.value}*",
            "",
            task.summary,
            "",
            f"**Why:** {task.reason}",
            f"**Next:** {task.suggested_action}",
            "",
        ]

        if task.is_synthetic:
            lines.append("*Auto-generated from classification*")
            lines.append("")

        lines.append("---")
        lines.append("")

        return lines
