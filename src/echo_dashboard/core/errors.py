"""Errors surfaced to the dashboard session."""


class DashboardError(Exception):
    """Base class for dashboard errors."""


class ConfigurationError(DashboardError):
    """Required configuration is missing; the session cannot start."""


class SourceFetchError(DashboardError):
    """A single integration source failed to deliver items."""


class ClassificationError(DashboardError):
    """The classifier failed or returned a response that breaks its contract."""


class PlanGenerationError(DashboardError):
    """The daily plan could not be generated."""
