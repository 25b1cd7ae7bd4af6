"""Base formatter interface for Commit Signals output rendering."""

from abc import ABC, abstractmethod

from ..dashboard import DashboardView


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, view: DashboardView) -> None:
        """Render the dashboard to stdout."""

    @abstractmethod
    def format(self, view: DashboardView) -> str:
        """Return formatted string representation of the dashboard."""
