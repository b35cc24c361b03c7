"""Application context for dependency injection."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from file_discovery import FileDiscovery
    from import_facts import ImportFactsProvider


@dataclass
class AppContext:
    """
    Application context holding the analysis collaborators.
    Both are stateless; every analysis call builds its own graph.
    """

    discovery: "FileDiscovery"
    facts_provider: "ImportFactsProvider"

    @classmethod
    def create_default(cls) -> "AppContext":
        """
        Creates default application context with standard configuration.

        Returns:
            Configured AppContext instance
        """
        from file_discovery import FileDiscovery
        from import_facts import RegexImportFactsProvider

        return cls(discovery=FileDiscovery(), facts_provider=RegexImportFactsProvider())


_app_context: AppContext | None = None


def get_context() -> AppContext:
    """
    Gets the global application context, creating it if necessary.

    Returns:
        Global AppContext instance
    """
    global _app_context
    if _app_context is None:
        _app_context = AppContext.create_default()
    return _app_context


def set_context(context: AppContext) -> None:
    """
    Sets the global application context.
    Useful for testing with mock dependencies.

    Args:
        context: AppContext instance to use
    """
    global _app_context
    _app_context = context


def reset_context() -> None:
    """Resets the global context to None. Useful for testing."""
    global _app_context
    _app_context = None
