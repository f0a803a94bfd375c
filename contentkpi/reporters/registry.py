"""Reporter registry: maps report format names to reporter classes."""

from typing import Any

from contentkpi.core.exceptions import ContentKPIError

from .base import Reporter
from .console import ConsoleReporter
from .json_reporter import JSONReporter


class ReporterNotFoundError(ContentKPIError):
    """Raised when no reporter is registered for a format name."""

    def __init__(self, reporter_type: str) -> None:
        self.reporter_type = reporter_type
        super().__init__(f"Reporter type not found: {reporter_type}")


class ReporterRegistry:
    """Format name to reporter class, with console and json built in.

    create() passes its config mapping to the reporter's constructor as
    keyword arguments, so the keys are the constructor's parameter names.
    """

    def __init__(self) -> None:
        self._reporters: dict[str, type[Reporter]] = {
            "console": ConsoleReporter,
            "json": JSONReporter,
        }

    def register(self, reporter_type: str, reporter_class: type[Reporter]) -> None:
        """Register (or replace) the reporter class for a format name."""
        self._reporters[reporter_type] = reporter_class

    def create(
        self, reporter_type: str, config: dict[str, Any] | None = None
    ) -> Reporter:
        """Instantiate the reporter registered for a format name.

        Raises:
            ReporterNotFoundError: If nothing is registered under the name.
        """
        try:
            reporter_class = self._reporters[reporter_type]
        except KeyError:
            raise ReporterNotFoundError(reporter_type) from None
        return reporter_class(**(config or {}))

    def list_reporters(self) -> list[str]:
        """Registered format names, in registration order."""
        return list(self._reporters)


_default_registry: ReporterRegistry | None = None


def get_registry() -> ReporterRegistry:
    """Get the global reporter registry."""
    global _default_registry
    if _default_registry is None:
        _default_registry = ReporterRegistry()
    return _default_registry


def create_reporter(
    reporter_type: str, config: dict[str, Any] | None = None
) -> Reporter:
    """Create a reporter using the global registry."""
    return get_registry().create(reporter_type, config)
