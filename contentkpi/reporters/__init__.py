"""Reporters for outputting aggregation results in various formats."""

from .base import Reporter
from .console import ConsoleReporter
from .json_reporter import JSONReporter
from .registry import (
    ReporterNotFoundError,
    ReporterRegistry,
    create_reporter,
    get_registry,
)

__all__ = [
    "Reporter",
    "ConsoleReporter",
    "JSONReporter",
    "ReporterRegistry",
    "ReporterNotFoundError",
    "create_reporter",
    "get_registry",
]
