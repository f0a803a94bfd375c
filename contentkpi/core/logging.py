"""Structured logging for contentkpi.

Engine modules log through plain ``logging.getLogger(__name__)`` loggers.
configure_logging() installs a structlog ProcessorFormatter on the root
logger, so those records are rendered as JSON or as colored console lines
on stderr, leaving stdout free for reports.

Example usage:
    from contentkpi.core.logging import configure_logging

    configure_logging(level="INFO", module_levels={"contentkpi.issues": "DEBUG"})
"""

import logging
import re
import socket
import sys
from collections.abc import Mapping
from functools import lru_cache

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from contentkpi import __version__

_ANSI_PATTERN = re.compile(r"\x1b\[[0-9;]*[a-zA-Z]")
MAX_LOG_MESSAGE_LENGTH = 10000

# Loggers whose level was set by configure_logging, restored by reset_logging
_configured_modules: set[str] = set()


@lru_cache(maxsize=1)
def _get_hostname() -> str:
    try:
        return socket.gethostname()
    except OSError:
        return "unknown"


def add_common_fields(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add the contentkpi version and hostname to every event."""
    event_dict.setdefault("contentkpi_version", __version__)
    event_dict.setdefault("hostname", _get_hostname())
    return event_dict


def sanitize_log_message(message: str) -> str:
    """Escape line breaks, strip ANSI sequences and cap the length.

    Issue descriptions and URLs come from crawled content and end up in
    log messages, so they must not be able to forge log lines.
    """
    if not message:
        return message

    sanitized = message.replace("\r", "\\r").replace("\n", "\\n")
    sanitized = _ANSI_PATTERN.sub("", sanitized)

    if len(sanitized) > MAX_LOG_MESSAGE_LENGTH:
        sanitized = sanitized[: MAX_LOG_MESSAGE_LENGTH - 20] + "... [TRUNCATED]"
    return sanitized


def sanitize_event(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    event = event_dict.get("event")
    if isinstance(event, str):
        event_dict["event"] = sanitize_log_message(event)
    return event_dict


def _to_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Invalid log level: {level}")
    return numeric


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        add_common_fields,
        sanitize_event,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.processors.format_exc_info,
    ]


def configure_logging(
    level: str | int = logging.INFO,
    json_output: bool | None = None,
    log_file: str | None = None,
    module_levels: Mapping[str, str | int] | None = None,
) -> None:
    """Configure structured logging for the application.

    Args:
        level: Root log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_output: Render JSON lines. If None, JSON is used when stderr
            is not a TTY.
        log_file: Optional file receiving the same records as stderr.
        module_levels: Logger name to level, e.g.
            {"contentkpi.issues": "DEBUG"}. A module level applies to the
            named logger and its children and may be lower or higher than
            the root level.
    """
    if json_output is None:
        json_output = not sys.stderr.isatty()

    shared_processors = _shared_processors()

    structlog.configure(
        processors=shared_processors
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=True)
    )
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=shared_processors,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(_to_level(level))
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Handlers pass everything; levels are decided by the loggers
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    _reset_module_levels()
    for module, module_level in (module_levels or {}).items():
        logging.getLogger(module).setLevel(_to_level(module_level))
        _configured_modules.add(module)


def _reset_module_levels() -> None:
    for module in _configured_modules:
        logging.getLogger(module).setLevel(logging.NOTSET)
    _configured_modules.clear()


def reset_logging() -> None:
    """Restore default logging state; used between tests."""
    _reset_module_levels()
    structlog.reset_defaults()

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.WARNING)
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)
