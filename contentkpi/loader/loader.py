"""Loading of page and domain analysis payloads from JSON or YAML files."""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from contentkpi.core.exceptions import InputError
from contentkpi.protocol import DomainAnalysis, PageScore

logger = logging.getLogger(__name__)

# Keys under which the backend responses carry each record list
PAGE_KEYS = ("pageScores", "page_scores", "scores", "pages")
DOMAIN_KEYS = ("domainAnalyses", "domain_analyses", "domains")

YAML_SUFFIXES = {".yaml", ".yml"}


def _first_list(payload: Mapping[str, Any], keys: tuple[str, ...]) -> list[Any]:
    for key in keys:
        value = payload.get(key)
        if value is not None:
            if not isinstance(value, list):
                raise InputError(f"'{key}' must be a list, got {type(value).__name__}")
            return value
    return []


def load_payload(file_path: str | Path) -> dict[str, Any]:
    """Read an analysis payload from a JSON or YAML file.

    Args:
        file_path: Path to the payload. ``.yaml``/``.yml`` files are parsed
            as YAML, everything else as JSON.

    Returns:
        The payload as a dictionary.

    Raises:
        InputError: If the file cannot be read or does not hold an object.
    """
    path = Path(file_path)

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise InputError(f"Cannot read file: {e}", file_path=str(path)) from e

    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            data = yaml.safe_load(content)
        else:
            data = json.loads(content)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise InputError(f"Invalid payload: {e}", file_path=str(path)) from e

    if not isinstance(data, dict):
        raise InputError("Payload must be an object", file_path=str(path))

    logger.debug("Loaded payload from %s", path)
    return data


def parse_payload(
    payload: Mapping[str, Any],
) -> tuple[list[PageScore], list[DomainAnalysis]]:
    """Validate the page and domain records of a payload.

    Missing lists are treated as empty and null entries are skipped.

    Raises:
        InputError: If a record has a field of the wrong type.
    """
    raw_pages = _first_list(payload, PAGE_KEYS)
    raw_domains = _first_list(payload, DOMAIN_KEYS)

    try:
        pages = [PageScore.model_validate(p) for p in raw_pages if p is not None]
        domains = [
            DomainAnalysis.model_validate(d) for d in raw_domains if d is not None
        ]
    except PydanticValidationError as e:
        raise InputError(f"Invalid analysis record: {e}") from e

    return pages, domains


def load_file(file_path: str | Path) -> tuple[list[PageScore], list[DomainAnalysis]]:
    """Read and validate an analysis payload file."""
    path = Path(file_path)
    payload = load_payload(path)
    try:
        return parse_payload(payload)
    except InputError as e:
        raise InputError(e.message, file_path=str(path)) from e
