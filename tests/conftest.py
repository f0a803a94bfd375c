"""Shared pytest fixtures for contentkpi tests."""

import json
from pathlib import Path
from typing import Any

import pytest

from contentkpi.loader import parse_payload
from contentkpi.protocol import DomainAnalysis, PageScore


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def analyses_dir(fixtures_dir: Path) -> Path:
    """Return path to the analysis payload fixtures."""
    return fixtures_dir / "analyses"


@pytest.fixture
def combined_payload_path(analyses_dir: Path) -> Path:
    """Return path to a payload with two pages and one domain."""
    return analyses_dir / "combined.json"


@pytest.fixture
def combined_yaml_path(analyses_dir: Path) -> Path:
    """Return path to the YAML payload fixture."""
    return analyses_dir / "combined.yaml"


@pytest.fixture
def sample_payload(combined_payload_path: Path) -> dict[str, Any]:
    """Return the parsed JSON of the combined payload."""
    return json.loads(combined_payload_path.read_text())


@pytest.fixture
def sample_analyses(
    sample_payload: dict[str, Any],
) -> tuple[list[PageScore], list[DomainAnalysis]]:
    """Return validated pages and domains from the combined payload."""
    return parse_payload(sample_payload)
