"""Shared fixtures for httpcmp tests.

Raw request fixtures live in fixtures/requests/ (CRLF line endings unless
the name says otherwise). Comparison cases live in fixtures/cases.yaml.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from httpcmp import RequestComparator

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"
REQUESTS_DIR = FIXTURES_DIR / "requests"


def load_request(name: str) -> str:
    """Load a raw request fixture by name, keeping its line endings."""
    path = REQUESTS_DIR / f"{name}.txt"
    if not path.exists():
        msg = f"Invalid request name: {name}"
        raise ValueError(msg)
    return path.read_bytes().decode("latin-1")


@pytest.fixture
def comparator() -> RequestComparator:
    return RequestComparator()


@pytest.fixture
def request_text() -> Callable[[str], str]:
    return load_request
