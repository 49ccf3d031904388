"""Shared fixtures for unit tests."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def sample_har_path() -> Path:
    """Path to sample HAR fixture (GET x.test/a, GET x.test/b, POST y.test/c)."""
    return Path(__file__).parent.parent / "fixtures" / "sample.har"


@pytest.fixture
def sample_har_bytes(sample_har_path: Path) -> bytes:
    """Raw content of the sample HAR fixture."""
    return sample_har_path.read_bytes()
