"""Shared test fixtures for slidemanager."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from slidemanager import LocalFileTransport, PresentationData, SlidesClient
from slidemanager.ids import ObjectIdGenerator

GOLDEN_DIR = Path(__file__).parent / "golden"


def load_snapshot(presentation_id: str) -> PresentationData:
    """Load a golden presentation as a snapshot."""
    path = GOLDEN_DIR / presentation_id / "presentation.json"
    data: dict[str, Any] = json.loads(path.read_text(encoding="utf-8"))
    return PresentationData(presentation_id=presentation_id, data=data)


@pytest.fixture
def golden_dir() -> Path:
    return GOLDEN_DIR


@pytest.fixture
def snapshot() -> PresentationData:
    """Four-slide presentation with notes, groups and a table."""
    return load_snapshot("simple_presentation")


@pytest.fixture
def transport() -> LocalFileTransport:
    """Create a LocalFileTransport for testing."""
    return LocalFileTransport(GOLDEN_DIR)


@pytest.fixture
def client(transport: LocalFileTransport) -> SlidesClient:
    """Create a SlidesClient with a deterministic ID generator."""
    return SlidesClient(transport, ObjectIdGenerator(clock=lambda: 1700000000000000000))


@pytest.fixture
def two_slides() -> PresentationData:
    """Two slides holding "Hello" and "World"."""
    return load_snapshot("two_slides")
