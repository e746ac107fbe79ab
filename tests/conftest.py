from __future__ import annotations

import pytest
from fakes import FakeFeedBackend, RecordingStore

from pyairbox.config import AirboxConfig


@pytest.fixture
def config() -> AirboxConfig:
    return AirboxConfig()


@pytest.fixture
def backend() -> FakeFeedBackend:
    return FakeFeedBackend()


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()
