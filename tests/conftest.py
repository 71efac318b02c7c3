"""Shared test fixtures."""

from __future__ import annotations

import pytest

from fs_hasher.admission.controller import AdmissionController, FileHasherSerializer
from fs_hasher.config import AdmissionConfig
from fs_hasher.observability.event_bus import InMemoryEventBus
from tests.helpers import write_tree


@pytest.fixture(autouse=True)
def reset_shared_serializer():
    FileHasherSerializer._instance = None
    yield
    FileHasherSerializer._instance = None


@pytest.fixture
def event_bus():
    return InMemoryEventBus()


@pytest.fixture
def controller(event_bus):
    return AdmissionController(AdmissionConfig(retry_delay_seconds=0.001), event_bus=event_bus)


@pytest.fixture
def xy_dir(tmp_path):
    return write_tree(tmp_path / "xy", {"a.txt": "x", "b.txt": "y"})
