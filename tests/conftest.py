"""Shared pytest fixtures for cache, event and gateway tests."""

from __future__ import annotations

import pytest

from fakes import EventRecorder, FakeClock, FakeGateway, ManualTimers
from gitnova.features.events import EventHub


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def timers(clock: FakeClock) -> ManualTimers:
    return ManualTimers(clock)


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def hub() -> EventHub:
    return EventHub()


@pytest.fixture
def recorder(hub: EventHub) -> EventRecorder:
    return EventRecorder(hub)
