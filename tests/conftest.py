"""Shared fixtures for the tracker tests."""
import os
import sys

import pytest
import pytest_asyncio

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from tracker.database.store import ScheduleStore
from tracker.viewmodels.schedule_list import ScheduleController


class FakeClock:
    """Settable millisecond clock."""

    def __init__(self, now: int = 100):
        self.now = now

    def __call__(self) -> int:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest_asyncio.fixture
async def store(tmp_path):
    store = ScheduleStore(tmp_path / "test_schedule.db")
    await store.initialize()
    yield store
    await store.close()


@pytest_asyncio.fixture
async def controller(store, clock):
    controller = ScheduleController(store, clock=clock)
    await controller.initialize()
    yield controller
    await controller.close()
