"""Tests for the rating flow and the one-shot signal."""
import pytest

from tracker.errors import NotFoundError
from tracker.viewmodels.quality import QualityController
from tracker.viewmodels.signals import OneShotSignal


class TestQualityController:

    @pytest.mark.asyncio
    async def test_rating_is_stored(self, controller, store, clock):
        started = await controller.on_start_tracking()
        clock.now = 400
        await controller.on_stop_tracking()

        quality = QualityController(store, started.id)
        rated = await quality.on_set_quality(5)

        stored = await store.get_by_key(started.id)
        assert stored.quality_rating == 5
        assert stored.end_time_ms == 400
        assert quality.navigate_to_tracker == rated
        # the list controller sees the rating through the live query
        assert controller.items[0].quality_rating == 5

        quality.acknowledge_navigation()
        assert quality.navigate_to_tracker is None

    @pytest.mark.asyncio
    async def test_rating_before_stop_survives_stop(self, controller, store, clock):
        started = await controller.on_start_tracking()
        await QualityController(store, started.id).on_set_quality(4)

        clock.now = 500
        closed = await controller.on_stop_tracking()

        stored = await store.get_by_key(started.id)
        assert stored.quality_rating == 4
        assert stored.end_time_ms == 500
        assert closed.quality_rating == 4

    @pytest.mark.asyncio
    async def test_missing_item(self, store):
        quality = QualityController(store, 123)

        with pytest.raises(NotFoundError):
            await quality.on_set_quality(3)
        assert quality.navigate_to_tracker is None


class TestOneShotSignal:

    def test_fire_and_acknowledge(self):
        signal = OneShotSignal[str]("toast")
        assert not signal.armed
        assert signal.value is None

        signal.fire("hello")
        assert signal.armed
        assert signal.value == "hello"

        signal.acknowledge()
        assert not signal.armed
        assert signal.value is None

    def test_falsy_payload_still_armed(self):
        signal = OneShotSignal[bool]("flag")
        signal.fire(False)
        assert signal.armed
