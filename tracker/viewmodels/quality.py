"""Controller behind the rating screen shown after a session is stopped."""
from dataclasses import replace

from loguru import logger

from ..database.models import ScheduleItem
from ..database.store import ScheduleStore
from ..errors import NotFoundError
from .signals import OneShotSignal

logger = logger.bind(module="viewmodels.quality")


class QualityController:
    """Stores a quality rating on one schedule item."""

    def __init__(self, store: ScheduleStore, item_key: int):
        self.store = store
        self.item_key = item_key
        self.navigation = OneShotSignal[ScheduleItem]("navigate_to_tracker")

    @property
    def navigate_to_tracker(self) -> ScheduleItem | None:
        return self.navigation.value

    async def on_set_quality(self, rating: int) -> ScheduleItem:
        """Executes when a quality icon is clicked.

        Raises:
            NotFoundError: if the item was removed in the meantime
        """
        item = await self.store.get_by_key(self.item_key)
        if item is None:
            raise NotFoundError(self.item_key)

        rated = replace(item, quality_rating=rating)
        await self.store.update_by_key(rated)
        logger.info(f"Rated schedule item {rated.id}: {rating}")

        self.navigation.fire(rated)
        return rated

    def acknowledge_navigation(self) -> None:
        self.navigation.acknowledge()
