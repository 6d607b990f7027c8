"""Controller behind the schedule list screen.

Turns start/stop/clear actions into store writes and derives the flags the
view binds to:
- start button visible while nothing is being tracked
- stop button visible while a session is in progress
- clear button visible while the table has rows
- one-shot snackbar and navigate-to-rating signals
"""
import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass, replace
from typing import AsyncIterator, Callable, Sequence

from loguru import logger

from ..database.live import Observable, Subscription
from ..database.models import ScheduleItem, now_ms
from ..database.store import ScheduleStore
from ..errors import NotFoundError
from ..utils.formatting import FormatResources, format_items
from .signals import OneShotSignal

logger = logger.bind(module="viewmodels.schedule_list")

Clock = Callable[[], int]
Formatter = Callable[[Sequence[ScheduleItem], FormatResources | None], str]


@dataclass(frozen=True)
class ScheduleViewState:
    """Snapshot of everything the list view renders."""
    last_item: ScheduleItem | None
    items: tuple[ScheduleItem, ...]
    display_text: str
    show_snackbar: bool
    navigate_to_rating: ScheduleItem | None

    @property
    def start_button_visible(self) -> bool:
        return self.last_item is None

    @property
    def stop_button_visible(self) -> bool:
        return self.last_item is not None

    @property
    def clear_button_visible(self) -> bool:
        return len(self.items) > 0

    def to_dict(self) -> dict:
        return {
            "last_item": self.last_item.to_dict() if self.last_item else None,
            "items": [item.to_dict() for item in self.items],
            "display_text": self.display_text,
            "start_button_visible": self.start_button_visible,
            "stop_button_visible": self.stop_button_visible,
            "clear_button_visible": self.clear_button_visible,
            "show_snackbar": self.show_snackbar,
            "navigate_to_rating": (
                self.navigate_to_rating.to_dict() if self.navigate_to_rating else None
            ),
        }


class ScheduleController:
    """Start/stop/clear orchestration for one view.

    Operations on one instance are serialized through a lock, so a start
    always reads back its own insert before the next action runs. View
    state is published once per operation, after it completes.
    """

    def __init__(
        self,
        store: ScheduleStore,
        clock: Clock | None = None,
        formatter: Formatter | None = None,
        resources: FormatResources | None = None,
    ):
        self.store = store
        self.clock = clock or now_ms
        self.formatter = formatter or format_items
        self.resources = resources

        self.last_item: ScheduleItem | None = None
        self.items: list[ScheduleItem] = []
        self.snackbar = OneShotSignal[bool]("show_snackbar")
        self.navigation = OneShotSignal[ScheduleItem]("navigate_to_rating")

        self._lock = asyncio.Lock()
        self._in_operation = False
        self._subscription: Subscription | None = None
        self.state: Observable[ScheduleViewState] = Observable(self.view_state())

    # ============== Derived view state ==============

    @property
    def start_button_visible(self) -> bool:
        return self.last_item is None

    @property
    def stop_button_visible(self) -> bool:
        return self.last_item is not None

    @property
    def clear_button_visible(self) -> bool:
        return len(self.items) > 0

    @property
    def display_text(self) -> str:
        return self.formatter(self.items, self.resources)

    @property
    def show_snackbar(self) -> bool:
        return self.snackbar.armed

    @property
    def navigate_to_rating(self) -> ScheduleItem | None:
        return self.navigation.value

    def view_state(self) -> ScheduleViewState:
        return ScheduleViewState(
            last_item=self.last_item,
            items=tuple(self.items),
            display_text=self.display_text,
            show_snackbar=self.show_snackbar,
            navigate_to_rating=self.navigate_to_rating,
        )

    def _publish_state(self) -> None:
        if not self._in_operation:
            self.state.publish(self.view_state())

    def _on_items_changed(self, items: list[ScheduleItem]) -> None:
        self.items = items
        self._publish_state()

    @asynccontextmanager
    async def _operation(self) -> AsyncIterator[None]:
        async with self._lock:
            self._in_operation = True
            try:
                yield
            finally:
                self._in_operation = False
                self._publish_state()

    # ============== Lifecycle ==============

    async def initialize(self) -> None:
        """Subscribe to the item list and load the unfinished session, if any."""
        async with self._operation():
            if self._subscription is None:
                self._subscription = self.store.list_all_descending().subscribe(
                    self._on_items_changed
                )
            self.last_item = await self._get_unfinished_item()
        logger.info(
            f"Controller initialized: tracking={self.last_item is not None}, "
            f"{len(self.items)} items"
        )

    async def close(self) -> None:
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None

    async def _get_unfinished_item(self) -> ScheduleItem | None:
        """Most recent item, but only if it has not been stopped yet.

        A stopped item has an end time different from its start time; an app
        that was killed mid-session leaves the two equal, so that session
        resumes as the current one.
        """
        item = await self.store.get_most_recent()
        if item is not None and item.is_finished:
            return None
        return item

    # ============== Actions ==============

    async def on_start_tracking(self) -> ScheduleItem:
        """Executes when the START button is clicked."""
        async with self._operation():
            now = self.clock()
            stored = await self.store.insert(
                ScheduleItem(start_time_ms=now, end_time_ms=now)
            )
            self.last_item = await self._get_unfinished_item()
            logger.info(f"Started tracking item {stored.id}")
            return stored

    async def on_stop_tracking(self) -> ScheduleItem | None:
        """Executes when the STOP button is clicked.

        Returns the closed item, or None when nothing was being tracked.
        """
        async with self._operation():
            if self.last_item is None:
                logger.debug("Stop ignored: nothing is being tracked")
                return None

            # Re-read the row so fields written elsewhere (rating) survive
            current = await self.store.get_by_key(self.last_item.id)
            if current is None:
                raise NotFoundError(self.last_item.id)

            # End must differ from start or the row still reads as unfinished
            end = max(self.clock(), current.start_time_ms + 1)
            closed = replace(current, end_time_ms=end)
            await self.store.update_by_key(closed)

            self.last_item = None
            self.navigation.fire(closed)
            logger.info(f"Stopped tracking item {closed.id}")
            return closed

    async def on_clear(self) -> None:
        """Executes when the CLEAR button is clicked."""
        async with self._operation():
            await self.store.clear_all()
            self.last_item = None
            self.snackbar.fire(True)

    # ============== Signal consumption ==============

    def acknowledge_snackbar(self) -> None:
        """Call after the snackbar has been shown."""
        self.snackbar.acknowledge()
        self._publish_state()

    def acknowledge_navigation(self) -> None:
        """Call after navigating to the rating screen."""
        self.navigation.acknowledge()
        self._publish_state()
