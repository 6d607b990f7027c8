"""Observable values and live queries.

A subscriber receives the current snapshot as soon as it subscribes and
every later snapshot synchronously when the value is published.
"""
from typing import Callable, Generic, TypeVar

from loguru import logger

logger = logger.bind(module="database.live")

T = TypeVar("T")

Handler = Callable[[T], None]


class Subscription:
    """Handle returned by ``Observable.subscribe``."""

    def __init__(self, observable: "Observable", handler: Callable):
        self._observable = observable
        self._handler = handler
        self.active = True

    def cancel(self) -> None:
        if self.active:
            self._observable._remove(self._handler)
            self.active = False


class Observable(Generic[T]):
    """Subject holding a current value and fanning out changes."""

    def __init__(self, initial: T):
        self._value = initial
        self._handlers: list[Handler] = []

    @property
    def value(self) -> T:
        return self._value

    @property
    def subscriber_count(self) -> int:
        return len(self._handlers)

    def subscribe(self, handler: Handler) -> Subscription:
        """Register ``handler`` and deliver the current snapshot to it."""
        self._handlers.append(handler)
        handler(self._value)
        return Subscription(self, handler)

    def publish(self, value: T) -> None:
        self._value = value
        for handler in list(self._handlers):
            try:
                handler(value)
            except Exception as e:
                logger.error(f"Subscriber {handler!r} failed: {e}")

    def _remove(self, handler: Handler) -> None:
        try:
            self._handlers.remove(handler)
        except ValueError:
            pass


class LiveQuery(Observable[T]):
    """Observable backed by a query that is re-run on invalidation."""

    def __init__(self, fetch: Callable[[], T]):
        self._fetch = fetch
        super().__init__(fetch())

    def refresh(self) -> T:
        """Re-run the query and publish the result."""
        value = self._fetch()
        self.publish(value)
        return value
