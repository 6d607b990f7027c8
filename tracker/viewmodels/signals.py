"""One-shot signals for the view layer."""
from typing import Generic, TypeVar

T = TypeVar("T")


class OneShotSignal(Generic[T]):
    """A value that triggers a single view action.

    The signal stays armed until the consumer calls ``acknowledge()``, so a
    consumer that re-reads state (re-render, reconnect) must acknowledge
    first or it will see the same signal again.
    """

    def __init__(self, name: str):
        self.name = name
        self._armed = False
        self._payload: T | None = None

    @property
    def armed(self) -> bool:
        return self._armed

    @property
    def value(self) -> T | None:
        """Payload while armed, otherwise None."""
        return self._payload if self._armed else None

    def fire(self, payload: T) -> None:
        self._payload = payload
        self._armed = True

    def acknowledge(self) -> None:
        self._armed = False
        self._payload = None

    def __repr__(self) -> str:
        return f"OneShotSignal({self.name!r}, armed={self._armed})"
