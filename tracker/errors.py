"""Error types raised by the store and controllers."""


class TrackerError(Exception):
    """Base class for schedule tracker errors."""


class StorageError(TrackerError):
    """The underlying persistence call failed (IO, constraint violation)."""


class NotFoundError(TrackerError):
    """No schedule item matches the requested key."""

    def __init__(self, key: int | None):
        super().__init__(f"Schedule item not found: {key}")
        self.key = key
