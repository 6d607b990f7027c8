"""Data model for tracked schedule items."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


def now_ms() -> int:
    """Current wall-clock time in Unix milliseconds."""
    return int(datetime.now().timestamp() * 1000)


@dataclass
class ScheduleItem:
    """One tracked start/stop session.

    A freshly started item has ``end_time_ms == start_time_ms``; that
    equality marks the session as still in progress. ``id`` stays None
    until the store assigns a key on insert.
    """
    id: int | None = None
    start_time_ms: int = field(default_factory=now_ms)
    end_time_ms: int = -1
    quality_rating: int | None = None

    def __post_init__(self) -> None:
        if self.end_time_ms < 0:
            self.end_time_ms = self.start_time_ms

    @property
    def is_finished(self) -> bool:
        return self.end_time_ms != self.start_time_ms

    @property
    def duration_ms(self) -> int:
        return self.end_time_ms - self.start_time_ms

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "start_time_ms": self.start_time_ms,
            "end_time_ms": self.end_time_ms,
            "quality_rating": self.quality_rating,
            "finished": self.is_finished,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScheduleItem":
        start = data.get("start_time_ms", now_ms())
        return cls(
            id=data.get("id"),
            start_time_ms=start,
            end_time_ms=data.get("end_time_ms", start),
            quality_rating=data.get("quality_rating"),
        )
