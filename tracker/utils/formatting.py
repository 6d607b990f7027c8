"""Plain-text rendering of schedule items for display."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Sequence

from ..database.models import ScheduleItem

_DEFAULT_QUALITY_LABELS = {
    0: "Very bad",
    1: "Poor",
    2: "So-so",
    3: "OK",
    4: "Pretty good",
    5: "Excellent",
}


@dataclass
class FormatResources:
    """Strings and formats used by ``format_items``."""
    title: str = "Here is your schedule data"
    time_format: str = "%a %d-%b-%Y %H:%M"
    in_progress: str = "in progress"
    unrated: str = "--"
    quality_labels: dict[int, str] = field(
        default_factory=lambda: dict(_DEFAULT_QUALITY_LABELS)
    )


def quality_label(rating: int | None, resources: FormatResources | None = None) -> str:
    resources = resources or FormatResources()
    if rating is None:
        return resources.unrated
    return resources.quality_labels.get(rating, resources.unrated)


def format_duration(duration_ms: int) -> str:
    """Format a duration as H:MM."""
    minutes = max(duration_ms, 0) // 60000
    return f"{minutes // 60}:{minutes % 60:02d}"


def _format_time(ms: int, fmt: str) -> str:
    return datetime.fromtimestamp(ms / 1000).strftime(fmt)


def format_items(
    items: Sequence[ScheduleItem],
    resources: FormatResources | None = None,
) -> str:
    """Render items, in the given order, as a multi-line text block."""
    resources = resources or FormatResources()
    lines = [resources.title, ""]
    for item in items:
        lines.append(f"Start: {_format_time(item.start_time_ms, resources.time_format)}")
        if item.is_finished:
            lines.append(f"End: {_format_time(item.end_time_ms, resources.time_format)}")
            lines.append(f"Quality: {quality_label(item.quality_rating, resources)}")
            lines.append(f"Hours:Minutes: {format_duration(item.duration_ms)}")
        else:
            lines.append(f"End: {resources.in_progress}")
        lines.append("")
    return "\n".join(lines).rstrip("\n")
