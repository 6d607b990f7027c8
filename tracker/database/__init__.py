"""Persistence layer: schedule item model, SQLite store and live queries."""
from .live import LiveQuery, Observable, Subscription
from .models import ScheduleItem, now_ms
from .store import ScheduleStore

__all__ = [
    "LiveQuery",
    "Observable",
    "Subscription",
    "ScheduleItem",
    "ScheduleStore",
    "now_ms",
]
