"""View-state controllers"""
from .quality import QualityController
from .schedule_list import ScheduleController, ScheduleViewState
from .signals import OneShotSignal

__all__ = [
    "OneShotSignal",
    "QualityController",
    "ScheduleController",
    "ScheduleViewState",
]
