"""Uhr-Modul: Phasen-Klassifikation, Fortschritt, Takt und Gong."""

from .phase import (
    UNKNOWN, AfterSchool, BeforeSchool, FreeTime, InLecture, Phase, Unknown, Weekend,
)
from .classifier import classify, classify_day, locate
from .progress import Progress, progress
from .ticker import ScheduleClock, TickResult, make_now_fn

__all__ = [
    "UNKNOWN",
    "AfterSchool",
    "BeforeSchool",
    "FreeTime",
    "InLecture",
    "Phase",
    "Unknown",
    "Weekend",
    "classify",
    "classify_day",
    "locate",
    "Progress",
    "progress",
    "ScheduleClock",
    "TickResult",
    "make_now_fn",
]
