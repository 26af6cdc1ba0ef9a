"""Fortschritt der aktuellen Phase (Restzeit / Gesamtdauer) für Balken und Countdown."""

from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Optional

from clock.phase import BeforeSchool, FreeTime, InLecture, Phase
from models.lecture import seconds_of_day


@dataclass(frozen=True)
class Progress:
    """Restzeit bis zum nächsten Ereignis und Gesamtdauer der Phase."""

    remaining: timedelta
    total: timedelta

    @property
    def fraction(self) -> float:
        """Erledigter Anteil 0.0–1.0; Gesamtdauer 0 gilt als vollständig."""
        total = self.total.total_seconds()
        if total <= 0:
            return 1.0
        done = 1.0 - self.remaining.total_seconds() / total
        return min(1.0, max(0.0, done))

    @property
    def percent(self) -> float:
        return self.fraction * 100


def time_between(later: time, earlier: time) -> timedelta:
    """later - earlier als timedelta (negativ, wenn later früher liegt)."""
    return timedelta(seconds=seconds_of_day(later) - seconds_of_day(earlier))


def progress(phase: Phase, now: datetime, app_start: datetime) -> Optional[Progress]:
    """Fortschritt der Phase zum Zeitpunkt now.

    - BeforeSchool: Countdown bis zur ersten Stunde, Gesamtdauer ab Programmstart
      (läuft das Programm seit einem früheren Tag, ab Mitternacht).
    - InLecture: Restzeit bis Stundenende, Gesamtdauer = Stundenlänge.
    - FreeTime mit nächster Stunde: Restzeit bis Stundenbeginn, Gesamtdauer = Pausenlänge.
    - Alle anderen Phasen: None.
    """
    t = now.time()
    if isinstance(phase, BeforeSchool):
        anchor = app_start.time() if app_start.date() >= now.date() else time.min
        return Progress(
            remaining=time_between(phase.first_lecture_begin, t),
            total=time_between(phase.first_lecture_begin, anchor),
        )
    if isinstance(phase, InLecture):
        lecture = phase.lecture
        return Progress(
            remaining=time_between(lecture.end, t),
            total=time_between(lecture.end, lecture.begin),
        )
    if isinstance(phase, FreeTime) and phase.next_lecture is not None:
        prev = phase.prev[1]
        nxt = phase.next_lecture
        return Progress(
            remaining=time_between(nxt.begin, t),
            total=time_between(nxt.begin, prev.end),
        )
    return None
