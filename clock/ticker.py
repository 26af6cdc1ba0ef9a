"""Takt-Schleife: einmal pro Sekunde klassifizieren und Ergebnis weiterreichen.

Die vorherige Phase ist der einzige Zustand; sie gehört der ScheduleClock
und wird explizit an classify() übergeben.
"""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from clock.classifier import classify
from clock.phase import UNKNOWN, Phase
from clock.progress import Progress, progress
from models.timetable import WeekTimetable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TickResult:
    """Ergebnis eines Takts, Eingabe für die Anzeige."""

    now: datetime
    phase: Phase
    transitioned: bool
    progress: Optional[Progress]


def make_now_fn(timezone: Optional[str] = None) -> Callable[[], datetime]:
    """Uhr-Funktion für eine IANA-Zeitzone (None = lokale Zeit)."""
    if timezone is None:
        return datetime.now
    tz = ZoneInfo(timezone)
    return lambda: datetime.now(tz)


class ScheduleClock:
    """Berechnet pro Takt die Phase neu und meldet Wechsel.

    on_transition(vorher, nachher) wird synchron aufgerufen und muss sofort
    zurückkehren (z.B. BellDispatcher.ring).
    """

    def __init__(
        self,
        week: WeekTimetable,
        now_fn: Optional[Callable[[], datetime]] = None,
        app_start: Optional[datetime] = None,
        on_transition: Optional[Callable[[Phase, Phase], None]] = None,
    ) -> None:
        self.week = week
        self._now_fn = now_fn or datetime.now
        self.app_start = app_start or self._now_fn()
        self.on_transition = on_transition
        self.phase: Phase = UNKNOWN
        self._last_second: Optional[datetime] = None

    def tick(self, now: Optional[datetime] = None) -> Optional[TickResult]:
        """Ein Takt. None, wenn in derselben Sekunde schon getaktet wurde."""
        now = now or self._now_fn()
        second = now.replace(microsecond=0)
        if second == self._last_second:
            logger.debug(f"Doppelter Takt um {second:%H:%M:%S} ignoriert")
            return None
        self._last_second = second

        previous = self.phase
        phase, transitioned = classify(now, self.week, previous)
        self.phase = phase

        if transitioned:
            logger.info(f"Phasenwechsel um {now:%H:%M:%S}: {previous} → {phase}")
            if self.on_transition is not None:
                self.on_transition(previous, phase)

        return TickResult(
            now=now,
            phase=phase,
            transitioned=transitioned,
            progress=progress(phase, now, self.app_start),
        )

    def run(
        self,
        on_tick: Callable[[TickResult], None],
        stop: threading.Event,
        interval: float = 1.0,
    ) -> None:
        """Taktet seriell, bis stop gesetzt wird."""
        logger.debug(f"Takt-Schleife gestartet (Intervall {interval}s)")
        while not stop.is_set():
            result = self.tick()
            if result is not None:
                on_tick(result)
            if stop.wait(interval):
                break
        logger.debug("Takt-Schleife beendet")
