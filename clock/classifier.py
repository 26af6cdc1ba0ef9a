"""Zeit-Klassifikation: aus Uhrzeit und Wochenplan die aktuelle Phase bestimmen.

Reine Funktionen ohne I/O; sicher aus dem Tick-Handler aufrufbar.
"""

from bisect import bisect_left
from datetime import datetime, time
from operator import attrgetter

from clock.phase import (
    AfterSchool,
    BeforeSchool,
    FreeTime,
    InLecture,
    Phase,
    Unknown,
    Weekend,
)
from models.lecture import Lecture
from models.timetable import SCHOOL_DAYS, WeekTimetable, day_of_week


def locate(day: list[Lecture], t: time) -> tuple[bool, int]:
    """Binäre Suche nach der Stunde, die t enthält.

    Gibt (True, i) zurück wenn day[i] den Zeitpunkt t enthält (Grenzen
    inklusive), sonst (False, i) mit i = Index der nächsten Stunde
    (Einfügeposition). Teilen sich zwei Stunden eine Grenze, gewinnt die
    frühere.
    """
    # erste Stunde, deren Ende nicht vor t liegt
    i = bisect_left(day, t, key=attrgetter("end"))
    if i < len(day) and day[i].begin <= t:
        return True, i
    return False, i


def classify_day(day: list[Lecture], t: time) -> Phase:
    """Phase für Uhrzeit t an einem Schultag."""
    if not day:
        raise ValueError("Tagesplan ist leer – Schultage brauchen mindestens eine Stunde")

    if t < day[0].begin:
        return BeforeSchool(first_lecture_begin=day[0].begin)
    if t > day[-1].end:
        return AfterSchool()

    found, index = locate(day, t)
    if found:
        return InLecture(index=index, lecture=day[index])
    next_lecture = day[index] if index < len(day) else None
    return FreeTime(prev=(index - 1, day[index - 1]), next=(index, next_lecture))


def classify(now: datetime, week: WeekTimetable, previous: Phase) -> tuple[Phase, bool]:
    """Klassifiziert now und meldet, ob ein Phasenwechsel stattfand.

    Der Wechsel zählt nur, wenn die vorherige Phase bekannt war und sich
    strukturell von der neuen unterscheidet.
    """
    weekday = day_of_week(now)
    if weekday >= SCHOOL_DAYS:
        phase: Phase = Weekend()
    else:
        phase = classify_day(week[weekday], now.time())

    transitioned = not isinstance(previous, Unknown) and previous != phase
    return phase, transitioned
