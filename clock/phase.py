"""Phasen eines Schultags: Ergebnis der Zeit-Klassifikation.

Jede Phase ist ein eigener, unveränderlicher Datentyp ohne gemeinsame
Basisklasse; Verbraucher unterscheiden per isinstance(). Gleichheit ist
strukturell (gleiche Variante, gleiche Feldwerte inkl. Index).
"""

from dataclasses import dataclass
from datetime import time
from typing import Optional, Union

from models.lecture import Lecture


@dataclass(frozen=True)
class Unknown:
    """Startwert vor dem ersten Tick. Nie Ergebnis einer Klassifikation."""


@dataclass(frozen=True)
class Weekend:
    """Samstag oder Sonntag."""


@dataclass(frozen=True)
class BeforeSchool:
    """Schultag, erste Stunde hat noch nicht begonnen."""

    # Beginn der ersten Stunde des Tages
    first_lecture_begin: time


@dataclass(frozen=True)
class InLecture:
    """Eine Stunde läuft (Beginn und Ende zählen dazu)."""

    # Position im Tagesplan, 0-basiert
    index: int
    lecture: Lecture


@dataclass(frozen=True)
class FreeTime:
    """Pause zwischen zwei Stunden.

    next ist (Index, None), wenn heute keine Stunde mehr folgt; bei einem
    gültigen Tagesplan kommt das nicht vor.
    """

    prev: tuple[int, Lecture]
    next: tuple[int, Optional[Lecture]]

    @property
    def next_lecture(self) -> Optional[Lecture]:
        return self.next[1]


@dataclass(frozen=True)
class AfterSchool:
    """Letzte Stunde des Tages ist vorbei."""


Phase = Union[Unknown, Weekend, BeforeSchool, InLecture, FreeTime, AfterSchool]

UNKNOWN = Unknown()
