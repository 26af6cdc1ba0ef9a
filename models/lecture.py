"""Datenmodell für eine einzelne Unterrichtsstunde (Pydantic v2)."""

from datetime import time

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class Lecture(BaseModel):
    """Eine Unterrichtsstunde mit Beginn, Ende und Fach.

    Unveränderlich (frozen) damit sie in Phasen eingebettet und gehasht
    werden kann. Gleichheit und Ordnung gelten nach Wert.
    """

    model_config = ConfigDict(frozen=True)

    begin: time     # Beginn, z.B. "08:00" oder "08:00:00"
    end: time       # Ende (inklusive)
    subject: str    # Fachname, muss exakt zum Theme-Eintrag passen

    @field_validator("begin", "end")
    @classmethod
    def _naive_time(cls, v: time) -> time:
        if v.tzinfo is not None:
            raise ValueError("Uhrzeit bitte ohne Zeitzone angeben.")
        return v

    @model_validator(mode="after")
    def _check_order(self):
        if self.begin > self.end:
            raise ValueError(
                f"Stunde '{self.subject}': Beginn ({self.begin}) liegt nach Ende ({self.end})"
            )
        return self

    def _sort_key(self) -> tuple:
        return (self.begin, self.end, self.subject)

    def __lt__(self, other: "Lecture") -> bool:
        if not isinstance(other, Lecture):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __le__(self, other: "Lecture") -> bool:
        if not isinstance(other, Lecture):
            return NotImplemented
        return self._sort_key() <= other._sort_key()

    def __gt__(self, other: "Lecture") -> bool:
        if not isinstance(other, Lecture):
            return NotImplemented
        return self._sort_key() > other._sort_key()

    def __ge__(self, other: "Lecture") -> bool:
        if not isinstance(other, Lecture):
            return NotImplemented
        return self._sort_key() >= other._sort_key()

    @property
    def duration_seconds(self) -> int:
        """Dauer der Stunde in Sekunden."""
        return seconds_of_day(self.end) - seconds_of_day(self.begin)

    def contains(self, t: time) -> bool:
        """True wenn t im Intervall [begin, end] liegt (beide Grenzen inklusive)."""
        return self.begin <= t <= self.end

    def __str__(self) -> str:
        return f"{self.begin:%H:%M}–{self.end:%H:%M} {self.subject}"


def seconds_of_day(t: time) -> int:
    """Sekunden seit Mitternacht (Mikrosekunden werden abgeschnitten)."""
    return t.hour * 3600 + t.minute * 60 + t.second
