"""Wochenstundenplan: fünf Tagespläne Montag bis Freitag (Pydantic v2)."""

from datetime import datetime, time

from pydantic import BaseModel, Field, model_validator

from models.lecture import Lecture

# Anzahl Schultage; Index 0=Mo .. 4=Fr. Samstag/Sonntag haben keinen Tagesplan.
SCHOOL_DAYS = 5

DAY_NAMES = ["Montag", "Dienstag", "Mittwoch", "Donnerstag", "Freitag",
             "Samstag", "Sonntag"]

DayTimetable = list[Lecture]


def day_of_week(now: datetime) -> int:
    """Wochentag als Zahl, 0=Montag .. 6=Sonntag."""
    return now.weekday()


class WeekTimetable(BaseModel):
    """Stundenplan einer Schulwoche.

    Jeder Tagesplan ist aufsteigend nach Beginn sortiert und überschneidungsfrei
    (Ende einer Stunde ≤ Beginn der nächsten). Leere Schultage sind unzulässig.
    """

    days: list[DayTimetable] = Field(min_length=SCHOOL_DAYS, max_length=SCHOOL_DAYS)

    @model_validator(mode="before")
    @classmethod
    def _accept_bare_list(cls, data):
        # timetable.json speichert die fünf Tage direkt als Liste
        if isinstance(data, (list, tuple)):
            return {"days": list(data)}
        return data

    @model_validator(mode="after")
    def _check_days(self):
        for weekday, day in enumerate(self.days):
            name = DAY_NAMES[weekday]
            if not day:
                raise ValueError(f"{name}: Tagesplan ist leer (mindestens eine Stunde nötig)")
            for prev, nxt in zip(day, day[1:]):
                if nxt.begin < prev.begin:
                    raise ValueError(
                        f"{name}: Stunden nicht nach Beginn sortiert "
                        f"('{nxt.subject}' {nxt.begin} vor '{prev.subject}' {prev.begin})"
                    )
                if prev.end > nxt.begin:
                    raise ValueError(
                        f"{name}: '{prev.subject}' (bis {prev.end}) überschneidet sich "
                        f"mit '{nxt.subject}' (ab {nxt.begin})"
                    )
        return self

    def __getitem__(self, weekday: int) -> DayTimetable:
        return self.days[weekday]

    def __len__(self) -> int:
        return len(self.days)

    @property
    def earliest_begin(self) -> time:
        """Frühester Stundenbeginn der Woche."""
        return min(day[0].begin for day in self.days)

    @property
    def latest_end(self) -> time:
        """Spätestes Stundenende der Woche."""
        return max(day[-1].end for day in self.days)

    @property
    def max_lectures_per_day(self) -> int:
        return max(len(day) for day in self.days)

    @property
    def subjects(self) -> set[str]:
        """Alle Fachnamen, die in der Woche vorkommen."""
        return {lecture.subject for day in self.days for lecture in day}
