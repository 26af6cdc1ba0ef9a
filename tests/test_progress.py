"""Tests für die Fortschrittsberechnung (Countdown und Balken)."""

from datetime import datetime, time, timedelta

from clock.classifier import classify
from clock.phase import (
    UNKNOWN, AfterSchool, BeforeSchool, FreeTime, InLecture, Weekend,
)
from clock.progress import Progress, progress, time_between
from models.lecture import Lecture
from models.timetable import WeekTimetable

MONDAY = datetime(2024, 3, 4)
MATH = Lecture(begin=time(8, 0), end=time(8, 50), subject="Math")
ENGLISH = Lecture(begin=time(9, 0), end=time(9, 50), subject="English")


def _at(hh, mm, ss=0, days=0):
    return MONDAY.replace(hour=hh, minute=mm, second=ss) + timedelta(days=days)


class TestProgressValues:
    def test_in_lecture(self):
        phase = InLecture(index=0, lecture=MATH)
        prog = progress(phase, _at(8, 20), app_start=_at(7, 0))
        assert prog == Progress(remaining=timedelta(minutes=30), total=timedelta(minutes=50))
        assert abs(prog.fraction - 0.4) < 1e-9

    def test_free_time_with_next(self):
        phase = FreeTime(prev=(0, MATH), next=(1, ENGLISH))
        prog = progress(phase, _at(8, 55), app_start=_at(7, 0))
        assert prog.remaining == timedelta(minutes=5)
        assert prog.total == timedelta(minutes=10)
        assert prog.fraction == 0.5

    def test_before_school_anchored_at_app_start(self):
        phase = BeforeSchool(first_lecture_begin=time(8, 0))
        prog = progress(phase, _at(7, 30), app_start=_at(7, 0))
        assert prog.remaining == timedelta(minutes=30)
        assert prog.total == timedelta(minutes=60)
        assert prog.fraction == 0.5

    def test_before_school_started_on_earlier_day_anchors_at_midnight(self):
        phase = BeforeSchool(first_lecture_begin=time(8, 0))
        prog = progress(phase, _at(6, 0), app_start=_at(15, 0, days=-1))
        assert prog.total == timedelta(hours=8)
        assert prog.fraction == 0.75

    def test_no_progress_for_other_phases(self):
        for phase in (Weekend(), AfterSchool(), UNKNOWN,
                      FreeTime(prev=(1, ENGLISH), next=(2, None))):
            assert progress(phase, _at(12, 0), app_start=_at(7, 0)) is None


class TestFraction:
    def test_zero_total_is_complete(self):
        prog = Progress(remaining=timedelta(0), total=timedelta(0))
        assert prog.fraction == 1.0
        assert prog.percent == 100.0

    def test_clamped_to_unit_interval(self):
        assert Progress(remaining=timedelta(minutes=90), total=timedelta(minutes=45)).fraction == 0.0
        assert Progress(remaining=timedelta(minutes=-5), total=timedelta(minutes=45)).fraction == 1.0

    def test_time_between_negative(self):
        assert time_between(time(8, 0), time(9, 0)) == timedelta(hours=-1)

    def test_monotonic_within_lecture_and_complete_at_end(self):
        week = WeekTimetable(days=[[MATH, ENGLISH]] * 5)
        now = _at(8, 0)
        last = -1.0
        while now <= _at(8, 50):
            phase, _ = classify(now, week, UNKNOWN)
            assert phase == InLecture(index=0, lecture=MATH)
            fraction = progress(phase, now, app_start=_at(7, 0)).fraction
            assert fraction >= last
            last = fraction
            now += timedelta(seconds=30)
        assert last == 1.0

    def test_free_time_reaches_one_before_next_begin(self):
        phase = FreeTime(prev=(0, MATH), next=(1, ENGLISH))
        prog = progress(phase, _at(9, 0), app_start=_at(7, 0))
        assert prog.fraction == 1.0
