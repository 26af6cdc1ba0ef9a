"""Tests für Takt-Schleife und Gong (Wechsel-Erkennung, Fire-and-forget)."""

import sys
import threading
from datetime import datetime, time, timedelta

import pytest

from clock.bell import Bell, BellDispatcher
from clock.phase import UNKNOWN, FreeTime, InLecture
from clock.ticker import ScheduleClock, make_now_fn
from config.schema import BellConfig
from models.lecture import Lecture
from models.timetable import WeekTimetable

MONDAY = datetime(2024, 3, 4)
MATH = Lecture(begin=time(8, 0), end=time(8, 50), subject="Math")
ENGLISH = Lecture(begin=time(9, 0), end=time(9, 50), subject="English")
WEEK = WeekTimetable(days=[[MATH, ENGLISH]] * 5)


def _at(hh, mm, ss=0, us=0):
    return MONDAY.replace(hour=hh, minute=mm, second=ss, microsecond=us)


class _RecordingBell(Bell):
    def __init__(self):
        super().__init__()
        self.played = threading.Event()

    def play(self):
        self.played.set()


class _BrokenBell(Bell):
    def play(self):
        raise RuntimeError("kein Audiogerät")


# ─── SCHEDULECLOCK ────────────────────────────────────────────────────────────

class TestScheduleClock:
    def test_first_tick_is_not_a_transition(self):
        calls = []
        clock = ScheduleClock(WEEK, app_start=_at(7, 0),
                              on_transition=lambda a, b: calls.append((a, b)))
        result = clock.tick(_at(8, 49, 59))
        assert result.phase == InLecture(index=0, lecture=MATH)
        assert result.transitioned is False
        assert calls == []

    def test_transition_calls_callback_once(self):
        calls = []
        clock = ScheduleClock(WEEK, app_start=_at(7, 0),
                              on_transition=lambda a, b: calls.append((a, b)))
        clock.tick(_at(8, 50, 0))
        result = clock.tick(_at(8, 50, 1))
        clock.tick(_at(8, 50, 2))
        assert result.transitioned is True
        assert calls == [(InLecture(index=0, lecture=MATH),
                          FreeTime(prev=(0, MATH), next=(1, ENGLISH)))]

    def test_phase_is_threaded_forward(self):
        clock = ScheduleClock(WEEK, app_start=_at(7, 0))
        assert clock.phase == UNKNOWN
        clock.tick(_at(8, 10))
        assert clock.phase == InLecture(index=0, lecture=MATH)

    def test_duplicate_tick_in_same_second_ignored(self):
        clock = ScheduleClock(WEEK, app_start=_at(7, 0))
        assert clock.tick(_at(8, 10, 5, 100)) is not None
        assert clock.tick(_at(8, 10, 5, 900_000)) is None
        assert clock.tick(_at(8, 10, 6)) is not None

    def test_progress_attached(self):
        clock = ScheduleClock(WEEK, app_start=_at(7, 0))
        result = clock.tick(_at(8, 25))
        assert result.progress.remaining == timedelta(minutes=25)

    def test_uses_now_fn(self):
        times = iter([_at(7, 0), _at(8, 0)])
        clock = ScheduleClock(WEEK, now_fn=lambda: next(times))
        assert clock.app_start == _at(7, 0)
        assert clock.tick().now == _at(8, 0)

    def test_run_until_stopped(self):
        stop = threading.Event()
        seconds = iter(range(10))
        results = []

        def now_fn():
            return _at(8, 49, 57) + timedelta(seconds=next(seconds))

        def on_tick(result):
            results.append(result)
            if len(results) == 5:
                stop.set()

        clock = ScheduleClock(WEEK, now_fn=now_fn, app_start=_at(7, 0))
        clock.run(on_tick, stop, interval=0.001)
        assert len(results) == 5
        assert [r.transitioned for r in results] == [False, False, False, False, True]

    def test_make_now_fn_with_timezone(self):
        now = make_now_fn("Asia/Seoul")()
        assert now.utcoffset() == timedelta(hours=9)

    def test_make_now_fn_local(self):
        assert make_now_fn(None)().tzinfo is None


# ─── GONG ─────────────────────────────────────────────────────────────────────

class TestBellDispatcher:
    def test_ring_runs_in_background(self):
        bell = _RecordingBell()
        dispatcher = BellDispatcher(bell)
        future = dispatcher.ring()
        assert bell.played.wait(timeout=5)
        future.result(timeout=5)
        dispatcher.shutdown()

    def test_disabled_does_not_ring(self):
        bell = _RecordingBell()
        dispatcher = BellDispatcher(bell, enabled=False)
        assert dispatcher.ring() is None
        assert not bell.played.is_set()
        dispatcher.shutdown()

    def test_failure_is_logged_not_raised(self, caplog):
        dispatcher = BellDispatcher(_BrokenBell())
        future = dispatcher.ring()
        with pytest.raises(RuntimeError):
            future.result(timeout=5)
        dispatcher._executor.shutdown(wait=True)
        assert any("Gong konnte nicht abgespielt werden" in r.message for r in caplog.records)

    def test_without_sound_file_rings_terminal(self):
        class _Console:
            rung = 0

            def bell(self):
                self.rung += 1

        console = _Console()
        Bell(console=console).play()
        assert console.rung == 1

    def test_missing_sound_file_raises_in_play(self, tmp_path):
        bell = Bell(sound_file=tmp_path / "fehlt.mp3")
        with pytest.raises(FileNotFoundError):
            bell.play()

    def test_missing_pygame_names_install_hint(self, tmp_path, monkeypatch):
        sound = tmp_path / "gong.wav"
        sound.write_bytes(b"")
        monkeypatch.setitem(sys.modules, "pygame", None)
        with pytest.raises(ImportError, match=r"stundenuhr\[sound\]") as excinfo:
            Bell(sound_file=sound).play()
        assert isinstance(excinfo.value.__cause__, ImportError)

    def test_from_config_resolves_relative_path(self, tmp_path):
        bell = Bell.from_config(BellConfig(sound_file="sound/bell.mp3"), base_dir=tmp_path)
        assert bell.sound_file == tmp_path / "sound" / "bell.mp3"

    def test_from_config_without_file_uses_terminal_bell(self):
        assert Bell.from_config(BellConfig()).sound_file is None

    def test_transition_triggers_ring_without_blocking(self):
        release = threading.Event()

        class _SlowBell(Bell):
            def play(self):
                release.wait(timeout=5)

        dispatcher = BellDispatcher(_SlowBell())
        clock = ScheduleClock(WEEK, app_start=_at(7, 0),
                              on_transition=lambda a, b: dispatcher.ring())
        clock.tick(_at(8, 50, 0))
        result = clock.tick(_at(8, 50, 1))
        # Tick kehrt zurück, obwohl der Gong noch "spielt"
        assert result.transitioned is True
        assert clock.tick(_at(8, 50, 2)) is not None
        release.set()
        dispatcher.shutdown()
