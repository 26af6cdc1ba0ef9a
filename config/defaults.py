from datetime import time

from config.schema import AppConfig
from models.lecture import Lecture
from models.theme import CellColor, Rgba, Theme
from models.timetable import WeekTimetable


def default_app_config() -> AppConfig:
    """Standard-Einstellungen: lokale Zeit, Sekundentakt, Terminal-Klingel."""
    return AppConfig()


# ─── ZEITRASTER ───
# Stundenraster eines typischen Gymnasiums:
# 1. Stunde  07:35 - 08:20
# 2. Stunde  08:25 - 09:10
#    ── Pause (20 min) ──
# 3. Stunde  09:30 - 10:15
# 4. Stunde  10:20 - 11:05
#    ── Pause (15 min) ──
# 5. Stunde  11:20 - 12:05
# 6. Stunde  12:10 - 12:55
#    ── Mittagspause (20 min) ──
# 7. Stunde  13:15 - 14:00

LESSON_TIMES: list[tuple[str, str]] = [
    ("07:35", "08:20"),
    ("08:25", "09:10"),
    ("09:30", "10:15"),
    ("10:20", "11:05"),
    ("11:20", "12:05"),
    ("12:10", "12:55"),
    ("13:15", "14:00"),
]

# Beispiel-Stundenplan einer 7. Klasse, Mo–Fr
SAMPLE_WEEK: list[list[str]] = [
    ["Deutsch", "Deutsch", "Mathematik", "Englisch", "Biologie", "Sport"],
    ["Englisch", "Mathematik", "Physik", "Physik", "Geschichte", "Kunst", "Kunst"],
    ["Mathematik", "Deutsch", "Französisch", "Religion", "Musik"],
    ["Französisch", "Englisch", "Deutsch", "Mathematik", "Erdkunde", "Sport"],
    ["Biologie", "Französisch", "Englisch", "Politik", "Religion"],
]


def _parse(hhmm: str) -> time:
    hour, minute = hhmm.split(":")
    return time(int(hour), int(minute))


def default_week_timetable() -> WeekTimetable:
    """Beispiel-Wochenplan auf Basis des Standard-Zeitrasters."""
    days = []
    for subjects in SAMPLE_WEEK:
        day = []
        for (begin, end), subject in zip(LESSON_TIMES, subjects):
            day.append(Lecture(begin=_parse(begin), end=_parse(end), subject=subject))
        days.append(day)
    return WeekTimetable(days=days)


# ─── FARBSCHEMA ───

# Farbpalette je Fachkategorie (RRGGBB)
CATEGORY_COLORS: dict[str, str] = {
    "hauptfach":    "B3D4FF",
    "sprache":      "FFF2B3",
    "nw":           "B3FFB3",
    "musisch":      "FFB3E6",
    "sport":        "FFD4B3",
    "gesellschaft": "D4B3FF",
}

SUBJECT_CATEGORY: dict[str, str] = {
    "Deutsch":      "hauptfach",
    "Mathematik":   "hauptfach",
    "Englisch":     "sprache",
    "Französisch":  "sprache",
    "Physik":       "nw",
    "Biologie":     "nw",
    "Kunst":        "musisch",
    "Musik":        "musisch",
    "Sport":        "sport",
    "Geschichte":   "gesellschaft",
    "Erdkunde":     "gesellschaft",
    "Politik":      "gesellschaft",
    "Religion":     "gesellschaft",
}


def default_theme() -> Theme:
    """Farbschema für alle Fächer des Beispielplans: Pastell-Hintergrund, schwarze Schrift."""
    foreground = Rgba.model_validate("#000000")
    return Theme({
        subject: CellColor(
            background=Rgba.model_validate("#" + CATEGORY_COLORS[category]),
            foreground=foreground,
        )
        for subject, category in SUBJECT_CATEGORY.items()
    })
