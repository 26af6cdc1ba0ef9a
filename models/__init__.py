from models.lecture import Lecture
from models.timetable import DayTimetable, WeekTimetable, day_of_week
from models.theme import CellColor, Rgba, Theme
from models.schedule import Schedule, ScheduleReport

__all__ = [
    "Lecture",
    "DayTimetable",
    "WeekTimetable",
    "day_of_week",
    "CellColor",
    "Rgba",
    "Theme",
    "Schedule",
    "ScheduleReport",
]
