"""Terminal-Anzeige der Stundenuhr (Rich).

Wird von `main.py now` (einmalig) und `main.py show` (Live) verwendet.
Alle Funktionen sind reine Renderer: Eingabe ist ein TickResult, Ausgabe
ein Rich-Renderable.
"""

from datetime import datetime
from typing import Optional

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.style import Style
from rich.table import Table
from rich.text import Text

from clock.phase import (
    AfterSchool, BeforeSchool, FreeTime, InLecture, Phase, Unknown, Weekend,
)
from clock.progress import Progress
from clock.ticker import TickResult
from config.schema import DisplayConfig
from models.schedule import Schedule
from models.theme import Rgba
from models.timetable import SCHOOL_DAYS


def phase_message(phase: Phase) -> str:
    """Kurzer Satz zur aktuellen Phase."""
    if isinstance(phase, Unknown):
        return ""
    if isinstance(phase, Weekend):
        return "Es ist Wochenende"
    if isinstance(phase, BeforeSchool):
        return "Zeit, sich auf den Unterricht vorzubereiten"
    if isinstance(phase, AfterSchool):
        return "Der Unterricht ist für heute vorbei"
    if isinstance(phase, InLecture):
        return f"{phase.lecture.subject} läuft gerade"
    if isinstance(phase, FreeTime):
        nxt = phase.next_lecture
        return f"Pause (nächste Stunde: {nxt.subject if nxt else 'keine'})"
    raise TypeError(f"Unbekannte Phase: {phase!r}")


def status_text(now: datetime, phase: Phase, day_names: list[str]) -> str:
    """Zweizeiliger Statustext: Wochentag + Uhrzeit, darunter die Phase."""
    return (
        f"Jetzt ist {day_names[now.weekday()]}, {now:%H:%M:%S} Uhr\n"
        f"{phase_message(phase)}"
    )


def _mm_ss(total_seconds: int) -> str:
    minutes, seconds = divmod(max(total_seconds, 0), 60)
    return f"{minutes:02d}:{seconds:02d}"


def progress_text(prog: Optional[Progress]) -> str:
    """'MM:SS von MM:SS übrig (x.x % erledigt)' oder leer ohne Fortschritt."""
    if prog is None:
        return ""
    remaining = int(prog.remaining.total_seconds())
    total = int(prog.total.total_seconds())
    return f"{_mm_ss(remaining)} von {_mm_ss(total)} übrig ({prog.percent:.1f} % erledigt)"


def highlighted_indices(phase: Phase) -> set[int]:
    """Stunden-Indizes des heutigen Tages, die hervorgehoben werden."""
    if isinstance(phase, InLecture):
        return {phase.index}
    if isinstance(phase, FreeTime):
        return {phase.prev[0], phase.next[0]}
    return set()


def _cell_style(schedule: Schedule, subject: str, dimmed: bool,
                config: DisplayConfig) -> Style:
    colors = schedule.theme.get(subject)
    if colors is None:
        # ohne Eintrag: Terminalfarben statt schwarz auf transparent
        return Style(dim=dimmed)
    backdrop = Rgba.model_validate(config.backdrop)
    fg, bg = colors.foreground, colors.background
    if dimmed:
        fg = fg.with_alpha_scaled(config.dim_factor)
        bg = bg.with_alpha_scaled(config.dim_factor)
    return Style(
        color=fg.blend_over(backdrop).to_hex(),
        bgcolor=bg.blend_over(backdrop).to_hex() if bg.alpha > 0 else None,
    )


def render_week_table(schedule: Schedule, today: Optional[int], phase: Phase,
                      config: DisplayConfig) -> Table:
    """Wochenraster: eine Spalte je Schultag, eine Zeile je Stunde.

    today ist der Wochentag (0=Mo); dessen Spalte ist fett überschrieben, die
    übrigen Tage sind abgeschwächt. Laufende Stunde bzw. die Stunden um die
    aktuelle Pause sind invertiert. today=None zeigt alle Tage gleichrangig.
    """
    highlight = highlighted_indices(phase) if today is not None and today < SCHOOL_DAYS else set()

    table = Table(box=box.ROUNDED, expand=True, show_lines=True)
    table.add_column("Std.", justify="right", style="dim", no_wrap=True)
    for day_idx in range(SCHOOL_DAYS):
        name = config.day_names[day_idx]
        table.add_column(
            f"[bold]{name}[/bold]" if day_idx == today else name,
            justify="center",
        )

    for row in range(schedule.week.max_lectures_per_day):
        cells: list[RenderableType] = [f"{row + 1}."]
        for day_idx in range(SCHOOL_DAYS):
            day = schedule.week[day_idx]
            if row >= len(day):
                cells.append("")
                continue
            lecture = day[row]
            dimmed = today is not None and day_idx != today
            style = _cell_style(schedule, lecture.subject, dimmed, config)
            if day_idx == today and row in highlight:
                style = style + Style(bold=True, reverse=True)
            cells.append(Text(
                f"{lecture.begin:%H:%M}–{lecture.end:%H:%M}\n{lecture.subject}",
                style=style,
                justify="center",
            ))
        table.add_row(*cells)
    return table


def render_dashboard(result: TickResult, schedule: Schedule,
                     config: DisplayConfig) -> Group:
    """Komplette Anzeige: Status, Fortschrittsbalken, Countdown, Wochenraster."""
    fraction = result.progress.fraction if result.progress is not None else 1.0
    parts: list[RenderableType] = [
        Panel(
            Text(status_text(result.now, result.phase, config.day_names),
                 justify="center", style="bold"),
            title=config.title,
            border_style="cyan",
        ),
        ProgressBar(total=1.0, completed=fraction),
        Text(progress_text(result.progress), justify="center"),
    ]
    if config.show_week_grid:
        parts.append(render_week_table(schedule, result.now.weekday(), result.phase, config))
    return Group(*parts)
