"""Schedule: Wochenstundenplan + Farbschema + Plausibilitäts-Check (Pydantic v2)."""

from pydantic import BaseModel, Field

from models.theme import Theme
from models.timetable import DAY_NAMES, WeekTimetable


class ScheduleReport(BaseModel):
    """Ergebnis des Plausibilitäts-Checks."""

    errors: list[str]      # Datenfehler (Anzeige wäre falsch)
    warnings: list[str]    # Hinweise (Anzeige funktioniert, sieht aber evtl. anders aus)

    @property
    def is_ok(self) -> bool:
        return not self.errors

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.markup import escape
        from rich.panel import Panel

        console = Console()
        if self.is_ok:
            status = "[bold green]✓ STUNDENPLAN OK[/bold green]"
        else:
            status = "[bold red]✗ STUNDENPLAN FEHLERHAFT[/bold red]"

        lines = [status]
        if self.errors:
            lines.append("\n[red bold]Fehler:[/red bold]")
            for e in self.errors:
                lines.append(f"  [red]• {escape(e)}[/red]")
        if self.warnings:
            lines.append("\n[yellow bold]Warnungen:[/yellow bold]")
            for w in self.warnings:
                lines.append(f"  [yellow]• {escape(w)}[/yellow]")
        if not self.errors and not self.warnings:
            lines.append("[dim]Keine Probleme gefunden.[/dim]")

        console.print(Panel("\n".join(lines), title="Stundenplan-Check", border_style="cyan"))


class Schedule(BaseModel):
    """Alles, was die Anzeige zur Laufzeit braucht: Woche und Farben."""

    week: WeekTimetable
    theme: Theme = Field(default_factory=Theme)

    def summary(self) -> str:
        """Kurze Übersicht über den Stundenplan."""
        days = self.week.days
        total = sum(len(day) for day in days)
        lines = [
            f"Stunden pro Woche: {total}",
            f"Fächer: {len(self.week.subjects)}",
            f"Unterricht von {self.week.earliest_begin:%H:%M} "
            f"bis spätestens {self.week.latest_end:%H:%M}",
            f"Farbschema: {len(self.theme)} Einträge",
        ]
        return "\n".join(lines)

    def check(self) -> ScheduleReport:
        """Prüft Stundenplan und Farbschema auf Unstimmigkeiten.

        Prüfungen:
        1. Jede Stunde hat einen Fachnamen
        2. Stunden ohne Dauer (Beginn = Ende)
        3. Fächer ohne Farbschema-Eintrag
        4. Farbschema-Einträge ohne passendes Fach
        """
        errors: list[str] = []
        warnings: list[str] = []

        for weekday, day in enumerate(self.week.days):
            name = DAY_NAMES[weekday]
            for index, lecture in enumerate(day):
                if not lecture.subject.strip():
                    errors.append(
                        f"{name}, {index + 1}. Stunde ({lecture.begin:%H:%M}): kein Fachname"
                    )
                elif lecture.begin == lecture.end:
                    warnings.append(
                        f"{name}, {index + 1}. Stunde '{lecture.subject}': "
                        f"Beginn und Ende identisch ({lecture.begin})"
                    )

        used = {s for s in self.week.subjects if s.strip()}
        for subject in sorted(used - self.theme.subjects):
            warnings.append(f"Fach '{subject}' hat keinen Farbschema-Eintrag (Standardfarben)")
        for subject in sorted(self.theme.subjects - used):
            warnings.append(f"Farbschema-Eintrag '{subject}' wird von keiner Stunde genutzt")

        return ScheduleReport(errors=errors, warnings=warnings)
