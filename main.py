"""Stundenuhr: Haupt-CLI.

Verwendung:
  python main.py init                     Beispiel-Konfiguration anlegen
  python main.py config show              Einstellungen anzeigen
  python main.py check                    Stundenplan und Farbschema prüfen
  python main.py now                      Aktuelle Phase einmalig anzeigen
  python main.py now --at 2024-03-04T08:15 Phase zu einem Zeitpunkt anzeigen
  python main.py show                     Live-Anzeige mit Gong
"""

import logging
import sys
import threading
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )


def _load_or_abort(ctx: click.Context):
    """Lädt Einstellungen und Stundenplan oder bricht mit Fehlermeldung ab."""
    from config.manager import ConfigError, ConfigManager

    mgr = ConfigManager(ctx.obj["config_dir"])
    try:
        settings = mgr.load_settings()
        schedule = mgr.load_schedule(settings)
    except FileNotFoundError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)
    except ConfigError as e:
        console.print(f"[red bold]Konfiguration fehlerhaft:[/red bold]\n{escape(str(e))}")
        sys.exit(1)
    return mgr, settings, schedule


# ─── INIT ─────────────────────────────────────────────────────────────────────

@click.command("init")
@click.option("--force", is_flag=True, default=False,
              help="Vorhandene Dateien überschreiben.")
@click.pass_context
def cmd_init(ctx: click.Context, force: bool):
    """Legt Einstellungen, Beispiel-Stundenplan und Farbschema an."""
    from config.manager import ConfigError, ConfigManager

    mgr = ConfigManager(ctx.obj["config_dir"])
    try:
        if not force and mgr.SETTINGS_FILE.exists() and not mgr.first_run_check():
            console.print(
                "[yellow]Eine Konfiguration existiert bereits.[/yellow]\n"
                "Mit [bold]--force[/bold] werden die Beispieldateien neu geschrieben."
            )
            return
        written = mgr.write_defaults(force=force)
    except ConfigError as e:
        console.print(f"[red bold]Konfiguration fehlerhaft:[/red bold]\n{escape(str(e))}")
        sys.exit(1)
    if not written:
        console.print("[dim]Alle Dateien vorhanden, nichts geschrieben.[/dim]")
        return
    console.print("[bold green]Einrichtung abgeschlossen![/bold green]")
    console.print("Prüfen Sie den Plan mit [bold]python main.py check[/bold].")


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Einstellungen anzeigen."""


@cmd_config.command("show")
@click.pass_context
def config_show(ctx: click.Context):
    """Zeigt die aktuellen Einstellungen an."""
    from config.manager import ConfigError, ConfigManager

    mgr = ConfigManager(ctx.obj["config_dir"])
    try:
        settings = mgr.load_settings()
    except ConfigError as e:
        console.print(f"[red bold]Konfiguration fehlerhaft:[/red bold]\n{escape(str(e))}")
        sys.exit(1)

    table = Table(title=f"Einstellungen ({mgr.SETTINGS_FILE})", box=box.ROUNDED)
    table.add_column("Bereich", style="bold")
    table.add_column("Parameter")
    table.add_column("Wert")
    table.add_row("Dateien", "timetable_file", settings.timetable_file)
    table.add_row("", "theme_file", settings.theme_file)
    for section in ("clock", "bell", "display"):
        for i, (k, v) in enumerate(getattr(settings, section).model_dump().items()):
            table.add_row(section if i == 0 else "", k, str(v))
    console.print(table)


# ─── CHECK ────────────────────────────────────────────────────────────────────

@click.command("check")
@click.pass_context
def cmd_check(ctx: click.Context):
    """Prüft Stundenplan und Farbschema."""
    from display.renderer import render_week_table
    from clock.phase import UNKNOWN

    mgr, settings, schedule = _load_or_abort(ctx)
    console.print(Panel(schedule.summary(), title="Stundenplan", border_style="cyan"))
    # Wochenraster ohne Hervorhebung
    console.print(render_week_table(
        schedule, None, UNKNOWN, settings.display,
    ))

    report = schedule.check()
    report.print_rich()
    sys.exit(0 if report.is_ok else 1)


# ─── NOW ──────────────────────────────────────────────────────────────────────

@click.command("now")
@click.option("--at", "at", type=click.DateTime(
    formats=["%Y-%m-%dT%H:%M:%S", "%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M"]),
    default=None, help="Zeitpunkt statt der aktuellen Uhrzeit.")
@click.pass_context
def cmd_now(ctx: click.Context, at):
    """Zeigt die Phase zum aktuellen (oder angegebenen) Zeitpunkt einmalig an."""
    from clock.ticker import ScheduleClock, make_now_fn
    from display.renderer import render_dashboard

    mgr, settings, schedule = _load_or_abort(ctx)
    now = at or make_now_fn(settings.clock.timezone)()
    clock = ScheduleClock(schedule.week, app_start=now)
    result = clock.tick(now)
    console.print(render_dashboard(result, schedule, settings.display))


# ─── SHOW ─────────────────────────────────────────────────────────────────────

@click.command("show")
@click.option("--no-bell", is_flag=True, default=False, help="Gong abschalten.")
@click.option("--no-grid", is_flag=True, default=False, help="Wochenraster ausblenden.")
@click.pass_context
def cmd_show(ctx: click.Context, no_bell: bool, no_grid: bool):
    """Live-Anzeige: Phase, Countdown und Wochenraster, Gong bei Wechsel."""
    from rich.live import Live

    from clock.bell import Bell, BellDispatcher
    from clock.ticker import ScheduleClock, make_now_fn
    from display.renderer import render_dashboard

    mgr, settings, schedule = _load_or_abort(ctx)
    display = settings.display
    if no_grid:
        display = display.model_copy(update={"show_week_grid": False})

    dispatcher = BellDispatcher(
        Bell.from_config(settings.bell, base_dir=mgr.CONFIG_DIR),
        enabled=settings.bell.enabled and not no_bell,
    )
    clock = ScheduleClock(
        schedule.week,
        now_fn=make_now_fn(settings.clock.timezone),
        on_transition=lambda previous, phase: dispatcher.ring(),
    )
    stop = threading.Event()

    try:
        with Live(console=console, screen=True, auto_refresh=False) as live:
            def on_tick(result):
                live.update(render_dashboard(result, schedule, display), refresh=True)

            clock.run(on_tick, stop, interval=settings.clock.tick_seconds)
    except KeyboardInterrupt:
        stop.set()
        logger.debug("Anzeige durch Benutzer beendet")
    finally:
        dispatcher.shutdown()


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--config-dir", type=click.Path(file_okay=False, path_type=Path),
              default=Path("config"), show_default=True,
              help="Ordner mit settings.yaml, Stundenplan und Farbschema.")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Debug-Ausgaben.")
@click.pass_context
def cli(ctx: click.Context, config_dir: Path, verbose: bool):
    """Stundenuhr: zeigt den Tagesablauf einer Klasse mit Countdown und Gong.

    Starten Sie mit: python main.py init
    """
    _setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_dir"] = config_dir


def main():
    """Einstiegspunkt."""
    cli(obj={})


# Befehle registrieren
cli.add_command(cmd_init)
cli.add_command(cmd_config)
cli.add_command(cmd_check)
cli.add_command(cmd_now)
cli.add_command(cmd_show)


if __name__ == "__main__":
    main()
