"""Konfigurationsmanager: Einstellungen, Stundenplan und Farbschema laden und speichern.

Nutzt ruamel.yaml für YAML-Serialisierung mit Kommentaren. Stundenplan und
Farbschema dürfen auch als JSON vorliegen (JSON ist gültiges YAML).
Ladefehler brechen den Start ab: ohne gültigen Stundenplan läuft nichts.
"""

import json
from datetime import date
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError
from rich.console import Console
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap
from ruamel.yaml.error import YAMLError

from config.defaults import default_app_config, default_theme, default_week_timetable
from config.schema import AppConfig
from models.schedule import Schedule
from models.theme import Theme
from models.timetable import WeekTimetable

console = Console()
yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120
_reader = YAML(typ="safe")


class ConfigError(ValueError):
    """Konfigurationsdatei nicht lesbar oder ungültig."""


# ─── YAML-KOMMENTAR-AUFBAU ───

_YAML_HEADER = f"""\
# ============================================
# Stundenuhr: Einstellungen
# Erstellt: {date.today().isoformat()}
# ============================================
"""

_SECTION_COMMENTS = {
    "timetable_file": (
        "Dateien",
        "Stundenplan und Farbschema, relativ zu diesem Ordner (JSON oder YAML).",
    ),
    "clock": (
        "Uhr",
        "timezone leer lassen für die lokale Systemzeit.",
    ),
    "bell": (
        "Gong",
        "Ohne sound_file klingelt das Terminal.",
    ),
    "display": (
        "Anzeige",
        None,
    ),
}


class ConfigManager:
    CONFIG_DIR = Path("config")
    SETTINGS_FILE = CONFIG_DIR / "settings.yaml"

    def __init__(self, config_dir: Optional[Path] = None) -> None:
        if config_dir is not None:
            self.CONFIG_DIR = Path(config_dir)
            self.SETTINGS_FILE = self.CONFIG_DIR / "settings.yaml"

    def first_run_check(self) -> bool:
        """Gibt True zurück wenn noch kein Stundenplan existiert (Erstaufruf)."""
        settings = self.load_settings()
        return not self._resolve(settings.timetable_file).exists()

    def _resolve(self, name: str) -> Path:
        path = Path(name)
        return path if path.is_absolute() else self.CONFIG_DIR / path

    def _read(self, path: Path) -> Any:
        """Liest JSON/YAML; fehlende oder kaputte Dateien → Ausnahme mit Hinweis."""
        if not path.exists():
            raise FileNotFoundError(
                f"Datei nicht gefunden: {path}\n"
                f"Führen Sie 'python main.py init' aus, um Beispieldateien anzulegen."
            )
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = _reader.load(f)
        except (OSError, UnicodeDecodeError, YAMLError) as e:
            raise ConfigError(f"Datei nicht lesbar: {path}\n{e}") from e
        if raw is None:
            raise ConfigError(f"Datei ist leer: {path}")
        return raw

    # ─── Laden ───

    def load_settings(self, path: Optional[Path] = None) -> AppConfig:
        """Lade Einstellungen. Fehlt die Datei, gelten die Defaults."""
        target = path or self.SETTINGS_FILE
        if not target.exists():
            return default_app_config()
        raw = self._read(target)
        try:
            return AppConfig.model_validate(dict(raw))
        except (ValidationError, TypeError, ValueError) as e:
            raise ConfigError(
                f"Einstellungen ungültig: {target}\n"
                f"Pydantic-Fehler: {e}"
            ) from e

    def load_timetable(self, path: Optional[Path] = None) -> WeekTimetable:
        """Lade den Wochenplan; Sortierung und Überschneidungen werden geprüft."""
        target = path or self._resolve(self.load_settings().timetable_file)
        raw = self._read(target)
        try:
            return WeekTimetable.model_validate(raw)
        except ValidationError as e:
            raise ConfigError(
                f"Stundenplan ungültig: {target}\n"
                f"Pydantic-Fehler: {e}"
            ) from e

    def load_theme(self, path: Optional[Path] = None) -> Theme:
        """Lade das Farbschema (Fach → Vorder-/Hintergrundfarbe)."""
        target = path or self._resolve(self.load_settings().theme_file)
        raw = self._read(target)
        try:
            return Theme.model_validate(raw)
        except ValidationError as e:
            raise ConfigError(
                f"Farbschema ungültig: {target}\n"
                f"Pydantic-Fehler: {e}"
            ) from e

    def load_schedule(self, settings: Optional[AppConfig] = None) -> Schedule:
        """Lädt Stundenplan und Farbschema gemäß Einstellungen."""
        settings = settings or self.load_settings()
        return Schedule(
            week=self.load_timetable(self._resolve(settings.timetable_file)),
            theme=self.load_theme(self._resolve(settings.theme_file)),
        )

    # ─── Speichern ───

    def save_settings(self, config: AppConfig, path: Optional[Path] = None) -> None:
        """Speichere Einstellungen als YAML mit deutschen Kommentaren."""
        target = path or self.SETTINGS_FILE
        target.parent.mkdir(parents=True, exist_ok=True)

        data = self._build_commented_yaml(config)

        with open(target, "w", encoding="utf-8") as f:
            f.write(_YAML_HEADER + "\n")
            yaml.dump(data, f)

        console.print(f"[green]✓[/green] Einstellungen gespeichert: {target}")

    def _build_commented_yaml(self, config: AppConfig) -> CommentedMap:
        """Baut die YAML-Struktur mit Kommentaren auf."""
        raw = json.loads(config.model_dump_json())
        cm = CommentedMap(raw)

        for field, (label, comment) in _SECTION_COMMENTS.items():
            cm.yaml_set_comment_before_after_key(
                field,
                before=f"\n─── {label} ───" + (f"\n{comment}" if comment else ""),
            )
        return cm

    def save_timetable(self, week: WeekTimetable, path: Optional[Path] = None) -> Path:
        """Speichert den Wochenplan als Liste von fünf Tageslisten."""
        target = path or self._resolve(self.load_settings().timetable_file)
        target.parent.mkdir(parents=True, exist_ok=True)
        self._write_data(target, week.model_dump(mode="json")["days"])
        console.print(f"[green]✓[/green] Stundenplan gespeichert: {target}")
        return target

    def save_theme(self, theme: Theme, path: Optional[Path] = None) -> Path:
        """Speichert das Farbschema."""
        target = path or self._resolve(self.load_settings().theme_file)
        target.parent.mkdir(parents=True, exist_ok=True)
        self._write_data(target, theme.model_dump(mode="json"))
        console.print(f"[green]✓[/green] Farbschema gespeichert: {target}")
        return target

    @staticmethod
    def _write_data(target: Path, data: Any) -> None:
        with open(target, "w", encoding="utf-8") as f:
            if target.suffix.lower() == ".json":
                json.dump(data, f, ensure_ascii=False, indent=2)
                f.write("\n")
            else:
                yaml.dump(data, f)

    def write_defaults(self, force: bool = False) -> list[Path]:
        """Legt Einstellungen, Beispiel-Stundenplan und Farbschema an.

        Vorhandene Dateien bleiben ohne force unangetastet.
        """
        written: list[Path] = []
        if force or not self.SETTINGS_FILE.exists():
            self.save_settings(default_app_config())
            written.append(self.SETTINGS_FILE)

        settings = self.load_settings()
        timetable_path = self._resolve(settings.timetable_file)
        if force or not timetable_path.exists():
            written.append(self.save_timetable(default_week_timetable(), timetable_path))

        theme_path = self._resolve(settings.theme_file)
        if force or not theme_path.exists():
            written.append(self.save_theme(default_theme(), theme_path))
        return written
