from pydantic import BaseModel, Field, field_validator
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


# ─── UHR ───

class ClockConfig(BaseModel):
    """Zeitquelle und Taktung."""
    # IANA-Zeitzone, z.B. "Europe/Berlin" oder "Asia/Seoul". None = Systemzeit.
    timezone: Optional[str] = Field(None,
        description="Zeitzone (IANA-Name), leer = lokale Systemzeit")
    # Abstand zwischen zwei Takten in Sekunden
    tick_seconds: float = Field(1.0, gt=0.0, le=60.0,
        description="Takt in Sekunden")

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unbekannte Zeitzone: {v!r}") from e
        return v


# ─── GONG ───

class BellConfig(BaseModel):
    """Pausengong bei Phasenwechsel."""
    # Gong an/aus
    enabled: bool = Field(True, description="Gong bei Phasenwechsel")
    # Audiodatei (relativ zum Konfigurationsordner). None = Terminal-Klingel.
    sound_file: Optional[str] = Field(None,
        description="Audiodatei (mp3/ogg/wav), leer = Terminal-Klingel")
    # Lautstärke 0.0 bis 1.0
    volume: float = Field(1.0, ge=0.0, le=1.0, description="Lautstärke")


# ─── ANZEIGE ───

class DisplayConfig(BaseModel):
    """Darstellung im Terminal."""
    # Überschrift über der Anzeige
    title: str = Field("Stundenuhr", description="Titel der Anzeige")
    # Wochenraster unter dem Fortschrittsbalken anzeigen
    show_week_grid: bool = Field(True, description="Wochenraster anzeigen")
    # Abschwächung der Farben für alle Tage außer heute (Alpha-Faktor)
    dim_factor: float = Field(0.8, ge=0.0, le=1.0,
        description="Alpha-Faktor für andere Wochentage")
    # Hintergrund, auf den halbtransparente Farben gemischt werden
    backdrop: str = Field("#000000",
        description="Terminal-Hintergrund für Alpha-Mischung (#RRGGBB)")
    # Namen der Wochentage, Montag zuerst
    day_names: list[str] = Field(
        default=["Montag", "Dienstag", "Mittwoch", "Donnerstag", "Freitag",
                 "Samstag", "Sonntag"],
        min_length=7, max_length=7,
        description="Namen der Wochentage (Mo–So)")


# ─── GESAMT-CONFIG ───

class AppConfig(BaseModel):
    """Gesamtkonfiguration der Stundenuhr."""
    # Stundenplan-Datei (JSON oder YAML), relativ zum Konfigurationsordner
    timetable_file: str = Field("timetable.yaml",
        description="Stundenplan-Datei")
    # Farbschema-Datei (JSON oder YAML), relativ zum Konfigurationsordner
    theme_file: str = Field("theme.yaml", description="Farbschema-Datei")
    clock: ClockConfig = Field(default_factory=ClockConfig)
    bell: BellConfig = Field(default_factory=BellConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
