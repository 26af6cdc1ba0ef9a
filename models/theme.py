"""Farbschema: Fach → (Vordergrund, Hintergrund) (Pydantic v2)."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, RootModel, model_serializer, model_validator


class Rgba(BaseModel):
    """Farbe mit Alphakanal, alle Kanäle 0.0 bis 1.0.

    Akzeptiert neben {red, green, blue, alpha} auch "#RRGGBB", "#RRGGBBAA"
    und Listen mit 3 oder 4 Werten (0.0–1.0).
    """

    model_config = ConfigDict(frozen=True)

    red: float = Field(ge=0.0, le=1.0)
    green: float = Field(ge=0.0, le=1.0)
    blue: float = Field(ge=0.0, le=1.0)
    alpha: float = Field(1.0, ge=0.0, le=1.0)

    @model_validator(mode="before")
    @classmethod
    def _parse_shorthand(cls, data):
        if isinstance(data, str):
            h = data.strip().lstrip("#")
            if len(h) not in (6, 8):
                raise ValueError(f"Ungültige Hex-Farbe: {data!r} (erwartet #RRGGBB oder #RRGGBBAA)")
            try:
                channels = [int(h[i:i + 2], 16) / 255 for i in range(0, len(h), 2)]
            except ValueError as e:
                raise ValueError(f"Ungültige Hex-Farbe: {data!r}") from e
            return dict(zip(("red", "green", "blue", "alpha"), channels))
        if isinstance(data, (list, tuple)):
            if len(data) not in (3, 4):
                raise ValueError(f"Farbliste braucht 3 oder 4 Werte, nicht {len(data)}")
            return dict(zip(("red", "green", "blue", "alpha"), data))
        return data

    @model_serializer
    def _serialize(self) -> str:
        # gespeichert wird immer als "#rrggbbaa"
        return self.to_hex() + f"{round(self.alpha * 255):02x}"

    def to_hex(self) -> str:
        """'#rrggbb' ohne Alphakanal."""
        return "#" + "".join(
            f"{round(c * 255):02x}" for c in (self.red, self.green, self.blue)
        )

    def with_alpha_scaled(self, factor: float) -> "Rgba":
        """Kopie mit abgeschwächtem Alphakanal (z.B. 0.8 für andere Wochentage)."""
        return self.model_copy(update={"alpha": self.alpha * factor})

    def blend_over(self, backdrop: "Rgba") -> "Rgba":
        """Alpha-Komposition auf einen deckenden Hintergrund (Terminals kennen kein Alpha)."""
        a = self.alpha
        return Rgba(
            red=self.red * a + backdrop.red * (1 - a),
            green=self.green * a + backdrop.green * (1 - a),
            blue=self.blue * a + backdrop.blue * (1 - a),
        )


BLACK = Rgba(red=0.0, green=0.0, blue=0.0)
TRANSPARENT = Rgba(red=0.0, green=0.0, blue=0.0, alpha=0.0)


class CellColor(BaseModel):
    """Farbpaar einer Zelle im Wochenraster."""

    model_config = ConfigDict(frozen=True)

    background: Rgba
    foreground: Rgba


DEFAULT_CELL_COLOR = CellColor(background=TRANSPARENT, foreground=BLACK)


class Theme(RootModel[dict[str, CellColor]]):
    """Zuordnung Fachname → Farbpaar.

    Unbekannte Fächer erhalten DEFAULT_CELL_COLOR. Verglichen wird exakt
    (Groß-/Kleinschreibung und Leerzeichen zählen).
    """

    root: dict[str, CellColor] = {}

    def get(self, subject: str) -> Optional[CellColor]:
        """Eintrag für das Fach oder None."""
        if not subject:
            return None
        return self.root.get(subject)

    def lookup(self, subject: str) -> CellColor:
        """Farbpaar für das Fach, Default-Farben bei fehlendem Eintrag."""
        return self.get(subject) or DEFAULT_CELL_COLOR

    @property
    def subjects(self) -> set[str]:
        return set(self.root)

    def __contains__(self, subject: str) -> bool:
        return self.get(subject) is not None

    def __len__(self) -> int:
        return len(self.root)
