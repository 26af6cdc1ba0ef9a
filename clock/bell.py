"""Pausengong bei Phasenwechsel.

Die Wiedergabe läuft in einem eigenen Worker-Thread; der Tick wartet nie
darauf. Fehler (kein Audiogerät, Datei fehlt) werden nur geloggt.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Optional

from rich.console import Console

from config.schema import BellConfig

logger = logging.getLogger(__name__)


class Bell:
    """Spielt den Gong ab (blockierend).

    Mit sound_file über pygame.mixer, sonst Terminal-Klingel (BEL).
    pygame wird erst beim ersten Abspielen importiert.
    """

    def __init__(self, sound_file: Optional[Path] = None, volume: float = 1.0,
                 console: Optional[Console] = None) -> None:
        self.sound_file = Path(sound_file) if sound_file else None
        self.volume = volume
        self.console = console or Console()

    @classmethod
    def from_config(cls, config: BellConfig, base_dir: Optional[Path] = None) -> "Bell":
        sound_file = None
        if config.sound_file:
            sound_file = Path(config.sound_file)
            if base_dir is not None and not sound_file.is_absolute():
                sound_file = base_dir / sound_file
        return cls(sound_file=sound_file, volume=config.volume)

    def play(self) -> None:
        if self.sound_file is None:
            self.console.bell()
            return
        if not self.sound_file.exists():
            raise FileNotFoundError(f"Gong-Datei nicht gefunden: {self.sound_file}")
        try:
            import pygame
        except ImportError as e:
            raise ImportError(
                "pygame nicht installiert. Bitte: pip install 'stundenuhr[sound]'"
            ) from e

        if not pygame.mixer.get_init():
            pygame.mixer.init()
        pygame.mixer.music.load(str(self.sound_file))
        pygame.mixer.music.set_volume(self.volume)
        pygame.mixer.music.play()
        while pygame.mixer.music.get_busy():
            pygame.time.wait(50)


class BellDispatcher:
    """Startet den Gong asynchron (fire-and-forget).

    Ein einzelner Worker: kommen zwei Wechsel kurz hintereinander, klingelt
    es nacheinander statt überlappend.
    """

    def __init__(self, bell: Bell, enabled: bool = True) -> None:
        self.bell = bell
        self.enabled = enabled
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="gong")

    def ring(self) -> Optional[Future]:
        """Gong einreihen und sofort zurückkehren."""
        if not self.enabled:
            return None
        future = self._executor.submit(self.bell.play)
        future.add_done_callback(self._log_failure)
        return future

    @staticmethod
    def _log_failure(future: Future) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.warning(f"Gong konnte nicht abgespielt werden: {exc}")

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)
