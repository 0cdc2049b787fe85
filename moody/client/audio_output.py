"""Single audio output handle on pygame.mixer.music."""
import io
import logging
import threading
from pathlib import PurePosixPath
from typing import Callable, Optional, Protocol
from urllib.parse import urlparse

import requests

from moody.config import HTTP_TIMEOUT_SEC
from moody.core.errors import AudioOutputError

logger = logging.getLogger(__name__)

POLL_INTERVAL_SEC = 0.25


class AudioOutput(Protocol):
    on_ended: Optional[Callable[[], None]]
    on_error: Optional[Callable[[], None]]

    def load(self, url: str) -> None: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def rewind(self) -> None: ...

    def set_volume(self, volume: float) -> None: ...

    def unload(self) -> None: ...


class PygameAudioOutput:
    """Plays one source at a time; loading a new source replaces the old one.

    A watcher thread reports the end of a track through on_ended.
    """

    def __init__(self, timeout: float = HTTP_TIMEOUT_SEC) -> None:
        import pygame

        self._pygame = pygame
        self._timeout = timeout
        self.on_ended: Optional[Callable[[], None]] = None
        self.on_error: Optional[Callable[[], None]] = None
        self._lock = threading.Lock()
        self._source: Optional[str] = None
        self._started = False  # play() called since load and not paused
        self._paused = False
        pygame.mixer.init()
        self._stop_watch = threading.Event()
        self._watch_thread = threading.Thread(target=self._watch_loop, daemon=True)
        self._watch_thread.start()

    def load(self, url: str) -> None:
        """Fetch and load `url`. Raises AudioOutputError and fires on_error."""
        if url == self._source:
            return
        # Old track stops even if the new one never loads
        with self._lock:
            self._pygame.mixer.music.stop()
            self._source = None
            self._started = False
            self._paused = False
        try:
            r = requests.get(url, timeout=self._timeout)
            r.raise_for_status()
            with self._lock:
                # Decoder is picked from the extension hint for file objects
                hint = PurePosixPath(urlparse(url).path).suffix.lstrip(".")
                self._pygame.mixer.music.load(io.BytesIO(r.content), namehint=hint)
                self._source = url
                self._started = False
                self._paused = False
        except (requests.RequestException, self._pygame.error) as e:
            logger.warning("Audio load failed for %s: %s", url, e)
            self._fire(self.on_error)
            raise AudioOutputError(str(e)) from e

    def play(self) -> None:
        with self._lock:
            if self._source is None:
                raise AudioOutputError("No source loaded")
            try:
                if self._paused:
                    self._pygame.mixer.music.unpause()
                else:
                    self._pygame.mixer.music.play()
            except self._pygame.error as e:
                raise AudioOutputError(str(e)) from e
            self._started = True
            self._paused = False

    def pause(self) -> None:
        with self._lock:
            if self._started:
                self._pygame.mixer.music.pause()
                self._paused = True
                self._started = False

    def rewind(self) -> None:
        """Back to position zero; the next play() starts from the beginning."""
        with self._lock:
            self._pygame.mixer.music.stop()
            self._started = False
            self._paused = False

    def set_volume(self, volume: float) -> None:
        self._pygame.mixer.music.set_volume(max(0.0, min(1.0, volume)))

    def unload(self) -> None:
        with self._lock:
            self._pygame.mixer.music.stop()
            self._pygame.mixer.music.unload()
            self._source = None
            self._started = False
            self._paused = False

    def close(self) -> None:
        self._stop_watch.set()
        self._watch_thread.join(timeout=2.0)
        self.unload()

    def _watch_loop(self) -> None:
        while not self._stop_watch.wait(timeout=POLL_INTERVAL_SEC):
            with self._lock:
                ended = self._started and not self._pygame.mixer.music.get_busy()
                if ended:
                    self._started = False
            if ended:
                self._fire(self.on_ended)

    @staticmethod
    def _fire(callback: Optional[Callable[[], None]]) -> None:
        if callback is None:
            return
        try:
            callback()
        except Exception as e:
            logger.warning("Audio callback failed: %s", e)
