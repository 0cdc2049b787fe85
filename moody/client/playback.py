"""Transport and volume control for one track at a time over a shared output."""
import logging
import threading
from typing import List, Optional, Sequence

from moody.client.audio_output import AudioOutput
from moody.config import DEFAULT_VOLUME
from moody.core.errors import AudioOutputError
from moody.models.session import PlaybackSession
from moody.models.song import Song

logger = logging.getLogger(__name__)


class PlaybackController:
    """Idle (no selection), Selected-Paused, or Selected-Playing.

    Every track goes through the same output, so selecting a new one
    implicitly stops the previous one.
    """

    def __init__(self, output: AudioOutput, volume: float = DEFAULT_VOLUME) -> None:
        self._output = output
        # Reentrant: the output may report a load error while select() holds it
        self._lock = threading.RLock()
        self._loaded = False  # output holds the active track's source
        self._songs: List[Song] = []
        self.session = PlaybackSession(volume=max(0.0, min(1.0, volume)))
        output.on_ended = self.on_track_ended
        output.on_error = self.on_track_error
        output.set_volume(self.session.effective_volume)

    @property
    def songs(self) -> List[Song]:
        return list(self._songs)

    @property
    def active_song(self) -> Optional[Song]:
        i = self.session.active_index
        return self._songs[i] if i is not None else None

    def select(self, index: int) -> None:
        """Toggle the active track, or switch to another one from position zero."""
        with self._lock:
            if not 0 <= index < len(self._songs):
                logger.debug("select(%d) ignored, %d songs", index, len(self._songs))
                return
            if index == self.session.active_index and self._loaded:
                self._toggle()
                return
            self._switch(index)

    def _toggle(self) -> None:
        if self.session.is_playing:
            self._output.pause()
            self.session.is_playing = False
            return
        try:
            self._output.play()
            self.session.is_playing = True
        except AudioOutputError as e:
            logger.debug("Resume failed: %s", e)
            self.session.is_playing = False

    def _switch(self, index: int) -> None:
        song = self._songs[index]
        self.session.active_index = index
        self._loaded = False
        self._output.pause()
        try:
            self._output.load(song.audio_url)
            self._loaded = True
            self._output.rewind()
            self._output.play()
            self.session.is_playing = True
            logger.info("Playing %r by %r", song.title, song.artist)
        except AudioOutputError as e:
            logger.warning("Could not play %r: %s", song.title, e)
            self.session.is_playing = False
            if not self._loaded:
                self._output.unload()

    def on_track_ended(self) -> None:
        with self._lock:
            self.session.is_playing = False

    def on_track_error(self) -> None:
        with self._lock:
            self.session.is_playing = False

    def set_volume(self, volume: float) -> None:
        """Clamp to [0, 1]. Any volume above zero also unmutes."""
        v = max(0.0, min(1.0, float(volume)))
        with self._lock:
            self.session.volume = v
            if self.session.muted and v > 0:
                self.session.muted = False
            self._output.set_volume(self.session.effective_volume)

    def toggle_mute(self) -> None:
        with self._lock:
            self.session.muted = not self.session.muted
            self._output.set_volume(self.session.effective_volume)

    def replace_songs(self, songs: Sequence[Song]) -> None:
        """Swap in a new list; drop the selection if it no longer exists."""
        with self._lock:
            self._songs = list(songs)
            i = self.session.active_index
            if i is not None and i >= len(self._songs):
                self.session.active_index = None
                self.session.is_playing = False
                self._loaded = False
                self._output.pause()
                self._output.unload()

    def close(self) -> None:
        with self._lock:
            self._output.pause()
            self.session.is_playing = False
