"""Connects mood detection to song lookup and playback."""
import itertools
import logging
import threading
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import List, Optional

from moody.client.catalog_client import SongCatalogClient
from moody.client.mood_sampler import MoodSampler
from moody.client.playback import PlaybackController
from moody.core.errors import CatalogFetchFailure
from moody.models.song import Song

logger = logging.getLogger(__name__)


class MoodPlayer:
    """On each mood change, fetch songs for it and hand them to playback.

    Queries run on a worker pool and are not cancelled. Each one is numbered;
    only the response to the most recently issued query is applied, so a slow
    answer for an old mood never replaces a newer list.
    """

    def __init__(
        self,
        sampler: MoodSampler,
        catalog: SongCatalogClient,
        playback: PlaybackController,
        executor: Optional[Executor] = None,
    ) -> None:
        self.sampler = sampler
        self.catalog = catalog
        self.playback = playback
        self._executor = executor or ThreadPoolExecutor(max_workers=2, thread_name_prefix="catalog")
        self._owns_executor = executor is None
        self._seq = itertools.count(1)
        self._latest_seq = 0
        self._lock = threading.Lock()
        self.current_mood: Optional[str] = None
        sampler.add_listener(self.on_mood_changed)

    @property
    def songs(self) -> List[Song]:
        return self.playback.songs

    def on_mood_changed(self, mood: str) -> None:
        with self._lock:
            seq = next(self._seq)
            self._latest_seq = seq
        self._executor.submit(self._refresh, mood, seq)

    def _refresh(self, mood: str, seq: int) -> None:
        try:
            songs = self.catalog.query_by_mood(mood)
        except CatalogFetchFailure as e:
            logger.warning("Keeping current songs: %s", e)
            return
        with self._lock:
            if seq != self._latest_seq:
                logger.debug("Discarding stale songs for %s (query %d < %d)", mood, seq, self._latest_seq)
                return
            self.current_mood = mood
            self.playback.replace_songs(songs)
        logger.info("%d song(s) for mood %s", len(songs), mood)

    def close(self) -> None:
        """Stop camera and detection, stop audio, drop pending queries."""
        try:
            self.sampler.close()
        finally:
            self.playback.close()
            if self._owns_executor:
                self._executor.shutdown(wait=False, cancel_futures=True)
