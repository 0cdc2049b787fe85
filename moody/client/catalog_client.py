"""HTTP client for the song API: mood queries and uploads."""
import logging
from pathlib import Path
from typing import BinaryIO, List, Optional, Union

import requests

from moody.config import API_URL, HTTP_TIMEOUT_SEC
from moody.core.errors import CatalogFetchFailure, UploadFailure
from moody.models.song import Song

logger = logging.getLogger(__name__)


class SongCatalogClient:
    def __init__(
        self,
        base_url: str = API_URL,
        timeout: float = HTTP_TIMEOUT_SEC,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def _fetch(self, params: dict) -> List[Song]:
        try:
            r = self._session.get(
                f"{self.base_url}/songs", params=params, timeout=self.timeout
            )
            r.raise_for_status()
            return [Song.from_dict(item) for item in r.json().get("songs", [])]
        except (requests.RequestException, ValueError, KeyError, TypeError, AttributeError) as e:
            raise CatalogFetchFailure(f"GET /songs {params or ''} failed: {e}") from e

    def query_by_mood(self, mood: str) -> List[Song]:
        """Songs tagged with exactly `mood`. Raises CatalogFetchFailure."""
        return self._fetch({"mood": mood})

    def list_all(self) -> List[Song]:
        return self._fetch({})

    def upload(
        self,
        file: Union[str, Path, bytes, BinaryIO],
        *,
        title: str,
        artist: str,
        mood: str,
        filename: Optional[str] = None,
    ) -> Song:
        """Send the audio plus metadata as multipart form. Raises UploadFailure."""
        if isinstance(file, (str, Path)):
            path = Path(file)
            try:
                payload = path.read_bytes()
            except OSError as e:
                raise UploadFailure(f"Cannot read {path}: {e}") from e
            filename = filename or path.name
        elif isinstance(file, bytes):
            payload = file
        else:
            payload = file.read()
        try:
            r = self._session.post(
                f"{self.base_url}/songs",
                files={"audio": (filename or "audio", payload)},
                data={"title": title, "artist": artist, "mood": mood},
                timeout=self.timeout,
            )
            r.raise_for_status()
            song = Song.from_dict(r.json()["song"])
        except (requests.RequestException, ValueError, KeyError, TypeError) as e:
            raise UploadFailure(f"POST /songs failed: {e}") from e
        logger.info("Uploaded %r (%s)", song.title, song.id)
        return song
