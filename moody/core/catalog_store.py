"""Persist and query song records (MongoDB, or a JSON file for local use)."""
import json
import logging
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Protocol

from moody.core.errors import CatalogStoreError
from moody.models.song import Song

logger = logging.getLogger(__name__)


class CatalogStore(Protocol):
    def create(self, title: str, artist: str, mood: Optional[str], audio_url: str) -> Song: ...

    def find_by_mood(self, mood: Optional[str]) -> List[Song]: ...


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _song_from_item(item: dict) -> Song:
    return Song(
        id=str(item["id"]),
        title=item["title"],
        artist=item["artist"],
        mood=item.get("mood"),
        audio_url=item["audio"],
        created_at=item.get("created_at") or "",
    )


def _matches(song: Song, mood: Optional[str]) -> bool:
    """Exact, case-sensitive match. No mood means no filter."""
    return mood is None or song.mood == mood


class JsonCatalogStore:
    """Songs kept in a single JSON file: {"songs": [...]}."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._lock = threading.Lock()

    def _load(self) -> List[Song]:
        if not self._path.exists():
            return []
        try:
            data = json.loads(self._path.read_text())
        except (json.JSONDecodeError, OSError) as e:
            # Saving over an unreadable file would drop every stored song
            logger.error("Catalog file %s unreadable: %s", self._path, e)
            raise CatalogStoreError(f"Catalog file {self._path} unreadable: {e}") from e
        if not isinstance(data, dict):
            raise CatalogStoreError(f"Catalog file {self._path} is not a song catalog")
        out = []
        for item in data.get("songs", []):
            try:
                out.append(_song_from_item(item))
            except (KeyError, TypeError):
                continue
        return out

    def _save(self, songs: List[Song]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        data = {"songs": [s.to_dict() for s in songs]}
        try:
            self._path.write_text(json.dumps(data, indent=2))
        except OSError as e:
            raise CatalogStoreError(f"Could not write {self._path}: {e}") from e

    def create(self, title: str, artist: str, mood: Optional[str], audio_url: str) -> Song:
        """Append a new song and save."""
        if not title or not artist:
            raise CatalogStoreError("title and artist are required")
        if not audio_url:
            raise CatalogStoreError("audio url is required")
        song = Song(
            id=uuid.uuid4().hex,
            title=title,
            artist=artist,
            mood=mood,
            audio_url=audio_url,
            created_at=_now(),
        )
        with self._lock:
            songs = self._load()
            songs.append(song)
            self._save(songs)
        return song

    def find_by_mood(self, mood: Optional[str]) -> List[Song]:
        with self._lock:
            songs = self._load()
        return [s for s in songs if _matches(s, mood)]


class MongoCatalogStore:
    """Songs in the `songs` collection of the database named by the URI."""

    def __init__(self, uri: str, db_name: str = "moody") -> None:
        from pymongo import MongoClient

        self._client = MongoClient(uri, serverSelectionTimeoutMS=5000)
        self._collection = self._client.get_default_database(default=db_name)["songs"]

    def ping(self) -> bool:
        """Check the connection; logs the outcome instead of raising."""
        from pymongo.errors import PyMongoError

        try:
            self._client.admin.command("ping")
        except PyMongoError as e:
            logger.error("MongoDB connection error: %s", e)
            return False
        logger.info("MongoDB connected")
        return True

    def create(self, title: str, artist: str, mood: Optional[str], audio_url: str) -> Song:
        from pymongo.errors import PyMongoError

        if not title or not artist:
            raise CatalogStoreError("title and artist are required")
        doc = {
            "title": title,
            "artist": artist,
            "mood": mood,
            "audio": audio_url,
            "created_at": _now(),
        }
        try:
            result = self._collection.insert_one(doc)
        except PyMongoError as e:
            raise CatalogStoreError(str(e)) from e
        doc["id"] = str(result.inserted_id)
        return _song_from_item(doc)

    def find_by_mood(self, mood: Optional[str]) -> List[Song]:
        from pymongo.errors import PyMongoError

        query = {} if mood is None else {"mood": mood}
        try:
            docs = list(self._collection.find(query))
        except PyMongoError as e:
            raise CatalogStoreError(str(e)) from e
        out = []
        for doc in docs:
            doc["id"] = str(doc.pop("_id"))
            try:
                out.append(_song_from_item(doc))
            except KeyError:
                logger.debug("Skipping malformed song document %s", doc.get("id"))
        return out

    def close(self) -> None:
        self._client.close()
