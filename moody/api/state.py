"""Shared application state (injected into routes)."""
from typing import List, Optional

from moody.config import (
    HTTP_TIMEOUT_SEC,
    IMAGEKIT_API_URL,
    IMAGEKIT_FOLDER,
    IMAGEKIT_PRIVATE_SECRET,
    IMAGEKIT_PUBLIC_KEY,
    IMAGEKIT_UPLOAD_URL,
    MEDIA_DIR,
    MONGODB_DB_NAME,
    MONGODB_URI,
    PUBLIC_URL,
    SONGS_PATH,
)
from moody.core.catalog_store import CatalogStore, JsonCatalogStore, MongoCatalogStore
from moody.core.media_store import ImageKitMediaStore, LocalMediaStore, MediaStore
from moody.core.song_service import songs_for_mood, upload_song
from moody.models.song import Song


def _default_catalog() -> CatalogStore:
    if MONGODB_URI:
        return MongoCatalogStore(MONGODB_URI, MONGODB_DB_NAME)
    return JsonCatalogStore(SONGS_PATH)


def _default_media() -> MediaStore:
    if IMAGEKIT_PUBLIC_KEY and IMAGEKIT_PRIVATE_SECRET:
        return ImageKitMediaStore(
            private_key=IMAGEKIT_PRIVATE_SECRET,
            folder=IMAGEKIT_FOLDER,
            upload_url=IMAGEKIT_UPLOAD_URL,
            api_url=IMAGEKIT_API_URL,
            timeout=HTTP_TIMEOUT_SEC,
        )
    return LocalMediaStore(MEDIA_DIR, PUBLIC_URL)


class AppState:
    def __init__(
        self,
        catalog: Optional[CatalogStore] = None,
        media: Optional[MediaStore] = None,
    ) -> None:
        self._catalog = catalog
        self._media = media

    @property
    def catalog(self) -> CatalogStore:
        if self._catalog is None:
            self._catalog = _default_catalog()
        return self._catalog

    @property
    def media(self) -> MediaStore:
        if self._media is None:
            self._media = _default_media()
        return self._media

    @property
    def serves_local_media(self) -> bool:
        return isinstance(self.media, LocalMediaStore)

    def upload_song(
        self,
        data: bytes,
        filename: str,
        *,
        title: str,
        artist: str,
        mood: Optional[str],
    ) -> Song:
        return upload_song(
            self.catalog, self.media, data, filename, title=title, artist=artist, mood=mood
        )

    def songs_for_mood(self, mood: Optional[str]) -> List[Song]:
        return songs_for_mood(self.catalog, mood)


_state = AppState()


def get_state() -> AppState:
    return _state
