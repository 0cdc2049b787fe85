"""Song upload and lookup on top of the catalog and media stores. Used by the API routes."""
import logging
from typing import List, Optional

from moody.core.catalog_store import CatalogStore
from moody.core.errors import (
    CatalogStoreError,
    MediaStoreError,
    PartialUploadFailure,
    UploadFailure,
)
from moody.core.media_store import MediaStore
from moody.models.song import Song

logger = logging.getLogger(__name__)


def upload_song(
    catalog: CatalogStore,
    media: MediaStore,
    data: bytes,
    filename: str,
    *,
    title: str,
    artist: str,
    mood: Optional[str],
) -> Song:
    """Store the binary, then the song record pointing at it.

    The two writes are not transactional. When the record write fails the
    binary is deleted again; if that delete fails too the binary is orphaned
    and PartialUploadFailure carries its file id.
    """
    if not data:
        raise UploadFailure("No audio file in request")
    try:
        stored = media.upload(data, filename)
    except MediaStoreError as e:
        logger.warning("Upload: media store failed: %s", e)
        raise UploadFailure(str(e)) from e

    try:
        song = catalog.create(title, artist, mood, stored.url)
    except CatalogStoreError as e:
        logger.warning("Upload: catalog write failed (%s), removing %s", e, stored.file_id)
        try:
            media.delete(stored.file_id)
        except MediaStoreError as cleanup_err:
            logger.error(
                "Upload: orphaned media %s (cleanup failed: %s)", stored.file_id, cleanup_err
            )
            raise PartialUploadFailure(
                f"Song record not saved and media {stored.file_id} could not be removed",
                stored.file_id,
            ) from e
        raise UploadFailure(f"Song record not saved: {e}") from e

    logger.info("Upload: saved %r by %r (mood=%s)", song.title, song.artist, song.mood)
    return song


def songs_for_mood(catalog: CatalogStore, mood: Optional[str]) -> List[Song]:
    """Songs whose mood equals `mood` exactly; all songs when mood is None."""
    return catalog.find_by_mood(mood)
