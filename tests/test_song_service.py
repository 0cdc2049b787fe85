import pytest

from moody.core.errors import (
    CatalogStoreError,
    MediaStoreError,
    PartialUploadFailure,
    UploadFailure,
)
from moody.core.media_store import StoredMedia
from moody.core.song_service import songs_for_mood, upload_song


class RecordingMedia:
    def __init__(self, fail_upload=False, fail_delete=False):
        self.fail_upload = fail_upload
        self.fail_delete = fail_delete
        self.uploaded = []
        self.deleted = []

    def upload(self, data, filename):
        if self.fail_upload:
            raise MediaStoreError("upload refused")
        self.uploaded.append(filename)
        return StoredMedia(file_id="f1", url="http://media.test/f1.mp3")

    def delete(self, file_id):
        if self.fail_delete:
            raise MediaStoreError("delete refused")
        self.deleted.append(file_id)


class BrokenCatalog:
    def create(self, *args):
        raise CatalogStoreError("write refused")

    def find_by_mood(self, mood):
        return []


def test_upload_stores_binary_then_record(catalog):
    media = RecordingMedia()
    song = upload_song(catalog, media, b"abc", "x.mp3", title="A", artist="B", mood="calm")
    assert media.uploaded == ["x.mp3"]
    assert song.audio_url == "http://media.test/f1.mp3"
    assert songs_for_mood(catalog, "calm") == [song]


def test_media_failure_writes_no_record(catalog):
    with pytest.raises(UploadFailure):
        upload_song(catalog, RecordingMedia(fail_upload=True), b"abc", "x.mp3", title="A", artist="B", mood="calm")
    assert songs_for_mood(catalog, None) == []


def test_record_failure_deletes_binary():
    media = RecordingMedia()
    with pytest.raises(UploadFailure) as info:
        upload_song(BrokenCatalog(), media, b"abc", "x.mp3", title="A", artist="B", mood="calm")
    assert not isinstance(info.value, PartialUploadFailure)
    assert media.deleted == ["f1"]


def test_record_and_cleanup_failure_is_partial():
    media = RecordingMedia(fail_delete=True)
    with pytest.raises(PartialUploadFailure) as info:
        upload_song(BrokenCatalog(), media, b"abc", "x.mp3", title="A", artist="B", mood="calm")
    assert info.value.file_id == "f1"


def test_empty_payload_rejected_before_any_write(catalog):
    media = RecordingMedia()
    with pytest.raises(UploadFailure):
        upload_song(catalog, media, b"", "x.mp3", title="A", artist="B", mood="calm")
    assert media.uploaded == []
