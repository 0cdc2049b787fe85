import pytest

from moody.core.catalog_store import JsonCatalogStore
from moody.core.errors import CatalogStoreError


def test_create_assigns_id_and_timestamp(catalog):
    song = catalog.create("A", "B", "happy", "http://media.test/a.mp3")
    assert song.id
    assert song.created_at
    assert song.audio_url == "http://media.test/a.mp3"


def test_songs_survive_a_new_store_instance(tmp_path):
    path = tmp_path / "songs.json"
    created = JsonCatalogStore(path).create("A", "B", "sad", "http://media.test/a.mp3")
    assert JsonCatalogStore(path).find_by_mood("sad") == [created]


def test_find_by_mood_is_exact(catalog):
    catalog.create("A", "B", "happy", "http://media.test/a.mp3")
    catalog.create("C", "D", "happy ", "http://media.test/c.mp3")
    catalog.create("E", "F", "HAPPY", "http://media.test/e.mp3")
    assert [s.title for s in catalog.find_by_mood("happy")] == ["A"]
    assert len(catalog.find_by_mood(None)) == 3


def test_missing_file_reads_as_empty(tmp_path):
    assert JsonCatalogStore(tmp_path / "songs.json").find_by_mood(None) == []


@pytest.mark.parametrize("content", ["{not json", "[]"])
def test_unreadable_file_raises(tmp_path, content):
    path = tmp_path / "songs.json"
    path.write_text(content)
    with pytest.raises(CatalogStoreError):
        JsonCatalogStore(path).find_by_mood(None)


def test_create_never_overwrites_corrupt_file(tmp_path):
    path = tmp_path / "songs.json"
    store = JsonCatalogStore(path)
    store.create("A", "B", "happy", "http://media.test/a.mp3")
    damaged = path.read_text()[:-5]
    path.write_text(damaged)
    with pytest.raises(CatalogStoreError):
        store.create("C", "D", "sad", "http://media.test/c.mp3")
    assert path.read_text() == damaged


@pytest.mark.parametrize("title,artist,url", [("", "B", "u"), ("A", "", "u"), ("A", "B", "")])
def test_required_fields(catalog, title, artist, url):
    with pytest.raises(CatalogStoreError):
        catalog.create(title, artist, "happy", url)
