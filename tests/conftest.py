"""Shared fixtures and fakes: no camera, model, database or network needed."""
from typing import Any, List, Optional

import pytest
from fastapi.testclient import TestClient

from moody.api.app import app
from moody.api.state import AppState, get_state
from moody.core.catalog_store import JsonCatalogStore
from moody.core.errors import AudioOutputError
from moody.core.media_store import LocalMediaStore
from moody.models.song import Song


class FakeCamera:
    def __init__(self, frames: Optional[List[Any]] = None, open_error: Exception | None = None):
        self.frames = frames
        self.open_error = open_error
        self.opened = 0
        self.released = 0
        self.is_open = False

    def open(self) -> None:
        if self.open_error is not None:
            raise self.open_error
        self.opened += 1
        self.is_open = True

    def read(self):
        if not self.is_open:
            return None
        if self.frames is None:
            return "frame"
        return self.frames.pop(0) if self.frames else None

    def release(self) -> None:
        if self.is_open:
            self.released += 1
        self.is_open = False


class FakeClassifier:
    """Returns queued results in order; an Exception entry is raised."""

    def __init__(self, results=None, loaded: bool = True):
        self.results = list(results or [])
        self.loaded = loaded
        self.calls = 0

    def load(self) -> None:
        self.loaded = True

    def classify(self, frame):
        self.calls += 1
        result = self.results.pop(0) if self.results else []
        if isinstance(result, Exception):
            raise result
        return result


class FakeOutput:
    def __init__(self):
        self.on_ended = None
        self.on_error = None
        self.source: Optional[str] = None
        self.playing = False
        self.position = 0
        self.volume: Optional[float] = None
        self.fail_play = False
        self.fail_load = False
        self.calls: List[str] = []

    def load(self, url: str) -> None:
        self.calls.append("load")
        if self.fail_load:
            if self.on_error:
                self.on_error()
            raise AudioOutputError("cannot load")
        self.source = url

    def play(self) -> None:
        self.calls.append("play")
        if self.fail_play:
            raise AudioOutputError("not ready")
        self.playing = True

    def pause(self) -> None:
        self.calls.append("pause")
        self.playing = False

    def rewind(self) -> None:
        self.calls.append("rewind")
        self.position = 0

    def set_volume(self, volume: float) -> None:
        self.volume = volume

    def unload(self) -> None:
        self.calls.append("unload")
        self.source = None
        self.playing = False


def make_song(i: int, mood: str = "happy") -> Song:
    return Song(
        id=f"id{i}",
        title=f"Song {i}",
        artist=f"Artist {i}",
        mood=mood,
        audio_url=f"http://media.test/{i}.mp3",
    )


@pytest.fixture
def catalog(tmp_path):
    return JsonCatalogStore(tmp_path / "songs.json")


@pytest.fixture
def media(tmp_path):
    return LocalMediaStore(tmp_path / "media", "http://testserver")


@pytest.fixture
def state(catalog, media):
    return AppState(catalog=catalog, media=media)


@pytest.fixture
def client(state):
    app.dependency_overrides[get_state] = lambda: state
    yield TestClient(app)
    app.dependency_overrides.clear()
