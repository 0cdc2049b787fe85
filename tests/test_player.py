from conftest import FakeCamera, FakeClassifier, FakeOutput, make_song
from moody.client.mood_sampler import MoodSampler
from moody.client.playback import PlaybackController
from moody.client.player import MoodPlayer
from moody.core.errors import CatalogFetchFailure


class QueuedExecutor:
    """Holds submitted work until run() so completion order can be chosen."""

    def __init__(self):
        self.pending = []

    def submit(self, fn, *args):
        self.pending.append((fn, args))

    def run(self, order=None):
        order = order if order is not None else range(len(self.pending))
        jobs = [self.pending[i] for i in order]
        self.pending = []
        for fn, args in jobs:
            fn(*args)


class FakeCatalog:
    def __init__(self, songs_by_mood=None, fail=False):
        self.songs_by_mood = songs_by_mood or {}
        self.fail = fail
        self.queries = []

    def query_by_mood(self, mood):
        self.queries.append(mood)
        if self.fail:
            raise CatalogFetchFailure("offline")
        return self.songs_by_mood.get(mood, [])


def make_player(results, catalog):
    sampler = MoodSampler(FakeCamera(), FakeClassifier(results))
    executor = QueuedExecutor()
    playback = PlaybackController(FakeOutput())
    return MoodPlayer(sampler, catalog, playback, executor=executor), executor


def test_same_mood_twice_queries_once():
    catalog = FakeCatalog({"happy": [make_song(1)]})
    player, executor = make_player([[{"happy": 0.9}], [{"happy": 0.8}]], catalog)
    player.sampler.start()
    player.sampler.tick()
    player.sampler.tick()
    executor.run()
    assert catalog.queries == ["happy"]
    assert [s.id for s in player.songs] == ["id1"]
    assert player.current_mood == "happy"


def test_stale_response_is_discarded():
    catalog = FakeCatalog({"happy": [make_song(1)], "sad": [make_song(2, "sad")]})
    player, executor = make_player([[{"happy": 0.9}], [{"sad": 0.9}]], catalog)
    player.sampler.start()
    player.sampler.tick()
    player.sampler.tick()
    # newer "sad" answer arrives first, then the old "happy" one
    executor.run(order=[1, 0])
    assert catalog.queries == ["sad", "happy"]
    assert [s.id for s in player.songs] == ["id2"]
    assert player.current_mood == "sad"


def test_fetch_failure_keeps_previous_songs():
    catalog = FakeCatalog({"happy": [make_song(1)]})
    player, executor = make_player([[{"happy": 0.9}], [{"sad": 0.9}]], catalog)
    player.sampler.start()
    player.sampler.tick()
    executor.run()
    catalog.fail = True
    player.sampler.tick()
    executor.run()
    assert [s.id for s in player.songs] == ["id1"]


def test_new_shorter_list_resets_playback():
    catalog = FakeCatalog({"happy": [make_song(1), make_song(2)], "sad": [make_song(3, "sad")]})
    player, executor = make_player([[{"happy": 0.9}], [{"sad": 0.9}]], catalog)
    player.sampler.start()
    player.sampler.tick()
    executor.run()
    player.playback.select(1)
    player.sampler.tick()
    executor.run()
    assert player.playback.session.active_index is None


def test_close_releases_camera_and_stops_audio():
    player, _ = make_player([], FakeCatalog())
    camera = player.sampler._camera
    player.sampler.start()
    player.close()
    assert camera.is_open is False
    assert player.playback.session.is_playing is False
