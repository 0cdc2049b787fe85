"""Client: webcam mood detection, song catalog access, and playback."""
from moody.client.catalog_client import SongCatalogClient
from moody.client.mood_sampler import MoodSampler
from moody.client.playback import PlaybackController
from moody.client.player import MoodPlayer

__all__ = ["MoodSampler", "SongCatalogClient", "PlaybackController", "MoodPlayer"]
