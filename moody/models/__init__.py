"""Data models for songs and client sessions."""
from moody.models.session import DetectionSession, PlaybackSession
from moody.models.song import Song

__all__ = [
    "Song",
    "DetectionSession",
    "PlaybackSession",
]
