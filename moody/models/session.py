"""Client-side session state for detection and playback (never persisted)."""
from dataclasses import dataclass
from typing import Optional


@dataclass
class DetectionSession:
    """Camera/detection flags and the last mood that triggered a query."""
    camera_active: bool = False
    detection_active: bool = False  # only ever True while camera_active
    last_emitted_mood: Optional[str] = None


@dataclass
class PlaybackSession:
    """Active track selection and output level."""
    active_index: Optional[int] = None
    is_playing: bool = False
    volume: float = 0.8
    muted: bool = False

    @property
    def effective_volume(self) -> float:
        return 0.0 if self.muted else self.volume
