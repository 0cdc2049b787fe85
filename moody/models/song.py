"""Song record as stored in the catalog and sent over the wire."""
from dataclasses import dataclass
from typing import Optional


@dataclass
class Song:
    """Stored song: metadata plus the URL of its audio binary."""
    id: str
    title: str
    artist: str
    mood: Optional[str]
    audio_url: str
    created_at: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "artist": self.artist,
            "mood": self.mood,
            "audio": self.audio_url,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Song":
        """Build from the wire shape. Raises KeyError on missing fields."""
        return cls(
            id=str(data["id"]),
            title=data["title"],
            artist=data["artist"],
            mood=data.get("mood"),
            audio_url=data["audio"],
            created_at=data.get("created_at") or "",
        )
