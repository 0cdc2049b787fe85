"""Configuration: env, storage credentials, camera and detection tuning."""
import os
from pathlib import Path

from dotenv import load_dotenv

# Base paths (project root = parent of moody package)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env from project root so MONGODB_URI, IMAGEKIT_* etc. are set
load_dotenv(BASE_DIR / ".env")

DATA_DIR = Path(os.getenv("MOODY_DATA_DIR", str(BASE_DIR / "data")))
SONGS_PATH = DATA_DIR / "songs.json"
MEDIA_DIR = DATA_DIR / "media"

# API
API_HOST = os.getenv("MOODY_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("MOODY_API_PORT", "3000"))
# Base URL used to build links for locally stored audio
PUBLIC_URL = os.getenv("MOODY_PUBLIC_URL", f"http://localhost:{API_PORT}")

# Catalog store (MongoDB); empty = JSON file under DATA_DIR
MONGODB_URI = os.getenv("MONGODB_URI", "")
MONGODB_DB_NAME = os.getenv("MOODY_DB_NAME", "moody")

# Media store (ImageKit); empty keys = files under MEDIA_DIR
IMAGEKIT_PUBLIC_KEY = os.getenv("IMAGEKIT_PUBLIC_KEY", "")
IMAGEKIT_PRIVATE_SECRET = os.getenv("IMAGEKIT_PRIVATE_SECRET", "")
IMAGEKIT_URL_ENDPOINT = os.getenv("IMAGEKIT_URL_ENDPOINT", "")
IMAGEKIT_FOLDER = os.getenv("IMAGEKIT_FOLDER", "Moody-player")
IMAGEKIT_UPLOAD_URL = "https://upload.imagekit.io/api/v1/files/upload"
IMAGEKIT_API_URL = "https://api.imagekit.io/v1"
HTTP_TIMEOUT_SEC = float(os.getenv("MOODY_HTTP_TIMEOUT_SEC", "30"))

# Client
API_URL = os.getenv("MOODY_API_URL", "http://localhost:3000")
CAMERA_INDEX = int(os.getenv("MOODY_CAMERA_INDEX", "0"))
# Run every 1.5s to keep CPU usage and API calls down
DETECT_INTERVAL_SEC = float(os.getenv("MOODY_DETECT_INTERVAL_SEC", "1.5"))
DETECTOR_BACKEND = os.getenv("MOODY_DETECTOR_BACKEND", "opencv").lower()
DEFAULT_VOLUME = float(os.getenv("MOODY_DEFAULT_VOLUME", "0.8"))


def ensure_data_dir() -> None:
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    MEDIA_DIR.mkdir(parents=True, exist_ok=True)
