"""Store uploaded audio binaries (ImageKit, or a local directory) and return their URL."""
import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import requests

from moody.core.errors import MediaStoreError

logger = logging.getLogger(__name__)


@dataclass
class StoredMedia:
    """Handle for an uploaded binary."""
    file_id: str
    url: str


class MediaStore(Protocol):
    def upload(self, data: bytes, filename: str) -> StoredMedia: ...

    def delete(self, file_id: str) -> None: ...


def _generated_name(filename: str) -> str:
    """Random name, keeping the original extension."""
    suffix = Path(filename or "").suffix.lower()
    return f"{uuid.uuid4().hex}{suffix}"


class ImageKitMediaStore:
    """ImageKit upload/delete over its REST API; private key is the basic-auth user."""

    def __init__(
        self,
        private_key: str,
        folder: str,
        upload_url: str,
        api_url: str,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self._auth = (private_key, "")
        self._folder = folder
        self._upload_url = upload_url
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    def upload(self, data: bytes, filename: str) -> StoredMedia:
        name = _generated_name(filename)
        try:
            r = self._session.post(
                self._upload_url,
                auth=self._auth,
                files={"file": (name, data)},
                data={"fileName": name, "folder": self._folder, "useUniqueFileName": "false"},
                timeout=self._timeout,
            )
            r.raise_for_status()
            body = r.json()
        except (requests.RequestException, ValueError) as e:
            raise MediaStoreError(f"ImageKit upload failed: {e}") from e
        file_id, url = body.get("fileId"), body.get("url")
        if not file_id or not url:
            raise MediaStoreError("ImageKit upload response missing fileId/url")
        logger.info("Uploaded %s to ImageKit (%s)", name, file_id)
        return StoredMedia(file_id=file_id, url=url)

    def delete(self, file_id: str) -> None:
        try:
            r = self._session.delete(
                f"{self._api_url}/files/{file_id}",
                auth=self._auth,
                timeout=self._timeout,
            )
            r.raise_for_status()
        except requests.RequestException as e:
            raise MediaStoreError(f"ImageKit delete of {file_id} failed: {e}") from e


class LocalMediaStore:
    """Binaries written under a directory that the API serves at /media."""

    def __init__(self, directory: Path, base_url: str) -> None:
        self._dir = directory
        self._base_url = base_url.rstrip("/")

    def upload(self, data: bytes, filename: str) -> StoredMedia:
        name = _generated_name(filename)
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            (self._dir / name).write_bytes(data)
        except OSError as e:
            raise MediaStoreError(f"Could not write {name}: {e}") from e
        return StoredMedia(file_id=name, url=f"{self._base_url}/media/{name}")

    def delete(self, file_id: str) -> None:
        p = self._dir / Path(file_id).name
        try:
            p.unlink(missing_ok=True)
        except OSError as e:
            raise MediaStoreError(f"Could not delete {file_id}: {e}") from e
