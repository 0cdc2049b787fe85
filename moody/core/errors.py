"""Error taxonomy shared by the API and the client."""


class MoodyError(Exception):
    """Base class for all application errors."""


class CameraError(MoodyError):
    """Camera could not be acquired. user_message is safe to show as-is."""
    user_message = "Could not access the camera. Check permissions and OS privacy settings."


class CameraUnavailable(CameraError):
    user_message = "Camera capture is not supported here. Install OpenCV with video support."


class PermissionDenied(CameraError):
    user_message = "Permission denied. Allow camera access for this user and try again."


class DeviceNotFound(CameraError):
    user_message = "No camera found. Connect a webcam and try again."


class DeviceBusy(CameraError):
    user_message = "Camera is in use by another app. Close it and try again."


class ClassifierTickFailure(MoodyError):
    """A single detection tick failed; logged and dropped by the sampler."""


class CatalogFetchFailure(MoodyError):
    """Fetching songs for a mood failed; the previous list stays in place."""


class UploadFailure(MoodyError):
    """Song upload failed."""


class PartialUploadFailure(UploadFailure):
    """Metadata write failed and the already stored binary could not be removed."""

    def __init__(self, message: str, file_id: str) -> None:
        super().__init__(message)
        self.file_id = file_id


class MediaStoreError(MoodyError):
    """Media store rejected an upload or delete."""


class CatalogStoreError(MoodyError):
    """Catalog store could not read or write a song record."""


class AudioOutputError(MoodyError):
    """Audio output could not load or play a source."""
