"""Webcam capture via OpenCV, with open failures mapped to camera errors."""
import logging
import os
from pathlib import Path
from typing import Any, Optional, Protocol

from moody.core.errors import (
    CameraUnavailable,
    DeviceBusy,
    DeviceNotFound,
    PermissionDenied,
)

logger = logging.getLogger(__name__)


class Camera(Protocol):
    def open(self) -> None: ...

    def read(self) -> Optional[Any]: ...

    def release(self) -> None: ...


def _device_path(index: int) -> Path:
    return Path(f"/dev/video{index}")


def classify_open_failure(index: int) -> Exception:
    """Best guess at why VideoCapture(index) did not open.

    Only Linux exposes the device node; elsewhere a failed open is reported
    as busy since the device cannot be inspected.
    """
    if os.name != "posix" or not Path("/dev").is_dir():
        return DeviceBusy(f"camera {index} could not be opened")
    dev = _device_path(index)
    if not dev.exists():
        return DeviceNotFound(f"{dev} does not exist")
    if not os.access(dev, os.R_OK | os.W_OK):
        return PermissionDenied(f"no read/write access to {dev}")
    return DeviceBusy(f"{dev} exists but could not be opened")


class OpenCVCamera:
    """One cv2.VideoCapture per open(); release() drops it. Not thread-safe."""

    def __init__(self, index: int = 0, width: int = 640, height: int = 480) -> None:
        self.index = index
        self.width = width
        self.height = height
        self._cap = None

    @property
    def is_open(self) -> bool:
        return self._cap is not None

    def open(self) -> None:
        if self._cap is not None:
            return
        try:
            import cv2
        except ImportError as e:
            raise CameraUnavailable(f"OpenCV not importable: {e}") from e
        if not hasattr(cv2, "VideoCapture"):
            raise CameraUnavailable("OpenCV built without video capture")

        cap = cv2.VideoCapture(self.index)
        if not cap.isOpened():
            cap.release()
            raise classify_open_failure(self.index)
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
        self._cap = cap
        logger.info("Camera %d opened", self.index)

    def read(self) -> Optional[Any]:
        """Current frame (BGR ndarray) or None if no frame is available."""
        if self._cap is None:
            return None
        ok, frame = self._cap.read()
        return frame if ok else None

    def release(self) -> None:
        cap, self._cap = self._cap, None
        if cap is not None:
            cap.release()
            logger.info("Camera %d released", self.index)
