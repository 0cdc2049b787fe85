"""Camera lifecycle plus a fixed-interval detection loop that emits mood changes."""
import logging
import threading
from typing import Callable, List, Optional

from moody.client.camera import Camera
from moody.client.expression import ExpressionClassifier, dominant_expression
from moody.config import DETECT_INTERVAL_SEC
from moody.core.errors import CameraError, ClassifierTickFailure
from moody.models.session import DetectionSession

logger = logging.getLogger(__name__)

MoodListener = Callable[[str], None]


class MoodSampler:
    """Samples one frame per interval and emits a mood only when it changes.

    Listeners run on the detection thread.
    """

    def __init__(
        self,
        camera: Camera,
        classifier: ExpressionClassifier,
        interval_sec: float = DETECT_INTERVAL_SEC,
    ) -> None:
        self._camera = camera
        self._classifier = classifier
        self.interval_sec = interval_sec
        self.session = DetectionSession()
        self.error: Optional[CameraError] = None
        self._listeners: List[MoodListener] = []
        self._lock = threading.Lock()
        self._detect_thread: Optional[threading.Thread] = None
        self._detect_stop: Optional[threading.Event] = None

    def add_listener(self, listener: MoodListener) -> None:
        self._listeners.append(listener)

    @property
    def models_loaded(self) -> bool:
        return bool(self._classifier.loaded)

    def load_models(self) -> None:
        self._classifier.load()

    def start(self) -> None:
        """Acquire the camera. Raises a CameraError subclass on failure."""
        self.error = None
        try:
            self._camera.open()
        except CameraError as e:
            logger.warning("Error accessing webcam: %s", e)
            self.error = e
            raise
        with self._lock:
            self.session.camera_active = True
            self.session.last_emitted_mood = None

    def stop(self) -> None:
        """Stop detection and release the camera. Idempotent."""
        self.stop_detection()
        try:
            self._camera.release()
        finally:
            with self._lock:
                self.session.camera_active = False
                self.session.detection_active = False

    def start_detection(self) -> None:
        with self._lock:
            if (
                self.session.detection_active
                or not self.session.camera_active
                or not self.models_loaded
            ):
                return
            self.session.detection_active = True
            stop_event = threading.Event()
            self._detect_stop = stop_event
            self._detect_thread = threading.Thread(
                target=self._detect_loop,
                args=(stop_event,),
                name="mood-detect",
                daemon=True,
            )
        self._detect_thread.start()
        logger.info("Mood detection started (interval %.1fs)", self.interval_sec)

    def stop_detection(self) -> None:
        """Cancel future ticks. A tick already running is not interrupted."""
        with self._lock:
            stop_event, thread = self._detect_stop, self._detect_thread
            self._detect_stop = None
            self._detect_thread = None
            self.session.detection_active = False
        if stop_event is None:
            return
        stop_event.set()
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=self.interval_sec + 5.0)
        logger.info("Mood detection stopped")

    def _detect_loop(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(timeout=self.interval_sec):
            self.tick()

    def tick(self) -> Optional[str]:
        """Run one detection. Returns the emitted mood, or None if nothing changed.

        Failures are logged and swallowed so the next tick still runs.
        """
        if not self.session.camera_active or not self.models_loaded:
            return None
        try:
            return self._detect_once()
        except ClassifierTickFailure as e:
            logger.debug("Detection tick failed: %s", e)
        except Exception as e:
            logger.warning("Detection tick error: %s", e)
        return None

    def _detect_once(self) -> Optional[str]:
        frame = self._camera.read()
        if frame is None:
            return None
        try:
            faces = self._classifier.classify(frame)
        except Exception as e:
            raise ClassifierTickFailure(str(e)) from e
        if not faces:
            return None
        mood = dominant_expression(faces[0])
        if not mood:
            return None
        with self._lock:
            if self.session.last_emitted_mood == mood:
                return None
            self.session.last_emitted_mood = mood
        logger.info("Mood changed: %s", mood)
        for listener in list(self._listeners):
            listener(mood)
        return mood

    def close(self) -> None:
        self.stop()

    def __enter__(self) -> "MoodSampler":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
