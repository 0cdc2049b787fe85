"""Facial-expression classification and reduction to a single mood label."""
import logging
from typing import Any, Dict, List, Mapping, Optional, Protocol

logger = logging.getLogger(__name__)

ExpressionScores = Dict[str, float]


class ExpressionClassifier(Protocol):
    loaded: bool

    def load(self) -> None: ...

    def classify(self, frame: Any) -> List[ExpressionScores]: ...


def dominant_expression(scores: Mapping[str, float]) -> Optional[str]:
    """Label with the highest score; ties go to the alphabetically first label.

    Returns None for an empty mapping or when no score is above zero.
    """
    best_label, best_score = None, 0.0
    for label in sorted(scores):
        score = scores[label]
        if score > best_score:
            best_label, best_score = label, score
    return best_label


class DeepFaceClassifier:
    """Expression scores from DeepFace's emotion model.

    DeepFace reports percentages; they are scaled to [0, 1].
    """

    def __init__(self, detector_backend: str = "opencv") -> None:
        self.detector_backend = detector_backend
        self.loaded = False

    def load(self) -> None:
        """Build the emotion model up front so the first tick is not a download."""
        from deepface import DeepFace

        DeepFace.build_model(model_name="Emotion", task="facial_attribute")
        self.loaded = True
        logger.info("Emotion model loaded (detector=%s)", self.detector_backend)

    def classify(self, frame: Any) -> List[ExpressionScores]:
        from deepface import DeepFace

        try:
            analysis = DeepFace.analyze(
                frame,
                actions=["emotion"],
                enforce_detection=True,
                detector_backend=self.detector_backend,
                silent=True,
            )
        except ValueError:
            # Raised by DeepFace when no face is detected
            return []
        # DeepFace may return a dict or a list of dicts depending on version
        if isinstance(analysis, dict):
            analysis = [analysis]
        faces = []
        for face in analysis or []:
            emotion = face.get("emotion") or {}
            faces.append({str(k): float(v) / 100.0 for k, v in emotion.items()})
        return faces
