import logging
import math
from numbers import Real
from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple

from pose_types import Landmark, LandmarkFrame

logger = logging.getLogger(__name__)

LANDMARK_COUNT = 33
VISIBILITY_THRESHOLD = 0.5

_FIELDS = ("x", "y", "z", "visibility")


def visible(landmarks: Iterable[Optional[Landmark]], threshold: float = VISIBILITY_THRESHOLD) -> bool:
    # Every landmark must be present and strictly above the confidence gate.
    for lm in landmarks:
        if lm is None or not lm.visibility > threshold:
            return False
    return True


def _read_field(raw: Any, name: str) -> Optional[float]:
    if isinstance(raw, Mapping):
        value = raw.get(name)
    else:
        value = getattr(raw, name, None)
    # bool is a Real subclass but never a valid coordinate.
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    value = float(value)
    if not math.isfinite(value):
        return None
    return value


def to_landmark(raw: Any) -> Optional[Landmark]:
    if raw is None:
        return None
    values = []
    for name in _FIELDS:
        value = _read_field(raw, name)
        if value is None:
            return None
        values.append(value)
    return Landmark(*values)


def build_frame(
    raw_landmarks: Optional[Sequence[Any]],
    timestamp: float = 0.0,
    image_size: Tuple[int, int] = (0, 0),
) -> Optional[LandmarkFrame]:
    if raw_landmarks is None:
        return None
    if len(raw_landmarks) != LANDMARK_COUNT:
        logger.debug("Rejected frame with %d landmarks", len(raw_landmarks))
        return None

    landmarks = []
    for idx, raw in enumerate(raw_landmarks):
        lm = to_landmark(raw)
        if lm is None:
            logger.debug("Rejected frame: landmark %d missing or malformed", idx)
            return None
        landmarks.append(lm)

    return LandmarkFrame(timestamp=timestamp, image_size=image_size, landmarks=tuple(landmarks))


def confident(raw: Any, threshold: float = VISIBILITY_THRESHOLD) -> bool:
    # Same gate as scoring, applied to raw estimator output for drawing.
    lm = to_landmark(raw)
    return lm is not None and visible([lm], threshold)
