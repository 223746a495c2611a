import logging
from typing import Any, Optional, Sequence, Tuple

from landmark_validation import LANDMARK_COUNT, build_frame, visible
from pose_types import LandmarkFrame, PostureAnalysis, PostureMode
from scorers import SittingScorer, StandingScorer

logger = logging.getLogger(__name__)


class PostureAnalyzer:
    """Turns one landmark frame into a posture score.

    Stateless: sitting/standing is decided from the current frame's hip
    visibility alone, so the reported mode can flicker when hips hover near
    the confidence gate.
    """

    def __init__(
        self,
        sitting: Optional[SittingScorer] = None,
        standing: Optional[StandingScorer] = None,
    ):
        self._scorers = {
            PostureMode.SITTING: sitting or SittingScorer(),
            PostureMode.STANDING: standing or StandingScorer(),
        }

    def classify(self, frame: LandmarkFrame) -> Optional[PostureMode]:
        if len(frame.landmarks) != LANDMARK_COUNT:
            return None
        # The sitting parts gate every frame; whatever standing needs on top
        # of them (the hips) decides the mode.
        base_parts = self._scorers[PostureMode.SITTING].required_parts
        extra_parts = [
            part for part in self._scorers[PostureMode.STANDING].required_parts if part not in base_parts
        ]
        if not visible(frame[part] for part in base_parts):
            return None
        if visible(frame[part] for part in extra_parts):
            return PostureMode.STANDING
        return PostureMode.SITTING

    def analyze(self, frame: Optional[LandmarkFrame]) -> Optional[PostureAnalysis]:
        if frame is None:
            return None
        mode = self.classify(frame)
        if mode is None:
            logger.debug("Upper body not visible, skipping frame at %.3f", frame.timestamp)
            return None
        return self._scorers[mode].score(frame)

    def analyze_landmarks(
        self,
        raw_landmarks: Optional[Sequence[Any]],
        timestamp: float = 0.0,
        image_size: Tuple[int, int] = (0, 0),
    ) -> Optional[PostureAnalysis]:
        return self.analyze(build_frame(raw_landmarks, timestamp, image_size))
