from dataclasses import dataclass
from typing import List, Tuple

from pose_types import BodyPart, LandmarkFrame, PostureAnalysis, PostureMode, PostureStatus

GOOD_MIN_SCORE = 75
FAIR_MIN_SCORE = 50


@dataclass
class ScoreBand:
    min_score: int
    status: PostureStatus
    message: str


def status_for_score(score: int) -> PostureStatus:
    if score >= GOOD_MIN_SCORE:
        return PostureStatus.GOOD
    if score >= FAIR_MIN_SCORE:
        return PostureStatus.FAIR
    return PostureStatus.POOR


class PostureScorerBase:
    mode: PostureMode
    required_parts: List[BodyPart] = []
    # Ordered highest first; the last band must start at 0.
    bands: List[ScoreBand] = []

    def score(self, frame: LandmarkFrame) -> PostureAnalysis:
        raise NotImplementedError

    def resolve(self, score: int) -> Tuple[PostureStatus, str]:
        for band in self.bands:
            if score >= band.min_score:
                return band.status, band.message
        return status_for_score(score), ""
