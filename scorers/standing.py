from dataclasses import dataclass
from typing import Optional

from geometry import angle_from_vertical_degrees, clamp_score, midpoint_3d
from pose_types import BodyPart, LandmarkFrame, PostureAnalysis, PostureMode, PostureStatus
from scorers.base import FAIR_MIN_SCORE, GOOD_MIN_SCORE, PostureScorerBase, ScoreBand


@dataclass
class StandingThresholds:
    upright_lean: float = 0.02
    slouch_lean: float = -0.05
    slight_lean_base: float = 80.0
    slight_lean_weight: float = 400.0
    slouch_base: float = 60.0
    slouch_weight: float = 600.0
    horizontal_weight: float = 200.0


class StandingScorer(PostureScorerBase):
    mode = PostureMode.STANDING
    required_parts = [
        BodyPart.LEFT_SHOULDER,
        BodyPart.RIGHT_SHOULDER,
        BodyPart.LEFT_HIP,
        BodyPart.RIGHT_HIP,
    ]
    bands = [
        ScoreBand(GOOD_MIN_SCORE, PostureStatus.GOOD, "Excellent posture!"),
        ScoreBand(FAIR_MIN_SCORE, PostureStatus.FAIR, "Sit up straighter"),
        ScoreBand(0, PostureStatus.POOR, "Slouching detected!"),
    ]

    def __init__(self, thresholds: Optional[StandingThresholds] = None):
        self._thresholds = thresholds or StandingThresholds()

    def _lean_alignment(self, forward_lean: float) -> float:
        t = self._thresholds
        if forward_lean > t.upright_lean:
            return 100.0
        if forward_lean > t.slouch_lean:
            return t.slight_lean_base - abs(forward_lean) * t.slight_lean_weight
        return max(0.0, t.slouch_base - abs(forward_lean) * t.slouch_weight)

    def score(self, frame: LandmarkFrame) -> PostureAnalysis:
        shoulder_mid = midpoint_3d(frame[BodyPart.LEFT_SHOULDER], frame[BodyPart.RIGHT_SHOULDER])
        hip_mid = midpoint_3d(frame[BodyPart.LEFT_HIP], frame[BodyPart.RIGHT_HIP])

        # Positive when the shoulders sit behind the hips in depth.
        forward_lean = shoulder_mid.z - hip_mid.z
        horizontal_alignment = abs(shoulder_mid.x - hip_mid.x)
        shoulder_hip_angle = abs(
            angle_from_vertical_degrees(shoulder_mid.x - hip_mid.x, shoulder_mid.y - hip_mid.y)
        )

        alignment = self._lean_alignment(forward_lean)
        alignment = max(0.0, alignment - horizontal_alignment * self._thresholds.horizontal_weight)

        final_score = clamp_score(alignment)
        status, message = self.resolve(final_score)
        return PostureAnalysis(
            score=final_score,
            status=status,
            message=message,
            posture_mode=self.mode,
            shoulder_hip_angle=shoulder_hip_angle,
            metrics={"hipAlignment": forward_lean},
        )
