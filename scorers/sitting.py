from dataclasses import dataclass
from typing import Optional

from geometry import angle_from_vertical_degrees, clamp_score, midpoint_3d
from pose_types import BodyPart, LandmarkFrame, PostureAnalysis, PostureMode, PostureStatus
from scorers.base import FAIR_MIN_SCORE, GOOD_MIN_SCORE, PostureScorerBase, ScoreBand


@dataclass
class SittingThresholds:
    forward_head_tolerance: float = 0.05
    forward_head_weight: float = 300.0
    ear_depth_tolerance: float = -0.02
    ear_depth_weight: float = 200.0
    nose_lean_tolerance: float = 0.08
    nose_lean_weight: float = 150.0
    shoulder_imbalance_tolerance: float = 0.05
    shoulder_imbalance_weight: float = 100.0


class SittingScorer(PostureScorerBase):
    mode = PostureMode.SITTING
    required_parts = [
        BodyPart.NOSE,
        BodyPart.LEFT_SHOULDER,
        BodyPart.RIGHT_SHOULDER,
        BodyPart.LEFT_EAR,
        BodyPart.RIGHT_EAR,
    ]
    bands = [
        ScoreBand(GOOD_MIN_SCORE, PostureStatus.GOOD, "Excellent sitting posture!"),
        ScoreBand(FAIR_MIN_SCORE, PostureStatus.FAIR, "Head too far forward"),
        ScoreBand(0, PostureStatus.POOR, "Slouching - sit up straight!"),
    ]

    def __init__(self, thresholds: Optional[SittingThresholds] = None):
        self._thresholds = thresholds or SittingThresholds()

    def score(self, frame: LandmarkFrame) -> PostureAnalysis:
        t = self._thresholds
        left_shoulder = frame[BodyPart.LEFT_SHOULDER]
        right_shoulder = frame[BodyPart.RIGHT_SHOULDER]
        nose = frame[BodyPart.NOSE]

        shoulder_mid = midpoint_3d(left_shoulder, right_shoulder)
        ear_mid = midpoint_3d(frame[BodyPart.LEFT_EAR], frame[BodyPart.RIGHT_EAR])

        # Ear ahead of the shoulder line (x) and in front of it in depth (z) both
        # indicate forward head posture.
        forward_head_distance = ear_mid.x - shoulder_mid.x
        ear_shoulder_depth = ear_mid.z - shoulder_mid.z
        nose_forward_lean = nose.x - shoulder_mid.x
        shoulder_imbalance = abs(left_shoulder.y - right_shoulder.y)

        score = 100.0
        if abs(forward_head_distance) > t.forward_head_tolerance:
            score -= abs(forward_head_distance) * t.forward_head_weight
        if ear_shoulder_depth < t.ear_depth_tolerance:
            score -= abs(ear_shoulder_depth) * t.ear_depth_weight
        if nose_forward_lean > t.nose_lean_tolerance:
            score -= (nose_forward_lean - t.nose_lean_tolerance) * t.nose_lean_weight
        if shoulder_imbalance > t.shoulder_imbalance_tolerance:
            score -= shoulder_imbalance * t.shoulder_imbalance_weight

        final_score = clamp_score(score)
        status, message = self.resolve(final_score)
        return PostureAnalysis(
            score=final_score,
            status=status,
            message=message,
            posture_mode=self.mode,
            forward_head_angle=angle_from_vertical_degrees(
                forward_head_distance, abs(ear_mid.y - shoulder_mid.y)
            ),
            metrics={
                "earShoulderAlignment": forward_head_distance,
                "noseShoulderAlignment": nose_forward_lean,
            },
        )
