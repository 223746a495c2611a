from dataclasses import dataclass
from typing import Any, List, Optional

import cv2
import mediapipe as mp

from landmark_validation import build_frame
from pose_types import LandmarkFrame


@dataclass
class Detection:
    # Raw estimator output is kept so the overlay can draw the skeleton even
    # when the frame fails validation.
    raw_landmarks: Optional[List[Any]]
    frame: Optional[LandmarkFrame]

    @property
    def person_detected(self) -> bool:
        return bool(self.raw_landmarks)


class PoseDetector:
    def __init__(
        self,
        model_complexity: int = 1,
        min_detection_confidence: float = 0.5,
        min_tracking_confidence: float = 0.5,
    ):
        self._mp_pose = mp.solutions.pose
        self._pose = self._mp_pose.Pose(
            static_image_mode=False,
            model_complexity=model_complexity,
            smooth_landmarks=True,
            enable_segmentation=False,
            min_detection_confidence=min_detection_confidence,
            min_tracking_confidence=min_tracking_confidence,
        )

    def process(self, frame_bgr, timestamp: float) -> Detection:
        height, width = frame_bgr.shape[:2]
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        results = self._pose.process(frame_rgb)

        if results.pose_landmarks is None:
            return Detection(raw_landmarks=None, frame=None)

        raw = list(results.pose_landmarks.landmark)
        return Detection(raw_landmarks=raw, frame=build_frame(raw, timestamp, (width, height)))

    def close(self) -> None:
        self._pose.close()
