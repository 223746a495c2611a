from typing import Any, Optional, Sequence, Tuple

import cv2
import mediapipe as mp

from landmark_validation import confident
from pose_types import PostureAnalysis, PostureStatus

# BGR
STATUS_COLORS = {
    PostureStatus.GOOD: (0, 255, 0),
    PostureStatus.FAIR: (0, 165, 255),
    PostureStatus.POOR: (0, 0, 255),
}
DEFAULT_COLOR = STATUS_COLORS[PostureStatus.GOOD]


def skeleton_color(analysis: Optional[PostureAnalysis]) -> Tuple[int, int, int]:
    if analysis is None:
        return DEFAULT_COLOR
    return STATUS_COLORS[analysis.status]


def _to_pixel(lm: Any, image_size: Tuple[int, int]) -> Tuple[int, int]:
    width, height = image_size
    return int(lm.x * width), int(lm.y * height)


def draw_pose(frame, raw_landmarks: Optional[Sequence[Any]], analysis: Optional[PostureAnalysis]) -> None:
    if not raw_landmarks:
        return
    height, width = frame.shape[:2]
    color = skeleton_color(analysis)

    def usable(idx: int) -> bool:
        return idx < len(raw_landmarks) and confident(raw_landmarks[idx])

    for a, b in mp.solutions.pose.POSE_CONNECTIONS:
        if not usable(a) or not usable(b):
            continue
        cv2.line(
            frame,
            _to_pixel(raw_landmarks[a], (width, height)),
            _to_pixel(raw_landmarks[b], (width, height)),
            color,
            4,
        )

    for idx, lm in enumerate(raw_landmarks):
        if not usable(idx):
            continue
        cv2.circle(frame, _to_pixel(lm, (width, height)), 6, color, -1)


def draw_status_panel(frame, lines: Sequence[str], origin=(10, 30), color=(255, 255, 255)) -> None:
    x, y = origin
    for line in lines:
        cv2.putText(frame, line, (x, y), cv2.FONT_HERSHEY_SIMPLEX, 0.7, color, 2)
        y += 28
