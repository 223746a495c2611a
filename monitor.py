from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple

from alert_throttle import AlertThrottle
from landmark_validation import build_frame
from notifications import Notifier, dispatch
from pose_types import AlertRequest, LandmarkFrame, PostureAnalysis
from posture_analyzer import PostureAnalyzer


@dataclass
class MonitorResult:
    analysis: Optional[PostureAnalysis]
    analyzing: bool
    alert: Optional[AlertRequest] = None


class PostureMonitor:
    def __init__(
        self,
        analyzer: Optional[PostureAnalyzer] = None,
        throttle: Optional[AlertThrottle] = None,
        notifier: Optional[Notifier] = None,
    ):
        self.analyzer = analyzer or PostureAnalyzer()
        self.throttle = throttle or AlertThrottle()
        self.notifier = notifier

    def process(self, frame: Optional[LandmarkFrame], analyzing: Optional[bool] = None) -> MonitorResult:
        # `analyzing` means the estimator saw a person, even if the frame was unusable.
        if analyzing is None:
            analyzing = frame is not None
        analysis = self.analyzer.analyze(frame) if analyzing else None
        alert = self.throttle.update(analysis)
        if alert is not None:
            dispatch(self.notifier, alert)
        return MonitorResult(analysis=analysis, analyzing=analyzing, alert=alert)

    def process_landmarks(
        self,
        raw_landmarks: Optional[Sequence[Any]],
        timestamp: float = 0.0,
        image_size: Tuple[int, int] = (0, 0),
    ) -> MonitorResult:
        frame = build_frame(raw_landmarks, timestamp, image_size)
        return self.process(frame, analyzing=bool(raw_landmarks))
