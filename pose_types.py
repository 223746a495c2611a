from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, Optional, Tuple


class BodyPart(IntEnum):
    # MediaPipe Pose landmark indices.
    NOSE = 0
    LEFT_EYE_INNER = 1
    LEFT_EYE = 2
    LEFT_EYE_OUTER = 3
    RIGHT_EYE_INNER = 4
    RIGHT_EYE = 5
    RIGHT_EYE_OUTER = 6
    LEFT_EAR = 7
    RIGHT_EAR = 8
    MOUTH_LEFT = 9
    MOUTH_RIGHT = 10
    LEFT_SHOULDER = 11
    RIGHT_SHOULDER = 12
    LEFT_ELBOW = 13
    RIGHT_ELBOW = 14
    LEFT_WRIST = 15
    RIGHT_WRIST = 16
    LEFT_PINKY = 17
    RIGHT_PINKY = 18
    LEFT_INDEX = 19
    RIGHT_INDEX = 20
    LEFT_THUMB = 21
    RIGHT_THUMB = 22
    LEFT_HIP = 23
    RIGHT_HIP = 24
    LEFT_KNEE = 25
    RIGHT_KNEE = 26
    LEFT_ANKLE = 27
    RIGHT_ANKLE = 28
    LEFT_HEEL = 29
    RIGHT_HEEL = 30
    LEFT_FOOT_INDEX = 31
    RIGHT_FOOT_INDEX = 32


class PostureStatus(str, Enum):
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class PostureMode(str, Enum):
    SITTING = "sitting"
    STANDING = "standing"


class Urgency(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    CRITICAL = "critical"


@dataclass(frozen=True)
class Landmark:
    x: float
    y: float
    z: float
    visibility: float


@dataclass(frozen=True)
class Point3D:
    x: float
    y: float
    z: float


@dataclass(frozen=True)
class LandmarkFrame:
    timestamp: float
    image_size: Tuple[int, int]
    landmarks: Tuple[Landmark, ...]

    def __getitem__(self, part: BodyPart) -> Landmark:
        return self.landmarks[int(part)]


@dataclass
class PostureAnalysis:
    score: int
    status: PostureStatus
    message: str
    posture_mode: PostureMode
    forward_head_angle: Optional[float] = None
    shoulder_hip_angle: Optional[float] = None
    metrics: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, object]:
        data: Dict[str, object] = {
            "score": self.score,
            "status": self.status.value,
            "message": self.message,
            "posture": self.posture_mode.value,
            "metrics": dict(self.metrics),
        }
        if self.forward_head_angle is not None:
            data["forwardHeadAngle"] = self.forward_head_angle
        if self.shoulder_hip_angle is not None:
            data["shoulderHipAngle"] = self.shoulder_hip_angle
        return data


@dataclass(frozen=True)
class AlertRequest:
    title: str
    body: str
    urgency: Urgency = Urgency.NORMAL
