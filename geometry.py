import math

from pose_types import Landmark, Point3D


def midpoint_3d(a: Landmark, b: Landmark) -> Point3D:
    return Point3D((a.x + b.x) / 2.0, (a.y + b.y) / 2.0, (a.z + b.z) / 2.0)


def angle_from_vertical_degrees(dx: float, dy: float) -> float:
    # Signed angle of (dx, dy) measured from the image vertical axis.
    return math.degrees(math.atan2(dx, dy))


def clamp_score(value: float, low: float = 0.0, high: float = 100.0) -> int:
    # Half-up rounding; round() would send 74.5 to 74.
    return int(math.floor(min(high, max(low, value)) + 0.5))
