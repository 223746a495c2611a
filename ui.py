from typing import List

from monitor import MonitorResult
from pose_types import PostureStatus

STATUS_GLYPHS = {
    PostureStatus.GOOD: "OK",
    PostureStatus.FAIR: "!",
    PostureStatus.POOR: "X",
}

# Qt stylesheet colours, same palette as the overlay.
STATUS_CSS = {
    PostureStatus.GOOD: "#00ff00",
    PostureStatus.FAIR: "#ffa500",
    PostureStatus.POOR: "#ff0000",
}


def status_lines(result: MonitorResult) -> List[str]:
    analysis = result.analysis
    if analysis is None:
        return ["Analyzing..." if result.analyzing else "No person detected"]
    lines = [
        f"Posture: {analysis.posture_mode.value}",
        f"Score: {analysis.score}",
        f"{STATUS_GLYPHS[analysis.status]} {analysis.message}",
    ]
    if analysis.forward_head_angle is not None:
        lines.append(f"Head angle: {analysis.forward_head_angle:.1f} deg")
    if analysis.shoulder_hip_angle is not None:
        lines.append(f"Torso angle: {analysis.shoulder_hip_angle:.1f} deg")
    return lines
