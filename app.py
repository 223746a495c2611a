import logging

import cv2
import numpy as np

from alert_throttle import AlertThrottle
from camera import CameraStream
from config import settings
from logging_config import setup_logging
from monitor import PostureMonitor
from notifications import LogNotifier
from pose_detection import PoseDetector
from ui import status_lines
from visualization import draw_pose, draw_status_panel, skeleton_color

logger = logging.getLogger(__name__)


def main():
    setup_logging(settings)
    window_name = settings.APP_NAME
    camera = CameraStream(
        camera_index=settings.CAMERA_INDEX,
        width=settings.FRAME_WIDTH,
        height=settings.FRAME_HEIGHT,
        target_fps=settings.TARGET_FPS,
    )
    detector = PoseDetector(
        model_complexity=settings.MODEL_COMPLEXITY,
        min_detection_confidence=settings.MIN_DETECTION_CONFIDENCE,
        min_tracking_confidence=settings.MIN_TRACKING_CONFIDENCE,
    )
    monitor = PostureMonitor(
        throttle=AlertThrottle(
            cooldown_seconds=settings.ALERT_COOLDOWN_SECONDS,
            title=settings.ALERT_TITLE,
        ),
        notifier=LogNotifier(),
    )

    cv2.namedWindow(window_name, cv2.WINDOW_NORMAL)
    logger.info("Monitoring camera %d, press Q to quit", settings.CAMERA_INDEX)
    try:
        while True:
            if cv2.getWindowProperty(window_name, cv2.WND_PROP_VISIBLE) < 1:
                break
            cam_frame = camera.read()
            if not cam_frame.ok:
                blank = np.zeros((480, 640, 3), dtype=np.uint8)
                draw_status_panel(blank, ["Camera error", "Retrying..."], origin=(10, 30))
                cv2.imshow(window_name, blank)
                # read() retries with backoff; no need to spin while it waits.
                if cv2.waitKey(100) & 0xFF == ord("q"):
                    break
                continue

            frame = cam_frame.frame
            detection = detector.process(frame, cam_frame.timestamp)
            result = monitor.process(detection.frame, analyzing=detection.person_detected)

            draw_pose(frame, detection.raw_landmarks, result.analysis)
            lines = status_lines(result) + ["Keys: Q quit"]
            draw_status_panel(frame, lines, origin=(10, 30), color=skeleton_color(result.analysis))

            cv2.imshow(window_name, frame)
            if cv2.waitKey(1) & 0xFF == ord("q"):
                break
    finally:
        detector.close()
        camera.release()
        cv2.destroyAllWindows()


if __name__ == "__main__":
    main()
