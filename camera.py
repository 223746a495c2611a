import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

import cv2
import numpy as np

logger = logging.getLogger(__name__)


@dataclass
class CameraFrame:
    frame: Optional[np.ndarray]
    timestamp: float
    ok: bool


class CameraStream:
    """Webcam capture that keeps retrying a missing device.

    A failed open is retried from `read()` at most once per `retry_seconds`;
    only the first failure of an outage is logged at ERROR.
    """

    def __init__(
        self,
        camera_index: int = 0,
        width: int = 1280,
        height: int = 720,
        target_fps: int = 30,
        backend: int = cv2.CAP_ANY,
        retry_seconds: float = 2.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.camera_index = camera_index
        self.width = width
        self.height = height
        self.target_fps = target_fps
        self.backend = backend
        self.retry_seconds = retry_seconds
        self._clock = clock
        self._sleep = sleep
        self._capture: Optional[cv2.VideoCapture] = None
        self._next_open_at = 0.0
        self._next_frame_at = 0.0
        self._outage_logged = False

    def open(self) -> bool:
        self._next_open_at = self._clock() + self.retry_seconds
        capture = cv2.VideoCapture(self.camera_index, self.backend)
        if not capture.isOpened():
            capture.release()
            if self._outage_logged:
                logger.debug("Camera %d still unavailable, retrying in %.1fs", self.camera_index, self.retry_seconds)
            else:
                logger.error("Could not open camera %d", self.camera_index)
                self._outage_logged = True
            return False

        capture.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        capture.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
        capture.set(cv2.CAP_PROP_FPS, self.target_fps)
        self._capture = capture
        self._outage_logged = False
        logger.info("Camera %d opened at %dx%d", self.camera_index, self.width, self.height)
        return True

    def _wait_for_slot(self) -> None:
        if self.target_fps <= 0:
            return
        delay = self._next_frame_at - self._clock()
        if delay > 0:
            self._sleep(delay)
        self._next_frame_at = max(self._next_frame_at, self._clock()) + 1.0 / self.target_fps

    def read(self) -> CameraFrame:
        if self._capture is None:
            if self._clock() < self._next_open_at or not self.open():
                return CameraFrame(None, time.time(), False)

        self._wait_for_slot()
        ok, frame = self._capture.read()
        if not ok:
            # Unplugged mid-stream: drop the handle and go back to retrying.
            logger.warning("Camera %d returned no frame", self.camera_index)
            self.release()
            self._next_open_at = self._clock() + self.retry_seconds
            return CameraFrame(None, time.time(), False)
        return CameraFrame(frame, time.time(), True)

    def release(self) -> None:
        if self._capture is not None:
            self._capture.release()
            self._capture = None
            logger.info("Camera %d released", self.camera_index)
