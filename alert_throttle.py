import logging
import threading
import time
from typing import Callable, Optional

from pose_types import AlertRequest, PostureAnalysis, PostureStatus, Urgency

logger = logging.getLogger(__name__)

DEFAULT_COOLDOWN_SECONDS = 60.0
DEFAULT_ALERT_TITLE = "Desk Sentry Alert"
# Sentinel for "never alerted"; any clock reading is a full cooldown past it.
EPOCH = float("-inf")


class AlertThrottle:
    """Converts a stream of posture statuses into occasional alert requests.

    A poor status fires at most once per cooldown window. Any recovery out of
    poor re-arms the throttle immediately, so poor/good/poor oscillation
    alerts again on the next poor frame regardless of elapsed time.
    """

    def __init__(
        self,
        cooldown_seconds: float = DEFAULT_COOLDOWN_SECONDS,
        clock: Callable[[], float] = time.time,
        title: str = DEFAULT_ALERT_TITLE,
        urgency: Urgency = Urgency.NORMAL,
    ):
        self.cooldown_seconds = cooldown_seconds
        self.title = title
        self.urgency = urgency
        self._clock = clock
        self._lock = threading.Lock()
        self._last_alert_timestamp = EPOCH
        self._last_status: Optional[PostureStatus] = None

    @property
    def last_alert_timestamp(self) -> float:
        return self._last_alert_timestamp

    @property
    def last_status(self) -> Optional[PostureStatus]:
        return self._last_status

    @property
    def in_cooldown(self) -> bool:
        return self._clock() - self._last_alert_timestamp < self.cooldown_seconds

    def reset(self) -> None:
        with self._lock:
            self._last_alert_timestamp = EPOCH
            self._last_status = None

    def update(self, analysis: Optional[PostureAnalysis]) -> Optional[AlertRequest]:
        # Frames without an analysis leave the state frozen.
        if analysis is None:
            return None

        with self._lock:
            status = analysis.status
            if self._last_status == PostureStatus.POOR and status != PostureStatus.POOR:
                self._last_alert_timestamp = EPOCH
                logger.info("Posture improved to %s, alert cooldown reset", status.value)

            self._last_status = status

            if status != PostureStatus.POOR:
                return None

            now = self._clock()
            elapsed = now - self._last_alert_timestamp
            if elapsed < self.cooldown_seconds:
                logger.debug("Alert suppressed, %.1fs left in cooldown", self.cooldown_seconds - elapsed)
                return None

            self._last_alert_timestamp = now

        logger.info("Poor posture alert (score=%d, mode=%s)", analysis.score, analysis.posture_mode.value)
        return AlertRequest(
            title=self.title,
            body=f"{analysis.message} (Score: {analysis.score})",
            urgency=self.urgency,
        )
