import logging
from typing import Optional

from pose_types import AlertRequest

logger = logging.getLogger(__name__)


class NotificationUnavailable(RuntimeError):
    pass


class Notifier:
    def notify(self, request: AlertRequest) -> None:
        raise NotImplementedError


class LogNotifier(Notifier):
    def __init__(self, level: int = logging.WARNING):
        self.level = level

    def notify(self, request: AlertRequest) -> None:
        logger.log(self.level, "%s: %s [%s]", request.title, request.body, request.urgency.value)


def dispatch(notifier: Optional[Notifier], request: Optional[AlertRequest]) -> bool:
    # Fire-and-forget: delivery problems must never reach the frame loop.
    if notifier is None or request is None:
        return False
    try:
        notifier.notify(request)
    except Exception:
        logger.exception("Failed to deliver posture alert via %s", type(notifier).__name__)
        return False
    return True
