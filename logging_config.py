import json
import logging
import os
import sys
from datetime import datetime
from typing import Dict, List

from config import AppSettings

LOG_LEVELS: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
            }
        return json.dumps(log_data)


def setup_logging(settings: AppSettings) -> None:
    """
    Configures the root logger from settings: level, plain or JSON lines,
    stdout plus an optional log file.
    """
    level = LOG_LEVELS.get(settings.LOG_LEVEL.upper(), logging.INFO)

    if settings.JSON_LOGS:
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.LOG_FILE:
        log_dir = os.path.dirname(settings.LOG_FILE)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(settings.LOG_FILE))

    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    # MediaPipe and absl are chatty at INFO.
    logging.getLogger("absl").setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging configured with level: %s, JSON: %s", settings.LOG_LEVEL, settings.JSON_LOGS
    )
