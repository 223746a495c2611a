import logging

import pytest
from pydantic import ValidationError

from config import AppSettings
from logging_config import setup_logging


def test_defaults(monkeypatch):
    monkeypatch.delenv("DESK_SENTRY_ALERT_COOLDOWN_SECONDS", raising=False)
    s = AppSettings(_env_file=None)
    assert s.APP_NAME == "Desk Sentry"
    assert s.ALERT_COOLDOWN_SECONDS == 60.0
    assert s.ALERT_TITLE == "Desk Sentry Alert"
    assert s.CAMERA_INDEX == 0


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DESK_SENTRY_ALERT_COOLDOWN_SECONDS", "30")
    monkeypatch.setenv("DESK_SENTRY_LOG_LEVEL", "DEBUG")
    s = AppSettings(_env_file=None)
    assert s.ALERT_COOLDOWN_SECONDS == 30.0
    assert s.LOG_LEVEL == "DEBUG"


def test_rejects_non_positive_cooldown(monkeypatch):
    monkeypatch.setenv("DESK_SENTRY_ALERT_COOLDOWN_SECONDS", "0")
    with pytest.raises(ValidationError):
        AppSettings(_env_file=None)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_writes_json_file(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "sentry.log"
    setup_logging(AppSettings(_env_file=None, LOG_FILE=str(log_file), JSON_LOGS=True, LOG_LEVEL="debug"))
    logging.getLogger("posture_analyzer").debug("frame skipped")
    for handler in logging.getLogger().handlers:
        handler.flush()
    content = log_file.read_text()
    assert '"level": "DEBUG"' in content
    assert '"message": "frame skipped"' in content
    assert logging.getLogger().level == logging.DEBUG
