# config.py
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DESK_SENTRY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # --- Metadata ---
    APP_NAME: str = "Desk Sentry"

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None
    JSON_LOGS: bool = False

    # --- Camera ---
    CAMERA_INDEX: int = Field(0, ge=0)
    FRAME_WIDTH: int = Field(1280, gt=0)
    FRAME_HEIGHT: int = Field(720, gt=0)
    TARGET_FPS: int = Field(30, ge=0)

    # --- Pose estimator ---
    MODEL_COMPLEXITY: int = Field(1, ge=0, le=2)
    MIN_DETECTION_CONFIDENCE: float = Field(0.5, ge=0.0, le=1.0)
    MIN_TRACKING_CONFIDENCE: float = Field(0.5, ge=0.0, le=1.0)

    # --- Alerts ---
    ALERT_COOLDOWN_SECONDS: float = Field(60.0, gt=0.0)
    ALERT_TITLE: str = "Desk Sentry Alert"


settings = AppSettings()
