"""Configuration for a sync run: environment defaults and validated settings."""

import os
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from common.constants import (
    ACTION_UPLOAD,
    ACTIONS,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_LOG_FILE,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_QQ_PATH,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_START_DELAY_SECONDS,
    PATH_SEPARATOR,
)
from syncer.exceptions import ConfigurationError


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


LOG_FILE = os.getenv("Q2S3_LOG_FILE", DEFAULT_LOG_FILE)

QQ_PATH = os.getenv("Q2S3_QQ_PATH", DEFAULT_QQ_PATH)
STATIC_ROSTER = os.getenv("Q2S3_ROSTER") or None
NODE_NAME = os.getenv("Q2S3_NODE_NAME") or None
STRICT_ROSTER = _env_flag("Q2S3_STRICT_ROSTER")

WORKERS = int(os.getenv("Q2S3_WORKERS", "1"))
START_DELAY = float(os.getenv("Q2S3_START_DELAY", str(DEFAULT_START_DELAY_SECONDS)))

CONNECT_TIMEOUT = int(os.getenv("Q2S3_CONNECT_TIMEOUT", str(DEFAULT_CONNECT_TIMEOUT)))
READ_TIMEOUT = int(os.getenv("Q2S3_READ_TIMEOUT", str(DEFAULT_READ_TIMEOUT)))
MAX_ATTEMPTS = int(os.getenv("Q2S3_MAX_ATTEMPTS", str(DEFAULT_MAX_ATTEMPTS)))


class SyncSettings(BaseModel):
    """Validated settings for one invocation."""
    basedir: str
    s3bucket: str
    region: str
    action: str = ACTION_UPLOAD
    node_name: Optional[str] = None
    roster: Optional[str] = None
    qq_path: str = DEFAULT_QQ_PATH
    log_file: Optional[str] = DEFAULT_LOG_FILE
    strict_roster: bool = False
    workers: int = Field(default=1, ge=1)
    start_delay: float = Field(default=DEFAULT_START_DELAY_SECONDS, ge=0)
    connect_timeout: int = Field(default=DEFAULT_CONNECT_TIMEOUT, ge=1)
    read_timeout: int = Field(default=DEFAULT_READ_TIMEOUT, ge=1)
    max_attempts: int = Field(default=DEFAULT_MAX_ATTEMPTS, ge=1)

    @field_validator("basedir")
    @classmethod
    def normalize_basedir(cls, value: str) -> str:
        """Absolute path without a trailing separator; object keys derive from it."""
        if not value.strip():
            raise ValueError("basedir cannot be empty")
        normalized = os.path.abspath(value)
        return normalized.rstrip(PATH_SEPARATOR) or PATH_SEPARATOR

    @field_validator("s3bucket", "region")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("value cannot be empty")
        return value.strip()

    @field_validator("action")
    @classmethod
    def known_action(cls, value: str) -> str:
        if value not in ACTIONS:
            raise ValueError(f"action must be one of {', '.join(ACTIONS)}")
        return value


def load_settings(**overrides) -> SyncSettings:
    """
    Build settings from environment defaults overlaid with explicit values.

    None values in overrides are ignored so unset CLI flags fall back to
    the environment.

    Raises:
        ConfigurationError: If the resulting settings are invalid
    """
    data = {
        "qq_path": QQ_PATH,
        "roster": STATIC_ROSTER,
        "node_name": NODE_NAME,
        "strict_roster": STRICT_ROSTER,
        "log_file": LOG_FILE,
        "workers": WORKERS,
        "start_delay": START_DELAY,
        "connect_timeout": CONNECT_TIMEOUT,
        "read_timeout": READ_TIMEOUT,
        "max_attempts": MAX_ATTEMPTS,
    }
    data.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return SyncSettings(**data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
