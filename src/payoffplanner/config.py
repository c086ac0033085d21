"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from .services.debts import PayoffStrategy

load_dotenv()

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "PayoffPlanner"
    LOG_FILENAME = "payoffplanner.log"
    DEBUG = False
    TESTING = False

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("PAYOFFPLANNER_DEV_MODE", default=True)
        self.DEFAULT_STRATEGY = self._resolve_strategy()
        self.LOG_LEVEL = os.getenv("PAYOFFPLANNER_LOG_LEVEL", "INFO").strip().upper()
        if self.LOG_LEVEL not in _LOG_LEVELS:
            raise ValueError(f"PAYOFFPLANNER_LOG_LEVEL must be one of {sorted(_LOG_LEVELS)}")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where logs and exports live."""

        data_root = os.getenv("PAYOFFPLANNER_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _resolve_strategy(self) -> PayoffStrategy:
        raw = os.getenv("PAYOFFPLANNER_DEFAULT_STRATEGY", PayoffStrategy.AVALANCHE.value)
        try:
            return PayoffStrategy(raw.strip().lower())
        except ValueError as exc:
            raise ValueError(
                f"PAYOFFPLANNER_DEFAULT_STRATEGY must be 'avalanche' or 'snowball', got {raw!r}"
            ) from exc

    @property
    def log_dir(self) -> Path:
        return Path(self.DATA_DIR) / "logs"


class DevConfig(BaseConfig):
    """Development configuration with verbose console output."""

    DEBUG = True


class TestConfig(BaseConfig):
    """Configuration used by the test-suite."""

    TESTING = True


def get_config() -> BaseConfig:
    """Return the config class selected by ``PAYOFFPLANNER_ENV``."""

    env = os.getenv("PAYOFFPLANNER_ENV", "dev").strip().lower()
    if env == "test":
        return TestConfig()
    if env in {"prod", "production"}:
        return BaseConfig()
    return DevConfig()
