"""Environment configuration and validation."""

import os
from typing import Optional

from dotenv import load_dotenv, find_dotenv

from ..constants import DEFAULT_TIMEOUT_SECS, DEFAULT_ACTUAL_TIMEOUT_MINS

import logging
logger = logging.getLogger(__name__)


ENV_PREFIX = "TESTING_DRIVER_"


def _env(name: str, default: str = "") -> str:
    return (os.getenv(ENV_PREFIX + name) or default).strip()


def _env_int(name: str, default: int) -> int:
    raw = _env(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise EnvironmentError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}.")


def _env_float(name: str, default: float) -> float:
    raw = _env(name)
    if not raw:
        return float(default)
    try:
        return float(raw)
    except ValueError:
        raise EnvironmentError(f"{ENV_PREFIX}{name} must be a number, got {raw!r}.")


def _env_bool(name: str, default: bool) -> bool:
    raw = _env(name)
    if not raw:
        return default
    return raw.lower() in ("1", "true", "yes", "on")


def get_env_config(dotenv_path: Optional[str] = None) -> dict:
    """
    Read the session configuration from the environment.

    A `.env` file is loaded first (the one given, or the closest one found from
    the current working directory). Variables already present in the process
    environment win over the file.

    Optional:   TESTING_DRIVER_BROWSER (default 'chrome')
                TESTING_DRIVER_TIMEOUT (seconds, fractions allowed, default 5)
                TESTING_DRIVER_ENVIRONMENT
                TESTING_DRIVER_URL
                TESTING_DRIVER_SCREENSHOT_DIR (default './')
                TESTING_DRIVER_ACTUAL_TIMEOUT (minutes, default 60)
                TESTING_DRIVER_LOADING_SPINNER (xpath)
                TESTING_DRIVER_ERROR_CONTAINER (xpath)
                TESTING_DRIVER_REMOTE_HOST (required for 'remote chrome')
                TESTING_DRIVER_BROWSER_BINARY
                TESTING_DRIVER_EXTENSIONS_DIR
                TESTING_DRIVER_DOWNLOAD_DIR
                TESTING_DRIVER_IE_NATIVE_EVENTS (default true)
    """
    load_dotenv(dotenv_path or find_dotenv(filename=".env", usecwd=True), override=False)

    timeout = _env_float("TIMEOUT", DEFAULT_TIMEOUT_SECS)
    if timeout <= 0:
        raise EnvironmentError(f"{ENV_PREFIX}TIMEOUT must be positive, got {timeout}.")

    config = {
        "browser": _env("BROWSER", "chrome"),
        "timeout": timeout,
        "environment": _env("ENVIRONMENT"),
        "url": _env("URL"),
        "screenshot_save_location": _env("SCREENSHOT_DIR", "./"),
        "actual_timeout": _env_int("ACTUAL_TIMEOUT", DEFAULT_ACTUAL_TIMEOUT_MINS),
        "loading_spinner": _env("LOADING_SPINNER"),
        "error_container": _env("ERROR_CONTAINER"),
        "remote_host": _env("REMOTE_HOST"),
        "browser_binary": _env("BROWSER_BINARY") or None,
        "extensions_dir": _env("EXTENSIONS_DIR") or None,
        "download_dir": _env("DOWNLOAD_DIR") or None,
        "ie_native_events": _env_bool("IE_NATIVE_EVENTS", True),
    }
    logger.debug(f"Loaded testing driver configuration for browser {config['browser']!r}")
    return config


__all__ = ["get_env_config", "ENV_PREFIX"]
