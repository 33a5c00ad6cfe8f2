"""Environment configuration and validation."""

import os
from typing import Optional

from dotenv import load_dotenv, find_dotenv

from ..constants import SERVICE_START_TIMEOUT_SECS

import logging
logger = logging.getLogger(__name__)

load_dotenv(find_dotenv(filename=".env", usecwd=True))


def _env_flag(name: str, default: str) -> bool:
    return (os.getenv(name, default) or "").strip() in ("1", "true", "True", "yes", "Yes")


def get_executable_path() -> Optional[str]:
    """EDGEDRIVER_EXECUTABLE_PATH, or None when unset or blank."""
    return (os.getenv("EDGEDRIVER_EXECUTABLE_PATH") or "").strip() or None


def get_kill_on_exit() -> bool:
    return _env_flag("EDGEDRIVER_KILL_ON_EXIT", "1")


def get_env_config() -> dict:
    """
    Read the EDGEDRIVER_* environment variables.

    Optional:   EDGEDRIVER_EXECUTABLE_PATH  (used when ServiceBuilder gets no path)
                EDGEDRIVER_PORT             (port of the default service)
                EDGEDRIVER_START_TIMEOUT    (seconds, default 30)
                EDGEDRIVER_KILL_ON_EXIT     (default 1)

    Raises:
        EnvironmentError: If EDGEDRIVER_PORT is set but is not a non-negative integer
    """
    executable_path = get_executable_path()

    port_env = (os.getenv("EDGEDRIVER_PORT") or "").strip()
    fixed_port: Optional[int] = None
    if port_env:
        if not port_env.isdigit():
            raise EnvironmentError(f"EDGEDRIVER_PORT must be a non-negative integer, got {port_env!r}.")
        fixed_port = int(port_env) or None

    return {
        "executable_path": executable_path,
        "fixed_port": fixed_port,
        "start_timeout": get_start_timeout(),
        "kill_on_exit": get_kill_on_exit(),
    }


def get_start_timeout() -> float:
    """Seconds to wait for a server to come up; falls back to the default on bad input."""
    raw = (os.getenv("EDGEDRIVER_START_TIMEOUT") or "").strip()
    if not raw:
        return SERVICE_START_TIMEOUT_SECS
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid EDGEDRIVER_START_TIMEOUT={raw!r}")
        return SERVICE_START_TIMEOUT_SECS
    return value if value > 0 else SERVICE_START_TIMEOUT_SECS


__all__ = [
    "get_env_config",
    "get_executable_path",
    "get_kill_on_exit",
    "get_start_timeout",
]
