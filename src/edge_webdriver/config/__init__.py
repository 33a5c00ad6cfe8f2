"""Configuration management for the Edge driver service."""

from .environment import (
    get_env_config,
    get_executable_path,
    get_kill_on_exit,
    get_start_timeout,
)

__all__ = [
    "get_env_config",
    "get_executable_path",
    "get_kill_on_exit",
    "get_start_timeout",
]
