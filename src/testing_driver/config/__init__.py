"""Configuration management for the testing driver."""

from .environment import (
    get_env_config,
    ENV_PREFIX,
)

__all__ = [
    "get_env_config",
    "ENV_PREFIX",
]
