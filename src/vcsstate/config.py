"""
Configuration management.

Settings live in a JSON file merged over DEFAULT_CONFIG. Environment
variables override individual git settings for one-off runs.
"""

from __future__ import annotations

import json
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .core.errors import ConfigError

CONFIG_DIR = Path(os.environ.get("VCSSTATE_CONFIG_DIR", Path.home() / ".config" / "vcsstate"))
CONFIG_FILE = CONFIG_DIR / "config.json"

STRATEGY_AUTO = "auto"
STRATEGY_LEGACY = "legacy"
STRATEGY_MODERN = "modern"
STRATEGIES = (STRATEGY_AUTO, STRATEGY_LEGACY, STRATEGY_MODERN)

DEFAULT_CONFIG: dict[str, Any] = {
    "version": "1.0.0",
    "git": {
        "binary": "git",
        "strategy": STRATEGY_AUTO,
        "timeout": None,
        "locale": "en_US.UTF-8",
        # Default StrictHostKeyChecking is "ask"; we prefer failing to blocking.
        "ssh_command": "ssh -o StrictHostKeyChecking=yes",
    },
}


@dataclass(frozen=True)
class GitSettings:
    """How git gets invoked."""

    binary: str = "git"
    strategy: str = STRATEGY_AUTO
    timeout: float | None = None
    locale: str = "en_US.UTF-8"
    ssh_command: str = "ssh -o StrictHostKeyChecking=yes"


def get_config_dir() -> Path:
    """Get the configuration directory."""
    return CONFIG_DIR


def get_config_file() -> Path:
    """Get the configuration file path."""
    return CONFIG_FILE


def deep_merge(base: dict, override: dict) -> dict:
    """Deep merge override into base."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        else:
            base[key] = value

    return base


def load_config() -> dict:
    """Load configuration from file, or return defaults."""
    config = json.loads(json.dumps(DEFAULT_CONFIG))

    if CONFIG_FILE.exists():
        try:
            with open(CONFIG_FILE) as f:
                user_config = json.load(f)
        except (json.JSONDecodeError, OSError):
            return config
        if isinstance(user_config, dict):
            deep_merge(config, user_config)

    return config


def save_config(config: dict) -> None:
    """Save configuration to file."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)

    with open(CONFIG_FILE, "w") as f:
        json.dump(config, f, indent=2)


def _checked_strategy(strategy: Any) -> str:
    if strategy not in STRATEGIES:
        raise ConfigError(
            user_message=f"Unknown git strategy '{strategy}'",
            suggested_action=f"Use one of: {', '.join(STRATEGIES)}",
        )
    return strategy


def _checked_timeout(timeout: Any) -> float | None:
    if timeout is None:
        return None
    if (
        isinstance(timeout, bool)
        or not isinstance(timeout, (int, float))
        or not math.isfinite(timeout)
        or timeout <= 0
    ):
        raise ConfigError(
            user_message=f"Invalid git timeout '{timeout}'",
            suggested_action="Use a positive number of seconds, or null for no timeout",
        )
    return float(timeout)


def validate_git_config(git: dict) -> None:
    """
    Check the git section of a config as stored, ignoring the environment.

    Raises:
        ConfigError: strategy or timeout has an invalid value
    """
    _checked_strategy(git.get("strategy", STRATEGY_AUTO))
    _checked_timeout(git.get("timeout"))


def get_git_settings(config: dict | None = None) -> GitSettings:
    """
    Build GitSettings from config plus environment overrides.

    Environment:
        VCSSTATE_GIT: git binary to run
        VCSSTATE_STRATEGY: one of auto, legacy, modern

    Raises:
        ConfigError: strategy or timeout has an invalid value
    """
    if config is None:
        config = load_config()
    git = config.get("git", {})
    validate_git_config(git)

    strategy = _checked_strategy(os.environ.get("VCSSTATE_STRATEGY") or git.get("strategy", STRATEGY_AUTO))

    return GitSettings(
        binary=os.environ.get("VCSSTATE_GIT") or git.get("binary", "git"),
        strategy=strategy,
        timeout=_checked_timeout(git.get("timeout")),
        locale=git.get("locale", "en_US.UTF-8"),
        ssh_command=git.get("ssh_command", GitSettings.ssh_command),
    )
