"""Runtime configuration for the kudos wall client.

Every setting resolves in the same order: environment variable, then the
YAML config file at ``<home>/config.yaml``, then the built-in default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

DEFAULT_API_BASE_URL = "http://localhost:3001/api"
DEFAULT_TOKEN_TTL_DAYS = 30

_TRUTHY = {"1", "true", "yes", "on"}


class ConfigError(Exception):
    """Raised when the config file cannot be parsed."""


@dataclass(frozen=True)
class ApiPaths:
    """Backend endpoint paths, relative to the base URL."""

    login: str = "/auth/login"
    register: str = "/auth/register"
    users: str = "/users"
    kudo_cards: str = "/kudocards"
    analytics: str = "/analytics"


@dataclass(frozen=True)
class Settings:
    """Resolved client settings."""

    api_base_url: str = DEFAULT_API_BASE_URL
    api_paths: ApiPaths = field(default_factory=ApiPaths)
    token_ttl_days: Optional[int] = DEFAULT_TOKEN_TTL_DAYS
    home_dir: Path = field(default_factory=lambda: Path.home() / ".kudos")
    demo_mode: bool = False
    log_level: str = "WARNING"

    @property
    def storage_path(self) -> Path:
        return self.home_dir / "session.json"


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUTHY


def _as_ttl(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        days = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"token_ttl_days must be an integer, got {value!r}") from e
    if days < 0:
        raise ConfigError(f"token_ttl_days must be 0 or more, got {days}")
    return days or None


def load_settings(
    config_path: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Build :class:`Settings` from the environment and the config file.

    Parameters
    ----------
    config_path:
        Explicit config file. Defaults to ``<home>/config.yaml``.
    env:
        Environment mapping, ``os.environ`` when *None*.
    """
    env = os.environ if env is None else env

    home_dir = Path(env["KUDOS_HOME"]).expanduser() if env.get("KUDOS_HOME") else Path.home() / ".kudos"
    file_values = _read_config_file(config_path or home_dir / "config.yaml")

    def pick(env_key: str, file_key: str, default: Any) -> Any:
        if env.get(env_key):
            return env[env_key]
        if file_key in file_values:
            return file_values[file_key]
        return default

    base_url = str(pick("KUDOS_API_BASE_URL", "api_base_url", DEFAULT_API_BASE_URL)).rstrip("/")

    return Settings(
        api_base_url=base_url or DEFAULT_API_BASE_URL,
        token_ttl_days=_as_ttl(pick("KUDOS_TOKEN_TTL_DAYS", "token_ttl_days", DEFAULT_TOKEN_TTL_DAYS)),
        home_dir=home_dir,
        demo_mode=_as_bool(pick("KUDOS_DEMO_MODE", "demo_mode", False)),
        log_level=str(pick("KUDOS_LOG_LEVEL", "log_level", "WARNING")).upper(),
    )
