"""Configuration loading for the server.

Sources, later ones winning per key:
    1. Model defaults
    2. ``$XDG_CONFIG_HOME/yandex-webmaster-mcp/config.toml``
    3. The file named by ``$WEBMASTER_MCP_CONFIG``
    4. The ``path`` argument (the CLI's ``--config``)
    5. ``overrides`` passed by the caller

The API token is then taken from the env var named by ``api.token_env``
(``YANDEX_API_KEY`` by default) unless a file already set ``api.token``.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from webmaster_mcp.core.errors import ConfigError

from .schema import WebmasterConfig

CONFIG_ENV = "WEBMASTER_MCP_CONFIG"


def _user_config_path() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "yandex-webmaster-mcp" / "config.toml"


def _config_files(path: str | Path | None) -> list[Path]:
    """Return the config files to apply, lowest priority first."""
    files: list[Path] = []

    user = _user_config_path()
    if user.is_file():
        files.append(user)

    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        if not Path(env_path).is_file():
            msg = f"{CONFIG_ENV} points to non-existent file: {env_path}"
            raise ConfigError(msg)
        files.append(Path(env_path))

    if path is not None:
        if not Path(path).is_file():
            msg = f"Config file not found: {path}"
            raise ConfigError(msg)
        files.append(Path(path))

    return files


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"Cannot read config file {path}: {e}"
        raise ConfigError(msg) from e


def _apply(target: dict[str, Any], layer: dict[str, Any]) -> None:
    """Apply one layer onto *target*, key by key within each ``[section]``."""
    for section, values in layer.items():
        current = target.get(section)
        if isinstance(current, dict) and isinstance(values, dict):
            current.update(values)
        elif isinstance(values, dict):
            target[section] = dict(values)
        else:
            target[section] = values


def load_config(
    path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> WebmasterConfig:
    """Load and validate configuration.

    Raises:
        ConfigError: On a missing or invalid file, or a value out of range.
    """
    raw: dict[str, Any] = {}
    for config_file in _config_files(path):
        _apply(raw, _read_toml(config_file))
    if overrides:
        _apply(raw, overrides)

    try:
        config = WebmasterConfig.model_validate(raw)
    except ValidationError as e:
        msg = f"Configuration validation failed: {e}"
        raise ConfigError(msg) from e

    if not config.api.token and config.api.token_env:
        config.api.token = os.environ.get(config.api.token_env) or None
    return config


def require_token(config: WebmasterConfig) -> str:
    """Return the API token or raise ConfigError naming its env var."""
    token = (config.api.token or "").strip()
    if not token:
        msg = (
            f"{config.api.token_env} environment variable is required "
            "(or set api.token in the config file)"
        )
        raise ConfigError(msg)
    return token
