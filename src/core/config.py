"""Core configuration.

Centralises environment variables (pydantic-settings) so the CLI and the
loaders read configuration the same way. Per-user defaults live in a `.env`
file under the user config directory and are edited with python-dotenv, the
same parser pydantic-settings reads them back with.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from dotenv import dotenv_values, set_key, unset_key
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "NET_PHRASEBOOK_"


def get_user_config_dir() -> Path:
    """Per-user configuration directory.

    ``NET_PHRASEBOOK_CONFIG_DIR`` wins; otherwise %APPDATA% on Windows,
    Application Support on macOS and ``$XDG_CONFIG_HOME`` (or ``~/.config``)
    elsewhere.
    """

    override = (os.environ.get(f"{ENV_PREFIX}CONFIG_DIR") or "").strip()
    if override:
        return Path(override).expanduser()

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
    return base / "net-phrasebook"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def env_var_name(field: str) -> str:
    return f"{ENV_PREFIX}{field.upper()}"


def read_user_settings() -> dict[str, str]:
    """Settings stored in the user .env, keyed by field name."""

    env_path = get_user_env_file()
    if not env_path.is_file():
        return {}
    stored = dotenv_values(env_path)
    return {
        field: value
        for field in AppSettings.model_fields
        if (value := stored.get(env_var_name(field))) is not None
    }


def write_user_settings(**values: str | Path | None) -> Path:
    """Store settings in the user .env; a ``None`` value removes the setting.

    Raises:
        ValueError: a name is not an `AppSettings` field.
    """

    unknown = sorted(set(values) - set(AppSettings.model_fields))
    if unknown:
        raise ValueError(f"unknown settings: {', '.join(unknown)}")

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)
    env_path.touch(exist_ok=True)
    present = dotenv_values(env_path)

    for field, value in values.items():
        key = env_var_name(field)
        if value is None:
            if key in present:
                unset_key(env_path, key)
        else:
            set_key(env_path, key, str(value), quote_mode="never")
    return env_path


class AppSettings(BaseSettings):
    """Application settings.

    Values come from ``NET_PHRASEBOOK_*`` environment variables, the project
    ``.env`` and then the per-user ``.env``.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra="ignore",
        case_sensitive=False,
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    phrasebook_path: Path | None = Field(
        default=None,
        description="External YAML phrasebook used when no --source is given.",
    )
    default_platform: str | None = Field(
        default=None,
        min_length=1,
        description="Platform used when no --platform is given.",
    )
    placeholder_pattern: str = Field(
        default=r":(\w+)",
        min_length=1,
        description="Regex (one capture group) matching placeholders in values.",
    )
    log_level: str = Field(
        default="WARNING",
        pattern=r"(?i)^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level for the CLI.",
    )
