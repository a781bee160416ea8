"""Configuration for XFile Manager.

Settings come from three places, highest priority first:

  1. ``XFILE_*`` environment variables (``XFILE_ROOT_DIR=/srv/www``)
  2. ``~/.xfilemanager/config.json``
  3. the defaults below

List fields are read from the environment as JSON
(``XFILE_INDEX_FILES='["index.html"]'``).
"""

from __future__ import annotations

import json
import logging
import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

ENV_PREFIX = "XFILE_"

# Bundled deployment files copied by the installer.
DEPLOY_DIR = Path(__file__).parent / "deploy"


def get_config_dir() -> Path:
    """Directory holding the optional JSON config file."""
    return Path.home() / ".xfilemanager"


def get_config_path() -> Path:
    return get_config_dir() / "config.json"


class Settings(BaseSettings):
    """Startup configuration, passed explicitly to the resolver, scanner and installer."""

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, extra="ignore")

    # Browsing
    root_dir: Path = Field(
        default_factory=Path.cwd,
        description="Document root; browsing never escapes it",
    )
    hide_files: list[str] = Field(
        default_factory=lambda: [".", "..", ".htaccess", ".git", ".gitignore"],
        description="Entry names never shown in a listing",
    )
    ignored_extensions: list[str] = Field(
        default_factory=list,
        description="File extensions left out of listings (without the dot)",
    )
    index_files: list[str] = Field(
        default_factory=lambda: ["index.php", "index.html", "index.htm"],
        description="Files opened in place instead of downloaded, listed first",
    )
    date_format: str = Field(default="%b %d, %Y %I:%M %p", description="strftime pattern")
    default_view: str = Field(default="grid", description="grid or list")

    # Web server
    web_host: str = "127.0.0.1"
    web_port: int = 8080

    # Installer
    install_source_dir: Path = Field(default=DEPLOY_DIR)
    install_files: list[str] = Field(default_factory=lambda: ["index.html", ".htaccess"])
    install_skip_existing: bool = True
    installer_allowed_hosts: list[str] = Field(default_factory=lambda: ["127.0.0.1", "::1"])

    @field_validator("root_dir", "install_source_dir")
    @classmethod
    def _expand_user(cls, v: Path) -> Path:
        return v.expanduser()

    @field_validator("ignored_extensions")
    @classmethod
    def _normalize_extensions(cls, v: list[str]) -> list[str]:
        return [ext.lower().lstrip(".") for ext in v if ext.strip(".")]

    @field_validator("default_view")
    @classmethod
    def _check_view(cls, v: str) -> str:
        v = v.lower()
        if v not in ("grid", "list"):
            raise ValueError(f"default_view must be 'grid' or 'list', got {v!r}")
        return v

    @classmethod
    def load(cls) -> Settings:
        """Build settings from the config file, letting environment variables win."""
        data: dict = {}
        config_path = get_config_path()
        if config_path.exists():
            try:
                data = json.loads(config_path.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as exc:
                logger.warning("Ignoring unreadable config file %s: %s", config_path, exc)
                data = {}
            if not isinstance(data, dict):
                logger.warning("Ignoring config file %s: top level is not an object", config_path)
                data = {}

        overrides = {
            key: value
            for key, value in data.items()
            if f"{ENV_PREFIX}{key.upper()}" not in os.environ
        }
        return cls(**overrides)


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings, loaded once."""
    return Settings.load()
