# Shared FastAPI dependencies for the API layer.
# Created: 2026-10-12

from __future__ import annotations

from fastapi import Request

from xfilemanager.browser import DirectoryBrowser
from xfilemanager.config import Settings, get_settings
from xfilemanager.installer import Installer


def get_app_settings(request: Request) -> Settings:
    """Settings bound to the running app, falling back to the process-wide ones."""
    settings = getattr(request.app.state, "settings", None)
    return settings if settings is not None else get_settings()


def get_browser(request: Request) -> DirectoryBrowser:
    return DirectoryBrowser(get_app_settings(request))


def get_installer(request: Request) -> Installer:
    return Installer(get_app_settings(request))
