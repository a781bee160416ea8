"""Local-only access guard for the installer.

The installer writes into the served tree, so it only answers requests that
genuinely come from this machine: the client address must be an allowed
loopback host and the request must not carry reverse-proxy headers (a proxy
running on localhost would otherwise make every remote caller look local).
"""

import logging
from urllib.parse import urlsplit

from fastapi import Depends, HTTPException, Request

from xfilemanager.api.deps import get_app_settings
from xfilemanager.config import Settings

logger = logging.getLogger(__name__)

_PROXY_HEADERS = ("x-forwarded-for", "x-real-ip", "forwarded", "cf-connecting-ip")


def _is_genuine_localhost(request_or_ws, settings: Settings) -> bool:
    """Check if a request originates from an allowed local host, not a proxy."""
    client_host = request_or_ws.client.host if request_or_ws.client else None
    if client_host not in settings.installer_allowed_hosts:
        return False

    headers = request_or_ws.headers
    for hdr in _PROXY_HEADERS:
        if headers.get(hdr):
            return False

    return True


def require_localhost(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> None:
    """FastAPI dependency rejecting non-local callers with 403."""
    if not _is_genuine_localhost(request, settings):
        client_host = request.client.host if request.client else "unknown"
        logger.warning("Installer request refused for %s", client_host)
        raise HTTPException(
            status_code=403,
            detail="The installer can only be run locally.",
        )


def _is_same_origin(request) -> bool:
    """Check that a browser-sent Origin (or Referer) names this server.

    Requests without either header (curl, scripts) pass; a page on another
    site cannot submit the installer form on the user's behalf.
    """
    source = request.headers.get("origin") or request.headers.get("referer")
    if not source:
        return True
    host = request.headers.get("host", "")
    return bool(host) and urlsplit(source).netloc.lower() == host.lower()


def require_same_origin(request: Request) -> None:
    """FastAPI dependency rejecting cross-site installer submissions with 403."""
    if not _is_same_origin(request):
        logger.warning(
            "Cross-site installer request refused (origin %r)",
            request.headers.get("origin") or request.headers.get("referer"),
        )
        raise HTTPException(
            status_code=403,
            detail="Cross-site installer requests are not allowed.",
        )
