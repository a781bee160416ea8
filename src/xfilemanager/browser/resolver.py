# Path resolver: untrusted relative path -> directory inside the root.
# Created: 2026-10-12
#
# Every failure degrades to the root directory. Nothing here raises to the caller.

from __future__ import annotations

import logging
import posixpath
import re
from pathlib import Path

from xfilemanager.browser.models import BreadcrumbSegment, ResolvedPath
from xfilemanager.config import Settings

logger = logging.getLogger(__name__)

HOME_LABEL = "Home"

# Applied in order; "\\" goes first so "..\\" is caught as "../".
_TRAVERSAL_TOKENS = ("\\", "../", "..\\", "./")
_SLASH_RUN = re.compile(r"/+")


def normalize_path(requested: str) -> str:
    """Strip traversal tokens and redundant slashes from a user-supplied path.

    >>> normalize_path("..\\\\a//b/../c/")
    'a/b/c'
    """
    path = requested.replace("\x00", "")
    for token in _TRAVERSAL_TOKENS:
        path = path.replace(token, "/")
    path = _SLASH_RUN.sub("/", path).strip("/")
    if not path:
        return ""
    # A bare trailing ".." still climbs; whatever would leave the root is dropped.
    path = posixpath.normpath(path)
    return "/".join(part for part in path.split("/") if part not in ("", ".", ".."))


def is_within(path: Path, root: Path) -> bool:
    """Segment-aware ancestor check on already canonical paths."""
    return path == root or path.is_relative_to(root)


def build_breadcrumbs(relative: str) -> list[BreadcrumbSegment]:
    parts = [part for part in relative.split("/") if part]
    crumbs = [BreadcrumbSegment(label=HOME_LABEL, path="", is_active=not parts)]

    current = ""
    for i, part in enumerate(parts):
        current = f"{current}/{part}" if current else part
        crumbs.append(
            BreadcrumbSegment(label=part, path=current, is_active=i == len(parts) - 1)
        )
    return crumbs


class PathResolver:
    """Resolves query-string paths against the configured root."""

    def __init__(self, settings: Settings):
        self.root = settings.root_dir.resolve()

    def _root_result(self) -> ResolvedPath:
        return ResolvedPath(absolute=self.root, relative="", breadcrumbs=build_breadcrumbs(""))

    def resolve(self, requested_path: str | None) -> ResolvedPath:
        relative = normalize_path(requested_path or "")
        if not relative:
            return self._root_result()

        try:
            candidate = (self.root / relative).resolve(strict=True)
        except (OSError, RuntimeError, ValueError) as exc:
            logger.debug("Path %r did not resolve (%s); using root", requested_path, exc)
            return self._root_result()

        if not is_within(candidate, self.root):
            logger.warning("Rejected path outside root: %r -> %s", requested_path, candidate)
            return self._root_result()

        if not candidate.is_dir():
            logger.debug("Path %r is not a directory; using root", requested_path)
            return self._root_result()

        return ResolvedPath(
            absolute=candidate,
            relative=relative,
            breadcrumbs=build_breadcrumbs(relative),
        )
