# Directory listing: resolve a requested path, then scan it.
# Created: 2026-10-12

from __future__ import annotations

from dataclasses import dataclass

from xfilemanager.browser.models import DirectoryEntry, ResolvedPath
from xfilemanager.browser.resolver import PathResolver
from xfilemanager.browser.scanner import DirectoryScanner
from xfilemanager.config import Settings


@dataclass
class DirectoryListing:
    location: ResolvedPath
    entries: list[DirectoryEntry]

    @property
    def count(self) -> int:
        return len(self.entries)

    @property
    def is_empty(self) -> bool:
        return not self.entries


class DirectoryBrowser:
    """Resolver and scanner bound to one settings value."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.resolver = PathResolver(settings)
        self.scanner = DirectoryScanner(settings)

    def browse(self, requested_path: str | None) -> DirectoryListing:
        location = self.resolver.resolve(requested_path)
        entries = self.scanner.list(location.absolute, location.relative)
        return DirectoryListing(location=location, entries=entries)
