# Directory scanner: one-level listing, hidden-name rules and ordering.
# Created: 2026-10-12

from __future__ import annotations

import logging
import os
import stat
from datetime import datetime
from pathlib import Path

from xfilemanager.browser.models import DirectoryEntry
from xfilemanager.browser.resolver import is_within
from xfilemanager.config import Settings

logger = logging.getLogger(__name__)


def file_extension(name: str) -> str:
    """Lowercase text after the last dot, or "" when there is none."""
    if "." not in name:
        return ""
    return name.rpartition(".")[2].lower()


class DirectoryScanner:
    """Lists the direct children of a directory, folders first."""

    def __init__(self, settings: Settings):
        self.root = settings.root_dir.resolve()
        self.hide_files = set(settings.hide_files)
        self.index_files = {name.lower() for name in settings.index_files}
        self.ignored_extensions = set(settings.ignored_extensions)

    def is_index(self, name: str) -> bool:
        return name.lower() in self.index_files

    def is_hidden(self, name: str) -> bool:
        """Whether *name* stays out of listings. Index files are always shown."""
        if self.is_index(name):
            return False
        if name in self.hide_files or (name.startswith(".") and name != ".."):
            return True
        return bool(self.ignored_extensions) and file_extension(name) in self.ignored_extensions

    def list(self, directory: Path, relative_path: str = "") -> list[DirectoryEntry]:
        """Scan *directory*; a missing or unreadable directory yields ``[]``."""
        try:
            with os.scandir(directory) as it:
                children = list(it)
        except OSError as exc:
            logger.debug("Cannot list %s: %s", directory, exc)
            return []

        folders: list[DirectoryEntry] = []
        files: list[DirectoryEntry] = []
        for child in children:
            if self.is_hidden(child.name):
                continue
            entry = self._build_entry(child, relative_path)
            if entry is None:
                continue
            if entry.is_dir:
                folders.append(entry)
            else:
                files.append(entry)

        folders.sort(key=lambda e: (e.name.lower(), e.name))
        files.sort(key=lambda e: (not e.is_index, e.name.lower(), e.name))
        return folders + files

    def _build_entry(self, child: os.DirEntry, relative_path: str) -> DirectoryEntry | None:
        try:
            st = child.stat()
            is_dir = child.is_dir()
            is_link = child.is_symlink()
        except OSError as exc:
            # Deleted mid-scan, dangling symlink, or no permission.
            logger.debug("Skipping %s: %s", child.path, exc)
            return None

        if is_link and not is_within(Path(os.path.realpath(child.path)), self.root):
            logger.debug("Skipping %s: link leads outside the root", child.path)
            return None

        return DirectoryEntry(
            name=child.name,
            relative_path=f"{relative_path}/{child.name}".lstrip("/"),
            is_dir=is_dir,
            size_bytes=st.st_size if stat.S_ISREG(st.st_mode) else 0,
            modified_at=datetime.fromtimestamp(st.st_mtime),
            extension=file_extension(child.name),
            is_index=self.is_index(child.name),
        )
