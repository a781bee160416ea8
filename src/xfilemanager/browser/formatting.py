# Presentation helpers: icons, sizes, dates and link targets for listing entries.
# Created: 2026-10-12

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from urllib.parse import quote, urlencode

from xfilemanager.browser.models import DirectoryEntry, ViewMode

# URL prefix under which the root directory is served as static files.
FILES_MOUNT = "/files"

SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")

FILE_ICONS: dict[str, str] = {
    # Images
    "jpg": "image",
    "jpeg": "image",
    "png": "image",
    "gif": "image",
    "bmp": "image",
    "svg": "image",
    "webp": "image",
    # Documents
    "pdf": "pdf",
    "doc": "word",
    "docx": "word",
    "xls": "excel",
    "xlsx": "excel",
    "ppt": "powerpoint",
    "pptx": "powerpoint",
    "txt": "text",
    "rtf": "text",
    "md": "text",
    # Web
    "html": "html",
    "htm": "html",
    "css": "css",
    "js": "javascript",
    "json": "javascript",
    "php": "php",
    "xml": "xml",
    # Archives
    "zip": "archive",
    "rar": "archive",
    "gz": "archive",
    "tar": "archive",
    "7z": "archive",
    # Audio / video
    "mp3": "audio",
    "wav": "audio",
    "ogg": "audio",
    "mp4": "video",
    "avi": "video",
    "mov": "video",
    "wmv": "video",
    "flv": "video",
    "mkv": "video",
    # Other
    "exe": "application",
    "dll": "application",
    "bat": "script",
    "sh": "script",
    "py": "script",
    "sql": "database",
    "db": "database",
}

# Remix Icon classes used by the templates.
ICON_CLASSES: dict[str, str] = {
    "folder": "ri-folder-fill",
    "home": "ri-home-4-fill",
    "image": "ri-image-fill",
    "pdf": "ri-file-pdf-fill",
    "word": "ri-file-word-fill",
    "excel": "ri-file-excel-fill",
    "powerpoint": "ri-file-ppt-fill",
    "text": "ri-file-text-fill",
    "html": "ri-html5-fill",
    "css": "ri-css3-fill",
    "javascript": "ri-javascript-fill",
    "php": "ri-code-s-slash-fill",
    "xml": "ri-file-code-fill",
    "archive": "ri-file-zip-fill",
    "audio": "ri-music-2-fill",
    "video": "ri-movie-fill",
    "application": "ri-apps-fill",
    "script": "ri-terminal-box-fill",
    "database": "ri-database-2-fill",
    "file": "ri-file-fill",
}


@dataclass(frozen=True)
class EntryLink:
    href: str
    download: bool = False


def file_icon(entry: DirectoryEntry) -> str:
    """Icon category for an entry: folder, home (index file) or an extension category."""
    if entry.is_dir:
        return "folder"
    if entry.is_index:
        return "home"
    return FILE_ICONS.get(entry.extension.lower(), "file")


def icon_class(icon: str) -> str:
    return ICON_CLASSES.get(icon, ICON_CLASSES["file"])


def format_file_size(size_bytes: int) -> str:
    """Human-readable size: 0 -> "0 B", 1536 -> "1.5 KB"."""
    if size_bytes <= 0:
        return "0 B"

    unit = 0
    while unit < len(SIZE_UNITS) - 1 and size_bytes >= 1024 ** (unit + 1):
        unit += 1

    value = f"{size_bytes / 1024**unit:.2f}".rstrip("0").rstrip(".")
    return f"{value} {SIZE_UNITS[unit]}"


def format_date(value: datetime, fmt: str) -> str:
    return value.strftime(fmt)


def listing_url(path: str = "", view: ViewMode | None = None) -> str:
    """Query-string link back to the listing page."""
    params = {"path": path}
    if view is not None:
        params["view"] = view.value
    return "?" + urlencode(params)


def file_url(relative_path: str) -> str:
    return f"{FILES_MOUNT}/{quote(relative_path)}"


def entry_link(entry: DirectoryEntry, view: ViewMode | None = None) -> EntryLink:
    """Where clicking an entry goes.

    Folders navigate the listing, index files open in place and every other
    file is offered as a download.
    """
    if entry.is_dir:
        return EntryLink(href=listing_url(entry.relative_path, view))
    if entry.is_index:
        return EntryLink(href=file_url(entry.relative_path))
    return EntryLink(href=file_url(entry.relative_path), download=True)
