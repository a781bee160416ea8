# Directory browser router: JSON listing of a directory under the root.
# Created: 2026-10-12

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from xfilemanager.api.deps import get_app_settings, get_browser
from xfilemanager.api.v1.schemas.browse import Breadcrumb, BrowseResponse, FileEntry
from xfilemanager.browser import DirectoryBrowser, DirectoryEntry, ViewMode
from xfilemanager.browser.formatting import (
    entry_link,
    file_icon,
    format_date,
    format_file_size,
)
from xfilemanager.config import Settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Browse"])


def _to_file_entry(entry: DirectoryEntry, settings: Settings, view: ViewMode) -> FileEntry:
    link = entry_link(entry, view)
    return FileEntry(
        name=entry.name,
        path=entry.relative_path,
        isDir=entry.is_dir,
        isIndex=entry.is_index,
        sizeBytes=entry.size_bytes,
        size="" if entry.is_dir else format_file_size(entry.size_bytes),
        modified=format_date(entry.modified_at, settings.date_format),
        modifiedTs=entry.modified_at.timestamp(),
        extension=entry.extension,
        icon=file_icon(entry),
        href=link.href,
        download=link.download,
    )


@router.get("/browse", response_model=BrowseResponse)
def browse_directory(
    path: str = "",
    view: str | None = None,
    browser: DirectoryBrowser = Depends(get_browser),
    settings: Settings = Depends(get_app_settings),
):
    """List a directory under the root. Unsafe or missing paths list the root."""
    mode = ViewMode.parse(view, ViewMode(settings.default_view))
    listing = browser.browse(path)
    location = listing.location

    return BrowseResponse(
        path=location.relative,
        name=location.name,
        breadcrumbs=[
            Breadcrumb(label=c.label, path=c.path, active=c.is_active)
            for c in location.breadcrumbs
        ],
        files=[_to_file_entry(e, settings, mode) for e in listing.entries],
        count=listing.count,
    )
