# Directory browser schemas.
# Created: 2026-10-12

from __future__ import annotations

from pydantic import BaseModel

from xfilemanager.api.v1.schemas.common import APIResponse


class Breadcrumb(BaseModel):
    label: str
    path: str
    active: bool = False


class FileEntry(BaseModel):
    """A single file or directory entry."""

    name: str
    path: str
    isDir: bool = False
    isIndex: bool = False
    sizeBytes: int = 0
    size: str = ""
    modified: str = ""
    modifiedTs: float = 0.0
    extension: str = ""
    icon: str = "file"
    href: str = ""
    download: bool = False


class BrowseResponse(APIResponse):
    """Directory listing."""

    path: str
    name: str
    breadcrumbs: list[Breadcrumb] = []
    files: list[FileEntry] = []
    count: int = 0
