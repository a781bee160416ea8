# Installer schemas.
# Created: 2026-10-12

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from xfilemanager.api.v1.schemas.common import APIResponse


class InstallRequest(BaseModel):
    """Directories to install into, absolute or relative to the root."""

    directories: list[str] = Field(default_factory=list)


class InstallResultItem(BaseModel):
    directory: str
    status: Literal["installed", "skipped", "failed"]
    message: str


class InstallResponse(APIResponse):
    results: list[InstallResultItem] = []
    installed: int = 0
    skipped: int = 0
    failed: int = 0


class CandidateItem(BaseModel):
    relative: str
    absolute: str


class CandidatesResponse(APIResponse):
    root: str
    directories: list[CandidateItem] = []
