# Installer router: list candidate directories, install into selected ones.
# Created: 2026-10-12
#
# Local callers only (see dashboard_auth.require_localhost).

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from xfilemanager.api.deps import get_installer
from xfilemanager.api.v1.schemas.common import ErrorResponse
from xfilemanager.api.v1.schemas.install import (
    CandidateItem,
    CandidatesResponse,
    InstallRequest,
    InstallResponse,
    InstallResultItem,
)
from xfilemanager.dashboard_auth import require_localhost, require_same_origin
from xfilemanager.installer import Installer

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Install"],
    dependencies=[Depends(require_localhost)],
    responses={403: {"model": ErrorResponse}},
)


@router.get("/install/candidates", response_model=CandidatesResponse)
def list_candidates(installer: Installer = Depends(get_installer)):
    """Subdirectories of the root that can receive the deployment files."""
    return CandidatesResponse(
        root=str(installer.root),
        directories=[
            CandidateItem(relative=c.relative, absolute=c.absolute)
            for c in installer.candidates()
        ],
    )


@router.post(
    "/install",
    response_model=InstallResponse,
    dependencies=[Depends(require_same_origin)],
)
def install(body: InstallRequest, installer: Installer = Depends(get_installer)):
    """Copy the deployment files into each requested directory."""
    report = installer.install(body.directories)
    logger.info(
        "Install finished: %d installed, %d skipped, %d failed",
        report.installed,
        report.skipped,
        report.failed,
    )
    return InstallResponse(
        results=[
            InstallResultItem(directory=r.directory, status=r.status.value, message=r.message)
            for r in report.results
        ],
        installed=report.installed,
        skipped=report.skipped,
        failed=report.failed,
    )
