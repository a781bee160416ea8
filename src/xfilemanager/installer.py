"""Installer: copies the deployment files into selected directories under the root.

A directory that already has an index file is skipped, so an existing site is
never overwritten. Each directory is handled on its own; a failure in one
does not stop the rest.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from xfilemanager.browser.resolver import is_within
from xfilemanager.browser.scanner import DirectoryScanner
from xfilemanager.config import Settings

logger = logging.getLogger(__name__)

# Candidate discovery goes this many levels below the root.
CANDIDATE_DEPTH = 2


class InstallStatus(str, Enum):
    INSTALLED = "installed"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class InstallResult:
    directory: str
    status: InstallStatus
    message: str


@dataclass
class InstallReport:
    results: list[InstallResult] = field(default_factory=list)

    def _count(self, status: InstallStatus) -> int:
        return sum(1 for r in self.results if r.status is status)

    @property
    def installed(self) -> int:
        return self._count(InstallStatus.INSTALLED)

    @property
    def skipped(self) -> int:
        return self._count(InstallStatus.SKIPPED)

    @property
    def failed(self) -> int:
        return self._count(InstallStatus.FAILED)


@dataclass(frozen=True)
class CandidateDirectory:
    relative: str
    absolute: str


class Installer:
    def __init__(self, settings: Settings):
        self.root = settings.root_dir.resolve()
        self.source_dir = settings.install_source_dir
        self.files = list(settings.install_files)
        self.skip_existing = settings.install_skip_existing
        self.index_files = {name.lower() for name in settings.index_files}
        self._scanner = DirectoryScanner(settings)

    def candidates(self) -> list[CandidateDirectory]:
        """Subdirectories of the root, two levels deep, sorted by relative path."""
        found: list[CandidateDirectory] = []
        self._collect(self.root, "", found)
        found.sort(key=lambda c: c.relative)
        return found

    def _collect(self, directory: Path, relative: str, found: list[CandidateDirectory]) -> None:
        try:
            children = sorted(directory.iterdir())
        except OSError as exc:
            logger.debug("Cannot scan %s: %s", directory, exc)
            return

        for child in children:
            if self._scanner.is_hidden(child.name):
                continue
            try:
                if child.is_symlink() or not child.is_dir():
                    continue
            except OSError:
                continue
            child_relative = f"{relative}/{child.name}".lstrip("/")
            found.append(CandidateDirectory(relative=child_relative, absolute=str(child)))
            if child_relative.count("/") + 1 < CANDIDATE_DEPTH:
                self._collect(child, child_relative, found)

    def _target_path(self, directory: str) -> Path:
        target = Path(directory.rstrip("/") or "/").expanduser()
        if not target.is_absolute():
            target = self.root / target
        return target.resolve()

    def install_one(self, directory: str) -> InstallResult:
        try:
            target = self._target_path(directory)
        except (OSError, RuntimeError, ValueError) as exc:
            logger.warning("Invalid install target %r: %s", directory, exc)
            return InstallResult(directory, InstallStatus.FAILED, "Invalid directory")

        if not is_within(target, self.root):
            logger.warning("Refusing to install outside root: %s", directory)
            return InstallResult(directory, InstallStatus.FAILED, "Outside the served directory")

        try:
            target.mkdir(parents=True, exist_ok=True)
            existing = {p.name.lower() for p in target.iterdir()}
        except OSError as exc:
            logger.warning("Cannot prepare %s: %s", target, exc)
            return InstallResult(directory, InstallStatus.FAILED, "Failed to create directory")

        if self.skip_existing and existing & self.index_files:
            return InstallResult(
                directory, InstallStatus.SKIPPED, "Skipped - index file already exists"
            )

        for name in self.files:
            source = self.source_dir / name
            if not source.is_file():
                continue
            try:
                shutil.copyfile(source, target / name)
            except OSError as exc:
                logger.warning("Copying %s into %s failed: %s", name, target, exc)
                return InstallResult(directory, InstallStatus.FAILED, "Failed to copy files")

        logger.info("Installed into %s", target)
        return InstallResult(directory, InstallStatus.INSTALLED, "Installed successfully")

    def install(self, directories: Iterable[str]) -> InstallReport:
        report = InstallReport()
        for directory in directories:
            report.results.append(self.install_one(directory))
        return report
