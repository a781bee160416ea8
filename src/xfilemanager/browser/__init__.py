"""Directory browsing core: path resolution, scanning and formatting."""

from xfilemanager.browser.listing import DirectoryBrowser, DirectoryListing
from xfilemanager.browser.models import BreadcrumbSegment, DirectoryEntry, ResolvedPath, ViewMode
from xfilemanager.browser.resolver import PathResolver
from xfilemanager.browser.scanner import DirectoryScanner

__all__ = [
    "BreadcrumbSegment",
    "DirectoryBrowser",
    "DirectoryEntry",
    "DirectoryListing",
    "DirectoryScanner",
    "PathResolver",
    "ResolvedPath",
    "ViewMode",
]
