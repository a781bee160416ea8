"""Directory browser data models.

Both models are built fresh for every request from a live filesystem scan and
thrown away once the response is rendered.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path


class ViewMode(str, Enum):
    """Listing layout. Purely a rendering toggle."""

    GRID = "grid"
    LIST = "list"

    @classmethod
    def parse(cls, value: str | None, default: "ViewMode | None" = None) -> "ViewMode":
        """Map a query-string value to a mode; anything unknown falls back."""
        fallback = default or cls.GRID
        if not value:
            return fallback
        try:
            return cls(value.lower())
        except ValueError:
            return fallback


@dataclass(frozen=True)
class DirectoryEntry:
    """One child of the directory being listed."""

    name: str
    relative_path: str  # forward slashes, no leading slash
    is_dir: bool
    size_bytes: int
    modified_at: datetime
    extension: str = ""  # lowercase, no dot
    is_index: bool = False


@dataclass(frozen=True)
class BreadcrumbSegment:
    label: str
    path: str
    is_active: bool = False


@dataclass
class ResolvedPath:
    """A requested path after sanitizing and containment checks."""

    absolute: Path
    relative: str
    breadcrumbs: list[BreadcrumbSegment] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.absolute.name

    @property
    def is_root(self) -> bool:
        return not self.relative
