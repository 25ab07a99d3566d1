from __future__ import annotations

"""
Project Resource Data Models.

Provides the resource kinds, resource nodes, search result DTO and error
types shared by the project tree primitives and the file finder.
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from projectfilefinder.infra.fs import resolve_absolute_path

# -----------------------------------------------------------------------------
# ERROR TYPES
# -----------------------------------------------------------------------------

class ProjectTreeError(Exception):
    """Base class for failures raised by project tree collaborators."""


class ResolutionError(ProjectTreeError):
    """A resource cannot produce an absolute on-disk location."""


class TraversalError(ProjectTreeError):
    """The project tree could not be read."""

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

class ResourceKind(str, Enum):
    PROJECT = "project"
    FOLDER = "folder"
    FILE = "file"


@dataclass(frozen=True)
class ProjectResource:
    """
    Represents a single entry of a project tree.

    Attributes:
        kind: Structural kind of the entry.
        rel_path: Project-relative logical path, '/'-separated. Empty for
                  the project itself.
        location: Raw on-disk location backing the entry, or None when the
                  entry is not bound to the filesystem.
        linked: True for linked resources and OS symbolic links, whose
                location lives outside the regular project storage.
        follow_symlinks: Whether resolution follows OS symbolic links.
    """
    kind: ResourceKind
    rel_path: str
    location: Optional[str] = None
    linked: bool = False
    follow_symlinks: bool = False

    @property
    def name(self) -> str:
        return self.rel_path.rsplit("/", 1)[-1]

    @property
    def is_file(self) -> bool:
        return self.kind is ResourceKind.FILE

    def resolve_location(self) -> str:
        """
        Resolve the absolute on-disk path of this file resource.

        Returns:
            str: Absolute filesystem path.

        Raises:
            ResolutionError: The entry is not a file, is unbound, or its
                             location cannot be resolved.
        """
        if not self.is_file:
            raise ResolutionError(f"Not a file resource: '{self.rel_path}'")
        if not self.location:
            raise ResolutionError(f"Resource has no location: '{self.rel_path}'")
        if self.linked and not os.path.exists(self.location):
            raise ResolutionError(f"Broken link: '{self.rel_path}' -> '{self.location}'")

        try:
            return resolve_absolute_path(self.location, follow_symlinks=self.follow_symlinks)
        except OSError as e:
            raise ResolutionError(f"Cannot resolve '{self.rel_path}': {e}") from e


def file_resource(rel_path: str, location: Optional[str], linked: bool = False) -> ProjectResource:
    """Shortcut factory for FILE resources."""
    return ProjectResource(ResourceKind.FILE, rel_path, location=location, linked=linked)


def folder_resource(rel_path: str, location: Optional[str] = None) -> ProjectResource:
    """Shortcut factory for FOLDER resources."""
    return ProjectResource(ResourceKind.FOLDER, rel_path, location=location)


# Visitor contract: return True to keep visiting, False to stop the traversal.
ResourceVisitor = Callable[[ProjectResource], bool]

# -----------------------------------------------------------------------------
# SEARCH RESULT
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SearchResult:
    """
    Outcome of a single project file lookup.

    Attributes:
        target: The absolute path that was searched for.
        file: Matched resource, or the caller's fallback when nothing matched.
        matched: True only when a project file resolved to the target.
        visited: Number of resources handed to the visitor.
        skipped: Number of file candidates that failed to resolve.
        error: Traversal failure message, empty when the walk completed.
    """
    target: str
    file: Optional[ProjectResource]
    matched: bool = False
    visited: int = 0
    skipped: int = 0
    error: str = ""

    @property
    def ok(self) -> bool:
        return not self.error

    def to_dict(self) -> dict:
        f = self.file
        return {
            "target": self.target,
            "matched": self.matched,
            "file": None if f is None else {
                "rel_path": f.rel_path,
                "location": f.location,
                "linked": f.linked,
                "name": f.name,
            },
            "visited": self.visited,
            "skipped": self.skipped,
            "error": self.error,
        }
