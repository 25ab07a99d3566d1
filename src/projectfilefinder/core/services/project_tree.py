from __future__ import annotations

"""
Project Tree Primitives.

Defines the tree-read contract consumed by the file finder and two concrete
trees: one backed by an explicit resource list handed over by a host
project model, and one that walks a project directory on demand while
honoring linked resources.
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Mapping, Optional, Set, Tuple

from projectfilefinder.domain.resource_models import (
    ProjectResource,
    ResourceKind,
    ResourceVisitor,
    TraversalError,
    file_resource,
    folder_resource,
)
from projectfilefinder.infra.fs import RESOURCE_SEP, normalize_path, to_resource_path

logger = logging.getLogger(__name__)


# ==============================================================================
# CONTRACT
# ==============================================================================

class ProjectTree(ABC):
    """
    Abstract hierarchical project model.

    Implementations visit the project itself, its folders and its files,
    one resource at a time, and stop as soon as the visitor returns False.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        self._closed = True

    def _ensure_open(self) -> None:
        if self._closed:
            raise TraversalError(f"Project '{self.name}' is closed")

    @abstractmethod
    def accept(self, visitor: ResourceVisitor) -> None:
        """
        Visit every resource of the project.

        Args:
            visitor: Callback invoked once per resource. Returning False
                     ends the traversal; no further resource is visited.

        Raises:
            TraversalError: The tree cannot be read.
        """


# ==============================================================================
# HOST-SUPPLIED TREE
# ==============================================================================

class InMemoryProjectTree(ProjectTree):
    """
    Tree over an explicit resource sequence, visited in the given order
    after the project resource itself.
    """

    def __init__(
            self,
            name: str,
            resources: Iterable[ProjectResource],
            location: Optional[str] = None,
    ) -> None:
        super().__init__(name)
        self.location = location
        self._resources: List[ProjectResource] = list(resources)

    @classmethod
    def from_mapping(
            cls,
            name: str,
            files: Mapping[str, Optional[str]],
            location: Optional[str] = None,
    ) -> "InMemoryProjectTree":
        """
        Build a tree from a ``{rel_path: location}`` mapping of files.

        Intermediate folders are synthesized, and the result is ordered
        depth-first with siblings sorted by name.
        """
        root: Dict[str, object] = {}
        for rel_path, file_location in files.items():
            parts = to_resource_path(rel_path).split(RESOURCE_SEP)
            level = root
            for part in parts[:-1]:
                nxt = level.setdefault(part, {})
                if not isinstance(nxt, dict):
                    raise ValueError(f"'{part}' is both a file and a folder in '{rel_path}'")
                level = nxt
            if isinstance(level.get(parts[-1]), dict):
                raise ValueError(f"'{rel_path}' is both a file and a folder")
            level[parts[-1]] = file_location

        resources: List[ProjectResource] = []
        _flatten(root, "", resources)
        return cls(name, resources, location=location)

    @property
    def resources(self) -> Tuple[ProjectResource, ...]:
        return tuple(self._resources)

    def accept(self, visitor: ResourceVisitor) -> None:
        self._ensure_open()

        project = ProjectResource(ResourceKind.PROJECT, "", location=self.location)
        if not visitor(project):
            return
        for resource in self._resources:
            if not visitor(resource):
                return


def _flatten(level: Dict[str, object], prefix: str, out: List[ProjectResource]) -> None:
    for name in sorted(level):
        rel_path = to_resource_path(prefix, name)
        value = level[name]
        if isinstance(value, dict):
            out.append(folder_resource(rel_path))
            _flatten(value, rel_path, out)
        else:
            out.append(file_resource(rel_path, value))


# ==============================================================================
# FILESYSTEM TREE
# ==============================================================================

class FilesystemProjectTree(ProjectTree):
    """
    Lazy depth-first view of a project directory.

    Siblings are visited in lexicographic order, folders before their
    contents. Linked resources map a project-relative path onto a location
    outside the project root; a linked folder is walked from its target.

    Args:
        root: Project root directory.
        name: Project name. Defaults to the root directory name.
        links: ``{rel_path: target}`` linked resources.
        follow_symlinks: Resolve OS symbolic links when computing file
                         locations. Symlinked folders are walked either way.
    """

    def __init__(
            self,
            root: str,
            name: Optional[str] = None,
            links: Optional[Mapping[str, str]] = None,
            follow_symlinks: bool = False,
    ) -> None:
        self.root = normalize_path(root, fallback=os.getcwd())
        super().__init__(name or os.path.basename(self.root.rstrip(os.sep)) or self.root)
        self.follow_symlinks = follow_symlinks
        self.links: Dict[str, str] = {}

        for rel_path, target in (links or {}).items():
            key = to_resource_path(rel_path)
            if not key:
                raise ValueError(f"Linked resource path must not be empty (target: '{target}')")
            if not target or not target.strip():
                raise ValueError(f"Linked resource '{key}' has no target")
            self.links[key] = normalize_path(target, fallback=target)

    def accept(self, visitor: ResourceVisitor) -> None:
        self._ensure_open()

        if not os.path.isdir(self.root):
            raise TraversalError(f"Project root is not a readable directory: '{self.root}'")

        project = ProjectResource(ResourceKind.PROJECT, "", location=self.root)
        if not visitor(project):
            return

        active: Set[str] = {os.path.realpath(self.root)}
        self._walk_folder(self.root, "", visitor, active)

    # --------------------------------------------------------------------------
    # Internal walk
    # --------------------------------------------------------------------------

    def _walk_folder(
            self,
            dir_path: str,
            rel_dir: str,
            visitor: ResourceVisitor,
            active: Set[str],
    ) -> bool:
        """Visit the children of one folder. Returns False once stopped."""
        for resource, descend in self._list_children(dir_path, rel_dir):
            if not visitor(resource):
                return False
            if not descend or resource.location is None:
                continue

            real = os.path.realpath(resource.location)
            if real in active:
                logger.debug(f"Not re-entering '{resource.rel_path}': folder is its own ancestor")
                continue

            active.add(real)
            try:
                if not self._walk_folder(resource.location, resource.rel_path, visitor, active):
                    return False
            finally:
                active.discard(real)
        return True

    def _list_children(self, dir_path: str, rel_dir: str) -> List[Tuple[ProjectResource, bool]]:
        """
        Read and classify the entries of a folder, merging linked resources.

        Raises:
            TraversalError: The folder cannot be listed.
        """
        children: Dict[str, Tuple[ProjectResource, bool]] = {}

        try:
            with os.scandir(dir_path) as it:
                for entry in it:
                    children[entry.name] = self._classify_entry(entry, rel_dir)
        except OSError as e:
            raise TraversalError(f"Cannot read folder '{rel_dir or '/'}' at '{dir_path}': {e}") from e

        for rel_path, target in self.links.items():
            parent, _, link_name = rel_path.rpartition(RESOURCE_SEP)
            if parent != rel_dir:
                continue
            if link_name in children:
                logger.debug(f"Linked resource '{rel_path}' shadows an on-disk entry")
            children[link_name] = self._linked_child(rel_path, target)

        return [children[name] for name in sorted(children)]

    def _classify_entry(self, entry: os.DirEntry, rel_dir: str) -> Tuple[ProjectResource, bool]:
        rel_path = to_resource_path(rel_dir, entry.name)
        is_link = entry.is_symlink()

        # Symlinked folders are walked too; their children keep locations
        # through the link unless links are followed
        if entry.is_dir():
            return folder_resource(rel_path, entry.path), True

        resource = ProjectResource(
            ResourceKind.FILE,
            rel_path,
            location=entry.path,
            linked=is_link,
            follow_symlinks=self.follow_symlinks,
        )
        return resource, False

    def _linked_child(self, rel_path: str, target: str) -> Tuple[ProjectResource, bool]:
        if os.path.isdir(target):
            return ProjectResource(ResourceKind.FOLDER, rel_path, location=target, linked=True), True

        resource = ProjectResource(
            ResourceKind.FILE,
            rel_path,
            location=target,
            linked=True,
            follow_symlinks=self.follow_symlinks,
        )
        return resource, False
