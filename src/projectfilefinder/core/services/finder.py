from __future__ import annotations

"""
Project File Finder.

Maps an absolute filesystem path, as reported by compilers and other build
tools, back to the project file resource whose resolved on-disk location
is exactly that path. Linked resources are covered because every candidate
is resolved individually instead of deriving paths from the project root.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from projectfilefinder.core.services.project_tree import ProjectTree
from projectfilefinder.domain.resource_models import (
    ProjectResource,
    ResolutionError,
    ResourceKind,
    SearchResult,
    TraversalError,
)

logger = logging.getLogger(__name__)


@dataclass
class _SearchState:
    """Per-call accumulator shared with the visitor closure."""
    target: str
    file: Optional[ProjectResource]
    matched: bool = False
    visited: int = 0
    skipped: int = 0


# ==============================================================================
# PUBLIC API
# ==============================================================================

def find_file(
        tree: ProjectTree,
        absolute_path: str,
        fallback: Optional[ProjectResource] = None,
) -> Optional[ProjectResource]:
    """
    Find the project file located at an absolute filesystem path.

    The first file (in the tree's traversal order) whose resolved location
    equals ``absolute_path`` character for character is returned, and the
    traversal stops there. Folders and the project itself never match.

    Args:
        tree: Project tree to search.
        absolute_path: OS-native absolute path to look for.
        fallback: Value returned when no file matches.

    Returns:
        Optional[ProjectResource]: The matching file, or ``fallback``.
    """
    return search_project(tree, absolute_path, fallback).file


def search_project(
        tree: ProjectTree,
        absolute_path: str,
        fallback: Optional[ProjectResource] = None,
) -> SearchResult:
    """
    Run a file lookup and report how the traversal went.

    Candidates that cannot be resolved are skipped. A failure of the tree
    itself ends the search early; it is logged and recorded in the result,
    never raised.

    Args:
        tree: Project tree to search.
        absolute_path: OS-native absolute path to look for.
        fallback: Value reported as ``file`` when no file matches.

    Returns:
        SearchResult: Matched file (or fallback) plus traversal statistics.
    """
    state = _SearchState(target=absolute_path, file=fallback)

    if not absolute_path:
        logger.debug("Empty target path, nothing can match. Returning fallback.")
        return _to_result(state, "")

    def visit(resource: ProjectResource) -> bool:
        # A tree that ignores the stop signal must not replace the first match
        if state.matched:
            return False

        state.visited += 1
        if resource.kind is not ResourceKind.FILE:
            return True

        try:
            location = resource.resolve_location()
        except ResolutionError as e:
            state.skipped += 1
            logger.debug(f"Skipping candidate: {e}")
            return True

        if location == state.target:
            state.file = resource
            state.matched = True
            return False
        return True

    error = ""
    try:
        tree.accept(visit)
    except (TraversalError, OSError) as e:
        error = str(e) or type(e).__name__
        logger.error(
            f"Search for '{absolute_path}' in project '{getattr(tree, 'name', tree)}' "
            f"aborted: {error}",
            exc_info=True,
        )

    if state.matched:
        logger.debug(f"Resolved '{absolute_path}' to project file '{state.file.rel_path}'")
    else:
        logger.debug(
            f"No project file at '{absolute_path}' "
            f"({state.visited} visited, {state.skipped} unresolvable)"
        )

    return _to_result(state, error)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _to_result(state: _SearchState, error: str) -> SearchResult:
    return SearchResult(
        target=state.target,
        file=state.file,
        matched=state.matched,
        visited=state.visited,
        skipped=state.skipped,
        error=error,
    )
