from __future__ import annotations

"""
Unit tests for the Project Resource Models.

Verifies location resolution rules and error classification of resources.
"""

import os
from pathlib import Path

import pytest

from projectfilefinder.domain.resource_models import (
    ProjectResource,
    ProjectTreeError,
    ResolutionError,
    ResourceKind,
    SearchResult,
    TraversalError,
    file_resource,
    folder_resource,
)


def test_error_hierarchy() -> None:
    assert issubclass(ResolutionError, ProjectTreeError)
    assert issubclass(TraversalError, ProjectTreeError)
    assert not issubclass(ResolutionError, TraversalError)


def test_file_resolves_to_absolute_path() -> None:
    res = file_resource("src/a.tex", os.path.join("some", "dir", "a.tex"))

    location = res.resolve_location()

    assert os.path.isabs(location)
    assert location == os.path.abspath(os.path.join("some", "dir", "a.tex"))


def test_plain_resolution_does_not_require_existence() -> None:
    res = file_resource("a.tex", os.path.abspath("/definitely/not/here.tex"))
    assert res.resolve_location() == os.path.abspath("/definitely/not/here.tex")


def test_folder_cannot_be_resolved() -> None:
    with pytest.raises(ResolutionError, match="Not a file"):
        folder_resource("src", "/abs/src").resolve_location()


def test_unbound_file_cannot_be_resolved() -> None:
    with pytest.raises(ResolutionError, match="no location"):
        file_resource("virtual.tex", None).resolve_location()


def test_broken_linked_file_cannot_be_resolved(tmp_path: Path) -> None:
    res = file_resource("a.tex", str(tmp_path / "missing.tex"), linked=True)
    with pytest.raises(ResolutionError, match="Broken link"):
        res.resolve_location()


def test_strict_symlink_resolution_reports_missing_target(tmp_path: Path) -> None:
    res = ProjectResource(
        ResourceKind.FILE, "a.tex", location=str(tmp_path / "missing.tex"), follow_symlinks=True
    )
    with pytest.raises(ResolutionError, match="Cannot resolve"):
        res.resolve_location()


def test_resource_name() -> None:
    assert file_resource("src/sub/a.tex", None).name == "a.tex"
    assert file_resource("a.tex", None).name == "a.tex"
    assert ProjectResource(ResourceKind.PROJECT, "").name == ""


def test_resources_are_immutable() -> None:
    res = file_resource("a.tex", "/x/a.tex")
    with pytest.raises(AttributeError):
        res.location = "/y/a.tex"  # type: ignore[misc]


def test_search_result_ok_flag() -> None:
    assert SearchResult(target="/x", file=None).ok is True
    assert SearchResult(target="/x", file=None, error="boom").ok is False
