from __future__ import annotations

"""
Integration tests for FileSystem Infrastructure.

Validates path normalization, cross-platform data directory resolution,
absolute path resolution and resource path construction.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from projectfilefinder.infra.fs import (
    get_user_data_dir,
    normalize_path,
    resolve_absolute_path,
    to_resource_path,
)

# -----------------------------------------------------------------------------
# PATH RESOLUTION TESTS
# -----------------------------------------------------------------------------

def test_get_user_data_dir_windows() -> None:
    """TC-01: Verify resolution of %LOCALAPPDATA% on Windows systems."""
    mock_appdata = "C:/Users/Test/AppData/Local"
    with patch("os.name", "nt"):
        with patch.dict(os.environ, {"LOCALAPPDATA": mock_appdata}):
            with patch("os.makedirs"):
                path = get_user_data_dir()
                assert "ProjectFileFinder" in path


def test_get_user_data_dir_unix() -> None:
    """TC-01: Verify resolution of ~/.projectfilefinder on Unix-like systems."""
    with patch("os.name", "posix"):
        with patch("os.path.expanduser", return_value="/home/testuser"):
            with patch("os.makedirs"):
                path = get_user_data_dir()
                assert path.replace("\\", "/").endswith("/home/testuser/.projectfilefinder")


def test_normalize_path_expansion() -> None:
    """TC-02: Verify expansion of environment variables."""
    with patch.dict(os.environ, {"TEST_VAR": "my_folder"}):
        path = normalize_path("$TEST_VAR/sub", fallback=".")
        assert path.endswith(os.path.join("my_folder", "sub"))
        assert os.path.isabs(path)


def test_normalize_path_empty_uses_fallback(tmp_path: Path) -> None:
    assert normalize_path("   ", fallback=str(tmp_path)) == str(tmp_path)


def test_resolve_absolute_path_plain_keeps_links(tmp_path: Path) -> None:
    target = tmp_path / "real.tex"
    target.write_text("x", encoding="utf-8")
    link = tmp_path / "link.tex"
    try:
        os.symlink(target, link)
    except (OSError, NotImplementedError) as e:
        pytest.skip(f"Symbolic links unavailable: {e}")

    assert resolve_absolute_path(str(link)) == str(link)
    assert resolve_absolute_path(str(link), follow_symlinks=True) == os.path.realpath(target)


def test_resolve_absolute_path_strict_missing(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        resolve_absolute_path(str(tmp_path / "missing"), follow_symlinks=True)

# -----------------------------------------------------------------------------
# RESOURCE PATHS
# -----------------------------------------------------------------------------

@pytest.mark.parametrize("parts, expected", [
    (("src", "main.tex"), "src/main.tex"),
    (("", "main.tex"), "main.tex"),
    (("src/", "/sub//a.tex"), "src/sub/a.tex"),
    ((os.path.join("a", "b"),), "a/b"),
    ((), ""),
])
def test_to_resource_path(parts, expected) -> None:
    assert to_resource_path(*parts) == expected
