from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path manipulation and resolution utilities used to
turn resource locations into comparable absolute paths. Acts as an
abstraction over the 'os' module to ensure uniform behavior across Windows
and Unix-like systems.
"""

import os
from typing import Optional

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "ProjectFileFinder"
UNIX_APP_DIR_NAME = ".projectfilefinder"
RESOURCE_SEP = "/"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/ProjectFileFinder
    - Linux/Mac: ~/.projectfilefinder

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    # Windows specific resolution
    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    # Posix fallback (Linux/Mac)
    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    # Idempotent directory creation
    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def resolve_absolute_path(location: str, follow_symlinks: bool = False) -> str:
    """
    Produce the absolute on-disk path for a resource location.

    Without symlink following the result mirrors a plain absolute-path
    computation. With it, every link component is resolved and the
    target must exist.

    Args:
        location: Raw location of the resource.
        follow_symlinks: Resolve OS symbolic links strictly.

    Returns:
        str: Absolute filesystem path.

    Raises:
        OSError: Symlink resolution failed or the target is missing.
    """
    if follow_symlinks:
        return os.path.realpath(location, strict=True)
    return os.path.abspath(location)


def to_resource_path(*parts: str) -> str:
    """
    Join path fragments into a '/'-separated project-relative path.

    Native separators inside the fragments are converted as well.
    """
    pieces = []
    for part in parts:
        if not part:
            continue
        pieces.extend(p for p in part.replace(os.sep, RESOURCE_SEP).split(RESOURCE_SEP) if p)
    return RESOURCE_SEP.join(pieces)
