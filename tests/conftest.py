from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared project trees and on-disk projects used across test modules.
3. Logging isolation between tests.
"""

import os
import sys
from pathlib import Path
from typing import Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from projectfilefinder.core.services.project_tree import InMemoryProjectTree  # noqa: E402
from projectfilefinder.infra.logging import shutdown_logging  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def reset_logging():
    """Remove handlers installed by the package before and after each test."""
    shutdown_logging()
    yield
    shutdown_logging()


@pytest.fixture
def scenario_tree() -> InMemoryProjectTree:
    """
    Two-file project whose files live under /abs/src on disk.

    Structure:
    /proj
      /src
        Main -> /abs/src/Main.tex
        Lib  -> /abs/src/Lib.tex
    """
    return InMemoryProjectTree.from_mapping(
        "proj",
        {
            "src/Main": os.path.abspath("/abs/src/Main.tex"),
            "src/Lib": os.path.abspath("/abs/src/Lib.tex"),
        },
        location=os.path.abspath("/proj"),
    )


@pytest.fixture
def sample_project(tmp_path: Path) -> Dict[str, Path]:
    """
    Create an on-disk project plus an external folder used for links.

    Structure:
    /project
      main.tex
      /chapters
        intro.tex
        results.tex
      /figures
    /external
      shared.tex
      /styles
        thesis.sty
    """
    project = tmp_path / "project"
    (project / "chapters").mkdir(parents=True)
    (project / "figures").mkdir()
    (project / "main.tex").write_text("\\documentclass{article}", encoding="utf-8")
    (project / "chapters" / "intro.tex").write_text("Intro", encoding="utf-8")
    (project / "chapters" / "results.tex").write_text("Results", encoding="utf-8")

    external = tmp_path / "external"
    (external / "styles").mkdir(parents=True)
    (external / "shared.tex").write_text("Shared", encoding="utf-8")
    (external / "styles" / "thesis.sty").write_text("% style", encoding="utf-8")

    return {"project": project, "external": external}
