from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides understood by the validator.
"""

import argparse
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the projectfilefinder CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="projectfilefinder",
        description=(
            "Map an absolute path reported by a build tool back to the "
            "project file located there, including linked resources."
        ),
    )

    # --- Lookup ---
    p.add_argument("project_root", help="Root directory of the project.")
    p.add_argument("absolute_path", help="Absolute filesystem path to look up.")
    p.add_argument(
        "--fallback",
        dest="fallback",
        default=None,
        metavar="REL_PATH",
        help="Project-relative file reported when nothing matches.",
    )

    # --- Project Model ---
    p.add_argument(
        "-l", "--link",
        dest="links",
        action="append",
        default=None,
        metavar="REL_PATH=TARGET",
        help="Linked resource mapping a project path to an external location. Repeatable.",
    )
    p.add_argument(
        "--follow-symlinks",
        action="store_true",
        help="Resolve OS symbolic links before comparing paths.",
    )

    # --- Configuration and Diagnostics ---
    p.add_argument(
        "-c", "--config",
        dest="config_path",
        default=None,
        help="JSON configuration file. Defaults to the user data directory.",
    )
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the persisted configuration file.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Write diagnostics to a rotating log file.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the search result as JSON.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.

    Raises:
        ValueError: A ``--link`` value is not of the form REL_PATH=TARGET.
    """
    overrides: Dict[str, Any] = {}

    links = _parse_links(args.links)
    if links:
        overrides["linked_resources"] = links
    if args.follow_symlinks:
        overrides["follow_symlinks"] = True
    if args.log_file:
        overrides["log_file"] = args.log_file
    if args.debug:
        overrides["log_level"] = "DEBUG"

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _parse_links(values: Optional[List[str]]) -> Dict[str, str]:
    links: Dict[str, str] = {}
    for raw in values or []:
        rel_path, sep, target = raw.partition("=")
        if not sep or not rel_path.strip() or not target.strip():
            raise ValueError(f"Invalid link '{raw}': expected REL_PATH=TARGET")
        links[rel_path.strip()] = target.strip()
    return links
