from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates one lookup from the terminal: argument parsing, logging
bootstrap, configuration merging (defaults, persisted file, CLI overrides),
project tree construction, the search itself and result rendering.
"""

import json
import os
import sys
from typing import Any, Dict, List, Optional

from projectfilefinder.core.services.finder import search_project
from projectfilefinder.core.services.project_tree import FilesystemProjectTree
from projectfilefinder.core.services.validator import validate_config
from projectfilefinder.domain.config import get_default_config, load_config
from projectfilefinder.domain.resource_models import SearchResult, file_resource
from projectfilefinder.infra.fs import normalize_path, to_resource_path
from projectfilefinder.infra.logging import LoggingConfig, configure_logging, get_logger
from projectfilefinder.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_FOUND = 0
EXIT_NOT_FOUND = 1
EXIT_INVALID_INPUT = 2

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute one project file lookup.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: 0 when a file (or the fallback) is reported, 1 when nothing
             matched, 2 on invalid input.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    try:
        overrides = cli_args.args_to_overrides(args)
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    base_conf = get_default_config() if args.use_defaults else load_config(args.config_path)
    clean_conf, warnings = validate_config(_merge_config(base_conf, overrides), strict=False)

    configure_logging(LoggingConfig.from_config(clean_conf, debug=args.debug))
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    project_root = normalize_path(args.project_root, fallback=os.getcwd())
    if not os.path.isdir(project_root):
        msg = f"Project root does not exist or is not a directory: {project_root}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    tree = FilesystemProjectTree(
        project_root,
        links=clean_conf["linked_resources"],
        follow_symlinks=clean_conf["follow_symlinks"],
    )

    fallback = None
    if args.fallback:
        rel = to_resource_path(args.fallback)
        fallback = file_resource(rel, os.path.join(project_root, *rel.split("/")))

    logger.debug(f"Searching project '{tree.name}' for: {args.absolute_path}")
    result = search_project(tree, args.absolute_path, fallback)

    if args.json_output:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    return EXIT_FOUND if result.file is not None else EXIT_NOT_FOUND

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge CLI overrides into the base configuration.

    Linked resources are combined, CLI entries winning on equal paths;
    every other key is replaced.
    """
    out = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if key == "linked_resources" and isinstance(out.get(key), dict):
            out[key] = {**out[key], **value}
        else:
            out[key] = value
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: SearchResult) -> None:
    if result.error:
        print(f"WARNING: search aborted: {result.error}", file=sys.stderr)

    if result.matched:
        print(result.file.rel_path)
    elif result.file is not None:
        print(f"{result.file.rel_path} (fallback)")
    else:
        print(f"No project file at: {result.target}", file=sys.stderr)

    print(
        f"Resources visited: {result.visited}, unresolvable: {result.skipped}",
        file=sys.stderr,
    )


if __name__ == "__main__":
    sys.exit(main())
