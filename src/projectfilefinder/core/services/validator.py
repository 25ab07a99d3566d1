from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper between raw configuration sources (JSON file, CLI overrides)
and the finder. Coerces types, normalizes linked resource targets and
fills missing keys with defaults.
"""

import logging
from typing import Any, Dict, List, Tuple

from projectfilefinder.domain.config import get_default_config
from projectfilefinder.infra.fs import to_resource_path
from projectfilefinder.infra.logging import LEVEL_NAMES

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raise on invalid values instead of falling back.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and the
                                          list of warnings produced.

    Raises:
        TypeError: Strict mode and a field has the wrong type.
        ValueError: Strict mode and a field has an unsupported value.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    unknown = sorted(set(config) - set(defaults))
    for key in unknown:
        warnings.append(f"Unknown field '{key}' ignored.")
        merged.pop(key)

    merged["follow_symlinks"] = _as_bool(
        merged.get("follow_symlinks"), defaults["follow_symlinks"], "follow_symlinks", warnings, strict
    )
    merged["log_file"] = _as_str(merged.get("log_file"), defaults["log_file"], "log_file", warnings, strict)
    merged["log_level"] = _as_level(merged.get("log_level"), defaults["log_level"], warnings, strict)
    merged["linked_resources"] = _as_links(merged.get("linked_resources"), warnings, strict)

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    if value is None:
        return fallback
    if isinstance(value, str):
        return value.strip()

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce common textual and numeric spellings into booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_level(value: Any, fallback: str, warnings: List[str], strict: bool) -> str:
    level = _as_str(value, fallback, "log_level", warnings, strict).upper()
    if level in LEVEL_NAMES:
        return level

    msg = f"Invalid field 'log_level': unknown level '{value}'."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using {fallback}.")
    return fallback


def _as_links(value: Any, warnings: List[str], strict: bool) -> Dict[str, str]:
    """Normalize ``{rel_path: target}`` linked resources, dropping bad entries."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        msg = f"Invalid field 'linked_resources': expected dict, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Ignoring links.")
        return {}

    links: Dict[str, str] = {}
    for rel_path, target in value.items():
        key = to_resource_path(rel_path) if isinstance(rel_path, str) else ""
        if not key or not isinstance(target, str) or not target.strip():
            msg = f"Invalid linked resource '{rel_path}' -> '{target}'."
            if strict:
                raise ValueError(msg)
            warnings.append(f"{msg} Skipped.")
            continue
        links[key] = target.strip()
    return links
