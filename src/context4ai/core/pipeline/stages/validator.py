from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper for the pipeline: coerces untrusted configuration (CLI, JSON)
into typed values, fills missing keys with defaults and reports every
correction as a warning.
"""

import logging
from typing import Any, Dict, List, Tuple

from context4ai.domain.config import get_default_config
from context4ai.domain.constants import TREE_MODES

logger = logging.getLogger(__name__)

GLOB_FIELDS = (
    "core_ignore_globs",
    "explorer_ignore_globs",
    "hide_children_globs",
    "always_show_globs",
    "always_hide_globs",
    "show_if_selected_globs",
)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a configuration dictionary.

    Args:
        config: Raw configuration data.
        strict: Raise on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and warnings.
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

    for field in ("project_root", "target_model"):
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    merged["tree_mode"] = _as_choice(
        merged.get("tree_mode"), defaults["tree_mode"], "tree_mode", TREE_MODES, warnings, strict
    )
    merged["max_tokens"] = _as_positive_int(
        merged.get("max_tokens"), defaults["max_tokens"], "max_tokens", warnings, strict
    )

    # Empty glob lists are legitimate: no fallback to defaults here
    for field in GLOB_FIELDS:
        merged[field] = _as_list_str(merged.get(field), defaults[field], field, warnings, strict)

    merged["file_groups"] = _as_file_groups(merged.get("file_groups"), warnings, strict)

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _reject(msg: str, warnings: List[str], strict: bool) -> None:
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")


def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    _reject(f"Invalid field '{field}': expected str, received {type(value).__name__}.", warnings, strict)
    return fallback


def _as_choice(
        value: Any,
        fallback: str,
        field: str,
        choices: Tuple[str, ...],
        warnings: List[str],
        strict: bool,
) -> str:
    if value is None:
        return fallback
    if isinstance(value, str) and value.strip().lower() in choices:
        return value.strip().lower()

    msg = f"Invalid field '{field}': expected one of {', '.join(choices)}, received {value!r}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_positive_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    if value is None:
        return fallback
    if isinstance(value, bool):
        _reject(f"Invalid field '{field}': expected int, received bool.", warnings, strict)
        return fallback
    if isinstance(value, int):
        if value > 0:
            return value
        msg = f"Invalid field '{field}': must be positive, received {value}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback
    if isinstance(value, str) and not strict:
        s = value.strip().replace("_", "").replace(",", "")
        if s.isdigit() and int(s) > 0:
            warnings.append(f"Field '{field}' converted from '{value}' to int.")
            return int(s)

    _reject(f"Invalid field '{field}': expected int, received {type(value).__name__}.", warnings, strict)
    return fallback


def _as_list_str(value: Any, fallback: List[str], field: str, warnings: List[str], strict: bool) -> List[str]:
    if value is None:
        return list(fallback)

    if isinstance(value, str) and not strict:
        warnings.append(f"Field '{field}' converted from CSV string to list.")
        return [x.strip() for x in value.split(",") if x.strip()]

    if isinstance(value, (list, tuple)):
        out: List[str] = []
        for i, item in enumerate(value):
            if isinstance(item, str):
                if item.strip():
                    out.append(item.strip())
                continue
            msg = f"Invalid item in '{field}[{i}]': expected str."
            if strict:
                raise TypeError(msg)
            warnings.append(f"{msg} Item discarded.")
        return out

    _reject(f"Invalid field '{field}': expected list[str], received {type(value).__name__}.", warnings, strict)
    return list(fallback)


def _as_file_groups(value: Any, warnings: List[str], strict: bool) -> Dict[str, Dict[str, Any]]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        _reject(f"Invalid field 'file_groups': expected dict, received {type(value).__name__}.", warnings, strict)
        return {}

    groups: Dict[str, Dict[str, Any]] = {}
    for name, group in value.items():
        if not isinstance(group, dict):
            msg = f"Invalid file group '{name}': expected dict."
            if strict:
                raise TypeError(msg)
            warnings.append(f"{msg} Group discarded.")
            continue
        groups[str(name)] = {
            "items": _as_list_str(group.get("items"), [], f"file_groups.{name}.items", warnings, strict),
            "visible": group.get("visible", True) is not False,
        }
    return groups
