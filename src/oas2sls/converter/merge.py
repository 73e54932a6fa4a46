"""Group function config fragments by service and deep-merge them.

Every converted operation yields a fragment holding exactly one function.
:func:`merge_configs` collects fragments sharing a service name into one
service config, in the order service names are first seen, merging the
function maps with :func:`deep_merge`. Two operations that derive the same
function name therefore end up as one function whose ``events`` list holds
both HTTP events.
"""

from __future__ import annotations

import copy
from typing import Any


def deep_merge(target: dict[str, Any], source: dict[str, Any]) -> dict[str, Any]:
    """Return a new mapping combining *target* and *source*.

    * keys are unioned;
    * nested mappings present on both sides are merged recursively;
    * lists present on both sides are concatenated, *target* items first;
    * for any other collision the value from *source* wins.

    Neither argument is modified.
    """
    merged = copy.deepcopy(target)
    for key, value in source.items():
        existing = merged.get(key)
        if isinstance(existing, dict) and isinstance(value, dict):
            merged[key] = deep_merge(existing, value)
        elif isinstance(existing, list) and isinstance(value, list):
            merged[key] = existing + copy.deepcopy(value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def merge_configs(fragments: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Merge single-function fragments into per-service configs.

    Args:
        fragments: ``{"service": str, "functions": {...}}`` mappings in
            processing order.

    Returns:
        One ``{"service": name, "functions": {...}}`` mapping per distinct
        service name, ordered by first appearance.
    """
    grouped: dict[str, dict[str, Any]] = {}
    for fragment in fragments:
        service = fragment["service"]
        functions = grouped.get(service, {})
        grouped[service] = deep_merge(functions, fragment["functions"])

    return [
        {"service": service, "functions": functions}
        for service, functions in grouped.items()
    ]
