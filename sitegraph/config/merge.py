"""Merge helpers for configuration documents."""

import copy
from typing import Any


def deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two config dicts (overlay takes precedence).

    Mappings present on both sides are merged key by key. Any other overlay
    value, lists included, replaces the base value wholesale. Neither input
    is modified.
    """
    result = copy.deepcopy(base)

    for key, value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)

    return result


def merge_defaults(defaults: dict[str, Any], config: dict[str, Any]) -> dict[str, Any]:
    """Layer defaults underneath config, replacing top-level keys wholesale."""
    return {**copy.deepcopy(defaults), **config}
