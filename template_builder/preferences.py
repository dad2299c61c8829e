"""
preferences.py

Responsibility: Template preference defaults and merging.

Preferences are plain dicts handed to the page template. Merging never
mutates its inputs.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

DEFAULT_PREFERENCES: dict[str, Any] = {"localNavigation": True, "auxBox": False}


def merge_preferences(defaults: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """
    Merge `overrides` on top of `defaults`, key by key.

    Mappings present on both sides are merged recursively; any other value
    from `overrides` replaces the default outright.
    """
    merged: dict[str, Any] = {}
    for key, value in defaults.items():
        merged[key] = _copy_value(value)

    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_preferences(current, value)
        else:
            merged[key] = _copy_value(value)
    return merged


def _copy_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return merge_preferences({}, value)
    return value
