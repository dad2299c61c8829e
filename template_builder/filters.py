"""
filters.py

Responsibility: Named content hooks.

Several collaborators may register transformations on the same hook; they
run in registration order when the hook is applied.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

MESSAGES_HOOK = "messages"
BANNER_HOOK = "banner"
BREADCRUMB_TRAIL_HOOK = "breadcrumbTrail"
CMS_EDITABLE_HOOK = "cmsCheckEditable"

Transformation = Callable[..., str]


class FilterChain:
    def __init__(self) -> None:
        self._hooks: dict[str, list[Transformation]] = {}

    def add(self, name: str, fn: Transformation) -> None:
        self._hooks.setdefault(name, []).append(fn)

    def exists(self, name: str) -> bool:
        return bool(self._hooks.get(name))

    def apply(self, name: str, value: str, *args: Any) -> str:
        """
        Pass `value` through every transformation registered on `name`.

        Extra positional args are handed to each transformation after the value.
        """
        for fn in self._hooks.get(name, []):
            value = fn(value, *args)
        return value

    def clear(self, name: str | None = None) -> None:
        if name is None:
            self._hooks.clear()
        else:
            self._hooks.pop(name, None)

    def copy(self) -> FilterChain:
        chain = FilterChain()
        chain._hooks = {name: list(fns) for name, fns in self._hooks.items()}
        return chain

    def __len__(self) -> int:
        return sum(len(fns) for fns in self._hooks.values())
