"""
navigation.py

Responsibility: Produce the local navigation HTML for a page.

A page may give its navigation as items, as ready HTML, or not at all. In
the last case a navigation file is searched upward from the working
directory, falling back to a site-wide default.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class NavigationNotFoundError(FileNotFoundError):
    pass


class NavigationRenderer(Protocol):
    def render_navigation(self, items: Sequence[Mapping[str, Any]]) -> str: ...


def resolve_navigation(
    local_navigation: str | Sequence[Mapping[str, Any]] | None,
    *,
    renderer: NavigationRenderer,
    discover: Callable[[], str],
) -> str:
    """
    Resolve a page's navigation value into HTML.

    - non-empty item list: rendered by `renderer`
    - empty/unset: `discover()` is called
    - non-empty string: already HTML, returned as is
    """
    if not local_navigation:
        return discover()
    if isinstance(local_navigation, str):
        return local_navigation
    return renderer.render_navigation(local_navigation)


def find_upward(filename: str, start: Path, max_levels: int) -> Path | None:
    """
    Look for `filename` in `start`, then in up to `max_levels` parent directories.
    """
    directory = start.resolve()
    for _ in range(max_levels + 1):
        candidate = directory / filename
        if candidate.is_file():
            return candidate
        if directory.parent == directory:
            break
        directory = directory.parent
    return None


class NavigationFinder:
    """Locate, load and evaluate a navigation file."""

    def __init__(
        self,
        filename: str,
        fallback: str | Path,
        *,
        evaluate: Callable[[str], str],
        max_levels: int = 5,
        start: str | Path | None = None,
    ) -> None:
        self._filename = filename
        self._fallback = Path(fallback)
        self._evaluate = evaluate
        self._max_levels = max_levels
        self._start = Path(start) if start is not None else None

    def locate(self) -> Path:
        start = self._start if self._start is not None else Path.cwd()
        found = find_upward(self._filename, start, self._max_levels)
        if found is not None:
            logger.debug("Using navigation file %s", found)
            return found
        logger.info("No %s within %d levels of %s; using %s", self._filename, self._max_levels, start, self._fallback)
        return self._fallback

    def __call__(self) -> str:
        path = self.locate()
        try:
            source = path.read_text(encoding="utf-8")
        except OSError as e:
            raise NavigationNotFoundError(f"Navigation file could not be read: {path}") from e
        return self._evaluate(source)
