"""
registry.py

Responsibility: Capture mode.

Embedding callers switch capture mode on, let page code call render as
usual, then pick up the built model and render it later themselves.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from template_builder.page_model import PageModel

logger = logging.getLogger(__name__)


class StoredBuilderRegistry:
    def __init__(self) -> None:
        self._capture_mode = False
        self._stored: PageModel | None = None

    @property
    def capture_mode(self) -> bool:
        return self._capture_mode

    def set_capture_mode(self, enabled: bool = True) -> None:
        self._capture_mode = bool(enabled)

    def store(self, model: PageModel) -> None:
        logger.debug("Capture mode on; storing page model instead of rendering")
        self._stored = model

    def get_stored(self, reset_capture_mode: bool = True) -> PageModel | None:
        """
        Return the last captured model, switching capture mode off unless told not to.
        """
        if reset_capture_mode:
            self._capture_mode = False
        return self._stored
