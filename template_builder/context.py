"""
context.py

Responsibility: Per-request render state.

One `RenderContext` is created per request (or per script run). It carries
everything the original design kept in process globals: pending template
preferences, caller-registered content filters, the stray output buffer,
request initializers and the capture registry.
"""

from __future__ import annotations

import contextlib
import io
import logging
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from template_builder.filters import FilterChain
from template_builder.registry import StoredBuilderRegistry

logger = logging.getLogger(__name__)

# Returns a response body to end the request early, or None to continue.
Initializer = Callable[[Mapping[str, Any]], Optional[str]]


class OutputBuffer:
    """Collects text written to stdout while a page is being built."""

    def __init__(self) -> None:
        self._stream: io.StringIO | None = None

    @property
    def active(self) -> bool:
        return self._stream is not None

    def start(self) -> io.StringIO:
        if self._stream is None:
            self._stream = io.StringIO()
        return self._stream

    @contextlib.contextmanager
    def capture(self) -> Iterator[OutputBuffer]:
        with contextlib.redirect_stdout(self.start()):
            yield self

    def write(self, text: str) -> None:
        self.start().write(text)

    def getvalue(self) -> str:
        return self._stream.getvalue() if self._stream is not None else ""

    def drain(self) -> str:
        """Return the buffered text and empty the buffer, leaving it armed."""
        if self._stream is None:
            return ""
        value = self._stream.getvalue()
        self._stream.seek(0)
        self._stream.truncate(0)
        return value


@dataclass
class RenderContext:
    environ: dict[str, Any] = field(default_factory=dict)
    preferences: dict[str, Any] = field(default_factory=dict)
    filters: FilterChain = field(default_factory=FilterChain)
    output: OutputBuffer = field(default_factory=OutputBuffer)
    registry: StoredBuilderRegistry = field(default_factory=StoredBuilderRegistry)
    initializers: list[Initializer] = field(default_factory=list)
    cms_initializer: Initializer | None = None
    _initialized: bool = field(default=False, init=False, repr=False)
    _early_response: str | None = field(default=None, init=False, repr=False)

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self, *, run_cms: bool = True) -> str | None:
        """
        Run request initializers once.

        Login/impersonation initializers run first, then the CMS initializer.
        The first one to return a body ends the request; that body is
        returned here and on every later call.
        """
        if self._initialized:
            return self._early_response
        self._initialized = True

        for initializer in self.initializers:
            response = initializer(self.environ)
            if response is not None:
                self._early_response = response
                return response

        if run_cms and self.cms_initializer is not None:
            response = self.cms_initializer(self.environ)
            if response is not None:
                logger.debug("CMS handled the request; skipping page render")
                self._early_response = response
        return self._early_response
