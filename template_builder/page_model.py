"""
page_model.py

Responsibility: Hold the fragments of a single page.

A `PageModel` is filled once from a keyed property bag (as sent by callers or
decoded from a request) and then treated as read-only by the assembler.

Supported properties:
- title, subtitle, content, focusBox: page text/HTML
- stylesheets, head, javascripts: markup added to the document head
- localNavigation: navigation items (list) or pre-rendered HTML (str)
- breadCrumbs, breadCrumbAdditions: lists of {"url": ..., "text": ...}
- messages, banners: HTML appended to the message and banner areas
- templatePreferences: preferences merged over the defaults
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Union

from template_builder.breadcrumbs import Crumb, coerce_crumbs
from template_builder.preferences import DEFAULT_PREFERENCES

if TYPE_CHECKING:
    from template_builder.context import OutputBuffer

logger = logging.getLogger(__name__)

TEMPLATE_PREFERENCES_KEY = "templatePreferences"

NavigationItems = Sequence[Mapping[str, Any]]
LocalNavigation = Union[str, NavigationItems]
CrumbLike = Union[Crumb, Mapping[str, Any]]


class PageModelError(ValueError):
    pass


class UnknownPropertyError(PageModelError):
    pass


# Keys are matched after lowercasing and dropping underscores.
_PROPERTY_FIELDS: dict[str, str] = {
    "title": "title",
    "subtitle": "subtitle",
    "content": "content",
    "focusbox": "focus_box",
    "stylesheets": "stylesheets",
    "head": "head",
    "javascripts": "javascripts",
    "localnavigation": "local_navigation",
    "breadcrumbs": "bread_crumbs",
    "breadcrumbadditions": "bread_crumb_additions",
    "messages": "messages",
    "banners": "banners",
}

_TEXT_FIELDS = {
    "title",
    "subtitle",
    "content",
    "focus_box",
    "stylesheets",
    "head",
    "javascripts",
    "messages",
    "banners",
}


def _normalize_key(key: str) -> str:
    return str(key).replace("_", "").lower()


@dataclass
class PageModel:
    title: str = ""
    subtitle: str = ""
    content: str = ""
    focus_box: str = ""
    stylesheets: str = ""
    head: str = ""
    javascripts: str = ""
    messages: str = ""
    banners: str = ""
    local_navigation: LocalNavigation = ""
    bread_crumbs: list[CrumbLike] = field(default_factory=list)
    bread_crumb_additions: list[CrumbLike] = field(default_factory=list)
    template_preferences: dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_PREFERENCES))

    @classmethod
    def from_properties(
        cls,
        properties: Mapping[str, Any] | None = None,
        template_preferences: Mapping[str, Any] | None = None,
        *,
        defaults: Mapping[str, Any] | None = None,
        strict: bool = False,
    ) -> PageModel:
        """
        Build a model from a keyed property bag.

        `template_preferences` overrides any `templatePreferences` found in
        `properties`; the result is laid over `defaults` (the built-in
        preferences unless given). Unknown keys are skipped unless `strict`.
        """
        props = dict(properties or {})
        prefs: dict[str, Any] = {}
        for key in list(props):
            if _normalize_key(key) == TEMPLATE_PREFERENCES_KEY.lower():
                given = props.pop(key) or {}
                if not isinstance(given, Mapping):
                    raise PageModelError(f"`{key}` must be an object/mapping, got {type(given).__name__}")
                prefs.update(given)
        prefs.update(template_preferences or {})

        base = dict(DEFAULT_PREFERENCES if defaults is None else defaults)
        model = cls(template_preferences={**base, **prefs})
        for key, value in props.items():
            model.set(key, value, strict=strict)
        return model

    def set(self, key: str, value: Any, *, strict: bool = False) -> PageModel:
        """
        Set one property by its keyed name and return the model for chaining.

        Only meant for filling the model while it is built; the assembler
        never changes a model it is given.
        """
        name = _PROPERTY_FIELDS.get(_normalize_key(key))
        if name is None:
            if strict:
                raise UnknownPropertyError(f"Unknown page property: {key!r}")
            logger.debug("Ignoring unknown page property %r", key)
            return self

        if name in ("bread_crumbs", "bread_crumb_additions"):
            items = value if isinstance(value, (str, bytes, Mapping)) else list(value)
            coerce_crumbs(items)
            value = items
        elif name == "local_navigation":
            if value is None:
                value = ""
            elif not isinstance(value, str):
                value = list(value)
        elif name in _TEXT_FIELDS:
            value = "" if value is None else str(value)

        setattr(self, name, value)
        return self

    def crumbs(self) -> list[Crumb]:
        return coerce_crumbs(self.bread_crumbs)

    def crumb_additions(self) -> list[Crumb]:
        return coerce_crumbs(self.bread_crumb_additions)

    def content_with_output(self, buffer: OutputBuffer | None, *, drain: bool) -> str:
        """
        Return the content with any stray captured output placed above it.

        Warnings or prints emitted while the page was built end up in the
        buffer; they are kept rather than lost. `drain` empties the buffer so
        a long-lived process does not repeat the text on the next page.
        """
        if buffer is None or not buffer.active:
            return self.content
        stray = buffer.drain() if drain else buffer.getvalue()
        return stray + self.content
