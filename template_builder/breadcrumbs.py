"""
breadcrumbs.py

Responsibility: Translate breadcrumb configuration into what the page template expects.

Convention: every rendered crumb is followed by " / ", so the trail reads
`<a>Home</a> / <a>Section</a> / ` and the page template closes it with the
current page title.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from template_builder.filters import BREADCRUMB_TRAIL_HOOK, FilterChain

CRUMB_SEPARATOR = " / "


@dataclass(frozen=True)
class Crumb:
    url: str
    text: str

    @classmethod
    def coerce(cls, value: Crumb | Mapping[str, Any]) -> Crumb:
        if isinstance(value, Crumb):
            return value
        if not isinstance(value, Mapping):
            raise TypeError(f"Breadcrumbs must be Crumb instances or mappings, got {type(value).__name__}")
        return cls(url=str(value.get("url", "")), text=str(value.get("text", "")))


def coerce_crumbs(values: Iterable[Crumb | Mapping[str, Any]]) -> list[Crumb]:
    if isinstance(values, (str, bytes, Mapping)):
        raise TypeError("Breadcrumbs must be a list of crumbs.")
    return [Crumb.coerce(v) for v in values]


def translate_breadcrumbs(crumbs: Iterable[Crumb]) -> list[dict[str, str]]:
    """
    Translate crumbs into the attribute/value pairs the page template renders.
    """
    return [{"attributes": f'href="{crumb.url}"', "value": crumb.text} for crumb in crumbs]


def _anchor(attributes: str, value: str) -> str:
    return f"<a {attributes}>{value}</a>{CRUMB_SEPARATOR}"


def render_breadcrumb_trail(translated: Iterable[Mapping[str, str]]) -> str:
    return "".join(_anchor(item["attributes"], item["value"]) for item in translated)


def build_breadcrumb_additions(additions: Iterable[Crumb]) -> str:
    """
    Render additional crumbs as anchors, each followed by the separator.
    """
    return render_breadcrumb_trail(translate_breadcrumbs(additions))


def register_breadcrumb_additions(filters: FilterChain, additions: Iterable[Crumb]) -> None:
    """
    Append the additional crumbs to the trail through the `breadcrumbTrail` hook.
    """
    built = build_breadcrumb_additions(additions)
    filters.add(BREADCRUMB_TRAIL_HOOK, lambda content: content + built)
