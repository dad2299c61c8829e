"""
renderer.py

Responsibility: Turn assembled page state into markup with Jinja2.

Rules:
- One Jinja2 environment per renderer; templates are looked up in the
  configured templates directory first, then in the bundled package templates.
- Fragments are trusted HTML, so autoescaping stays off.
- Undefined variables fail loudly (StrictUndefined).
- Errors raised inside templates reach the caller unchanged.

This module intentionally does NOT know about page models or request state.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, StrictUndefined

from template_builder.breadcrumbs import render_breadcrumb_trail
from template_builder.config import PACKAGE_TEMPLATES_DIR, BuilderConfig
from template_builder.filters import BANNER_HOOK, BREADCRUMB_TRAIL_HOOK, MESSAGES_HOOK, FilterChain


class RenderError(RuntimeError):
    pass


class TemplateRenderer:
    def __init__(self, config: BuilderConfig | None = None) -> None:
        self._config = config or BuilderConfig()
        self._env = _build_environment(self._config)

    def render_page(self, state: Mapping[str, Any], filters: FilterChain) -> str:
        """
        Render the page template.

        The message, banner and breadcrumb areas are resolved through their
        content hooks before the template sees them.
        """
        context = dict(state)
        trail = render_breadcrumb_trail(context.get("breadcrumbTrailArray") or [])
        context["BreadcrumbTrail"] = filters.apply(BREADCRUMB_TRAIL_HOOK, trail)
        context["Messages"] = filters.apply(MESSAGES_HOOK, "")
        context["Banner"] = filters.apply(BANNER_HOOK, "")
        template = self._env.get_template(self._config.page_template)
        return template.render(context)

    def render_navigation(self, items: Sequence[Mapping[str, Any]]) -> str:
        template = self._env.get_template(self._config.navigation_template)
        return template.render(items=list(items))

    def render_string(self, source: str, **context: Any) -> str:
        return self._env.from_string(source).render(**context)


def _build_environment(config: BuilderConfig) -> Environment:
    loaders = []
    if config.templates_dir is not None:
        tpl_dir = config.templates_dir.expanduser().resolve()
        if not tpl_dir.exists() or not tpl_dir.is_dir():
            raise RenderError(f"Template directory not found: {tpl_dir}")
        loaders.append(FileSystemLoader(str(tpl_dir)))
    loaders.append(FileSystemLoader(str(PACKAGE_TEMPLATES_DIR)))

    return Environment(
        loader=ChoiceLoader(loaders),
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )
