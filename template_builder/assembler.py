"""
assembler.py

Responsibility: Assemble a page model into the final HTML page.

High-level flow of `PageAssembler.render`:
1) Capture mode -> store the model, render nothing
2) Run request initializers once (login/impersonation, CMS)
3) Translate breadcrumbs, merge preferences
4) Register message/banner/breadcrumb contributions on a per-render filter chain
5) Build the named sections, pass them through the CMS edit hook if present
6) Render the page template with sections under the pending preferences

Request state never leaks between renders: the context's own filters and
preferences are read, not modified.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

from template_builder.breadcrumbs import register_breadcrumb_additions, translate_breadcrumbs
from template_builder.config import BuilderConfig
from template_builder.context import RenderContext
from template_builder.filters import BANNER_HOOK, CMS_EDITABLE_HOOK, MESSAGES_HOOK
from template_builder.navigation import NavigationFinder, resolve_navigation
from template_builder.page_model import PageModel
from template_builder.preferences import merge_preferences
from template_builder.renderer import TemplateRenderer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rendered:
    html: str


@dataclass(frozen=True)
class Captured:
    model: PageModel

    @property
    def html(self) -> None:
        return None


RenderResult = Union[Rendered, Captured]


class PageAssembler:
    def __init__(
        self,
        config: BuilderConfig | None = None,
        renderer: TemplateRenderer | None = None,
        *,
        navigation_start: str | Path | None = None,
    ) -> None:
        self.config = config or BuilderConfig()
        self.renderer = renderer or TemplateRenderer(self.config)
        self._navigation_start = navigation_start

    def new_model(
        self,
        properties: Mapping[str, Any] | None = None,
        template_preferences: Mapping[str, Any] | None = None,
        *,
        strict: bool = False,
    ) -> PageModel:
        """Build a model whose preferences start from the configured defaults."""
        return PageModel.from_properties(
            properties,
            template_preferences,
            defaults=self.config.default_preferences,
            strict=strict,
        )

    def discover_navigation(self) -> str:
        finder = NavigationFinder(
            self.config.navigation_filename,
            self.config.fallback_navigation,
            evaluate=self.renderer.render_string,
            max_levels=self.config.navigation_search_depth,
            start=self._navigation_start,
        )
        return finder()

    def resolve_navigation(self, model: PageModel) -> str:
        return resolve_navigation(
            model.local_navigation,
            renderer=self.renderer,
            discover=self.discover_navigation,
        )

    def build_sections(self, model: PageModel, context: RenderContext) -> dict[str, str]:
        content = model.content_with_output(context.output, drain=self.config.long_lived)
        return {
            "Title": model.title.strip(),
            "Subtitle": model.subtitle.strip(),
            "Content": content.strip(),
            "LocalNavigation": self.resolve_navigation(model).strip(),
            "FocusBox": model.focus_box.strip(),
            "Head": (model.stylesheets + model.head).strip(),
            "JavaScript": model.javascripts.strip(),
        }

    def render(
        self,
        model: PageModel,
        context: RenderContext | None = None,
        *,
        capture: bool | None = None,
    ) -> RenderResult:
        """
        Render `model` into a page.

        `capture=None` follows the context registry's capture mode; True or
        False forces the mode for this call.
        """
        context = context or RenderContext()
        if capture is None:
            capture = context.registry.capture_mode
        if capture:
            context.registry.store(model)
            return Captured(model)

        early = context.initialize(run_cms=self.config.run_cms)
        if early is not None:
            return Rendered(early)

        filters = context.filters.copy()

        model_prefs = merge_preferences(
            {"breadcrumbTrailArray": translate_breadcrumbs(model.crumbs())},
            model.template_preferences,
        )
        register_breadcrumb_additions(filters, model.crumb_additions())
        state = merge_preferences(context.preferences, model_prefs)

        messages = model.messages
        banners = model.banners
        filters.add(MESSAGES_HOOK, lambda value: value + messages)
        filters.add(BANNER_HOOK, lambda value: value + banners)

        sections = self.build_sections(model, context)
        if filters.exists(CMS_EDITABLE_HOOK):
            sections = {name: filters.apply(CMS_EDITABLE_HOOK, value, name) for name, value in sections.items()}

        # Preferences set before this render win over the model's sections.
        state = merge_preferences(sections, state)
        return Rendered(self.renderer.render_page(state, filters))

    def render_html(self, model: PageModel, context: RenderContext | None = None) -> str | None:
        return self.render(model, context).html


def render_page(
    properties: Mapping[str, Any] | None = None,
    template_preferences: Mapping[str, Any] | None = None,
    *,
    context: RenderContext | None = None,
    config: BuilderConfig | None = None,
) -> str | None:
    """Build a model from `properties` and render it in one call."""
    assembler = PageAssembler(config)
    return assembler.render_html(assembler.new_model(properties, template_preferences), context)
