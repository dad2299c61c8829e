from pathlib import Path

import pytest

from template_builder.assembler import PageAssembler
from template_builder.config import BuilderConfig
from template_builder.context import RenderContext


@pytest.fixture
def builder_properties() -> dict:
    return {
        "title": "Test Page",
        "subTitle": "A subtitle",
        "content": "<p>Page content</p>",
        "focusBox": "<div>focus</div>",
        "stylesheets": '<link rel="stylesheet" href="/style.css">',
        "javascripts": '<script src="/app.js"></script>',
        "head": '<meta name="robots" content="noindex">',
        "localNavigation": "<ul><li>explicit nav</li></ul>",
    }


@pytest.fixture
def nav_tree(tmp_path: Path) -> dict:
    """
    A deep directory to search from plus a fallback navigation file.
    """
    start = tmp_path / "site" / "a" / "b" / "c" / "d" / "e" / "f"
    start.mkdir(parents=True)
    fallback = tmp_path / "fallback_nav.html"
    fallback.write_text("<ul><li>fallback site nav</li></ul>\n", encoding="utf-8")
    return {"root": tmp_path / "site", "start": start, "fallback": fallback}


@pytest.fixture
def config(nav_tree: dict) -> BuilderConfig:
    return BuilderConfig(fallback_navigation=nav_tree["fallback"])


@pytest.fixture
def assembler(config: BuilderConfig, nav_tree: dict) -> PageAssembler:
    return PageAssembler(config, navigation_start=nav_tree["start"])


@pytest.fixture
def context() -> RenderContext:
    return RenderContext()
