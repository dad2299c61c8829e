from pathlib import Path

import pytest

from template_builder.navigation import NavigationFinder, NavigationNotFoundError, find_upward, resolve_navigation


class RecordingRenderer:
    def __init__(self) -> None:
        self.calls: list = []

    def render_navigation(self, items) -> str:
        self.calls.append(items)
        return "<ul>rendered</ul>"


def _fail_discover() -> str:
    raise AssertionError("discovery should not run")


def test_item_list_is_rendered() -> None:
    renderer = RecordingRenderer()
    items = [{"url": "/a", "text": "A"}]
    assert resolve_navigation(items, renderer=renderer, discover=_fail_discover) == "<ul>rendered</ul>"
    assert renderer.calls == [items]


def test_string_is_returned_verbatim() -> None:
    renderer = RecordingRenderer()
    html = "  <ul><li>mine</li></ul>  "
    assert resolve_navigation(html, renderer=renderer, discover=_fail_discover) == html
    assert renderer.calls == []


@pytest.mark.parametrize("empty", ["", [], None])
def test_empty_value_discovers(empty) -> None:
    renderer = RecordingRenderer()
    assert resolve_navigation(empty, renderer=renderer, discover=lambda: "found") == "found"
    assert renderer.calls == []


def test_find_upward_within_cap(nav_tree: dict) -> None:
    target = nav_tree["start"].parent.parent / "site_nav.html"
    target.write_text("nav", encoding="utf-8")
    assert find_upward("site_nav.html", nav_tree["start"], 5) == target


def test_find_upward_beyond_cap(nav_tree: dict) -> None:
    # start is six levels below root
    (nav_tree["root"] / "site_nav.html").write_text("nav", encoding="utf-8")
    assert find_upward("site_nav.html", nav_tree["start"], 5) is None
    assert find_upward("site_nav.html", nav_tree["start"], 6) == nav_tree["root"] / "site_nav.html"


def test_finder_evaluates_discovered_file(nav_tree: dict) -> None:
    (nav_tree["start"] / "site_nav.html").write_text("test site nav", encoding="utf-8")
    finder = NavigationFinder(
        "site_nav.html",
        nav_tree["fallback"],
        evaluate=lambda source: source.upper(),
        start=nav_tree["start"],
    )
    assert finder() == "TEST SITE NAV"


def test_finder_uses_fallback(nav_tree: dict) -> None:
    finder = NavigationFinder("site_nav.html", nav_tree["fallback"], evaluate=str, start=nav_tree["start"])
    assert finder.locate() == nav_tree["fallback"]
    assert "fallback site nav" in finder()


def test_unreadable_fallback_raises(nav_tree: dict, tmp_path: Path) -> None:
    finder = NavigationFinder(
        "site_nav.html",
        tmp_path / "missing.html",
        evaluate=str,
        start=nav_tree["start"],
    )
    with pytest.raises(NavigationNotFoundError):
        finder()
    with pytest.raises(FileNotFoundError):
        finder()
