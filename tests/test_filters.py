from template_builder.filters import FilterChain


def test_apply_runs_in_registration_order() -> None:
    chain = FilterChain()
    chain.add("messages", lambda value: value + "a")
    chain.add("messages", lambda value: value + "b")
    assert chain.apply("messages", ">") == ">ab"


def test_apply_unknown_hook_returns_value() -> None:
    assert FilterChain().apply("missing", "unchanged") == "unchanged"


def test_extra_args_are_passed_through() -> None:
    chain = FilterChain()
    chain.add("edit", lambda value, section: f"{section}:{value}")
    assert chain.apply("edit", "x", "Title") == "Title:x"


def test_exists_and_clear() -> None:
    chain = FilterChain()
    assert not chain.exists("banner")
    chain.add("banner", lambda value: value)
    chain.add("messages", lambda value: value)
    assert chain.exists("banner")

    chain.clear("banner")
    assert not chain.exists("banner")
    assert chain.exists("messages")

    chain.clear()
    assert len(chain) == 0


def test_copy_is_independent() -> None:
    chain = FilterChain()
    chain.add("banner", lambda value: value + "1")
    copied = chain.copy()
    copied.add("banner", lambda value: value + "2")

    assert chain.apply("banner", "") == "1"
    assert copied.apply("banner", "") == "12"
