"""
config.py

Responsibility: Load builder configuration into a deterministic, typed model.

Configuration is optional. Without a file every field keeps its default and
the bundled templates are used. A YAML file can be given explicitly or via
the `TEMPLATE_BUILDER_CONFIG` environment variable.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from template_builder.preferences import DEFAULT_PREFERENCES

CONFIG_ENV_VAR = "TEMPLATE_BUILDER_CONFIG"

PACKAGE_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class BuilderConfig:
    """Settings shared by the assembler, the renderer and navigation discovery."""

    templates_dir: Path | None = None
    page_template: str = "page.html"
    navigation_template: str = "navigation.html"
    navigation_filename: str = "site_nav.html"
    navigation_search_depth: int = 5
    fallback_navigation: Path = PACKAGE_TEMPLATES_DIR / "site_nav.html"
    default_preferences: dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_PREFERENCES))
    # Drain captured output after reading it (server). One-shot scripts keep it.
    long_lived: bool = True
    run_cms: bool = True


def _optional_path(data: dict[str, Any], key: str) -> Path | None:
    raw = data.get(key)
    if raw is None or str(raw).strip() == "":
        return None
    return Path(str(raw)).expanduser()


def _parse_config_mapping(data: dict[str, Any]) -> BuilderConfig:
    defaults = BuilderConfig()

    depth_raw = data.get("navigation_search_depth", defaults.navigation_search_depth)
    try:
        depth = int(depth_raw)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"`navigation_search_depth` must be an integer, got {depth_raw!r}") from e
    if depth < 0:
        raise ConfigError("`navigation_search_depth` must not be negative.")

    prefs_raw = data.get("default_preferences")
    if prefs_raw is None:
        prefs_raw = dict(defaults.default_preferences)
    if not isinstance(prefs_raw, dict):
        raise ConfigError("`default_preferences` must be an object/mapping when provided.")

    fallback = _optional_path(data, "fallback_navigation") or defaults.fallback_navigation

    return BuilderConfig(
        templates_dir=_optional_path(data, "templates_dir"),
        page_template=str(data.get("page_template") or defaults.page_template).strip(),
        navigation_template=str(data.get("navigation_template") or defaults.navigation_template).strip(),
        navigation_filename=str(data.get("navigation_filename") or defaults.navigation_filename).strip(),
        navigation_search_depth=depth,
        fallback_navigation=fallback,
        default_preferences=dict(prefs_raw),
        long_lived=bool(data.get("long_lived", defaults.long_lived)),
        run_cms=bool(data.get("run_cms", defaults.run_cms)),
    )


def load_config(config_path: str | Path | None = None) -> BuilderConfig:
    """
    Load a `BuilderConfig`.

    Lookup order:
    - explicit `config_path`
    - path in the `TEMPLATE_BUILDER_CONFIG` environment variable
    - built-in defaults

    Recognised YAML keys mirror the `BuilderConfig` fields.
    """
    if config_path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR, "").strip()
        if not env_path:
            return BuilderConfig()
        config_path = env_path

    path = Path(config_path)
    if not path.exists():
        raise ConfigError(f"Config file does not exist: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file is not valid YAML: {path}") from e
    if not isinstance(data, dict):
        raise ConfigError("Config file must be a mapping/object at the top level.")

    return _parse_config_mapping(data)
