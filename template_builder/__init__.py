"""
template_builder package

Assembles page fragments into a full HTML page through Jinja2.

Key responsibilities are split across modules:
- `page_model.py`: the fragment bag built from keyed properties
- `preferences.py`: default template preferences and recursive merging
- `breadcrumbs.py`: breadcrumb translation and trail additions
- `filters.py`: named content hooks applied in registration order
- `navigation.py`: local navigation resolution and upward file discovery
- `renderer.py`: Jinja2 environment and page rendering
- `context.py`: per-request state (preferences, filters, output buffer, initializers)
- `registry.py`: capture mode for deferred rendering
- `assembler.py`: render orchestration (model -> sections -> page)
- `request.py`: request helpers (requested file, CMS initializer, property decoding)
- `config.py`: YAML-backed configuration
"""

from __future__ import annotations

from template_builder.assembler import Captured, PageAssembler, Rendered, render_page
from template_builder.config import BuilderConfig, load_config
from template_builder.context import RenderContext
from template_builder.page_model import PageModel

__all__ = [
    "BuilderConfig",
    "Captured",
    "PageAssembler",
    "PageModel",
    "RenderContext",
    "Rendered",
    "__version__",
    "load_config",
    "render_page",
]

__version__ = "0.1.0"
