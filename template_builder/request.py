"""
request.py

Responsibility: Request-facing helpers.

- Work out which file a request targets (for the CMS controller)
- Turn a CMS controller into a request initializer
- Decode page properties sent as URL-encoded JSON and render them
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from typing import Any, Optional
from urllib.parse import unquote, urlparse

from template_builder.assembler import PageAssembler
from template_builder.context import Initializer, RenderContext

TEMPLATE_PROPERTIES_FIELD = "templateProperties"

CMSController = Callable[[str], Optional[Mapping[str, Any]]]


class PropertiesDecodeError(ValueError):
    pass


def requested_file(environ: Mapping[str, Any]) -> str:
    """
    Return the file a request targets: SCRIPT_FILENAME, else the REQUEST_URI path.
    """
    script = str(environ.get("SCRIPT_FILENAME") or "")
    if script:
        return script
    uri = environ.get("REQUEST_URI")
    if uri:
        return urlparse(str(uri)).path
    return ""


def cms_initializer(controller: CMSController) -> Initializer:
    """
    Wrap a CMS controller as an initializer.

    The controller receives the requested file. An answer of
    `{"action": "return", "value": body}` ends the request with `body`.
    """

    def _initialize(environ: Mapping[str, Any]) -> str | None:
        actions = controller(requested_file(environ))
        if not actions:
            return None
        if actions.get("action") == "return" and "value" in actions:
            return str(actions["value"])
        return None

    return _initialize


def decode_template_properties(
    form: Mapping[str, Any] | None = None,
    query: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Read page properties from the POST form, else the query string.

    The field holds URL-encoded JSON. A missing field means no properties.
    """
    raw = None
    for source in (form, query):
        if source is not None and source.get(TEMPLATE_PROPERTIES_FIELD) is not None:
            raw = source[TEMPLATE_PROPERTIES_FIELD]
            break
    if raw is None:
        return {}

    try:
        data = json.loads(unquote(str(raw)))
    except json.JSONDecodeError as e:
        raise PropertiesDecodeError(f"`{TEMPLATE_PROPERTIES_FIELD}` is not valid JSON") from e
    if not isinstance(data, dict):
        raise PropertiesDecodeError(f"`{TEMPLATE_PROPERTIES_FIELD}` must decode to an object.")
    return data


def render_request(
    form: Mapping[str, Any] | None = None,
    query: Mapping[str, Any] | None = None,
    *,
    assembler: PageAssembler | None = None,
    context: RenderContext | None = None,
) -> str | None:
    assembler = assembler or PageAssembler()
    model = assembler.new_model(decode_template_properties(form, query))
    return assembler.render_html(model, context)
