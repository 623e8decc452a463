"""Jinja2 rendering of live-template XML.

Provides the TemplateRenderer class which turns a ``ComponentDescriptor``
into one ``<template>`` block and wraps blocks into a ``<templateSet>``
document.  The JSX snippet stored in each template's ``value`` attribute is
XML inside XML, so it is built here with its angle brackets and newlines
already escaped (``&lt;``, ``&gt;``, ``&#10;``); the Jinja environment runs
with autoescaping disabled.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .config import GeneratorConfig
from .jsvalues import is_number, is_truthy, to_js_string
from .models import ComponentDescriptor, SerializedProps
from .serializer import XMLText, quote_for_xml, serialize_props

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

END_MARKER = "$END$"
NL = "&#10;"
INDENT = "    "

# Editor contexts in which every generated template is offered.
CONTEXT_OPTIONS = (
    "HTML",
    "HTML_TEXT",
    "JAVASCRIPT",
    "JAVASCRIPT_EXPRESSION",
    "JAVASCRIPT_JSX_HTML",
    "JAVASCRIPT_STATEMENT",
    "JAVASCRIPT_OTHER",
    "OTHER",
)


# ---------------------------------------------------------------------------
# Snippet body
# ---------------------------------------------------------------------------


def children_slot(children: Any) -> str:
    """Text placed between the opening and closing tags.

    A non-empty string or non-zero number default is used as-is (escaped);
    anything else leaves the editor's end-of-expansion cursor ``$END$``.
    """
    if not is_truthy(children):
        return END_MARKER
    if isinstance(children, str):
        return quote_for_xml(children)
    if is_number(children):
        return to_js_string(children)
    return END_MARKER


def build_body(key: str, has_children: bool, props: SerializedProps, children: str) -> str:
    """Build the escaped JSX usage snippet for one component."""
    markup = props.props_markup
    if has_children:
        if props.props_count > 1:
            return (
                f"&lt;{key}{NL}{INDENT}{markup}{NL}&gt;{NL}"
                f"{INDENT}{children}{NL}&lt;/{key}&gt;{NL}"
            )
        if props.props_count == 1:
            return f"&lt;{key} {markup}&gt;{NL}{INDENT}{children} {NL}&lt;/{key}&gt;{NL}"
        return f"&lt;{key}&gt;{NL}{INDENT}{children}{NL}&lt;/{key}&gt;{NL}"

    if props.props_count:
        return f"&lt;{key}{NL}{INDENT}{markup}{NL}/&gt;{NL}"
    return f"&lt;{key} /&gt;{NL}"


def format_placeholder(value: Any) -> str:
    """Placeholder default as it appears inside ``defaultValue``.

    Object placeholders arrive as already-escaped JSON; strings are escaped
    here.  Numbers and booleans use their JavaScript spelling.
    """
    if isinstance(value, XMLText):
        return str(value)
    if isinstance(value, str):
        return quote_for_xml(value)
    return to_js_string(value)


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders live-template XML for discovered components."""

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        template_dir: str | Path | None = None,
    ) -> None:
        self.config = config or GeneratorConfig()
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, key: str, descriptor: ComponentDescriptor) -> str:
        """Render the ``<template>`` block for *descriptor* registered under *key*."""
        props = serialize_props(descriptor.default_props)
        body = build_body(
            key, descriptor.has_children, props, children_slot(props.children)
        )

        variables = [
            {"name": name, "default_value": format_placeholder(value)}
            for name, value in props.placeholders.items()
        ]
        block = self.env.get_template("template.xml.j2").render(
            name=quote_for_xml(f"{self.config.prefix}{descriptor.alias}"),
            value=body,
            description=quote_for_xml(f"{self.config.group} {key}"),
            variables=variables,
            context_options=CONTEXT_OPTIONS,
        )
        return block.rstrip("\n")

    def render_document(self, blocks: list[str]) -> str:
        """Wrap rendered ``<template>`` blocks in the ``<templateSet>`` root."""
        return self.env.get_template("template_set.xml.j2").render(
            group=quote_for_xml(self.config.group),
            blocks=blocks,
        )
