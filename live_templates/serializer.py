"""defaultProps -> JSX attribute markup with tab-stop placeholders.

The markup ends up inside an XML attribute, so quotes and newlines are
written as entities (``&quot;``, ``&#10;``).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .jsvalues import is_number, own_properties, to_json
from .models import SerializedProps

PROPS_SEPARATOR = " &#10;    "

# Ampersand first: later substitutions introduce ampersands of their own.
_XML_ESCAPES = (
    ("&", "&amp;"),
    ("'", "&apos;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
)

# Keys present on every JSX element object.
_ELEMENT_FIELDS = ("type", "key", "ref")


class XMLText(str):
    """A string that is already XML-escaped."""


def quote_for_xml(text: str) -> str:
    """Escape ``& ' < > "`` as XML entities."""
    for char, entity in _XML_ESCAPES:
        text = text.replace(char, entity)
    return text


def is_element(value: Mapping) -> bool:
    """Return ``True`` if *value* looks like a JSX element descriptor."""
    return all(field in value for field in _ELEMENT_FIELDS)


def serialize_props(default_props: Any) -> SerializedProps:
    """Serialize a component's defaultProps.

    Each default becomes one attribute fragment, in declared order:

    * numbers and ``false`` -> ``key={$key$}`` with the value as placeholder
    * ``true`` -> bare ``key``
    * strings -> ``key=&quot;$key$&quot;`` with the string as placeholder
    * plain objects -> ``key={$key$}`` with their escaped JSON as placeholder;
      JSX elements are left out entirely
    * anything else -> ``key={}`` and no placeholder

    ``children`` is returned separately and never becomes an attribute.
    """
    fragments: list[str] = []
    placeholders: dict[str, Any] = {}
    children: Any = None

    for key, value in own_properties(default_props):
        if key == "children":
            children = value
            continue

        if is_number(value):
            fragments.append(f"{key}={{${key}$}}")
            placeholders[key] = value
        elif isinstance(value, bool):
            if value:
                fragments.append(key)
            else:
                fragments.append(f"{key}={{${key}$}}")
                placeholders[key] = value
        elif isinstance(value, Mapping):
            if is_element(value):
                continue
            fragments.append(f"{key}={{${key}$}}")
            placeholders[key] = XMLText(quote_for_xml(to_json(value)))
        elif isinstance(value, str):
            fragments.append(f"{key}=&quot;${key}$&quot;")
            placeholders[key] = value
        else:
            fragments.append(f"{key}={{}}")

    return SerializedProps(
        props_count=len(fragments),
        props_markup=PROPS_SEPARATOR.join(fragments),
        children=children,
        placeholders=placeholders,
    )
