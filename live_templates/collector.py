"""Component discovery over a library's export graph.

Walks the exports depth-first and records every member that looks like a UI
component (it declares ``propTypes``, a ``displayName`` or ``defaultProps``)
under a qualified key such as ``Form.Item``.

Traversal order
    Properties are visited in the order the export graph declares them
    (dict insertion order, which JSON snapshots preserve), or in sorted order
    when ``GeneratorConfig.sort_keys`` is set.  Each recorded component is
    descended into before its next sibling is visited, so when two paths
    produce the same key the one reached first in that order wins.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Any

from .config import GeneratorConfig
from .jsvalues import get_property, is_truthy, own_properties
from .models import (
    NOT_COMPONENT,
    Classification,
    Component,
    ComponentDescriptor,
    Registry,
)

_COMPONENT_SIGNALS = ("propTypes", "displayName", "defaultProps")
_UPPERCASE = re.compile(r"[A-Z]")


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def _has_component_signal(value: Any) -> bool:
    return any(is_truthy(get_property(value, signal)) for signal in _COMPONENT_SIGNALS)


def classify(value: Any) -> Classification:
    """Decide whether *value* is a component.

    A value without its own signal still qualifies through a nested
    ``default`` export (an ES module namespace wrapping the component).
    """
    if not is_truthy(value):
        return NOT_COMPONENT
    if _has_component_signal(value):
        return Component(value)

    nested = get_property(value, "default")
    if is_truthy(nested) and _has_component_signal(nested):
        return Component(nested, unwrapped=True)
    return NOT_COMPONENT


# ---------------------------------------------------------------------------
# Naming
# ---------------------------------------------------------------------------


def qualify_name(name: str, parent_name: str | None, config: GeneratorConfig) -> str:
    """Return the registry key for *name* found under *parent_name*.

    Names that already contain the parent name anywhere (``Menu`` ->
    ``SubMenu``) keep their bare name.
    """
    if (
        parent_name
        and parent_name not in config.skip_parent_name
        and parent_name not in name
    ):
        return f"{parent_name}.{name}"
    return name


def normalize_display_name(name: str | None) -> str | None:
    """Turn a qualified key into a hyphenated lowercase alias.

    ``"Form.Item"`` -> ``"form-item"``, ``"DatePicker"`` -> ``"date-picker"``.
    Only the first dot is removed.  Falsy input is returned unchanged.
    """
    if not name:
        return name
    name = name.replace(".", "", 1)
    return _UPPERCASE.sub(
        lambda m: ("" if m.start() == 0 else "-") + m.group(0).lower(), name
    )


def stringify_prop_types(prop_types: Any) -> tuple[bool, dict[str, None]]:
    """Split declared prop names into ``(has_children, prop_schema)``."""
    has_children = False
    props: dict[str, None] = {}
    for key, _validator in own_properties(prop_types):
        if key == "children":
            has_children = True
        else:
            props[key] = None
    return has_children, props


# ---------------------------------------------------------------------------
# Collector
# ---------------------------------------------------------------------------


class ComponentCollector:
    """Builds the component registry for one export graph."""

    def __init__(self, config: GeneratorConfig) -> None:
        self.config = config

    def _properties(self, value: Any) -> Iterator[tuple[str, Any]]:
        items = own_properties(value)
        if self.config.sort_keys:
            items = sorted(items, key=lambda item: item[0])
        return iter(items)

    def collect(self, root: Any) -> Registry:
        """Walk *root* and return the registry of discovered components."""
        registry: Registry = {}
        stack: list[tuple[Iterator[tuple[str, Any]], str | None]] = [
            (self._properties(root), None)
        ]

        while stack:
            properties, parent_name = stack[-1]
            entry = next(properties, None)
            if entry is None:
                stack.pop()
                continue

            name, value = entry
            key = qualify_name(name, parent_name, self.config)
            if key in self.config.skip or key in registry:
                continue
            if not _UPPERCASE.match(name):
                continue

            result = classify(value)
            if not isinstance(result, Component):
                continue
            component = result.value

            has_children, prop_schema = stringify_prop_types(
                get_property(component, "propTypes")
            )
            registry[key] = ComponentDescriptor(
                qualified_key=key,
                alias=normalize_display_name(key),
                has_children=has_children,
                prop_schema=prop_schema,
                default_props=get_property(component, "defaultProps"),
            )

            stack.append((self._properties(component), name))

        return registry


def collect(root: Any, config: GeneratorConfig | None = None) -> Registry:
    """Convenience wrapper around :meth:`ComponentCollector.collect`."""
    return ComponentCollector(config or GeneratorConfig()).collect(root)
