"""Python view of a JavaScript value graph.

Component libraries are JavaScript modules, so the generator reasons about
their exports with JavaScript semantics: truthiness, own enumerable
properties, string coercion of numbers and ``JSON.stringify``.  Values arrive
either as decoded snapshot data (dicts, lists, primitives and :class:`JSValue`
markers) or as plain Python objects.
"""

from __future__ import annotations

import json
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any


# ---------------------------------------------------------------------------
# Non-JSON JavaScript values
# ---------------------------------------------------------------------------


@dataclass
class JSValue:
    """A JavaScript value that has no direct JSON/Python counterpart.

    Functions and classes keep their enumerable static members in
    ``properties`` so the export walker can descend into them (``Form.Item``
    lives on the ``Form`` function).
    """

    kind: str
    name: str | None = None
    value: Any = None
    properties: dict[str, Any] = field(default_factory=dict)


UNDEFINED = JSValue(kind="undefined")

# Keys of values that JSON.stringify omits from objects.
_UNSERIALISABLE_KINDS = {"undefined", "function", "symbol"}


def is_undefined(value: Any) -> bool:
    return isinstance(value, JSValue) and value.kind == "undefined"


def is_number(value: Any) -> bool:
    """Return ``True`` for ints and floats, excluding booleans."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_truthy(value: Any) -> bool:
    """JavaScript truthiness.

    Only ``null``, ``undefined``, ``false``, ``0``, ``NaN`` and ``""`` are
    falsy; empty objects and arrays are truthy, unlike in Python.
    """
    if value is None or value is False or is_undefined(value):
        return False
    if is_number(value):
        return value != 0 and not math.isnan(value)
    if isinstance(value, str):
        return value != ""
    return True


# ---------------------------------------------------------------------------
# Property access
# ---------------------------------------------------------------------------


def own_properties(value: Any) -> Iterable[tuple[str, Any]]:
    """Yield ``(name, value)`` pairs of a value's own enumerable properties.

    Mappings yield their items, :class:`JSValue` its ``properties`` and other
    Python objects their instance ``__dict__``.  Primitives, lists and
    ``None`` have none.
    """
    if isinstance(value, Mapping):
        return list(value.items())
    if isinstance(value, JSValue):
        return list(value.properties.items())
    if value is None or isinstance(value, (str, bytes, int, float, list, tuple)):
        return []
    try:
        return list(vars(value).items())
    except TypeError:
        return []


def get_property(value: Any, name: str) -> Any:
    """Look up ``value[name]`` the way a JavaScript property read would."""
    if isinstance(value, Mapping):
        return value.get(name)
    if isinstance(value, JSValue):
        return value.properties.get(name)
    if value is None or isinstance(value, (str, bytes, int, float, list, tuple)):
        return None
    return getattr(value, name, None)


# ---------------------------------------------------------------------------
# String coercion
# ---------------------------------------------------------------------------


def format_number(value: int | float) -> str:
    """Format a number like ``String(n)`` does in JavaScript."""
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    magnitude = abs(value)
    if value.is_integer() and magnitude < 1e21:
        return str(int(value))
    if 1e-6 <= magnitude < 1e21:
        return format(Decimal(repr(value)), "f")
    mantissa, _, exponent = repr(value).partition("e")
    if mantissa.endswith(".0"):
        mantissa = mantissa[:-2]
    exp = int(exponent)
    return f"{mantissa}e{'+' if exp > 0 else '-'}{abs(exp)}"


def to_js_string(value: Any) -> str:
    """String coercion for primitive values (template-literal interpolation)."""
    if isinstance(value, str):
        return value
    if value is True:
        return "true"
    if value is False:
        return "false"
    if value is None:
        return "null"
    if is_number(value):
        return format_number(value)
    if is_undefined(value):
        return "undefined"
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None or is_undefined(item) else to_js_string(item) for item in value)
    if isinstance(value, JSValue) and value.kind == "date":
        return str(value.value)
    return "[object Object]"


# ---------------------------------------------------------------------------
# JSON.stringify
# ---------------------------------------------------------------------------


def _prepare_json(value: Any, in_array: bool) -> Any:
    if value is None or isinstance(value, (str, bool)):
        return value
    if is_number(value):
        if isinstance(value, float):
            if not math.isfinite(value):
                return None
            if value.is_integer() and abs(value) < 1e21:
                return int(value)
        return value
    if isinstance(value, Mapping):
        prepared: dict[str, Any] = {}
        for key, item in value.items():
            item = _prepare_json(item, in_array=False)
            if not is_undefined(item):
                prepared[str(key)] = item
        return prepared
    if isinstance(value, (list, tuple)):
        return [_prepare_json(item, in_array=True) for item in value]
    if isinstance(value, JSValue):
        if value.kind == "date":
            return value.value
        if value.kind in _UNSERIALISABLE_KINDS:
            return None if in_array else UNDEFINED
        if value.kind == "number":
            return None
        return {}
    # Python-side graphs: callables behave like functions, other objects
    # serialise their instance attributes.
    if callable(value):
        return None if in_array else UNDEFINED
    return _prepare_json(dict(own_properties(value)), in_array)


def to_json(value: Any) -> str:
    """Serialise like ``JSON.stringify(value)``: compact, unicode preserved.

    ``undefined``, functions and symbols are dropped from objects and become
    ``null`` inside arrays.  Non-finite numbers become ``null``.
    """
    prepared = _prepare_json(value, in_array=False)
    if is_undefined(prepared):
        return "undefined"
    return json.dumps(prepared, ensure_ascii=False, separators=(",", ":"))
