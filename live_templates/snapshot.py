"""Export-graph snapshots of a JavaScript component library.

The generator needs the *shape* of a library's exports (which members carry
``propTypes``, ``displayName`` or ``defaultProps``, and what the defaults
are).  That shape lives in a Node.js module, so a small Node script
``require()``s the library and prints its enumerable own properties as JSON.
Functions also carry the component statics they inherit from a base class.

Values that JSON cannot carry are tagged with a ``"$js"`` key::

    {"$js": "function", "name": "Button", "properties": {...statics...}}
    {"$js": "undefined"}
    {"$js": "number", "value": "NaN"}

:func:`decode_snapshot` turns those tags into :class:`JSValue` markers.
"""

from __future__ import annotations

import json
import tempfile
import textwrap
from pathlib import Path
from typing import Any

from .jsvalues import UNDEFINED, JSValue
from .utils import run_command


class SnapshotError(Exception):
    """Raised when the library's exports cannot be captured."""

    def __init__(self, message: str, stderr: str = "") -> None:
        self.stderr = stderr
        super().__init__(message)


# ---------------------------------------------------------------------------
# Node script template
# ---------------------------------------------------------------------------

_SNAPSHOT_SCRIPT = textwrap.dedent("""\
    const libraryName = {library_json};
    const maxDepth = {max_depth};
    const resolved = require.resolve(libraryName, {{ paths: [process.cwd()] }});
    const library = require(resolved);

    const ancestors = [];

    // Statics a subclass reads through its prototype chain (class B extends A).
    const inheritedStatics = {inherited_statics_json};

    const ownAndInheritedKeys = (value) => {{
        const keys = Object.keys(value);
        if (typeof value === 'function') {{
            for (const name of inheritedStatics) {{
                if (name in value && keys.indexOf(name) === -1) {{
                    keys.push(name);
                }}
            }}
        }}
        return keys;
    }};

    const encodeProperties = (value, depth) => {{
        const out = {{}};
        for (const key of ownAndInheritedKeys(value)) {{
            let item;
            try {{
                item = value[key];
            }} catch (err) {{
                continue;
            }}
            out[key] = encode(item, depth + 1);
        }}
        return out;
    }};

    const encode = (value, depth) => {{
        if (value === undefined) {{
            return {{ $js: 'undefined' }};
        }}
        if (value === null) {{
            return null;
        }}
        const tag = Object.prototype.toString.call(value);
        switch (typeof value) {{
            case 'string':
            case 'boolean':
                return value;
            case 'number':
                return Number.isFinite(value) ? value : {{ $js: 'number', value: String(value) }};
            case 'bigint':
                return {{ $js: 'bigint', value: String(value) }};
            case 'symbol':
                return {{ $js: 'symbol', name: String(value.description || '') }};
            default:
                break;
        }}
        if (ancestors.indexOf(value) > -1) {{
            return {{ $js: 'circular' }};
        }}
        if (tag === '[object Date]') {{
            return {{ $js: 'date', value: isNaN(value.getTime()) ? null : value.toISOString() }};
        }}
        if (depth > maxDepth) {{
            return typeof value === 'function' ? {{ $js: 'function', name: value.name || '' }} : {{}};
        }}
        ancestors.push(value);
        try {{
            if (typeof value === 'function') {{
                return {{
                    $js: 'function',
                    name: value.name || '',
                    properties: encodeProperties(value, depth),
                }};
            }}
            if (Array.isArray(value)) {{
                return value.map((item) => encode(item, depth + 1));
            }}
            if (tag === '[object Object]') {{
                return encodeProperties(value, depth);
            }}
            return {{ $js: 'other', name: tag }};
        }} finally {{
            ancestors.pop();
        }}
    }};

    ancestors.push(library);
    process.stdout.write('\\n' + JSON.stringify(encodeProperties(library, 0)) + '\\n');
""")

DEFAULT_MAX_DEPTH = 12

# Component statics looked up like ordinary property reads, so a subclass
# inherits them from its base class.
INHERITED_STATICS = ("propTypes", "displayName", "defaultProps", "default")


def build_snapshot_script(library: str, max_depth: int = DEFAULT_MAX_DEPTH) -> str:
    """Return the Node.js script that dumps *library*'s exports as JSON."""
    return _SNAPSHOT_SCRIPT.format(
        library_json=json.dumps(library),
        max_depth=int(max_depth),
        inherited_statics_json=json.dumps(list(INHERITED_STATICS)),
    )


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def decode_snapshot(data: Any) -> Any:
    """Convert raw snapshot JSON into Python values and :class:`JSValue` markers."""
    if isinstance(data, list):
        return [decode_snapshot(item) for item in data]
    if not isinstance(data, dict):
        return data

    kind = data.get("$js")
    if kind is None:
        return {key: decode_snapshot(value) for key, value in data.items()}

    if kind == "undefined":
        return UNDEFINED
    if kind == "number":
        return float(data.get("value", "NaN").replace("Infinity", "inf"))
    return JSValue(
        kind=kind,
        name=data.get("name"),
        value=data.get("value"),
        properties={
            key: decode_snapshot(value)
            for key, value in (data.get("properties") or {}).items()
        },
    )


def _parse_script_output(output: str) -> Any:
    """Pick the JSON document out of the script's stdout.

    Libraries may print warnings while loading, so only the last line that
    looks like a JSON object is parsed.
    """
    for candidate in reversed(output.split("\n")):
        candidate = candidate.strip()
        if candidate.startswith("{"):
            return json.loads(candidate)
    raise SnapshotError("Snapshot script produced no JSON output")


# ---------------------------------------------------------------------------
# Capture / persistence
# ---------------------------------------------------------------------------


async def capture_snapshot(
    library: str,
    cwd: str | Path | None = None,
    timeout: int = 120,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> dict[str, Any]:
    """Run Node.js against *library* and return the raw (tagged) snapshot.

    Args:
        library: Module name or path passed to ``require``.
        cwd: Directory whose ``node_modules`` resolves *library*.
        timeout: Maximum seconds for the Node process.
        max_depth: Property depth after which values are truncated.

    Raises:
        SnapshotError: ``node`` is missing, the script fails or times out, or
            its output is not JSON.
    """
    script = build_snapshot_script(library, max_depth=max_depth)

    with tempfile.TemporaryDirectory(prefix="live-templates-") as tmp:
        script_path = Path(tmp) / "_snapshot.js"
        script_path.write_text(script, encoding="utf-8")

        try:
            returncode, stdout, stderr = await run_command(
                ["node", str(script_path)], cwd=cwd, timeout=timeout
            )
        except FileNotFoundError as exc:
            raise SnapshotError("'node' not found. Snapshotting a library requires Node.js.") from exc

    if returncode != 0:
        raise SnapshotError(
            f"Snapshot of '{library}' exited with code {returncode}", stderr=stderr
        )

    try:
        raw = _parse_script_output(stdout)
    except json.JSONDecodeError as exc:
        raise SnapshotError(f"Failed to parse snapshot output: {exc}") from exc
    if not isinstance(raw, dict):
        raise SnapshotError("Snapshot output is not a JSON object")
    return raw


async def take_snapshot(
    library: str,
    cwd: str | Path | None = None,
    timeout: int = 120,
) -> Any:
    """Capture *library*'s exports and return the decoded export graph."""
    raw = await capture_snapshot(library, cwd=cwd, timeout=timeout)
    return decode_snapshot(raw)


def load_snapshot(path: str | Path) -> Any:
    """Load a saved snapshot file and decode it."""
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    return decode_snapshot(raw)


def save_snapshot(raw: dict[str, Any], path: str | Path) -> Path:
    """Write a raw snapshot (as returned by :func:`capture_snapshot`) to disk."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(raw, indent=2, ensure_ascii=False), encoding="utf-8")
    return target
