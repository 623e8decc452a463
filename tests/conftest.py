"""Shared pytest fixtures for the live-template generator test suite.

Provides reusable fixtures for:
- The raw and decoded UXCore-like export snapshot
- In-memory export graphs built from plain dicts
- Generator configurations
- A mocked Node.js subprocess
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from live_templates.config import GeneratorConfig
from live_templates.snapshot import decode_snapshot

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Snapshots
# ---------------------------------------------------------------------------


@pytest.fixture
def snapshot_path() -> Path:
    """Path to the UXCore-like export snapshot fixture."""
    path = FIXTURES_DIR / "uxcore-exports.json"
    assert path.exists(), f"Snapshot fixture not found at {path}"
    return path


@pytest.fixture
def raw_snapshot(snapshot_path: Path) -> dict[str, Any]:
    """The snapshot fixture as raw tagged JSON."""
    return json.loads(snapshot_path.read_text(encoding="utf-8"))


@pytest.fixture
def uxcore_exports(raw_snapshot: dict[str, Any]) -> Any:
    """The decoded export graph of the snapshot fixture."""
    return decode_snapshot(raw_snapshot)


# ---------------------------------------------------------------------------
# In-memory export graphs
# ---------------------------------------------------------------------------


def make_component(
    prop_types: dict[str, Any] | None = None,
    default_props: dict[str, Any] | None = None,
    display_name: str | None = None,
    **statics: Any,
) -> dict[str, Any]:
    """Build a component-like dict with optional static sub-components."""
    component: dict[str, Any] = {}
    if display_name is not None:
        component["displayName"] = display_name
    if prop_types is not None:
        component["propTypes"] = prop_types
    if default_props is not None:
        component["defaultProps"] = default_props
    component.update(statics)
    return component


@pytest.fixture
def component_factory():
    """Factory for component-like dicts (see :func:`make_component`)."""
    return make_component


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@pytest.fixture
def default_config() -> GeneratorConfig:
    """Configuration with every field at its default."""
    return GeneratorConfig()


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """A config.json in the camelCase format."""
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({
            "skip": ["Form.Item"],
            "skipParentName": ["Menu"],
            "prefix": "ux-",
        }),
        encoding="utf-8",
    )
    return path


# ---------------------------------------------------------------------------
# Mock Node.js
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_node(raw_snapshot: dict[str, Any]):
    """Patch ``asyncio.create_subprocess_exec`` to emulate the snapshot script.

    The fake process prints a library warning followed by the snapshot JSON
    line, like a real ``node`` run would.
    """
    stdout = (
        "Warning: componentWillMount has been renamed\n"
        + json.dumps(raw_snapshot)
        + "\n"
    ).encode("utf-8")

    process = MagicMock()
    process.returncode = 0
    process.communicate = AsyncMock(return_value=(stdout, b""))
    process.wait = AsyncMock(return_value=0)

    return patch(
        "asyncio.create_subprocess_exec",
        AsyncMock(return_value=process),
    )
