"""Generator configuration.

A single typed, validated record loaded once before traversal and passed
explicitly to the collector, renderer and emitter.  The JSON file keeps the
camelCase keys of the existing ``config.json`` format (``skipParentName``,
``sortKeys``); Python code uses snake_case attribute names.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_OUTPUT = Path("resources/liveTemplates/UXCore.xml")


class GeneratorConfig(BaseModel):
    """Settings for one generator run.

    Instances are frozen: the same configuration is used for the whole
    traversal and rendering pass.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    skip: list[str] = Field(
        default_factory=list,
        description="Qualified component keys to exclude, e.g. 'Form.Item'",
    )
    skip_parent_name: list[str] = Field(
        default_factory=list,
        alias="skipParentName",
        description="Parent names whose children keep their bare name",
    )
    prefix: str = Field(default="", description="Prepended to every template name")
    group: str = Field(
        default="UXCore",
        min_length=1,
        description="templateSet group and description prefix",
    )
    library: str = Field(
        default="uxcore", min_length=1, description="Node module to snapshot"
    )
    output: Path = Field(default=DEFAULT_OUTPUT, description="Generated XML file")
    sort_keys: bool = Field(
        default=False,
        alias="sortKeys",
        description="Walk exports in sorted key order instead of declared order",
    )

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration as JSON using the camelCase keys."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2, by_alias=True), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "GeneratorConfig":
        """Load a configuration file.

        Raises:
            FileNotFoundError: If *path* does not exist.
            pydantic.ValidationError: If the JSON does not match the schema.
        """
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def load_or_default(cls, path: Path | None) -> "GeneratorConfig":
        """Load *path* when it exists, otherwise return the defaults."""
        if path is None or not Path(path).exists():
            return cls()
        return cls.load(path)

    @classmethod
    def from_env(cls, base: "GeneratorConfig | None" = None) -> "GeneratorConfig":
        """Apply environment overrides on top of *base* (or the defaults).

        Recognised variables (all optional):
            LIVE_TEMPLATES_PREFIX, LIVE_TEMPLATES_GROUP, LIVE_TEMPLATES_LIBRARY,
            LIVE_TEMPLATES_OUTPUT, LIVE_TEMPLATES_SKIP (comma-separated).
        """
        base = base or cls()
        updates: dict[str, Any] = {}
        if os.environ.get("LIVE_TEMPLATES_PREFIX") is not None:
            updates["prefix"] = os.environ["LIVE_TEMPLATES_PREFIX"]
        if os.environ.get("LIVE_TEMPLATES_GROUP"):
            updates["group"] = os.environ["LIVE_TEMPLATES_GROUP"]
        if os.environ.get("LIVE_TEMPLATES_LIBRARY"):
            updates["library"] = os.environ["LIVE_TEMPLATES_LIBRARY"]
        if os.environ.get("LIVE_TEMPLATES_OUTPUT"):
            updates["output"] = Path(os.environ["LIVE_TEMPLATES_OUTPUT"])
        if os.environ.get("LIVE_TEMPLATES_SKIP"):
            extra = [s.strip() for s in os.environ["LIVE_TEMPLATES_SKIP"].split(",") if s.strip()]
            updates["skip"] = [*base.skip, *extra]

        if not updates:
            return base
        return base.model_validate({**base.model_dump(), **updates})
