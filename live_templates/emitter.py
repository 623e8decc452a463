"""Live-template file generation.

Collects components from an export graph, renders one ``<template>`` per
component and writes the ``<templateSet>`` document.  Write failures are not
caught: a run either produces the whole file or fails.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .collector import ComponentCollector
from .config import GeneratorConfig
from .models import Registry
from .renderer import TemplateRenderer
from .utils import console


class Emitter:
    """Drives a single generator run for one configuration."""

    def __init__(self, config: GeneratorConfig | None = None) -> None:
        self.config = config or GeneratorConfig()
        self.collector = ComponentCollector(self.config)
        self.renderer = TemplateRenderer(self.config)
        self.registry: Registry = {}

    def build_document(self, root_exports: Any) -> str:
        """Collect components under *root_exports* and render the XML document."""
        self.registry = self.collector.collect(root_exports)
        blocks = [
            self.renderer.render(key, descriptor)
            for key, descriptor in self.registry.items()
        ]
        return self.renderer.render_document(blocks)

    def run(self, root_exports: Any, output: str | Path | None = None) -> Path:
        """Generate the document and write it, replacing any previous file.

        Args:
            root_exports: The library's export graph.
            output: Destination file.  Defaults to ``config.output``.

        Returns:
            The path that was written.
        """
        document = self.build_document(root_exports)
        target = Path(output) if output is not None else self.config.output
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(document, encoding="utf-8")

        console.print(f"Found [bold]{len(self.registry)}[/bold] components")
        return target


def build_document(root_exports: Any, config: GeneratorConfig | None = None) -> str:
    """Render the ``<templateSet>`` document for *root_exports* without writing it."""
    return Emitter(config).build_document(root_exports)
