"""Command-line entry point.

Usage::

    python -m live_templates --config config.json
    python -m live_templates --library uxcore --cwd ./frontend --save-snapshot exports.json
    python -m live_templates --snapshot exports.json --output resources/liveTemplates/UXCore.xml
"""

from __future__ import annotations

import asyncio
import sys
import time
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from rich.markup import escape

from .config import GeneratorConfig
from .emitter import Emitter
from .snapshot import SnapshotError, capture_snapshot, decode_snapshot, load_snapshot, save_snapshot
from .utils import (
    console,
    format_duration,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)


def _load_exports(args: Any, config: GeneratorConfig) -> Any:
    """Return the export graph from a saved snapshot or a fresh Node.js capture."""
    if args.snapshot:
        snapshot_path = Path(args.snapshot)
        if not snapshot_path.exists():
            print_error(f"Error: Snapshot file not found: {escape(str(snapshot_path))}")
            sys.exit(1)
        return load_snapshot(snapshot_path)

    console.print(f"Capturing exports of [cyan]{config.library}[/cyan] with Node.js...")
    try:
        raw = asyncio.run(capture_snapshot(config.library, cwd=args.cwd, timeout=args.timeout))
    except SnapshotError as exc:
        print_error(f"Error: {escape(str(exc))}")
        if exc.stderr:
            console.print(f"[dim]{escape(exc.stderr[:500])}[/dim]")
        sys.exit(1)

    if args.save_snapshot:
        saved = save_snapshot(raw, args.save_snapshot)
        console.print(f"Snapshot saved to {saved}")
    return decode_snapshot(raw)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``python -m live_templates``."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="live-templates",
        description="Generate IDE live templates from a UI component library's exports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  live-templates --config config.json\n"
            "  live-templates --snapshot exports.json -o UXCore.xml\n"
        ),
    )
    parser.add_argument(
        "--config", "-c",
        default="config.json",
        help="Generator configuration JSON (default: config.json, optional)",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--snapshot",
        default=None,
        help="Read the export graph from a saved snapshot instead of running Node.js",
    )
    source.add_argument(
        "--library",
        default=None,
        help="Node module to capture (overrides config 'library')",
    )
    parser.add_argument("--cwd", default=None, help="Directory that resolves the library")
    parser.add_argument("--output", "-o", default=None, help="Output XML file")
    parser.add_argument("--prefix", default=None, help="Template name prefix")
    parser.add_argument("--save-snapshot", default=None, help="Write the captured snapshot here")
    parser.add_argument(
        "--timeout", type=int, default=120, help="Node.js timeout in seconds (default: 120)"
    )

    args = parser.parse_args(argv)

    try:
        config = GeneratorConfig.from_env(GeneratorConfig.load_or_default(Path(args.config)))
        overrides: dict[str, Any] = {}
        if args.library:
            overrides["library"] = args.library
        if args.output:
            overrides["output"] = Path(args.output)
        if args.prefix is not None:
            overrides["prefix"] = args.prefix
        if overrides:
            config = GeneratorConfig.model_validate({**config.model_dump(), **overrides})
    except ValidationError as exc:
        print_error(f"Error: Invalid configuration: {escape(str(exc))}")
        sys.exit(1)

    started = time.monotonic()
    exports = _load_exports(args, config)

    emitter = Emitter(config)
    output_path = emitter.run(exports)
    if not emitter.registry:
        print_warning(f"No components found in the exports of '{config.library}'")

    print_summary_table(
        {
            "Components": str(len(emitter.registry)),
            "Output": str(output_path),
            "Duration": format_duration(time.monotonic() - started),
        },
        title=f"{config.group} live templates",
    )
    print_success(f"Wrote {output_path}")


if __name__ == "__main__":
    main()
