"""Live-template generator for UI component libraries.

Walks a component library's exports and writes a JetBrains live-template
file with one JSX snippet per component, its default props as tab stops.

Quick usage::

    from live_templates import Emitter, GeneratorConfig, load_snapshot

    config = GeneratorConfig(prefix="ux-", skip=["Form.Item"])
    exports = load_snapshot("exports.json")
    Emitter(config).run(exports)
"""

__version__ = "0.1.0"

from live_templates.collector import ComponentCollector, classify, collect, normalize_display_name
from live_templates.config import GeneratorConfig
from live_templates.emitter import Emitter, build_document
from live_templates.models import ComponentDescriptor, SerializedProps
from live_templates.renderer import TemplateRenderer
from live_templates.serializer import quote_for_xml, serialize_props
from live_templates.snapshot import SnapshotError, load_snapshot, take_snapshot

__all__ = [
    "__version__",
    "ComponentCollector",
    "ComponentDescriptor",
    "Emitter",
    "GeneratorConfig",
    "SerializedProps",
    "SnapshotError",
    "TemplateRenderer",
    "build_document",
    "classify",
    "collect",
    "load_snapshot",
    "normalize_display_name",
    "quote_for_xml",
    "serialize_props",
    "take_snapshot",
]
