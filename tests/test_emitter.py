"""Tests for document generation and file output (live_templates.emitter).

Covers:
- build_document over the snapshot fixture
- Output file writing, overwrite and parent directory creation
- Idempotence
- Console summary
- Write failures propagating
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from unittest.mock import patch

import pytest

from live_templates.config import GeneratorConfig
from live_templates.emitter import Emitter, build_document


# ---------------------------------------------------------------------------
# build_document
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestBuildDocument:
    def test_templates_for_every_component(self, uxcore_exports):
        root = ET.fromstring(build_document(uxcore_exports))
        assert root.tag == "templateSet"
        assert root.get("group") == "UXCore"
        names = [t.get("name") for t in root.iter("template")]
        assert names == [
            "button",
            "form",
            "form-item",
            "menu",
            "sub-menu",
            "table",
            "icon",
            "slider",
        ]

    def test_button_template(self, uxcore_exports):
        root = ET.fromstring(build_document(uxcore_exports))
        button = root.find("template[@name='button']")
        assert button.get("description") == "UXCore Button"
        assert button.get("toReformat") == "true"
        assert button.get("toShortenFQNames") == "true"
        assert button.get("value") == (
            '<Button\n    size="$size$" \n    disabled={$disabled$} \n    onClick={}'
            "\n>\n    $END$\n</Button>\n"
        )
        variables = [(v.get("name"), v.get("defaultValue")) for v in button.iter("variable")]
        assert variables == [("size", '"large"'), ("disabled", '"false"')]

    def test_element_default_skipped(self, uxcore_exports):
        root = ET.fromstring(build_document(uxcore_exports))
        table = root.find("template[@name='table']")
        assert table.get("value") == (
            '<Table\n    pageSize={$pageSize$} \n    locale="$locale$"\n>\n    $END$\n</Table>\n'
        )
        assert [v.get("name") for v in table.iter("variable")] == ["pageSize", "locale"]

    def test_slider_special_values(self, uxcore_exports):
        root = ET.fromstring(build_document(uxcore_exports))
        slider = root.find("template[@name='slider']")
        assert slider.get("value") == (
            "<Slider\n    step={$step$} \n    max={$max$} \n    marks={$marks$} \n    value={}\n/>\n"
        )
        variables = {v.get("name"): v.get("defaultValue") for v in slider.iter("variable")}
        assert variables == {
            "step": '"0.5"',
            "max": '"Infinity"',
            "marks": '"{"0":"0°C","100":"100°C"}"',
        }

    def test_sub_component_and_self_closing(self, uxcore_exports):
        root = ET.fromstring(build_document(uxcore_exports))
        assert root.find("template[@name='form-item']").get("value") == (
            "<Form.Item\n    required\n/>\n"
        )
        assert root.find("template[@name='icon']").get("value") == "<Icon />\n"

    def test_config_threaded_through(self, uxcore_exports):
        config = GeneratorConfig(prefix="ux-", group="Kuma", skip=["Slider"])
        root = ET.fromstring(build_document(uxcore_exports, config))
        assert root.get("group") == "Kuma"
        names = [t.get("name") for t in root.iter("template")]
        assert "ux-slider" not in names
        assert names[0] == "ux-button"
        assert root.find("template[@name='ux-button']").get("description") == "Kuma Button"

    def test_idempotent(self, uxcore_exports):
        assert build_document(uxcore_exports) == build_document(uxcore_exports)

    def test_empty_library(self):
        assert build_document({}) == '<templateSet group="UXCore">\n</templateSet>\n'


# ---------------------------------------------------------------------------
# Emitter.run
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestEmitterRun:
    def test_writes_configured_output(self, uxcore_exports, tmp_path: Path):
        output = tmp_path / "resources" / "liveTemplates" / "UXCore.xml"
        emitter = Emitter(GeneratorConfig(output=output))
        written = emitter.run(uxcore_exports)
        assert written == output
        assert output.read_text(encoding="utf-8") == build_document(uxcore_exports)
        assert len(emitter.registry) == 8

    def test_explicit_output_overrides_config(self, uxcore_exports, tmp_path: Path):
        target = tmp_path / "out.xml"
        written = Emitter().run(uxcore_exports, output=target)
        assert written == target
        assert target.exists()

    def test_overwrites_existing_file(self, uxcore_exports, tmp_path: Path):
        target = tmp_path / "UXCore.xml"
        target.write_text("stale content that is much longer than nothing", encoding="utf-8")
        Emitter().run({}, output=target)
        assert target.read_text(encoding="utf-8") == (
            '<templateSet group="UXCore">\n</templateSet>\n'
        )

    def test_byte_identical_reruns(self, uxcore_exports, tmp_path: Path):
        target = tmp_path / "UXCore.xml"
        Emitter().run(uxcore_exports, output=target)
        first = target.read_bytes()
        Emitter().run(uxcore_exports, output=target)
        assert target.read_bytes() == first

    def test_reports_component_count(self, uxcore_exports, tmp_path: Path):
        with patch("live_templates.emitter.console") as mock_console:
            Emitter().run(uxcore_exports, output=tmp_path / "x.xml")
        message = mock_console.print.call_args[0][0]
        assert "8" in message
        assert "components" in message

    def test_write_failure_propagates(self, uxcore_exports, tmp_path: Path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("", encoding="utf-8")
        with pytest.raises(OSError):
            Emitter().run(uxcore_exports, output=blocker / "UXCore.xml")
