"""Unit tests for utility functions (live_templates.utils).

Tests cover:
- run_command (success, failure, timeout, working directory)
- format_duration
- Rich output helpers
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from live_templates.utils import (
    format_duration,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
    run_command,
)


# ---------------------------------------------------------------------------
# run_command
# ---------------------------------------------------------------------------


class TestRunCommand:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_successful_command(self):
        returncode, stdout, stderr = await run_command(["echo", "hello"])
        assert returncode == 0
        assert stdout == "hello"
        assert stderr == ""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failing_command(self):
        returncode, _, stderr = await run_command(["ls", "/definitely/not/here"])
        assert returncode != 0
        assert stderr

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_timeout(self):
        returncode, stdout, stderr = await run_command(["sleep", "5"], timeout=1)
        assert returncode == -1
        assert stdout == ""
        assert "timed out" in stderr

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_cwd(self, tmp_path):
        _, stdout, _ = await run_command(["pwd"], cwd=tmp_path)
        assert stdout.endswith(tmp_path.name)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_program_raises(self):
        with pytest.raises(FileNotFoundError):
            await run_command(["definitely-not-a-real-program-xyz"])


# ---------------------------------------------------------------------------
# format_duration
# ---------------------------------------------------------------------------


class TestFormatDuration:
    @pytest.mark.unit
    def test_seconds(self):
        assert format_duration(3.7) == "3.7s"

    @pytest.mark.unit
    def test_minutes(self):
        assert format_duration(65.2) == "1m 5s"

    @pytest.mark.unit
    def test_negative(self):
        assert format_duration(-1) == "0.0s"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


class TestRichHelpers:
    @pytest.mark.unit
    def test_print_success(self):
        with patch("live_templates.utils.console") as mock_console:
            print_success("done")
        mock_console.print.assert_called_once_with("[bold green]done[/bold green]")

    @pytest.mark.unit
    def test_print_error(self):
        with patch("live_templates.utils.console") as mock_console:
            print_error("boom")
        mock_console.print.assert_called_once_with("[bold red]boom[/bold red]")

    @pytest.mark.unit
    def test_print_warning(self):
        with patch("live_templates.utils.console") as mock_console:
            print_warning("careful")
        mock_console.print.assert_called_once_with("[bold yellow]careful[/bold yellow]")

    @pytest.mark.unit
    def test_print_summary_table(self):
        with patch("live_templates.utils.console") as mock_console:
            print_summary_table({"Components": "8"}, title="UXCore")
        table = mock_console.print.call_args[0][0]
        assert table.title == "UXCore"
        assert table.row_count == 1
