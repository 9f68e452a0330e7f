"""Unit tests for console helpers (fastdash.utils).

Tests cover:
- style_message tag colouring and markup escaping
- make_executable
- Rich output helpers (print_report, print_summary_table, etc.)
"""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from fastdash.scaffolder.models import FileResult, WriteOutcome
from fastdash.utils import (
    console,
    make_executable,
    print_error,
    print_header,
    print_info,
    print_report,
    print_success,
    print_summary_table,
    print_warning,
    style_message,
)


# ---------------------------------------------------------------------------
# style_message
# ---------------------------------------------------------------------------


class TestStyleMessage:
    @pytest.mark.unit
    def test_known_tag_is_styled(self):
        assert style_message("[SUCCESS] Created file: x") == (
            "[bold green]\\[SUCCESS][/bold green] Created file: x"
        )

    @pytest.mark.unit
    def test_action_required_tag(self):
        assert style_message("[ACTION REQUIRED] Review it").startswith(
            "[bold magenta]\\[ACTION REQUIRED][/bold magenta]"
        )

    @pytest.mark.unit
    def test_markup_in_text_is_escaped(self):
        styled = style_message("[ERROR] bad [red]name[/red]")
        assert styled.endswith("bad \\[red]name\\[/red]")

    @pytest.mark.unit
    def test_untagged_text_escaped(self):
        assert style_message("plain [b]text[/b]") == "plain \\[b]text\\[/b]"

    @pytest.mark.unit
    def test_unknown_tag_left_as_text(self):
        with console.capture() as capture:
            console.print(style_message("[DEBUG] x"))
        assert "[DEBUG] x" in capture.get()

    @pytest.mark.unit
    def test_renders_without_markup_errors(self):
        with console.capture() as capture:
            console.print(style_message("[WARNING] keep [this] text"))
        output = capture.get()
        assert "WARNING" in output
        assert "keep [this] text" in output


# ---------------------------------------------------------------------------
# make_executable
# ---------------------------------------------------------------------------


class TestMakeExecutable:
    @pytest.mark.unit
    @pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
    def test_sets_execute_bits(self, tmp_path: Path):
        script = tmp_path / "run.sh"
        script.write_text("#!/bin/sh\n", encoding="utf-8")
        script.chmod(0o644)
        make_executable(script)
        assert stat.S_IMODE(script.stat().st_mode) == 0o755


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


class TestRichHelpers:
    @pytest.mark.unit
    def test_print_report(self, tmp_path: Path):
        result = FileResult(path=tmp_path / "x.go", outcome=WriteOutcome.CREATED)
        with console.capture() as capture:
            print_report(result)
        output = capture.get()
        assert "SUCCESS" in output
        assert "Created file:" in output

    @pytest.mark.unit
    def test_print_summary_table(self):
        # Should not raise
        print_summary_table({"Project": "demo", "Module": "demo"}, title="Test Summary")

    @pytest.mark.unit
    def test_print_header(self):
        print_header("Create New Fast Dashboard Project")

    @pytest.mark.unit
    def test_print_success(self):
        print_success("Project created")

    @pytest.mark.unit
    def test_print_error(self):
        print_error("Something failed")

    @pytest.mark.unit
    def test_print_warning(self):
        print_warning("Using default width")

    @pytest.mark.unit
    def test_print_info(self):
        print_info("Exiting.")
