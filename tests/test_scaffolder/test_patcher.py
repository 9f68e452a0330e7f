"""Tests for the marker-based file patcher.

Covers:
- Insertion directly after the first matching anchor
- Ordering of repeated insertions (most recent closest to the anchor)
- Missing anchors leave the file byte-for-byte unchanged
- Import de-duplication versus always-append anchors
- Line-ending and permission preservation
- Multi-anchor application via apply()
"""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from fastdash.config import Config
from fastdash.errors import FileSystemError, MissingAnchorError
from fastdash.scaffolder.models import PatchStatus
from fastdash.scaffolder.patcher import AnchorPatch, MarkerPatcher, find_marker


pytestmark = pytest.mark.unit


def _lines(path: Path) -> list[str]:
    return path.read_text(encoding="utf-8").splitlines()


def _after(path: Path, marker: str, count: int) -> list[str]:
    lines = _lines(path)
    index = next(i for i, line in enumerate(lines) if line.strip() == marker)
    return lines[index + 1:index + 1 + count]


# ---------------------------------------------------------------------------
# insert_after
# ---------------------------------------------------------------------------


class TestInsertAfter:
    def test_inserts_directly_after_anchor(self, anchored_file: Path, config: Config):
        marker = config.anchors.instantiations_start
        result = MarkerPatcher(config).insert_after(anchored_file, marker, ["\tclock := 1"])

        assert result.status is PatchStatus.INSERTED
        assert result.inserted == ["\tclock := 1"]
        assert _after(anchored_file, marker, 2) == [
            "\tclock := 1",
            f"\t{config.anchors.instantiations_end}",
        ]

    def test_most_recent_insertion_closest_to_anchor(self, anchored_file: Path, config: Config):
        marker = config.anchors.list_start
        patcher = MarkerPatcher(config)
        patcher.insert_after(anchored_file, marker, ["\t\ta,"])
        patcher.insert_after(anchored_file, marker, ["\t\tb,"])
        assert _after(anchored_file, marker, 2) == ["\t\tb,", "\t\ta,"]

    def test_multiple_lines_keep_their_order(self, anchored_file: Path, config: Config):
        marker = config.anchors.list_start
        MarkerPatcher(config).insert_after(anchored_file, marker, ["\t\tone,", "\t\ttwo,"])
        assert _after(anchored_file, marker, 2) == ["\t\tone,", "\t\ttwo,"]

    def test_rest_of_file_unchanged(self, anchored_file: Path, config: Config):
        before = _lines(anchored_file)
        marker = config.anchors.instantiations_start
        MarkerPatcher(config).insert_after(anchored_file, marker, ["\tnew := 1"])
        after = _lines(anchored_file)

        index = before.index(f"\t{marker}")
        assert after[:index + 1] == before[:index + 1]
        assert after[index + 2:] == before[index + 1:]

    def test_missing_anchor_raises_and_leaves_file(self, anchored_file: Path, config: Config):
        original = anchored_file.read_bytes()
        with pytest.raises(MissingAnchorError) as excinfo:
            MarkerPatcher(config).insert_after(anchored_file, "// NOPE", ["x"])
        assert excinfo.value.marker == "// NOPE"
        assert anchored_file.read_bytes() == original

    def test_only_first_matching_anchor_used(self, tmp_path: Path):
        path = tmp_path / "dup.go"
        path.write_text("// ANCHOR\nmiddle\n// ANCHOR\nend\n", encoding="utf-8")
        MarkerPatcher().insert_after(path, "// ANCHOR", ["new"])
        assert _lines(path) == ["// ANCHOR", "new", "middle", "// ANCHOR", "end"]

    def test_substring_is_not_a_match(self, tmp_path: Path):
        path = tmp_path / "sub.go"
        path.write_text("x := 1 // ANCHOR\n", encoding="utf-8")
        with pytest.raises(MissingAnchorError):
            MarkerPatcher().insert_after(path, "// ANCHOR", ["new"])

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(FileSystemError):
            MarkerPatcher().insert_after(tmp_path / "absent.go", "// ANCHOR", ["x"])

    def test_anchor_on_last_line_without_newline(self, tmp_path: Path):
        path = tmp_path / "tail.go"
        path.write_text("first\n// ANCHOR", encoding="utf-8")
        MarkerPatcher().insert_after(path, "// ANCHOR", ["new"])
        assert path.read_text(encoding="utf-8") == "first\n// ANCHOR\nnew\n"


class TestDedupe:
    def test_present_line_not_inserted_again(self, anchored_file: Path, config: Config):
        marker = config.anchors.imports_start
        patcher = MarkerPatcher(config)
        first = patcher.insert_after(anchored_file, marker, ['\t"mydash/internal/ui/widgets"'], dedupe=True)
        second = patcher.insert_after(anchored_file, marker, ['\t"mydash/internal/ui/widgets"'], dedupe=True)

        assert first.status is PatchStatus.INSERTED
        assert second.status is PatchStatus.ALREADY_PRESENT
        assert _lines(anchored_file).count('\t"mydash/internal/ui/widgets"') == 1

    def test_containment_ignores_indentation(self, anchored_file: Path, config: Config):
        result = MarkerPatcher(config).insert_after(
            anchored_file, config.anchors.imports_start, ['    "fmt"'], dedupe=True
        )
        assert result.status is PatchStatus.ALREADY_PRESENT

    def test_containment_checked_before_anchor(self, tmp_path: Path):
        path = tmp_path / "no_anchor.go"
        path.write_text('import "fmt"\n"fmt"\n', encoding="utf-8")
        result = MarkerPatcher().insert_after(path, "// ANCHOR", ['"fmt"'], dedupe=True)
        assert result.status is PatchStatus.ALREADY_PRESENT

    def test_without_dedupe_lines_repeat(self, anchored_file: Path, config: Config):
        marker = config.anchors.list_start
        patcher = MarkerPatcher(config)
        patcher.insert_after(anchored_file, marker, ["\t\tclockWidget,"])
        patcher.insert_after(anchored_file, marker, ["\t\tclockWidget,"])
        assert _lines(anchored_file).count("\t\tclockWidget,") == 2


class TestFilePreservation:
    def test_crlf_line_endings_kept(self, tmp_path: Path):
        path = tmp_path / "crlf.go"
        path.write_bytes(b"first\r\n// ANCHOR\r\nlast\r\n")
        MarkerPatcher().insert_after(path, "// ANCHOR", ["new"])
        assert path.read_bytes() == b"first\r\n// ANCHOR\r\nnew\r\nlast\r\n"

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
    def test_mode_kept(self, tmp_path: Path):
        path = tmp_path / "mode.go"
        path.write_text("// ANCHOR\n", encoding="utf-8")
        path.chmod(0o640)
        MarkerPatcher().insert_after(path, "// ANCHOR", ["new"])
        assert stat.S_IMODE(path.stat().st_mode) == 0o640

    def test_no_temporary_files_left(self, anchored_file: Path, config: Config):
        MarkerPatcher(config).insert_after(anchored_file, config.anchors.list_start, ["\t\tx,"])
        assert sorted(p.name for p in anchored_file.parent.iterdir()) == ["layout.go"]


# ---------------------------------------------------------------------------
# apply / widget_patches
# ---------------------------------------------------------------------------


class TestApply:
    def test_applies_in_order(self, anchored_file: Path, config: Config):
        patcher = MarkerPatcher(config)
        results = patcher.apply(anchored_file, patcher.widget_patches("mydash", "MyClock", "myClockWidget"))
        assert [r.status for r in results] == [PatchStatus.INSERTED] * 3

        assert _after(anchored_file, config.anchors.imports_start, 1) == ['\t"mydash/internal/ui/widgets"']
        assert _after(anchored_file, config.anchors.instantiations_start, 1) == [
            "\tmyClockWidget := widgets.NewMyClockWidget(win, app)"
        ]
        assert _after(anchored_file, config.anchors.list_start, 1) == ["\t\tmyClockWidget,"]

    def test_missing_anchor_does_not_stop_later_patches(self, anchored_file: Path, config: Config):
        patches = [
            AnchorPatch(marker="// NOPE", lines=["lost"]),
            AnchorPatch(marker=config.anchors.list_start, lines=["\t\tkept,"]),
        ]
        results = MarkerPatcher(config).apply(anchored_file, patches)
        assert [r.status for r in results] == [PatchStatus.MISSING_ANCHOR, PatchStatus.INSERTED]
        assert "NOPE" in results[0].error
        assert "\t\tkept," in _lines(anchored_file)

    def test_file_system_error_stops(self, tmp_path: Path, config: Config):
        patcher = MarkerPatcher(config)
        results = patcher.apply(tmp_path / "absent.go", patcher.widget_patches("m", "X", "xWidget"))
        assert len(results) == 1
        assert results[0].status is PatchStatus.FAILED

    def test_widget_patches_only_dedupe_import(self, config: Config):
        patches = MarkerPatcher(config).widget_patches("mydash", "MyClock", "myClockWidget")
        assert [p.marker for p in patches] == [
            config.anchors.imports_start,
            config.anchors.instantiations_start,
            config.anchors.list_start,
        ]
        assert [p.dedupe for p in patches] == [True, False, False]


class TestFindMarker:
    def test_found(self):
        assert find_marker(["a", "  // M  \n", "// M"], "// M") == 1

    def test_not_found(self):
        assert find_marker(["a", "b"], "// M") is None
