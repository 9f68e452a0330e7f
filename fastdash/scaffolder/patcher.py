"""Marker-based patching of a previously generated file.

The generated layout file carries literal anchor comments. The patcher finds
the first line equal to an anchor and inserts new lines directly after it,
leaving every other byte of the file alone. A missing anchor is an error;
the patcher never guesses another location.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import tempfile
from pathlib import Path
from typing import Sequence

from pydantic import BaseModel, Field

from fastdash.config import Config
from fastdash.errors import FileSystemError, MissingAnchorError

from .models import PatchResult, PatchStatus


class AnchorPatch(BaseModel):
    """Lines to insert after one anchor."""

    marker: str
    lines: list[str] = Field(default_factory=list)
    dedupe: bool = Field(default=False, description="Skip lines already present anywhere in the file")


class MarkerPatcher:
    """Inserts lines after anchor markers in an existing file.

    Each call is a whole-file read-modify-write. The rewrite goes to a
    temporary file in the same directory which then replaces the target, so
    a crash leaves either the old or the new content, never a mix.
    """

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or Config()

    # -- Single anchor -----------------------------------------------------

    def insert_after(
        self,
        path: str | Path,
        marker: str,
        lines: Sequence[str],
        *,
        dedupe: bool = False,
    ) -> PatchResult:
        """Insert *lines* immediately after the first line matching *marker*.

        The marker is compared against whole lines with surrounding
        whitespace trimmed. Lines inserted by earlier calls end up below the
        new ones, so the most recent insertion sits closest to the anchor.

        Args:
            path: File to patch.
            marker: Exact anchor text.
            lines: Lines to insert, without line terminators.
            dedupe: When true, lines already present anywhere in the file
                (whitespace-trimmed) are not inserted again.

        Returns:
            A ``PatchResult`` with status ``INSERTED`` or ``ALREADY_PRESENT``.

        Raises:
            MissingAnchorError: If no line matches *marker*. The file is
                left untouched.
            FileSystemError: If the file cannot be read or rewritten.
        """
        target = Path(path)
        file_lines = self._read_lines(target)
        to_insert = list(lines)

        if dedupe:
            present = {line.strip() for line in file_lines}
            to_insert = [line for line in to_insert if line.strip() not in present]
            if not to_insert:
                return PatchResult(path=target, marker=marker, status=PatchStatus.ALREADY_PRESENT)

        index = find_marker(file_lines, marker)
        if index is None:
            raise MissingAnchorError(target, marker)

        newline = _line_ending(file_lines[index]) or _line_ending(file_lines[0]) or "\n"
        if not _line_ending(file_lines[index]):
            file_lines[index] += newline
        file_lines[index + 1:index + 1] = [line + newline for line in to_insert]

        self._write_atomic(target, "".join(file_lines))
        return PatchResult(
            path=target,
            marker=marker,
            status=PatchStatus.INSERTED,
            inserted=to_insert,
        )

    # -- Several anchors ---------------------------------------------------

    def apply(self, path: str | Path, patches: Sequence[AnchorPatch]) -> list[PatchResult]:
        """Apply *patches* in order, each against the file left by the last.

        A missing anchor is recorded and the next patch is still attempted.
        A file-system failure is recorded and stops the remaining patches.
        """
        target = Path(path)
        results: list[PatchResult] = []
        for patch in patches:
            try:
                results.append(
                    self.insert_after(target, patch.marker, patch.lines, dedupe=patch.dedupe)
                )
            except MissingAnchorError as exc:
                results.append(
                    PatchResult(
                        path=target,
                        marker=patch.marker,
                        status=PatchStatus.MISSING_ANCHOR,
                        error=str(exc),
                    )
                )
            except FileSystemError as exc:
                results.append(
                    PatchResult(
                        path=target,
                        marker=patch.marker,
                        status=PatchStatus.FAILED,
                        error=str(exc),
                    )
                )
                break
        return results

    # -- Layout helpers ----------------------------------------------------

    def widget_patches(self, module_name: str, exported_name: str, variable_name: str) -> list[AnchorPatch]:
        """Build the import, instantiation and list patches for one widget.

        Only the import patch is de-duplicated; adding the same widget twice
        instantiates and lists it twice.
        """
        anchors = self.config.anchors
        widgets_pkg = f"{module_name}/{self.config.paths.ui_widgets}"
        return [
            AnchorPatch(marker=anchors.imports_start, lines=[f'\t"{widgets_pkg}"'], dedupe=True),
            AnchorPatch(
                marker=anchors.instantiations_start,
                lines=[f"\t{variable_name} := widgets.New{exported_name}Widget(win, app)"],
            ),
            AnchorPatch(marker=anchors.list_start, lines=[f"\t\t{variable_name},"]),
        ]

    # -- I/O ---------------------------------------------------------------

    def _read_lines(self, target: Path) -> list[str]:
        try:
            with target.open("r", encoding="utf-8", newline="") as fh:
                return fh.read().splitlines(keepends=True)
        except FileNotFoundError as exc:
            raise FileSystemError(target, "File to patch not found") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise FileSystemError(target, f"Failed to read file ({exc})") from exc

    def _write_atomic(self, target: Path, content: str) -> None:
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent)
            )
        except OSError as exc:
            raise FileSystemError(target, f"Failed to write file ({exc})") from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
                fh.write(content)
            shutil.copymode(target, tmp_name)
            os.replace(tmp_name, target)
        except OSError as exc:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
            raise FileSystemError(target, f"Failed to write file ({exc})") from exc


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def find_marker(lines: Sequence[str], marker: str) -> int | None:
    """Return the index of the first line equal to *marker*, or ``None``."""
    wanted = marker.strip()
    for index, line in enumerate(lines):
        if line.strip() == wanted:
            return index
    return None


def _line_ending(line: str) -> str:
    if line.endswith("\r\n"):
        return "\r\n"
    if line.endswith(("\n", "\r")):
        return line[-1]
    return ""
