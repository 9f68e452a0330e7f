"""Idempotent, non-destructive file writer.

A generated file belongs to the user as soon as it exists on disk, so the
materializer creates missing directories and new files but never touches a
file that is already there.
"""

from __future__ import annotations

import contextlib
from pathlib import Path

from fastdash.errors import FileSystemError

from .models import FileResult, WriteOutcome


class FileMaterializer:
    """Writes rendered content to disk, skipping files that already exist."""

    def __init__(self, root: str | Path | None = None) -> None:
        self.root = Path(root) if root is not None else None

    def materialize(self, path: str | Path, content: str) -> FileResult:
        """Create *path* with *content* unless it already exists.

        Missing parent directories are created first and listed in the
        result.

        Returns:
            A ``FileResult`` with outcome ``CREATED`` or ``SKIPPED``.

        Raises:
            FileSystemError: If a directory cannot be created or the file
                cannot be written.
        """
        target = self.resolve(path)
        created_dirs = self.ensure_directory(target.parent)

        try:
            # "x" mode never truncates an existing file.
            fh = target.open("x", encoding="utf-8", newline="")
        except FileExistsError:
            return FileResult(path=target, outcome=WriteOutcome.SKIPPED, created_dirs=created_dirs)
        except OSError as exc:
            raise FileSystemError(target, f"Failed to create file ({exc.strerror or exc})") from exc

        try:
            with fh:
                fh.write(content)
        except (OSError, UnicodeError) as exc:
            # Never leave a partial file behind.
            with contextlib.suppress(OSError):
                target.unlink()
            raise FileSystemError(target, f"Failed to write file ({exc})") from exc

        return FileResult(path=target, outcome=WriteOutcome.CREATED, created_dirs=created_dirs)

    def ensure_directory(self, directory: str | Path) -> list[Path]:
        """Create *directory* and any missing parents.

        Returns:
            The directories that did not exist before, outermost first.

        Raises:
            FileSystemError: If a directory cannot be created.
        """
        target = self.resolve(directory)
        missing: list[Path] = []
        current = target
        while not current.exists() and current != current.parent:
            missing.append(current)
            current = current.parent
        missing.reverse()

        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FileSystemError(target, f"Failed to create directory ({exc.strerror or exc})") from exc
        return missing

    def resolve(self, path: str | Path) -> Path:
        """Resolve a relative *path* against the materializer root, if any."""
        target = Path(path)
        if self.root is not None and not target.is_absolute():
            return self.root / target
        return target
