"""Error taxonomy shared by the scaffolder and the CLI.

Every error is recoverable: the orchestrators turn them into report entries
and the interactive menu resumes at its next iteration.
"""

from __future__ import annotations

from pathlib import Path


class FastDashError(Exception):
    """Base class for all errors raised by the dashboard manager."""


class ValidationError(FastDashError):
    """Raised when user text sanitizes to an empty or malformed identifier."""

    def __init__(self, raw: str, message: str) -> None:
        self.raw = raw
        super().__init__(message)


class MissingProjectDescriptorError(FastDashError):
    """Raised when a feature is added outside a generated project root."""

    def __init__(self, path: str | Path, message: str | None = None) -> None:
        self.path = Path(path)
        super().__init__(
            message
            or f"{self.path.name} not found in {self.path.parent}. "
            "This operation requires being in the root of a Fast Dashboard project."
        )


class FileSystemError(FastDashError):
    """Raised when a directory or file cannot be created, read or written."""

    def __init__(self, path: str | Path, message: str) -> None:
        self.path = Path(path)
        super().__init__(f"{message}: {self.path}")


class MissingAnchorError(FastDashError):
    """Raised when a patch target does not contain the expected marker line."""

    def __init__(self, path: str | Path, marker: str) -> None:
        self.path = Path(path)
        self.marker = marker
        super().__init__(f"Anchor {marker!r} not found in {self.path}")
