"""Pydantic v2 models shared by the scaffolder components.

Covers the feature kinds, the derived identifier set, and the report models
returned by the materializer, the patcher and the orchestrators.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class FeatureKind(str, Enum):
    """Kinds of feature that can be added to an existing project."""
    MODULE = "module"
    WIDGET = "widget"
    SERVICE = "service"
    MODEL = "model"


class Theme(str, Enum):
    """Application theme written into the generated ``main.go``."""
    SYSTEM = "system"
    DARK = "dark"
    LIGHT = "light"


class LayoutStyle(str, Enum):
    """How the dashboard widgets are arranged in the main layout."""
    VERTICAL = "vertical"
    GRID = "grid"


class WriteOutcome(str, Enum):
    """Result of materializing a single file."""
    CREATED = "created"
    SKIPPED = "skipped"
    FAILED = "failed"


class PatchStatus(str, Enum):
    """Result of patching a single anchor."""
    INSERTED = "inserted"
    ALREADY_PRESENT = "already_present"
    MISSING_ANCHOR = "missing_anchor"
    FAILED = "failed"


# ---------------------------------------------------------------------------
# Identifiers & requests
# ---------------------------------------------------------------------------

class IdentifierSet(BaseModel):
    """The identifier forms derived from one raw display name."""

    model_config = ConfigDict(frozen=True)

    package_name: str = Field(..., description="Lower-case [a-z0-9._-] form, e.g. 'myclock'")
    file_stem: str = Field(..., description="Snake-case file stem, e.g. 'my_clock'")
    exported_name: str = Field(..., description="PascalCase exported name, e.g. 'MyClock'")
    variable_name: str = Field(..., description="camelCase variable with kind suffix, e.g. 'myClockWidget'")


class FeatureRequest(BaseModel):
    """A single feature-addition request. Lives for one operation only."""

    kind: FeatureKind
    display_name: str
    identifiers: IdentifierSet


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class ErrorEntry(BaseModel):
    """An error reported at an operation boundary."""

    kind: str = Field(..., description="Exception class name, e.g. 'ValidationError'")
    message: str

    @classmethod
    def from_exception(cls, exc: Exception) -> "ErrorEntry":
        return cls(kind=type(exc).__name__, message=str(exc))


# ---------------------------------------------------------------------------
# Per-file and per-anchor results
# ---------------------------------------------------------------------------

class FileResult(BaseModel):
    """Outcome of materializing one file."""

    path: Path
    outcome: WriteOutcome
    created_dirs: list[Path] = Field(default_factory=list)
    error: Optional[str] = Field(default=None, description="Error message when outcome is FAILED")

    def messages(self) -> list[str]:
        lines = [f"[SUCCESS] Created directory: {d}" for d in self.created_dirs]
        if self.outcome is WriteOutcome.CREATED:
            lines.append(f"[SUCCESS] Created file: {self.path}")
        elif self.outcome is WriteOutcome.SKIPPED:
            lines.append(f"[INFO] File already exists: {self.path}. Skipping.")
        else:
            lines.append(f"[ERROR] {self.error}")
        return lines


class PatchResult(BaseModel):
    """Outcome of inserting lines after one anchor."""

    path: Path
    marker: str
    status: PatchStatus
    inserted: list[str] = Field(default_factory=list)
    error: Optional[str] = None

    def messages(self) -> list[str]:
        if self.status is PatchStatus.INSERTED:
            added = ", ".join(line.strip() for line in self.inserted)
            return [f"[SUCCESS] Added after {_anchor_label(self.marker)}: {added}"]
        if self.status is PatchStatus.ALREADY_PRESENT:
            return [f"[INFO] Already present after {_anchor_label(self.marker)}, nothing added."]
        return [f"[ERROR] {self.error}"]


# ---------------------------------------------------------------------------
# Operation reports
# ---------------------------------------------------------------------------

class FeatureReport(BaseModel):
    """Everything that happened while adding one feature."""

    kind: FeatureKind
    display_name: str
    identifiers: Optional[IdentifierSet] = None
    files: list[FileResult] = Field(default_factory=list)
    patches: list[PatchResult] = Field(default_factory=list)
    errors: list[ErrorEntry] = Field(default_factory=list, description="Operation-level errors")
    next_steps: list[str] = Field(default_factory=list)

    @computed_field  # type: ignore[misc]
    @property
    def ok(self) -> bool:
        """True when no error was recorded for any file or anchor."""
        if self.errors:
            return False
        if any(f.outcome is WriteOutcome.FAILED for f in self.files):
            return False
        return not any(
            p.status in (PatchStatus.MISSING_ANCHOR, PatchStatus.FAILED) for p in self.patches
        )

    def messages(self) -> list[str]:
        lines = [f"[ERROR] {e.message}" for e in self.errors]
        for f in self.files:
            lines.extend(f.messages())
        for p in self.patches:
            lines.extend(p.messages())
        lines.extend(f"[ACTION REQUIRED] {step}" for step in self.next_steps)
        return lines


class ProjectReport(BaseModel):
    """Everything that happened while generating a whole project."""

    project_name: str
    module_name: str
    root: Path
    created_dirs: list[Path] = Field(default_factory=list)
    files: list[FileResult] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    errors: list[ErrorEntry] = Field(default_factory=list)
    next_steps: list[str] = Field(default_factory=list)

    @computed_field  # type: ignore[misc]
    @property
    def ok(self) -> bool:
        """True when every file was created or skipped."""
        if self.errors:
            return False
        return not any(f.outcome is WriteOutcome.FAILED for f in self.files)

    def messages(self) -> list[str]:
        lines = [f"[WARNING] {w}" for w in self.warnings]
        lines.extend(f"[ERROR] {e.message}" for e in self.errors)
        lines.extend(f"[SUCCESS] Created directory: {d}" for d in self.created_dirs)
        for f in self.files:
            lines.extend(f.messages())
        lines.extend(f"[INFO] {step}" for step in self.next_steps)
        return lines


def _anchor_label(marker: str) -> str:
    """Short name of an anchor marker, e.g. ``AUTO_IMPORTS_START``."""
    words = marker.replace("//", " ").split()
    return words[0] if words else marker
