"""Fast Dashboard manager configuration.

Centralised, typed configuration for the generator. All settings use Pydantic
v2 models so they are validated at construction time. A single ``Config`` is
built once by the CLI entry point and passed explicitly into every component
that needs sub-paths, anchor markers or defaults.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ProjectPaths(BaseModel):
    """Fixed relative paths inside a generated project.

    These paths are part of the contract between generator runs: features
    added later are written relative to them.
    """

    model_config = ConfigDict(frozen=True)

    ui_modules: str = Field(default="internal/ui/modules")
    ui_widgets: str = Field(default="internal/ui/widgets")
    services: str = Field(default="internal/services")
    models: str = Field(default="internal/models")
    layout_file: str = Field(default="internal/ui/layout/main_layout.go")
    descriptor_file: str = Field(default="go.mod")
    manager_script: str = Field(default="manage_dashboard.sh")

    def feature_dirs(self) -> list[str]:
        """Return every directory that receives feature files."""
        return [self.ui_modules, self.ui_widgets, self.services, self.models]


class AnchorMarkers(BaseModel):
    """Literal anchor lines embedded in the generated layout file.

    Changing any of these strings breaks patching of projects generated by
    earlier versions.
    """

    model_config = ConfigDict(frozen=True)

    imports_start: str = Field(default="// AUTO_IMPORTS_START (do not remove or modify this line)")
    imports_end: str = Field(default="// AUTO_IMPORTS_END (do not remove or modify this line)")
    instantiations_start: str = Field(
        default="// AUTO_WIDGET_INSTANTIATIONS_START (do not remove or modify this line)"
    )
    instantiations_end: str = Field(
        default="// AUTO_WIDGET_INSTANTIATIONS_END (do not remove or modify this line)"
    )
    list_start: str = Field(default="// AUTO_WIDGET_LIST_START (do not remove or modify this line)")
    list_end: str = Field(default="// AUTO_WIDGET_LIST_END (do not remove or modify this line)")

    def as_context(self) -> dict[str, str]:
        """Return the markers as template placeholders."""
        return {
            "anchor_imports_start": self.imports_start,
            "anchor_imports_end": self.imports_end,
            "anchor_instantiations_start": self.instantiations_start,
            "anchor_instantiations_end": self.instantiations_end,
            "anchor_list_start": self.list_start,
            "anchor_list_end": self.list_end,
        }


class WindowDefaults(BaseModel):
    """Initial window size used when the user gives no valid dimension."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(default=1024, gt=0)
    height: int = Field(default=768, gt=0)


class ToolchainVersions(BaseModel):
    """Versions written into the generated ``go.mod``."""

    model_config = ConfigDict(frozen=True)

    go: str = Field(default="1.21")
    fyne: str = Field(default="v2.4.0")


class Config(BaseModel):
    """Global Fast Dashboard manager configuration.

    Loaded once and read-only afterwards.
    """

    model_config = ConfigDict(frozen=True)

    paths: ProjectPaths = Field(default_factory=ProjectPaths)
    anchors: AnchorMarkers = Field(default_factory=AnchorMarkers)
    window: WindowDefaults = Field(default_factory=WindowDefaults)
    toolchain: ToolchainVersions = Field(default_factory=ToolchainVersions)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            FASTDASH_DEFAULT_WIDTH, FASTDASH_DEFAULT_HEIGHT,
            FASTDASH_GO_VERSION, FASTDASH_FYNE_VERSION.
        """
        window_kwargs: dict[str, Any] = {}
        if os.environ.get("FASTDASH_DEFAULT_WIDTH"):
            window_kwargs["width"] = int(os.environ["FASTDASH_DEFAULT_WIDTH"])
        if os.environ.get("FASTDASH_DEFAULT_HEIGHT"):
            window_kwargs["height"] = int(os.environ["FASTDASH_DEFAULT_HEIGHT"])

        toolchain_kwargs: dict[str, Any] = {}
        if os.environ.get("FASTDASH_GO_VERSION"):
            toolchain_kwargs["go"] = os.environ["FASTDASH_GO_VERSION"]
        if os.environ.get("FASTDASH_FYNE_VERSION"):
            toolchain_kwargs["fyne"] = os.environ["FASTDASH_FYNE_VERSION"]

        return cls(
            window=WindowDefaults(**window_kwargs),
            toolchain=ToolchainVersions(**toolchain_kwargs),
        )

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    def descriptor_path(self, project_root: str | Path) -> Path:
        """Path to the project descriptor (``go.mod``) under *project_root*."""
        return Path(project_root) / self.paths.descriptor_file

    def layout_path(self, project_root: str | Path) -> Path:
        """Path to the canonical layout file, the only patch target."""
        return Path(project_root) / self.paths.layout_file
