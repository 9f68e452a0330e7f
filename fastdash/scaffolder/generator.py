"""Main scaffolding orchestrator.

Takes a ``ProjectDescriptor`` and generates a complete Go + Fyne dashboard
project: ``go.mod``, ``main.go`` with the chosen window size and theme,
placeholder packages, and the anchored main layout that later feature
additions patch.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Any

from jinja2 import TemplateError
from pydantic import BaseModel, ConfigDict, Field

from fastdash.config import Config
from fastdash.errors import (
    FileSystemError,
    MissingProjectDescriptorError,
    ValidationError,
)

from .materializer import FileMaterializer
from .models import ErrorEntry, FileResult, LayoutStyle, ProjectReport, Theme, WriteOutcome
from .naming import derive_module_name
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Project skeleton
# ---------------------------------------------------------------------------

PROJECT_DIRECTORIES: tuple[str, ...] = (
    "cli",
    "core",
    "generators",
    "templates",
    "utils",
    "internal/ui/layout",
    "internal/ui/widgets",
    "internal/ui/modules",
    "internal/config",
    "internal/services",
    "internal/models",
)

# (relative path, Go package, purpose comment, exported name)
PLACEHOLDER_FILES: tuple[tuple[str, str, str, str], ...] = (
    ("cli/flags.go", "cli", "Handles command-line flags and arguments.", "CliFlags"),
    ("core/app_logic.go", "core", "Core business logic.", "AppLogic"),
    ("generators/widget_generator.go", "generators", "For custom widget generators.", "WidgetGenerator"),
    ("templates/widget_template.go", "templates", "For Go code templates.", "WidgetTemplate"),
    ("utils/helpers.go", "utils", "Utility functions.", "Helpers"),
    ("internal/ui/widgets/sample_widget.go", "widgets", "Example custom Fyne widget.", "Sample"),
    ("internal/config/loader.go", "config", "Loads application configuration.", "ConfigLoader"),
    ("internal/services/data_service.go", "services", "Handles data interactions.", "DataService"),
    ("internal/models/example_model.go", "models", "Example data model structure.", "ExampleModel"),
)

_THEME_LINES: dict[Theme, tuple[str, str]] = {
    Theme.SYSTEM: ("", "\t// myApp.Settings().SetTheme(theme.DarkTheme())"),
    Theme.DARK: ('\t"fyne.io/fyne/v2/theme"', "\tmyApp.Settings().SetTheme(theme.DarkTheme())"),
    Theme.LIGHT: ('\t"fyne.io/fyne/v2/theme"', "\tmyApp.Settings().SetTheme(theme.LightTheme())"),
}

_WIDGET_CONTAINERS: dict[LayoutStyle, str] = {
    LayoutStyle.VERTICAL: "container.NewVBox()",
    LayoutStyle.GRID: "container.NewGridWrap(fyne.NewSize(320, 200))",
}


# ---------------------------------------------------------------------------
# Descriptor
# ---------------------------------------------------------------------------


class ProjectDescriptor(BaseModel):
    """Immutable description of the project to scaffold."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Project name as typed; also the directory name")
    module_name: str = Field(..., description="Sanitized Go module name")
    window_width: int = Field(default=1024, gt=0)
    window_height: int = Field(default=768, gt=0)
    theme: Theme = Field(default=Theme.SYSTEM)
    layout: LayoutStyle = Field(default=LayoutStyle.VERTICAL)

    @classmethod
    def from_input(
        cls,
        name: str,
        width: Any = None,
        height: Any = None,
        theme: Theme | str = Theme.SYSTEM,
        layout: LayoutStyle | str = LayoutStyle.VERTICAL,
        *,
        config: Config | None = None,
        warnings: list[str] | None = None,
    ) -> "ProjectDescriptor":
        """Build a descriptor from raw user input.

        Invalid window dimensions fall back to the configured defaults; a
        warning is appended to *warnings* for each fallback.

        Raises:
            ValidationError: If the name is empty, contains a path separator,
                or sanitizes to an empty module name.
        """
        config = config or Config()
        clean_name = validate_project_name(name)

        return cls(
            name=clean_name,
            module_name=derive_module_name(clean_name),
            window_width=resolve_dimension(width, config.window.width, "width", warnings),
            window_height=resolve_dimension(height, config.window.height, "height", warnings),
            theme=Theme(theme),
            layout=LayoutStyle(layout),
        )


def validate_project_name(name: str) -> str:
    """Return *name* stripped, or raise if it is not usable as a project.

    Raises:
        ValidationError: If the name is empty, contains a path separator,
            is "." or "..", or sanitizes to an empty module name.
    """
    clean_name = name.strip()
    if not clean_name:
        raise ValidationError(name, "Project name cannot be empty.")
    if "/" in clean_name or "\\" in clean_name or clean_name in (".", ".."):
        raise ValidationError(name, f"Project name {name!r} must be a plain directory name.")
    derive_module_name(clean_name)
    return clean_name


def resolve_dimension(
    raw: Any,
    default: int,
    label: str = "dimension",
    warnings: list[str] | None = None,
) -> int:
    """Parse a window dimension, falling back to *default* when invalid.

    Empty input silently yields the default; non-numeric or non-positive
    input yields the default and records a warning.
    """
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return default
    text = str(raw).strip()
    if text.isascii() and text.isdigit() and int(text) > 0:
        return int(text)
    if warnings is not None:
        warnings.append(
            f"Invalid {label} input {text!r}. Must be a positive number. Using default: {default}"
        )
    return default


def read_module_name(descriptor_path: str | Path) -> str:
    """Read the module name from a project descriptor (``go.mod``).

    The module name is the second whitespace-delimited token of the first
    line.

    Raises:
        MissingProjectDescriptorError: If the file is missing or its first
            line has no module name.
    """
    path = Path(descriptor_path)
    if not path.is_file():
        raise MissingProjectDescriptorError(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise MissingProjectDescriptorError(path, f"Could not read {path}: {exc}") from exc

    first_line = text.splitlines()[0] if text else ""
    tokens = first_line.split()
    if len(tokens) < 2:
        raise MissingProjectDescriptorError(
            path, f"Could not determine module name from {path.name}."
        )
    return tokens[1]


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Generates a new dashboard project from a ``ProjectDescriptor``.

    Generation is idempotent: re-running it over an existing project only
    creates the files that are missing.
    """

    def __init__(self, config: Config | None = None, renderer: TemplateRenderer | None = None) -> None:
        self.config = config or Config()
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    def generate(
        self,
        descriptor: ProjectDescriptor,
        output_dir: str | Path = ".",
        *,
        overwrite: bool = False,
    ) -> ProjectReport:
        """Generate the complete project structure.

        Args:
            descriptor: What to generate.
            output_dir: Parent directory; the project folder is created inside
                it and named after the project.
            overwrite: Remove an existing project directory first. Callers
                are expected to confirm this with the user.

        Returns:
            A ``ProjectReport`` describing every directory and file.
        """
        root = Path(output_dir) / descriptor.name
        report = ProjectReport(
            project_name=descriptor.name,
            module_name=descriptor.module_name,
            root=root,
        )

        if root.exists() and overwrite:
            try:
                shutil.rmtree(root)
            except OSError as exc:
                report.errors.append(
                    ErrorEntry.from_exception(FileSystemError(root, f"Failed to remove existing directory ({exc})"))
                )
                return report
            report.warnings.append(f"Removed existing directory: {root}")

        materializer = FileMaterializer(root)

        # 1. Directory skeleton
        for directory in ("", *PROJECT_DIRECTORIES):
            try:
                report.created_dirs.extend(materializer.ensure_directory(directory))
            except FileSystemError as exc:
                report.errors.append(ErrorEntry.from_exception(exc))
        if not root.is_dir():
            return report

        # 2. Files
        for template_name, relative, context in self._file_plan(descriptor):
            report.files.append(self._materialize(materializer, template_name, relative, context))

        report.next_steps = [
            f"Fast Dashboard project '{descriptor.name}' created (module '{descriptor.module_name}').",
            f'Next steps: cd "{descriptor.name}", go mod tidy, go run main.go',
            f"To add features later, run './{self.config.paths.manager_script}' "
            f"from within the '{descriptor.name}' directory.",
        ]
        return report

    # -- File plan ---------------------------------------------------------

    def build_context(self, descriptor: ProjectDescriptor) -> dict[str, str]:
        """Build the placeholder values shared by the project templates."""
        theme_import, theme_setup = _THEME_LINES[descriptor.theme]
        return {
            "module_name": descriptor.module_name,
            "project_name": descriptor.name,
            "window_width": str(descriptor.window_width),
            "window_height": str(descriptor.window_height),
            "theme_import": theme_import,
            "theme_setup": theme_setup,
            "widgets_container": _WIDGET_CONTAINERS[descriptor.layout],
            "manager_script": self.config.paths.manager_script,
            "go_version": self.config.toolchain.go,
            "fyne_version": self.config.toolchain.fyne,
            **self.config.anchors.as_context(),
        }

    def _file_plan(self, descriptor: ProjectDescriptor) -> list[tuple[str, str, dict[str, str]]]:
        ctx = self.build_context(descriptor)
        plan: list[tuple[str, str, dict[str, str]]] = [
            ("go.mod.j2", self.config.paths.descriptor_file, ctx),
            ("main.go.j2", "main.go", ctx),
        ]
        for relative, package, purpose, exported in PLACEHOLDER_FILES:
            plan.append((
                "placeholder.go.j2",
                relative,
                {
                    "package_name": package,
                    "purpose": purpose,
                    "exported_name": exported,
                    "file_name": Path(relative).name,
                    "module_name": descriptor.module_name,
                },
            ))
        plan.append(("layout/main_layout.go.j2", self.config.paths.layout_file, ctx))
        return plan

    def _materialize(
        self,
        materializer: FileMaterializer,
        template_name: str,
        relative: str,
        context: dict[str, str],
    ) -> FileResult:
        try:
            content = self.renderer.render(template_name, context)
            return materializer.materialize(relative, content)
        except FileSystemError as exc:
            return FileResult(
                path=materializer.resolve(relative),
                outcome=WriteOutcome.FAILED,
                error=str(exc),
            )
        except TemplateError as exc:
            return FileResult(
                path=materializer.resolve(relative),
                outcome=WriteOutcome.FAILED,
                error=f"Failed to render template {template_name!r} ({exc})",
            )
