"""Feature addition for an existing dashboard project.

Adds a page (module), widget, service or data model to a project generated
by :class:`~fastdash.scaffolder.generator.ProjectGenerator`. Each call
derives identifiers, renders the kind's templates, materializes the files
and, for widgets only, patches the main layout at its three anchors.
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import TemplateError
from pydantic import BaseModel, ConfigDict

from fastdash.config import Config
from fastdash.errors import FileSystemError, MissingProjectDescriptorError, ValidationError

from .generator import read_module_name
from .materializer import FileMaterializer
from .models import (
    ErrorEntry,
    FeatureKind,
    FeatureReport,
    FeatureRequest,
    FileResult,
    WriteOutcome,
)
from .naming import derive_identifiers
from .patcher import MarkerPatcher
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Per-kind definitions
# ---------------------------------------------------------------------------


class FeatureSpec(BaseModel):
    """What one feature kind produces."""

    model_config = ConfigDict(frozen=True)

    kind: FeatureKind
    directory: str  # attribute name on ProjectPaths
    files: tuple[tuple[str, str], ...]  # (template, output name pattern)
    patches_layout: bool = False
    next_steps: tuple[str, ...] = ()


FEATURE_SPECS: dict[FeatureKind, FeatureSpec] = {
    FeatureKind.MODULE: FeatureSpec(
        kind=FeatureKind.MODULE,
        directory="ui_modules",
        files=(
            ("features/module_view.go.j2", "{file_stem}/view.go"),
            ("features/module_logic.go.j2", "{file_stem}/logic.go"),
        ),
        next_steps=(
            "You'll need to manually add a way to navigate to the '{display_name}' page/section.",
            "This usually involves adding a button to the toolbar or sidebar in '{layout_file}' "
            "and updating the main content area when that button is clicked.",
        ),
    ),
    FeatureKind.WIDGET: FeatureSpec(
        kind=FeatureKind.WIDGET,
        directory="ui_widgets",
        files=(("features/widget.go.j2", "{file_stem}_widget.go"),),
        patches_layout=True,
        next_steps=(
            "Widget auto-integration attempted. Please review '{layout_file}'.",
            "Then run 'go mod tidy' and 'go run main.go' to see the changes.",
        ),
    ),
    FeatureKind.SERVICE: FeatureSpec(
        kind=FeatureKind.SERVICE,
        directory="services",
        files=(("features/service.go.j2", "{file_stem}_service.go"),),
        next_steps=(
            "Implement the actual logic in '{target}'.",
            "Create an instance of this service in your application (e.g. in 'main.go').",
            "Call its methods from your UI modules or other parts of the application.",
        ),
    ),
    FeatureKind.MODEL: FeatureSpec(
        kind=FeatureKind.MODEL,
        directory="models",
        files=(("features/model.go.j2", "{file_stem}_model.go"),),
        next_steps=(
            "Define the specific fields for '{display_name}' in '{target}'.",
            "Use this data structure in your services or UI modules.",
            "If using a database, add it to your database setup/migrations.",
        ),
    ),
}


def build_request(kind: FeatureKind | str, display_name: str) -> FeatureRequest:
    """Validate *display_name* and derive its identifiers.

    Raises:
        ValidationError: If the name yields an empty or malformed identifier.
    """
    feature_kind = FeatureKind(kind)
    name = display_name.strip()
    return FeatureRequest(
        kind=feature_kind,
        display_name=name,
        identifiers=derive_identifiers(name, feature_kind),
    )


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


class FeatureGenerator:
    """Adds features to the project rooted at *project_root*.

    Holds no state between calls: the module name is re-read from the
    project descriptor on every :meth:`add_feature`.
    """

    def __init__(
        self,
        project_root: str | Path = ".",
        config: Config | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.project_root = Path(project_root)
        self.config = config or Config()
        self.renderer = renderer or TemplateRenderer()
        self.materializer = FileMaterializer(self.project_root)
        self.patcher = MarkerPatcher(self.config)

    def module_name(self) -> str:
        """Return the module name of the current project.

        Raises:
            MissingProjectDescriptorError: Outside a generated project root.
        """
        return read_module_name(self.config.descriptor_path(self.project_root))

    def add_feature(self, kind: FeatureKind | str, display_name: str) -> FeatureReport:
        """Add one feature and report what happened.

        Never raises for the documented error kinds: validation and
        descriptor problems abort before anything is written, per-file
        failures are recorded and the remaining files are still attempted.
        """
        feature_kind = FeatureKind(kind)
        report = FeatureReport(kind=feature_kind, display_name=display_name)

        try:
            request = build_request(feature_kind, display_name)
        except ValidationError as exc:
            report.errors.append(ErrorEntry.from_exception(exc))
            return report
        report.display_name = request.display_name
        report.identifiers = request.identifiers

        try:
            module_name = self.module_name()
        except MissingProjectDescriptorError as exc:
            report.errors.append(ErrorEntry.from_exception(exc))
            return report

        spec = FEATURE_SPECS[feature_kind]
        context = self.build_context(request, module_name)
        directory = Path(getattr(self.config.paths, spec.directory))

        targets: list[Path] = []
        for template_name, pattern in spec.files:
            relative = directory / pattern.format(**context)
            targets.append(relative)
            report.files.append(self._materialize(template_name, relative, context))

        if spec.patches_layout:
            patches = self.patcher.widget_patches(
                module_name,
                request.identifiers.exported_name,
                request.identifiers.variable_name,
            )
            report.patches.extend(
                self.patcher.apply(self.config.layout_path(self.project_root), patches)
            )

        step_values = {**context, "target": targets[0].as_posix()}
        report.next_steps = [step.format(**step_values) for step in spec.next_steps]
        return report

    def build_context(self, request: FeatureRequest, module_name: str) -> dict[str, str]:
        """Placeholder values for the feature templates."""
        ids = request.identifiers
        return {
            "module_name": module_name,
            "display_name": request.display_name,
            # Go package of a page lives in a directory named after the stem.
            "package_name": ids.file_stem,
            "file_stem": ids.file_stem,
            "exported_name": ids.exported_name,
            "variable_name": ids.variable_name,
            "layout_file": self.config.paths.layout_file,
        }

    def _materialize(self, template_name: str, relative: Path, context: dict[str, str]) -> FileResult:
        try:
            content = self.renderer.render(template_name, context)
            return self.materializer.materialize(relative, content)
        except FileSystemError as exc:
            return FileResult(
                path=self.materializer.resolve(relative),
                outcome=WriteOutcome.FAILED,
                error=str(exc),
            )
        except TemplateError as exc:
            return FileResult(
                path=self.materializer.resolve(relative),
                outcome=WriteOutcome.FAILED,
                error=f"Failed to render template {template_name!r} ({exc})",
            )
