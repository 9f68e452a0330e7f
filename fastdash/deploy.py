"""Deployment step run after a project has been generated.

Places an executable ``manage_dashboard.sh`` launcher in the project root so
features can be added later from inside the project. The scaffolding
orchestrators know nothing about this step; the CLI runs it.
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import TemplateError

from fastdash.config import Config
from fastdash.errors import FileSystemError
from fastdash.scaffolder.materializer import FileMaterializer
from fastdash.scaffolder.models import FileResult, WriteOutcome
from fastdash.scaffolder.templates import TemplateRenderer
from fastdash.utils import make_executable


def install_manager_script(
    project_root: str | Path,
    config: Config | None = None,
    renderer: TemplateRenderer | None = None,
) -> FileResult:
    """Write the manager launcher into *project_root* unless it exists.

    Raises:
        FileSystemError: If the launcher cannot be rendered or written.
    """
    config = config or Config()
    renderer = renderer or TemplateRenderer()
    root = Path(project_root)

    try:
        content = renderer.render("manage_dashboard.sh.j2", {"project_name": root.name})
    except TemplateError as exc:
        raise FileSystemError(
            root / config.paths.manager_script, f"Failed to render the manager script ({exc})"
        ) from exc
    result = FileMaterializer(root).materialize(config.paths.manager_script, content)
    if result.outcome is WriteOutcome.CREATED:
        make_executable(result.path)
    return result
