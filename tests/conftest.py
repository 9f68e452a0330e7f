"""Shared pytest fixtures for the Fast Dashboard manager test suite.

Provides reusable fixtures for:
- Default configuration and template renderer
- A freshly generated dashboard project in a temp directory
- A small hand-written file carrying the three layout anchors
"""

from __future__ import annotations

from pathlib import Path

import pytest

from fastdash.config import Config
from fastdash.scaffolder.generator import ProjectDescriptor, ProjectGenerator
from fastdash.scaffolder.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def config() -> Config:
    """Default configuration."""
    return Config()


@pytest.fixture
def renderer() -> TemplateRenderer:
    """Renderer bound to the packaged templates."""
    return TemplateRenderer()


# ---------------------------------------------------------------------------
# Projects & files
# ---------------------------------------------------------------------------

@pytest.fixture
def generated_project(tmp_path: Path, config: Config) -> Path:
    """A generated project named 'My Dash' (module 'mydash')."""
    descriptor = ProjectDescriptor.from_input("My Dash", config=config)
    report = ProjectGenerator(config).generate(descriptor, tmp_path)
    assert report.ok, report.messages()
    return report.root


@pytest.fixture
def anchored_file(tmp_path: Path, config: Config) -> Path:
    """A Go-like file containing the import, instantiation and list anchors."""
    a = config.anchors
    lines = [
        "package layout",
        "",
        "import (",
        '\t"fmt"',
        f"\t{a.imports_start}",
        f"\t{a.imports_end}",
        ")",
        "",
        "func build() {",
        f"\t{a.instantiations_start}",
        f"\t{a.instantiations_end}",
        "\titems := []any{",
        f"\t\t{a.list_start}",
        f"\t\t{a.list_end}",
        "\t}",
        "\tfmt.Println(items)",
        "}",
        "",
    ]
    path = tmp_path / "layout.go"
    path.write_text("\n".join(lines), encoding="utf-8")
    return path
