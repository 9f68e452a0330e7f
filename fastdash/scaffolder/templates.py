"""Jinja2 template rendering for project scaffolding.

Provides the TemplateRenderer class which loads templates from the
``fastdash/scaffolder/templates/`` directory. Templates use ``${name}``
placeholders and nothing else: every other character, including newlines,
indentation and comments, passes through unchanged. A placeholder with no
value renders as the empty string.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Mapping

from jinja2 import ChainableUndefined, Environment, FileSystemLoader


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

# Block and comment delimiters that never occur in source text, so "{%" and
# "{#" in Go or shell code stay literal.
_BLOCK_START = "\x00%"
_BLOCK_END = "%\x00"
_COMMENT_START = "\x00#"
_COMMENT_END = "#\x00"

_NEWLINE_RE = re.compile(r"\r\n|\r|\n")
_LINE_RE = re.compile(r"[^\r\n]*(?:\r\n|\r|\n)|[^\r\n]+")


# ---------------------------------------------------------------------------
# Placeholder sets per template
# ---------------------------------------------------------------------------

_ANCHOR_PLACEHOLDERS: tuple[str, ...] = (
    "anchor_imports_start",
    "anchor_imports_end",
    "anchor_instantiations_start",
    "anchor_instantiations_end",
    "anchor_list_start",
    "anchor_list_end",
)

TEMPLATE_PLACEHOLDERS: dict[str, tuple[str, ...]] = {
    "go.mod.j2": ("module_name", "go_version", "fyne_version"),
    "main.go.j2": (
        "module_name",
        "project_name",
        "window_width",
        "window_height",
        "theme_import",
        "theme_setup",
    ),
    "layout/main_layout.go.j2": (
        "module_name",
        "project_name",
        "widgets_container",
        "manager_script",
        *_ANCHOR_PLACEHOLDERS,
    ),
    "placeholder.go.j2": ("package_name", "purpose", "exported_name", "file_name", "module_name"),
    "features/module_view.go.j2": ("package_name", "display_name", "exported_name"),
    "features/module_logic.go.j2": ("package_name", "display_name"),
    "features/widget.go.j2": ("display_name", "exported_name"),
    "features/service.go.j2": ("module_name", "display_name", "exported_name", "file_stem"),
    "features/model.go.j2": ("display_name", "exported_name"),
    "manage_dashboard.sh.j2": ("project_name",),
}


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders literal-substitution templates for project scaffolding.

    The Jinja2 environment is configured with ``${`` / ``}`` variable
    delimiters so Go source (full of ``{`` and ``}``) needs no escaping,
    block and comment syntax moved out of reach, and ``ChainableUndefined``
    so missing values (including dotted ones) render empty. Line endings of
    the template are kept as they are.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            variable_start_string="${",
            variable_end_string="}",
            block_start_string=_BLOCK_START,
            block_end_string=_BLOCK_END,
            comment_start_string=_COMMENT_START,
            comment_end_string=_COMMENT_END,
            line_statement_prefix=None,
            line_comment_prefix=None,
            autoescape=False,
            keep_trailing_newline=True,
            undefined=ChainableUndefined,
        )
        self._envs: dict[str, Environment] = {"\n": self.env}

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: Mapping[str, Any]) -> str:
        """Render a template file with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"features/widget.go.j2"``).
            context: Mapping of placeholder name to value. Values are
                converted with ``str``.

        Returns:
            The rendered content.

        Raises:
            jinja2.TemplateNotFound: If the template does not exist.
        """
        source, _, _ = self.env.loader.get_source(self.env, template_path)
        return self._render_source(source, _stringify(context))

    def render_string(self, template_string: str, context: Mapping[str, Any]) -> str:
        """Render inline template text with the provided context."""
        return self._render_source(template_string, _stringify(context))

    def _render_source(self, source: str, values: dict[str, str]) -> str:
        # Jinja normalizes every line break to one newline_sequence.
        newlines = set(_NEWLINE_RE.findall(source))
        if len(newlines) > 1:
            return "".join(
                self._render_source(line, values) for line in _LINE_RE.findall(source)
            )
        env = self._environment(newlines.pop() if newlines else "\n")
        return env.from_string(source).render(**values)

    def _environment(self, newline: str) -> Environment:
        if newline not in self._envs:
            self._envs[newline] = self.env.overlay(newline_sequence=newline)
        return self._envs[newline]

    # -- Utility -----------------------------------------------------------

    def placeholders(self, template_path: str) -> tuple[str, ...]:
        """Return the enumerated placeholder names of a known template."""
        return TEMPLATE_PLACEHOLDERS.get(template_path, ())

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all ``.j2`` template paths under *prefix*.

        Paths are relative to the template root directory.
        """
        search_dir = self.template_dir / prefix if prefix else self.template_dir
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in search_dir.rglob("*.j2")
        )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _stringify(context: Mapping[str, Any]) -> dict[str, str]:
    return {key: str(value) for key, value in context.items()}
