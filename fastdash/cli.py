"""Fast Dashboard manager command line.

Runs the interactive menu when called without arguments, or a single
operation when given a subcommand.

Usage::

    fastdash
    fastdash new my-dashboard --width 1280 --height 800 --theme dark
    fastdash add widget "My Clock"
    python -m fastdash add service "Weather API" --project ./my-dashboard
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from rich.markup import escape
from rich.prompt import Confirm, IntPrompt, Prompt

from fastdash.config import Config
from fastdash.deploy import install_manager_script
from fastdash.errors import FastDashError, MissingProjectDescriptorError
from fastdash.scaffolder import FeatureGenerator, ProjectDescriptor, ProjectGenerator
from fastdash.scaffolder.generator import validate_project_name
from fastdash.scaffolder.models import FeatureKind, LayoutStyle, ProjectReport, Theme
from fastdash.utils import (
    console,
    print_error,
    print_header,
    print_info,
    print_report,
    print_success,
    print_summary_table,
    print_warning,
    style_message,
)


# ---------------------------------------------------------------------------
# Menu definitions
# ---------------------------------------------------------------------------

MAIN_MENU: dict[int, str] = {
    1: "Create a new Fast Dashboard project",
    2: "Add features to an existing Fast Dashboard project",
    0: "Exit",
}

FEATURE_MENU: dict[int, tuple[FeatureKind, str, str]] = {
    1: (
        FeatureKind.MODULE,
        "Add a new PAGE or full SECTION to the dashboard",
        "What do you want to call this new page/section? (e.g., User Profile, System Settings)",
    ),
    2: (
        FeatureKind.WIDGET,
        "Add a new WIDGET or small INFO BOX to the main dashboard screen",
        "What do you want to call this new widget/info box? (e.g., My Clock, Weather Info)",
    ),
    3: (
        FeatureKind.SERVICE,
        "Add a way to HANDLE DATA or connect to an EXTERNAL SOURCE (Advanced)",
        "Describe the new background task or data connection (e.g., Weather API, User Settings Saver)",
    ),
    4: (
        FeatureKind.MODEL,
        "Define a new TYPE OF INFORMATION the dashboard will manage (Advanced)",
        "What kind of information do you want to store/manage? (e.g., Customer, Project Task, Note)",
    ),
}


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


def create_project(
    descriptor: ProjectDescriptor,
    output_dir: str | Path,
    config: Config,
    *,
    overwrite: bool = False,
    manager_script: bool = True,
    warnings: Sequence[str] = (),
) -> ProjectReport:
    """Generate a project, install the manager script, and print the report."""
    report = ProjectGenerator(config).generate(descriptor, output_dir, overwrite=overwrite)
    report.warnings[:0] = list(warnings)

    if manager_script and report.root.is_dir():
        try:
            report.files.append(install_manager_script(report.root, config))
        except FastDashError as exc:
            report.warnings.append(f"Could not install the manager script: {exc}")

    print_report(report)
    print_summary_table(
        {
            "Project": descriptor.name,
            "Module": descriptor.module_name,
            "Window": f"{descriptor.window_width}x{descriptor.window_height}",
            "Theme": descriptor.theme.value,
            "Layout": descriptor.layout.value,
            "Location": str(report.root),
        },
        title="Fast Dashboard project",
    )
    return report


def add_feature(kind: FeatureKind | str, name: str, project_root: str | Path, config: Config) -> bool:
    """Add one feature, print the report, and return whether it succeeded."""
    report = FeatureGenerator(project_root, config).add_feature(kind, name)
    print_report(report)
    return report.ok


# ---------------------------------------------------------------------------
# Interactive menu
# ---------------------------------------------------------------------------


def _prompt_new_project(config: Config, output_dir: Path) -> None:
    print_header("Create New Fast Dashboard Project")
    name = Prompt.ask(
        "Enter the name for your new Fast Dashboard project (e.g., my-dashboard)",
        default="",
        show_default=False,
        console=console,
    )
    clean_name = validate_project_name(name)
    overwrite = False
    if (output_dir / clean_name).exists():
        overwrite = Confirm.ask(
            f"[bold yellow]Directory '{escape(clean_name)}' already exists. Overwrite?[/bold yellow]",
            default=False,
            console=console,
        )
        if not overwrite:
            print_info("Project creation cancelled by user.")
            return

    width = Prompt.ask(
        "Enter initial window width", default=str(config.window.width), console=console
    )
    height = Prompt.ask(
        "Enter initial window height", default=str(config.window.height), console=console
    )
    theme = Prompt.ask(
        "Theme", choices=[t.value for t in Theme], default=Theme.SYSTEM.value, console=console
    )
    layout = Prompt.ask(
        "Widget layout",
        choices=[s.value for s in LayoutStyle],
        default=LayoutStyle.VERTICAL.value,
        console=console,
    )

    warnings: list[str] = []
    descriptor = ProjectDescriptor.from_input(
        name, width, height, theme, layout, config=config, warnings=warnings
    )
    for warning in warnings:
        print_warning(warning)
    print_info(f"Initial window size will be: {descriptor.window_width}x{descriptor.window_height}")
    report = create_project(descriptor, output_dir, config, overwrite=overwrite)
    if report.ok:
        print_success(f"Fast Dashboard project '{descriptor.name}' created successfully!")


def _feature_menu(config: Config, project_root: Path) -> None:
    generator = FeatureGenerator(project_root, config)
    module_name = generator.module_name()
    print_info(f"Current project module: {module_name}")

    while True:
        print_header("What kind of feature would you like to add to your dashboard?")
        for number, (_, label, _) in FEATURE_MENU.items():
            console.print(f"  {number}. {label}")
        console.print("  0. Back to Main Menu")
        choice = IntPrompt.ask(
            "Enter your choice",
            choices=[str(n) for n in (*FEATURE_MENU, 0)],
            show_choices=False,
            console=console,
        )
        if choice == 0:
            return

        kind, _, question = FEATURE_MENU[choice]
        name = Prompt.ask(question, default="", show_default=False, console=console)
        print_report(generator.add_feature(kind, name))


def run_menu(config: Config, working_dir: str | Path = ".") -> None:
    """Run the interactive menu until the user exits.

    Errors are reported and the loop resumes at the next menu iteration.
    """
    root = Path(working_dir)
    print_header("Unified Fast Dashboard Manager")
    while True:
        console.print("What would you like to do?")
        for number, label in MAIN_MENU.items():
            console.print(f"  {number}. {label}")
        choice = IntPrompt.ask(
            "Enter your choice",
            choices=[str(n) for n in MAIN_MENU],
            show_choices=False,
            console=console,
        )
        try:
            if choice == 1:
                _prompt_new_project(config, root)
            elif choice == 2:
                _feature_menu(config, root)
            else:
                print_info("Exiting.")
                return
        except MissingProjectDescriptorError as exc:
            console.print(style_message(f"[ERROR] {exc}"))
            print_error("Could not proceed with adding features. Run this from a project root with a valid go.mod.")
        except FastDashError as exc:
            console.print(style_message(f"[ERROR] {exc}"))


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fastdash",
        description="Fast Dashboard manager -- scaffold and extend Go + Fyne dashboards",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  fastdash                          (interactive menu)\n"
            "  fastdash new my-dashboard --width 1280 --height 800\n"
            '  fastdash add widget "My Clock"\n'
        ),
    )
    subparsers = parser.add_subparsers(dest="command")

    new = subparsers.add_parser("new", help="Create a new dashboard project")
    new.add_argument("name", help="Project name (also the directory name)")
    new.add_argument("--width", default=None, help="Initial window width")
    new.add_argument("--height", default=None, help="Initial window height")
    new.add_argument("--theme", choices=[t.value for t in Theme], default=Theme.SYSTEM.value)
    new.add_argument("--layout", choices=[s.value for s in LayoutStyle], default=LayoutStyle.VERTICAL.value)
    new.add_argument("--output", "-o", default=".", help="Parent directory (default: .)")
    new.add_argument("--overwrite", action="store_true", help="Replace an existing project directory")
    new.add_argument(
        "--no-manager-script",
        action="store_true",
        help="Do not place the manager launcher in the new project",
    )

    add = subparsers.add_parser("add", help="Add a feature to an existing project")
    add.add_argument("kind", choices=[k.value for k in FeatureKind])
    add.add_argument("name", help="Display name of the feature, e.g. 'My Clock'")
    add.add_argument("--project", "-p", default=".", help="Project root (default: .)")

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point for ``fastdash`` and ``python -m fastdash``."""
    args = build_parser().parse_args(argv)
    config = Config.from_env()

    if args.command is None:
        try:
            run_menu(config)
        except (KeyboardInterrupt, EOFError):
            console.print()
            print_info("Exiting.")
        console.print("Unified Fast Dashboard Manager finished.")
        return

    try:
        if args.command == "new":
            warnings: list[str] = []
            descriptor = ProjectDescriptor.from_input(
                args.name,
                args.width,
                args.height,
                args.theme,
                args.layout,
                config=config,
                warnings=warnings,
            )
            report = create_project(
                descriptor,
                args.output,
                config,
                overwrite=args.overwrite,
                manager_script=not args.no_manager_script,
                warnings=warnings,
            )
            ok = report.ok
        else:
            ok = add_feature(args.kind, args.name, args.project, config)
    except FastDashError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        sys.exit(1)

    if not ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
