"""Command-line entry point for skelgen."""

from __future__ import annotations

import argparse
import sys

from jinja2 import TemplateError
from rich.markup import escape

from skelgen import __version__
from skelgen.config import GenerateOptions
from skelgen.scaffolder import AppSpec, Root, ScaffoldError, new_app_template, new_init_template
from skelgen.utils import console, print_error, print_success, print_warning


def _add_generate_options(parser: argparse.ArgumentParser, defaults: GenerateOptions) -> None:
    parser.add_argument(
        "--overwrite",
        action="store_true",
        default=defaults.overwrite,
        help="Overwrite files",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=defaults.dry_run,
        help="Display what would change without actually changing anything",
    )
    parser.add_argument(
        "--directory", "-C",
        default=defaults.working_directory,
        help="Generate into this directory (default: current directory)",
    )


def build_parser() -> argparse.ArgumentParser:
    defaults = GenerateOptions.from_env()

    parser = argparse.ArgumentParser(
        prog="skelgen",
        description="Generate project skeletons from built-in templates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  skelgen app --name my-tool --color\n"
            "  skelgen app -n my-tool --http --license --dry-run\n"
            "  skelgen app -n my-tool -C ./projects/my-tool\n"
            "  skelgen init --dry-run\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    app = subparsers.add_parser("app", help="Create a new app")
    app.add_argument("--name", "-n", default=None, help="Name of the new app")
    app.add_argument("--help-text", default="", help="Set the help text string")
    app.add_argument("--comment", "-c", default="", help="Set the comment string")
    app.add_argument("--app-version", "-V", default="", help="Set the version string")
    app.add_argument("--license", action="store_true", help="Write a license file")
    app.add_argument("--color", action="store_true", help="Activate colour output")
    app.add_argument("--table", action="store_true", help="Activate table output")
    app.add_argument("--http", action="store_true", help="Add a dependency on httpx")
    _add_generate_options(app, defaults)

    init = subparsers.add_parser("init", help="Add skelgen to the project in the working directory")
    _add_generate_options(init, defaults)

    return parser


def _app_root(args: argparse.Namespace, options: GenerateOptions) -> tuple[Root, str]:
    spec_kwargs = {}
    if args.name:
        spec_kwargs["name"] = args.name
    spec = AppSpec(
        help_text=args.help_text,
        comment=args.comment,
        version=args.app_version,
        license=args.license,
        extensions={"color": args.color, "table": args.table},
        dependencies={"http": args.http},
        **spec_kwargs,
    )
    return new_app_template(spec, options), f"Created app {spec.name}"


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``skelgen`` and ``python -m skelgen``."""
    args = build_parser().parse_args(argv)

    options = GenerateOptions(
        overwrite=args.overwrite,
        dry_run=args.dry_run,
        working_directory=args.directory,
    )

    if args.command == "init":
        root, done = new_init_template(options), "Project initialized for skelgen"
    else:
        root, done = _app_root(args, options)

    try:
        root.execute(console=console)
    except (ScaffoldError, TemplateError, OSError) as exc:
        print_error(f"Error: {escape(str(exc))}")
        sys.exit(1)

    if options.dry_run:
        print_warning("Dry run: no files were changed.")
    else:
        print_success(done)


if __name__ == "__main__":
    main()
