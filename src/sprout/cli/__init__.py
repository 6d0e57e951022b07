"""Sprout CLI — render pages and inspect routes.

Entry point registered as ``sprout`` in ``pyproject.toml``::

    [project.scripts]
    sprout = "sprout.cli:main"
"""

import argparse
import sys


def _add_pod_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--root", default=".", help="Pod directory (default: .)")
    parser.add_argument(
        "--base-url",
        default=None,
        help="Fetch documents and views over HTTP from this URL instead of --root",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=("debug", "info", "warning", "error"),
        help="Logging level (default: from podspec.yaml, else warning)",
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``sprout`` command."""
    parser = argparse.ArgumentParser(
        prog="sprout",
        description="Sprout — render static-site pages from YAML documents.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- sprout render ----------------------------------------------------
    render_parser = subparsers.add_parser("render", help="Render one page")
    render_parser.add_argument("path", help="Request path (e.g. /blog/hello)")
    render_parser.add_argument("--out", "-o", default=None, help="Write HTML here instead of stdout")
    render_parser.add_argument(
        "--strict-cycles",
        action="store_true",
        default=None,
        help="Fail on cyclic document references instead of skipping them",
    )
    _add_pod_arguments(render_parser)

    # -- sprout routes ----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List the routes manifest")
    _add_pod_arguments(routes_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "render":
        from sprout.cli._render import run_render

        run_render(args)
    elif args.command == "routes":
        from sprout.cli._routes import run_routes

        run_routes(args)
