"""Routebook CLI: write documentation and list the dispatch table.

Entry point registered as ``routebook`` in ``pyproject.toml``::

    [project.scripts]
    routebook = "routebook.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``routebook`` command."""
    parser = argparse.ArgumentParser(
        prog="routebook",
        description="Routebook: declare HTTP endpoints once, get a dispatch table and docs.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- routebook docs ---------------------------------------------------
    docs_parser = subparsers.add_parser("docs", help="Write service documentation")
    docs_parser.add_argument(
        "service",
        help="Import string (e.g. myapi:service)",
    )
    docs_parser.add_argument(
        "--format",
        choices=("md", "json"),
        default="md",
        help="Output format (default: md)",
    )
    docs_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write to this file instead of stdout",
    )

    # -- routebook routes -------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List the dispatch table")
    routes_parser.add_argument(
        "service",
        help="Import string (e.g. myapi:service)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "docs":
        from routebook.cli._docs import run_docs

        run_docs(args)
    elif args.command == "routes":
        from routebook.cli._routes import run_routes

        run_routes(args)
