"""Smolblog CLI: serve, export, or mirror a manifest-driven site.

Entry point registered as ``smolblog`` in ``pyproject.toml``::

    [project.scripts]
    smolblog = "smolblog.cli:main"
"""

import argparse
import logging
import sys

from smolblog.config import DEFAULT_OUTPUT


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``smolblog`` command."""
    parser = argparse.ArgumentParser(
        prog="smolblog",
        description="smolblog: render a site from a JSON manifest.",
    )
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["debug", "info", "warning", "error"],
        help="Logging verbosity (default: info)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- smolblog serve ---------------------------------------------------
    serve_parser = subparsers.add_parser(
        "serve", help="Serve the site, re-rendering on every request"
    )
    serve_parser.add_argument("--manifest", required=True, help="The location of the manifest")
    serve_parser.add_argument("--host", default=None, help="Bind host address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port number (default 4444)")
    serve_parser.add_argument(
        "--output",
        default=None,
        help="Mirror every route into this directory instead of serving",
    )

    # -- smolblog export --------------------------------------------------
    export_parser = subparsers.add_parser("export", help="Render every page to a directory")
    export_parser.add_argument(
        "--manifest",
        default=None,
        help="The location of the manifest (default: ./smolmanifest.json)",
    )
    export_parser.add_argument(
        "--output",
        default=None,
        help=f"The output directory for the rendered pages (default: ./{DEFAULT_OUTPUT})",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        from smolblog.cli._serve import run_serve

        run_serve(args)
    elif args.command == "export":
        from smolblog.cli._export import run_export

        run_export(args)
