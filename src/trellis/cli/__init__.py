"""Trellis CLI — inspect how identifiers and layouts resolve.

Entry point registered as ``trellis`` in ``pyproject.toml``::

    [project.scripts]
    trellis = "trellis.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``trellis`` command."""
    parser = argparse.ArgumentParser(
        prog="trellis",
        description="Trellis — hierarchical view resolution for kida templates.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log each lookup")
    subparsers = parser.add_subparsers(dest="command")

    # -- trellis resolve --------------------------------------------------
    resolve_parser = subparsers.add_parser("resolve", help="Resolve a view identifier")
    resolve_parser.add_argument("identifier", help="View identifier (e.g. page-about)")
    resolve_parser.add_argument(
        "--root",
        dest="roots",
        action="append",
        required=True,
        help="Template root, highest priority first (repeatable)",
    )
    resolve_parser.add_argument("--ext", default=".twig", help="Template extension")
    resolve_parser.add_argument("--sentinel", default="index", help="Generic fallback identifier")

    # -- trellis layout ---------------------------------------------------
    layout_parser = subparsers.add_parser("layout", help="Pick the layout wrapping a template")
    layout_parser.add_argument("template", help="Host template file (e.g. theme/page-about.php)")
    layout_parser.add_argument("--override", required=True, help="Child theme directory")
    layout_parser.add_argument("--base", default=None, help="Parent theme directory")
    layout_parser.add_argument("--sentinel", default="index", help="Generic fallback identifier")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.command == "resolve":
        from trellis.cli._resolve import run_resolve

        run_resolve(args)
    elif args.command == "layout":
        from trellis.cli._layout import run_layout

        run_layout(args)
