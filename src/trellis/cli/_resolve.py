"""``trellis resolve`` — show which template a view identifier lands on.

Runs the same path-major cascade as ``ViewRenderer.resolve()`` against
the given roots and prints the loader key and the file it points at.
"""

import argparse
import sys

from trellis.errors import InvalidIdentifier
from trellis.resolution.candidates import candidate_chain
from trellis.resolution.resolver import reduce_identifier, resolve_path_major
from trellis.resolution.search_path import SearchPath


def run_resolve(args: argparse.Namespace) -> None:
    """Resolve ``args.identifier`` and print the result.

    Exits with status 1 when nothing matches, listing what was tried.
    """
    search_path = SearchPath(args.roots)
    try:
        candidates = candidate_chain(args.identifier, args.ext, sentinel=args.sentinel)
    except InvalidIdentifier as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    resolved = resolve_path_major(candidates, search_path.roots)
    if resolved is None:
        print(f"No template for {args.identifier!r}", file=sys.stderr)
        print(f"  Tried: {', '.join(candidates)}", file=sys.stderr)
        print(f"  In:    {', '.join(search_path.roots)}", file=sys.stderr)
        sys.exit(1)

    print(reduce_identifier(resolved, search_path.roots))
    print(f"  file: {resolved.absolute_path}")
    print(f"  root: {resolved.matched_root}")
