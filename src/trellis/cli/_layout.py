"""``trellis layout`` — show which layout would wrap a host template."""

import argparse

from trellis.layout import LayoutWrapper, ThemeRoots


def run_layout(args: argparse.Namespace) -> None:
    wrapper = LayoutWrapper(ThemeRoots(args.override, args.base), sentinel=args.sentinel)
    layout = wrapper.wrap(args.template)
    print(layout)
    if layout == args.template:
        print("  (no layout found, rendered unwrapped)")
