#!/usr/bin/env python3

import argparse
import sys

from tagconf.core.app_context import build_context
from tagconf.cli import check, config, generate, rules


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="tagconf", description="tagconf configuration toolkit")
    subparsers = parser.add_subparsers(dest="command")

    # Register subcommands (they accept ctx)
    generate.register(subparsers)
    check.register(subparsers)
    rules.register(subparsers)
    config.register(subparsers)

    args = parser.parse_args(argv)
    if hasattr(args, "func"):
        ctx = build_context(configure_logging=True)  # built once
        return args.func(args, ctx)
    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
