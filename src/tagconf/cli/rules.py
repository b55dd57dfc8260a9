#!/usr/bin/env python3

import json

from tagconf.core.app_context import AppContext


def list_rules(args, ctx: AppContext) -> int:
    names = ctx.rules.names()

    if args.json:
        print(json.dumps(names, indent=2))
        return 0

    if not names:
        print("No rules registered.")
        return 1

    print("Registered rules:")
    for name in names:
        doc = (ctx.rules.get(name).__doc__ or "").strip()
        summary = doc.splitlines()[0] if doc else ""
        print(f"  - {name:14} {summary}".rstrip())
    return 0


def register(subparsers):
    sp = subparsers.add_parser("rules", help="List registered validation rules")
    sp.add_argument("--json", action="store_true", help="JSON output")
    sp.set_defaults(func=list_rules)
