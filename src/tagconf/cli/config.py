#!/usr/bin/env python3
import json
from pathlib import Path

import tagconf.core.config as cfg
from tagconf.core.app_context import AppContext


def register(subparsers):
    sp = subparsers.add_parser("config", help="Tool configuration utilities")
    sps = sp.add_subparsers(dest="config_cmd")

    # default when user runs: `tagconf config`
    def config_default(args, ctx: AppContext) -> int:
        sp.print_help()
        return 1
    sp.set_defaults(func=config_default)

    showp = sps.add_parser("show", help="Show effective config")
    showp.add_argument("--options", action="store_true", help="Show the resulting loader options instead")
    showp.set_defaults(func=show_config)

    pathsp = sps.add_parser("paths", help="Show which config files are consulted")
    pathsp.set_defaults(func=show_paths)


def show_config(args, ctx: AppContext) -> int:
    payload = ctx.options.model_dump(mode="json") if args.options else ctx.config
    print(json.dumps(payload, indent=2))
    return 0


def show_paths(args, ctx: AppContext) -> int:
    for label, path in (
        ("global", cfg.GLOBAL_CONFIG_PATH),
        ("project", Path.cwd() / cfg.PROJECT_CONFIG_NAME),
    ):
        status = "found" if path.exists() else "missing"
        print(f"  - {label:8} {status:8} {path}")
    return 0
