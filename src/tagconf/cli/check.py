#!/usr/bin/env python3
from __future__ import annotations

from pathlib import Path

from tagconf.cli.targets import load_target
from tagconf.core.app_context import AppContext
from tagconf.core.document.loader import load_file
from tagconf.core.document.options import LoadOptions
from tagconf.core.errors import ConfigError, DocumentSyntaxError, SchemaError
from tagconf.core.formatting import format_config_error


def _options_for_run(args, ctx: AppContext) -> LoadOptions:
    """
    Prefer CLI-provided policy flags for this run; otherwise, use the options from context.
    """
    overrides = {}
    if args.unknown_keys is not None:
        overrides["unknown_keys"] = args.unknown_keys
    if args.validate_defaults:
        overrides["validate_defaults"] = True
    if args.fail_fast:
        overrides["fail_fast"] = True
    if not overrides:
        return ctx.options
    return LoadOptions(**{**ctx.options.model_dump(), **overrides})


def check(args, ctx: AppContext) -> int:
    try:
        schema = load_target(args.target)
    except (ValueError, ImportError, AttributeError, TypeError) as e:
        print(f"Schema '{args.target}' could not be loaded: {e}")
        return 1

    path = Path(args.file)
    options = _options_for_run(args, ctx)
    try:
        load_file(path, schema, registry=ctx.rules, options=options)
    except ConfigError as e:
        print(f"{path}: Validation Failed")
        for line in format_config_error(e):
            print(f"  - {line}")
        return 1
    except DocumentSyntaxError as e:
        print(f"{path}: Failed to read TOML ({e})")
        return 1
    except SchemaError as e:
        print(f"{args.target}: Invalid schema\n  {e}")
        return 1
    except (FileNotFoundError, ValueError) as e:
        print(str(e))
        return 1

    print(f"{path}: Validation Passed")
    return 0


def register(subparser):
    parser = subparser.add_parser("check", help="Validate a TOML document against a schema class.")
    parser.add_argument("target", help="Schema class as 'module:Class'.")
    parser.add_argument("file", help="TOML document to check.")
    parser.add_argument(
        "--unknown-keys",
        choices=["error", "warn", "ignore"],
        default=None,
        help="How to treat keys not in the schema (overrides config).",
    )
    parser.add_argument(
        "--validate-defaults",
        action="store_true",
        help="Also check declared defaults against their rules.",
    )
    parser.add_argument("--fail-fast", action="store_true", help="Stop at the first error.")
    parser.set_defaults(func=check)
