#!/usr/bin/env python3

from pathlib import Path

from tagconf.cli.targets import load_target
from tagconf.core.app_context import AppContext
from tagconf.core.document.generator import render_template, write_template
from tagconf.core.errors import SchemaError


def generate(args, ctx: AppContext) -> int:
    """
    Generate a TOML configuration template for a schema class.
    Prints to stdout unless an output path is given.
    """
    try:
        schema = load_target(args.target)
    except (ValueError, ImportError, AttributeError, TypeError) as e:
        print(f"Schema '{args.target}' could not be loaded: {e}")
        return 1

    try:
        if args.output is None:
            print(render_template(schema), end="")
            return 0
        output_path = Path(args.output).resolve()
        write_template(schema, output_path)
    except SchemaError as e:
        print(f"Error generating template:\n  {e}")
        return 1

    print(f"Template generated at {output_path}")
    return 0


def register(subparser):
    parser = subparser.add_parser(
        "generate",
        help="Generate a TOML configuration template from a schema class."
    )
    parser.add_argument("target", help="Schema class as 'module:Class'.")
    parser.add_argument("-o", "--output", default=None, help="Path to save the generated document.")
    parser.set_defaults(func=generate)
