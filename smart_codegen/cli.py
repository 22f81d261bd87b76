"""Command-line interface for smart-codegen.

Usage::

    codegen generate vue-form userProfile -b '{"name": "input", "email": "input"}'
    codegen g react-component Button --dry-run
    codegen list
    codegen validate vue-form
    codegen init --example

Missing template / module name / body arguments are asked for interactively.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Optional

from rich.prompt import Confirm, Prompt

from . import __version__
from .config import ConfigError
from .scaffolder.body import BodySpecError, describe_body, parse_body
from .scaffolder.generator import DEFAULT_OUTPUT_DIR, Generator
from .scaffolder.templates import config_filename, copy_example_templates, write_starter_config
from .utils import (
    console,
    load_json,
    print_error,
    print_info,
    print_success,
    print_summary_table,
    print_warning,
)

BODY_EXAMPLES = (
    'Simple: {"name": "input", "email": "input"}',
    'Nested: {"name": "input", "address": {"city": "input", "country": "select"}}',
)
DEFAULT_BODY_INPUT = '{"name": "input", "email": "input"}'


# ---------------------------------------------------------------------------
# generate
# ---------------------------------------------------------------------------


def cmd_generate(args: argparse.Namespace) -> int:
    try:
        generator = Generator.from_config_file(args.config)
    except ConfigError as exc:
        print_error("\nConfiguration Error:")
        print_error(str(exc))
        print_warning('\nTip: Run "codegen init" to create a config file')
        return 1

    templates = generator.templates
    if not templates:
        print_error('No templates found. Run "codegen init" first.')
        return 0

    template_name = args.template or Prompt.ask(
        "Select a template", choices=templates, console=console
    )
    module_name = args.name or _ask_module_name()

    if not generator.has_template(template_name):
        print_error(f'\nTemplate "{template_name}" not found!')
        print_warning("\nAvailable templates:")
        for name in templates:
            print_info(f"  - {name}")
        return 1

    template = generator.get_template(template_name)

    body: Optional[dict[str, Any]] = None
    if template.needs_body:
        try:
            body = _resolve_body(args)
        except ValueError as exc:
            print_error(str(exc))
            return 1
    elif args.body or args.body_file:
        print_warning(f'Template "{template_name}" does not use a body; ignoring it.')

    output_path = args.output or template.output
    console.print(f'\n[blue]Generating {template_name} with name "{module_name}"...[/blue]')
    if output_path:
        print_info(f"Output: {output_path}")
    if body is not None:
        print_info(f"Fields: {describe_body(parse_body(body))}\n")
    if args.dry_run:
        print_warning("\nDRY RUN MODE - No files will be created\n")

    result = asyncio.run(
        generator.generate(
            template_name,
            module_name,
            args.output,
            body,
            dry_run=args.dry_run,
            format_output=not args.no_format,
        )
    )

    if not result.success:
        print_error("\nGeneration failed:")
        for error in result.errors:
            print_error(f"  x {error}")
        return 1

    print_success("\nGeneration completed successfully!\n")
    base = Path(output_path or DEFAULT_OUTPUT_DIR)
    for file in result.files:
        print_success(f"  + {base / file}")
    for warning in result.warnings:
        print_warning(f"  ! {warning}")

    if args.dry_run:
        print_summary_table(
            {
                "Template": template_name,
                "Module": module_name,
                "Output": str(base),
                "Files": str(len(result.files)),
                "Warnings": str(len(result.warnings)),
            },
            title="Dry run",
        )
        print_warning("No files were created (dry run mode)\n")
    elif not args.no_format:
        print_info("\nFiles formatted with Prettier\n")
    return 0


def _ask_module_name() -> str:
    while True:
        value = Prompt.ask("Enter module name", console=console).strip()
        if value:
            return value
        print_error("Module name is required")


def _resolve_body(args: argparse.Namespace) -> dict[str, Any]:
    """Body from ``--body``, ``--body-file`` or an interactive prompt.

    Raises:
        ValueError: If the supplied body is not valid JSON or not an object.
    """
    if args.body:
        try:
            data = json.loads(args.body)
        except json.JSONDecodeError:
            raise ValueError("Invalid JSON in --body option") from None
    elif args.body_file:
        try:
            data = load_json(args.body_file)
        except (OSError, json.JSONDecodeError) as exc:
            raise ValueError(f"Could not read --body-file {args.body_file}: {exc}") from None
    else:
        data = _ask_body()

    try:
        parse_body(data)
    except BodySpecError as exc:
        raise ValueError(str(exc)) from None
    return data


def _ask_body() -> Any:
    console.print("\n[blue]This template requires body fields.[/blue]")
    print_info("Examples:")
    for example in BODY_EXAMPLES:
        print_info(f"  {example}")
    console.print()

    while True:
        raw = Prompt.ask(
            "Enter body object (JSON)", default=DEFAULT_BODY_INPUT, console=console
        )
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            print_error("Please enter valid JSON")


# ---------------------------------------------------------------------------
# list
# ---------------------------------------------------------------------------


def cmd_list(args: argparse.Namespace) -> int:
    try:
        generator = Generator.from_config_file(args.config)
    except ConfigError as exc:
        print_error(f"Error: {exc}")
        return 1

    if not generator.templates:
        print_warning('No templates found. Run "codegen init" first.')
        return 0

    console.print("\n[blue]Available templates:[/blue]\n")
    for name in generator.templates:
        template = generator.get_template(name)
        print_success(f"  * {name}")
        if template.description:
            print_info(f"    {template.description}")
        if template.output:
            print_info(f"    Output: {template.output}")
        if template.needs_body:
            print_warning("    Requires body input")
        if template.variables:
            print_info(f"    Supported field types: {', '.join(template.variables)}")
    console.print()
    return 0


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------


def cmd_validate(args: argparse.Namespace) -> int:
    try:
        generator = Generator.from_config_file(args.config)
    except ConfigError as exc:
        print_error(f"Error: {exc}")
        return 1

    if not generator.has_template(args.template):
        print_error(f'Template "{args.template}" not found')
        return 1

    check = generator.check_template(args.template)
    console.print(f"\n[blue]Validating template: {args.template}[/blue]\n")

    if not check.exists:
        print_error(f"x Template path not found: {check.path}")
        return 1
    print_success(f"+ Template path exists: {check.path}")
    print_success(f"+ Found {check.file_count} template files")

    if check.needs_body:
        if check.missing_variables:
            print_warning("! Template needs body but no variables defined")
        else:
            print_success(f"+ Variables defined: {', '.join(check.variables)}")

    print_success("\nTemplate is valid\n")
    return 0


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------


def cmd_init(args: argparse.Namespace) -> int:
    fmt = "json" if args.json else "py" if args.py else "yaml"
    target_dir = Path.cwd()
    config_file = target_dir / config_filename(fmt)

    if config_file.exists() and not args.force:
        overwrite = Confirm.ask(
            f"{config_file.name} already exists. Overwrite?", default=False, console=console
        )
        if not overwrite:
            print_warning("Cancelled.")
            return 0

    asyncio.run(write_starter_config(target_dir, fmt))
    print_success(f"Configuration file created: {config_file.name}")

    if args.example:
        written = asyncio.run(copy_example_templates(target_dir))
        for path in written:
            print_success(f"  + {path.relative_to(target_dir)}")

    console.print("\n[blue]Next steps:[/blue]")
    if not args.example:
        console.print("1. Create template directories (or re-run with --example)")
    else:
        console.print("1. Adjust the example templates under ./templates")
    console.print("2. Add template files with placeholders")
    console.print('3. Run "codegen list" to see available templates')
    console.print('4. Run "codegen generate <template> <name>"')
    return 0


# ---------------------------------------------------------------------------
# Parser / entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codegen",
        description="Smart Codegen - template-driven code generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  codegen init --example\n"
            "  codegen generate vue-form userProfile -b '{\"name\": \"input\"}'\n"
            "  codegen list\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Config file (default: codegen.config.{py,json,yaml,yml} in the working directory)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", aliases=["g"], help="Generate code from a template")
    gen.add_argument("template", nargs="?", help="Template name")
    gen.add_argument("name", nargs="?", help="Module name")
    gen.add_argument("--output", "-o", default=None, help="Output directory")
    body_group = gen.add_mutually_exclusive_group()
    body_group.add_argument("--body", "-b", default=None, help="Body object as a JSON string")
    body_group.add_argument("--body-file", default=None, help="Read the body object from a JSON file")
    gen.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview what will be generated without creating files",
    )
    gen.add_argument("--no-format", action="store_true", help="Skip Prettier formatting")
    gen.set_defaults(func=cmd_generate)

    lst = sub.add_parser("list", aliases=["ls"], help="List available templates")
    lst.set_defaults(func=cmd_list)

    val = sub.add_parser("validate", help="Validate template structure")
    val.add_argument("template", help="Template name")
    val.set_defaults(func=cmd_validate)

    init = sub.add_parser("init", help="Create a starter configuration")
    fmt_group = init.add_mutually_exclusive_group()
    fmt_group.add_argument("--json", action="store_true", help="Write codegen.config.json")
    fmt_group.add_argument("--py", action="store_true", help="Write codegen.config.py (supports hooks)")
    init.add_argument("--example", action="store_true", help="Also copy example templates")
    init.add_argument("--force", action="store_true", help="Overwrite an existing config")
    init.set_defaults(func=cmd_init)

    return parser


def run(argv: list[str] | None = None) -> int:
    """Parse *argv* and dispatch; returns the process exit code."""
    args = build_parser().parse_args(argv)
    return args.func(args)


def main() -> None:
    """CLI entry point for ``codegen`` and ``python -m smart_codegen``."""
    sys.exit(run())


if __name__ == "__main__":
    main()
