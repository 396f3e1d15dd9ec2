#!/usr/bin/env python3
"""
tsmc: generate mock values for TypeScript type declarations

    tsmc init [--mock-location DIR] [--indent N|tab]
    tsmc list src/types.ts
    tsmc generate src/types.ts --type Invoice
    tsmc generate src/types.ts              (asks which type to mock)
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from ts_mock_creator.config.plugin import write_plugin_template
from ts_mock_creator.config.project import MockConfig
from ts_mock_creator.core.errors import MockCreatorError, UserCancelled
from ts_mock_creator.core.pipeline import MockPipeline

INDENT_CHOICES = {"2": "  ", "4": "    ", "tab": "\t"}


def choose_declaration(identifiers: Sequence[str]) -> str | None:
    """Prompt on stderr/stdin for one of ``identifiers``. None when the user gives up."""
    print("For which type do you like to create a mock?", file=sys.stderr)
    for i, name in enumerate(identifiers, 1):
        print(f"  {i}. {name}", file=sys.stderr)
    try:
        answer = input("> ").strip()
    except EOFError:
        return None

    if answer.isdigit() and 1 <= int(answer) <= len(identifiers):
        return identifiers[int(answer) - 1]
    if answer in identifiers:
        return answer
    return None


def cmd_init(args: argparse.Namespace) -> dict:
    config = MockConfig(args.project_dir)
    if config.exists():
        return {"success": False, "error": "Project already initialized", "config_file": str(config.config_file)}

    values = config.init(
        mock_location=args.mock_location,
        indent=INDENT_CHOICES.get(args.indent) if args.indent else None,
    )
    write_plugin_template(config.plugin_file)
    return {
        "success": True,
        "config": values,
        "config_file": str(config.config_file),
        "plugin_file": str(config.plugin_file),
    }


def cmd_list(args: argparse.Namespace) -> dict:
    pipeline = MockPipeline.for_project(args.project_dir)
    return {"success": True, "declarations": pipeline.list_declarations(args.file)}


def cmd_generate(args: argparse.Namespace) -> dict:
    pipeline = MockPipeline.for_project(args.project_dir)
    if args.type:
        result = pipeline.generate(args.file, args.type)
    else:
        result = pipeline.generate_interactive(args.file, choose_declaration)
    return result.to_dict()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tsmc", description="TypeScript Mock Creator")
    parser.add_argument("--project-dir", type=Path, default=None,
                        help="Project root containing .tsmc/ (default: current directory)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    init = sub.add_parser("init", help="Create .tsmc/config.yml and a starter transformer module")
    init.add_argument("--mock-location", help="Mock directory relative to the mocked file path, e.g. ../__mocks__")
    init.add_argument("--indent", choices=sorted(INDENT_CHOICES), help="Indentation of generated mocks")
    init.set_defaults(func=cmd_init)

    list_ = sub.add_parser("list", help="List the type declarations of a file")
    list_.add_argument("file", help="Path to TypeScript file")
    list_.set_defaults(func=cmd_list)

    generate = sub.add_parser("generate", help="Generate a mock file for one declaration")
    generate.add_argument("file", help="Path to TypeScript file")
    generate.add_argument("--type", help="Declaration to mock (prompted for when omitted)")
    generate.set_defaults(func=cmd_generate)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        result = args.func(args)
    except UserCancelled:
        return 0
    except MockCreatorError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0 if result.get("success", True) else 1


if __name__ == "__main__":
    sys.exit(main())
