"""Input definition CLI entry points.

This module exposes commands to create, show, list, and delete
input definitions. It maps argparse commands onto registry calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
import sys
from typing import Sequence

from core.config import InputDefinitionConfig
from core.errors import InputDefinitionError
from core.logging_config import configure_cli_logging
from store.definition_meta import load_meta_file, meta_to_json
from store.definition_registry import InputDefinitionRegistry


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="inputdef", description="Input definition store CLI")
    parser.add_argument("--data-root", help="Override INPUTDEF_DATA_ROOT for this command")
    parser.add_argument("--verbose", action="store_true", help="Log lifecycle events to stderr")
    subparsers = parser.add_subparsers(dest="command", required=True)
    create_parser = subparsers.add_parser("create", help="Create a definition from meta JSON")
    _add_target_arguments(create_parser)
    create_parser.add_argument("--meta", required=True, help="Path to definition meta JSON or YAML")
    show_parser = subparsers.add_parser("show", help="Print a definition as meta JSON")
    _add_target_arguments(show_parser)
    list_parser = subparsers.add_parser("list", help="List definitions of an index")
    list_parser.add_argument("--index", required=True, help="Owning index name")
    delete_parser = subparsers.add_parser("delete", help="Delete a definition")
    _add_target_arguments(delete_parser)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the input definition CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_cli_logging(args.verbose)
    try:
        config = _build_config(args.data_root)
        registry = InputDefinitionRegistry(config, args.index)
        if args.command == "create":
            return _run_create_command(registry, args)
        if args.command == "show":
            return _run_show_command(registry, args)
        if args.command == "list":
            return _run_list_command(registry)
        if args.command == "delete":
            return _run_delete_command(registry, args)
    except InputDefinitionError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _add_target_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--index", required=True, help="Owning index name")
    parser.add_argument("--name", required=True, help="Input definition name")


def _build_config(data_root: str | None) -> InputDefinitionConfig:
    """Build config with optional data-root override.

    Args:
        data_root: Optional override path.

    Returns:
        Runtime configuration.
    """
    config = InputDefinitionConfig.from_env()
    if data_root:
        config = replace(config, data_root=Path(data_root).expanduser().resolve())
    return config


def _run_create_command(registry: InputDefinitionRegistry, args: argparse.Namespace) -> int:
    """Handle create command."""
    definition = registry.create(args.name, load_meta_file(args.meta))
    print(definition.file_path)
    return 0


def _run_show_command(registry: InputDefinitionRegistry, args: argparse.Namespace) -> int:
    """Handle show command."""
    definition = registry.get(args.name)
    print(meta_to_json(definition.meta()))
    return 0


def _run_list_command(registry: InputDefinitionRegistry) -> int:
    """Handle list command."""
    for name in registry.list_names():
        print(name)
    return 0


def _run_delete_command(registry: InputDefinitionRegistry, args: argparse.Namespace) -> int:
    """Handle delete command."""
    registry.delete(args.name)
    return 0
