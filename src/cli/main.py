"""flatquery CLI entry points.
This module exposes table listing, counting, and query commands.
It maps argparse commands onto the file data source.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
import json
from pathlib import Path
import sys
from typing import Any, Sequence

from core.config import FlatQueryConfig, normalize_extension, validate_delimiter
from core.constants import SUPPORTED_MODES
from core.errors import FlatQueryError, InvalidQueryError
from core.query_file import load_query_file
from core.types import OrderBy, Query, ResultSet
from store.file_source import FileDataSource


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="flatquery", description="Query delimited text files as tables"
    )
    parser.add_argument("--path", help="Override FLATQUERY_DATA_PATH for this command")
    parser.add_argument("--extension", help="Override FLATQUERY_EXTENSION for this command")
    parser.add_argument(
        "--mode", choices=SUPPORTED_MODES, help="Override FLATQUERY_MODE for this command"
    )
    parser.add_argument("--delimiter", help="Override FLATQUERY_DELIMITER for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_sources_command(subparsers)
    _add_describe_command(subparsers)
    _add_count_command(subparsers)
    _add_query_command(subparsers)
    _add_run_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the flatquery CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _build_config(args)
        if args.command == "sources":
            return _run_sources_command(config)
        if args.command == "describe":
            return _run_describe_command(config, args)
        if args.command == "count":
            return _run_count_command(config, args)
        if args.command == "query":
            return _run_query_command(config, args)
        if args.command == "run":
            return _run_query_file_command(config, args)
    except FlatQueryError as error:
        print(f"error={error}", file=sys.stderr)
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(args: argparse.Namespace) -> FlatQueryConfig:
    """Build config with optional CLI overrides.

    Args:
        args: Parsed CLI args.

    Returns:
        Configured runtime config.
    """
    config = FlatQueryConfig.from_env()
    if args.path:
        config = replace(config, data_path=Path(args.path).expanduser().resolve())
    if args.extension:
        config = replace(config, extension=normalize_extension(args.extension))
    if args.mode:
        config = replace(config, mode=args.mode)
    if args.delimiter:
        config = replace(config, delimiter=validate_delimiter(args.delimiter))
    return config


def _run_sources_command(config: FlatQueryConfig) -> int:
    """Handle sources command."""
    for name in FileDataSource(config).sources():
        print(name)
    return 0


def _run_describe_command(config: FlatQueryConfig, args: argparse.Namespace) -> int:
    """Handle describe command."""
    data_source = FileDataSource(config, {args.source: _split_names(args.schema)})
    schema = data_source.describe(args.source)
    for position, name in enumerate(schema):
        print(f"{position}\t{name}")
    return 0


def _run_count_command(config: FlatQueryConfig, args: argparse.Namespace) -> int:
    """Handle count command."""
    print(FileDataSource(config).count(args.source))
    return 0


def _run_query_command(config: FlatQueryConfig, args: argparse.Namespace) -> int:
    """Handle query command.

    Args:
        config: Runtime config.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    query = Query(
        fields=_split_names(args.fields),
        conditions=_parse_where(args.where or []),
        order=_parse_order(args.order),
        limit=args.limit,
        page=args.page,
    )
    data_source = FileDataSource(config, {args.source: _split_names(args.schema)})
    _print_result(data_source.read(args.source, query))
    return 0


def _run_query_file_command(config: FlatQueryConfig, args: argparse.Namespace) -> int:
    """Handle run command."""
    query_file = load_query_file(args.query_file)
    data_source = FileDataSource(config, {query_file.source: query_file.schema})
    _print_result(data_source.read(query_file.source, query_file.query))
    return 0


def _print_result(result: ResultSet) -> None:
    for record in result.to_dicts():
        print(json.dumps(record))


def _split_names(raw_value: str | None) -> tuple[str, ...]:
    if not raw_value:
        return ()
    return tuple(name.strip() for name in raw_value.split(",") if name.strip())


def _parse_where(raw_conditions: list[str]) -> dict[str, tuple[str, ...]]:
    """Parse ``field=v1,v2`` expressions; repeated fields extend their values."""
    conditions: dict[str, tuple[str, ...]] = {}
    for expression in raw_conditions:
        name, separator, raw_values = expression.partition("=")
        name = name.strip()
        if not separator or not name:
            raise InvalidQueryError(
                f"Invalid condition '{expression}': expected field=value[,value...]."
            )
        values = tuple(value.strip() for value in raw_values.split(","))
        conditions[name] = conditions.get(name, ()) + values
    return conditions


def _parse_order(raw_order: str | None) -> OrderBy | None:
    if not raw_order:
        return None
    name, _, direction = raw_order.partition(":")
    return OrderBy(field=name.strip(), direction=direction or "ASC")


def _add_sources_command(subparsers: Any) -> None:
    """Register sources subcommand."""
    subparsers.add_parser("sources", help="List tables in the data directory")


def _add_describe_command(subparsers: Any) -> None:
    """Register describe subcommand."""
    parser = subparsers.add_parser("describe", help="Show the declared schema of a table")
    parser.add_argument("source", help="Table name")
    parser.add_argument("--schema", required=True, help="Comma-separated field names")


def _add_count_command(subparsers: Any) -> None:
    """Register count subcommand."""
    parser = subparsers.add_parser("count", help="Count lines in a table")
    parser.add_argument("source", help="Table name")


def _add_query_command(subparsers: Any) -> None:
    """Register query subcommand."""
    parser = subparsers.add_parser("query", help="Project, filter, sort, and paginate a table")
    parser.add_argument("source", help="Table name")
    parser.add_argument("--schema", required=True, help="Comma-separated field names")
    parser.add_argument("--fields", help="Comma-separated fields to project")
    parser.add_argument(
        "--where",
        action="append",
        help="Condition field=value[,value...]; repeat for more fields",
    )
    parser.add_argument("--order", help="Sort key field[:ASC|DESC]")
    parser.add_argument("--limit", type=int, help="Records per page")
    parser.add_argument("--page", type=int, help="One-based page number")


def _add_run_command(subparsers: Any) -> None:
    """Register run subcommand."""
    parser = subparsers.add_parser("run", help="Execute a YAML query file")
    parser.add_argument("query_file", help="Path to YAML query file")
