import argparse
import locale
import sys

from loguru import logger

import config_paths
from comparators import resolve_name
from log_setup import setup_logging
from sort_engine import SortContext, SortEngine, TableSortState
from sort_errors import SortError
from sort_indicator import decorate_headers
from table_loader import (
    MissingEngineError,
    TableLoader,
    UnsupportedFileTypeError,
    build_context,
)

try:
    from _version import __version__
except ImportError:
    __version__ = "0.0.0"


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="gridsort",
        description="gridsort - sort table rows by clicking column headers",
    )
    parser.add_argument("path", nargs="?", help="Table file (.csv, .tsv, .parquet, .xlsx, .h5)")
    parser.add_argument("-t", "--table", help="Table (sheet) to sort; defaults to the first")
    parser.add_argument(
        "-c",
        "--column",
        action="append",
        default=[],
        help="Header to click, by index or name; repeat to toggle or switch columns",
    )
    parser.add_argument(
        "-o",
        "--override",
        action="append",
        default=[],
        metavar="COLUMN=COMPARATOR",
        help="Pin a column's comparator (alpha_numeric, date_day_first, date_month_first, number, number_comma_decimal)",
    )
    parser.add_argument("--classify", action="store_true", help="Print each column's comparator and exit")
    parser.add_argument("--write", metavar="OUT", help="Save the sorted tables to OUT")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=sorted(config_paths.LOG_LEVELS),
        help="Loguru level (default from config, WARNING)",
    )
    parser.add_argument("--log-file", help="Also write debug logs to this file")
    parser.add_argument("-v", "--version", action="store_true", help="Print version and exit")
    return parser.parse_args(argv)


def _parse_overrides(items):
    overrides = {}
    for item in items:
        column, sep, name = item.rpartition("=")
        if not sep or not column:
            raise SortError(f"Override must look like COLUMN=COMPARATOR: {item!r}")
        key = int(column) if column.isdigit() else column
        overrides[key] = resolve_name(name).value
    return overrides


def _resolve_column(table: TableSortState, spec: str) -> int:
    if spec in table.headers:
        return table.headers.index(spec)
    try:
        return int(spec)
    except ValueError:
        raise SortError(f"Unknown column {spec!r} in table {table.table_id!r}") from None


def _render(table: TableSortState, arrows) -> str:
    df = table.container.df
    return df.set_axis(decorate_headers(table, arrows), axis=1).to_string(index=False)


def _print_classification(context: SortContext, table_ids):
    for table_id in table_ids:
        table = context.table(table_id)
        if len(table_ids) > 1:
            print(f"[{table_id}]")
        for header, state in zip(table.headers, table.columns):
            name = state.comparator.value if state.comparator else "-"
            print(f"{header}: {name}")


def _use_user_collation():
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error:
        logger.warning("Locale collation unavailable; falling back to code point order")


def run(args, cfg) -> int:
    overrides = dict(cfg["COLUMN_OVERRIDES"])
    overrides.update(_parse_overrides(args.override))

    tables = TableLoader(args.path).load()
    if not tables:
        print("No tables found", file=sys.stderr)
        return 1

    context = build_context(tables, overrides)
    table_ids = context.table_ids()
    table_id = args.table if args.table is not None else table_ids[0]
    table = context.table(table_id)

    if args.classify:
        _print_classification(context, [table_id] if args.table else table_ids)
        return 0

    engine = SortEngine(context)
    engine.add_listener(
        lambda change: logger.info(
            "Table {!r} column {} now {}",
            change.table_id,
            change.column_index,
            change.direction.value,
        )
    )
    for spec in args.column:
        engine.sort(table_id, _resolve_column(table, spec))

    print(_render(table, cfg["ARROWS"]))

    if args.write:
        sorted_tables = {
            name: context.table(name).container.df for name in context.table_ids()
        }
        TableLoader(args.write).save(sorted_tables)
    return 0


def main(argv=None) -> int:
    args = parse_args(argv)

    if args.version:
        print(__version__)
        return 0

    if not args.path:
        print("Usage: gridsort PATH [-c COLUMN]... (see -h)", file=sys.stderr)
        return 2

    config_paths.ensure_config_dirs()
    cfg = config_paths.load_config()
    setup_logging(args.log_level or cfg["LOG_LEVEL"], args.log_file)
    _use_user_collation()

    try:
        return run(args, cfg)
    except (SortError, UnsupportedFileTypeError, MissingEngineError, FileNotFoundError) as exc:
        print(f"gridsort: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
