"""
Area Table Link: CLI entry point.

Usage:
    # Show the area tables an exported workbook contains
    area-table-link inspect <workbook.xlsx>

    # Show what importing an edited workbook would change
    area-table-link diff <exported.xlsx> <edited.xlsx>
"""

import argparse
import logging
import sys

from pydantic import ValidationError

from .adapters.workbook import read_workbook
from .config import LinkSettings, load_settings
from .core.diagnostics import Diagnostic
from .core.errors import AreaTableLinkError
from .core.models import Table, format_area
from .core.reconcile import reconcile

logger = logging.getLogger(__name__)


def setup_logging(level_str: str = "INFO") -> None:
    """Configure logging."""
    level = getattr(logging, level_str.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _print_table(table: Table) -> None:
    print(f"{table.handle}  Parz. {table.parzelle or '-'}  Enteig {table.number or '-'}  {table.address}")
    for item in table.items:
        print(f"    {item.name}: {format_area(item.area) or '-'}")
        for sub_item in item.sub_items:
            print(f"      -{sub_item.name}: {format_area(sub_item.area) or '-'}")


def _print_diagnostics(diagnostics: list[Diagnostic]) -> None:
    if diagnostics:
        print(f"\n{len(diagnostics)} problem(s):")
    for diagnostic in diagnostics:
        print(f"  [{diagnostic.kind.value}] {diagnostic.message}")


def inspect_workbook(path: str, settings: LinkSettings) -> int:
    result = read_workbook(path, settings)
    for table in result.tables.values():
        _print_table(table)
    print(f"\nTables: {len(result.tables)}")
    _print_diagnostics(result.diagnostics)
    return 0


def diff_workbooks(current_path: str, edited_path: str, settings: LinkSettings) -> int:
    current = read_workbook(current_path, settings)
    edited = read_workbook(edited_path, settings)
    result = reconcile(current.tables, edited.tables)
    for change in result.changes:
        print(change)
    print(f"\nChanges: {len(result.changes)}")
    _print_diagnostics(current.diagnostics + edited.diagnostics + result.diagnostics)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="area-table-link",
        description="Inspect and compare Area Tables workbooks",
    )
    parser.add_argument("--config", default=None, help="Path to a settings YAML file")
    parser.add_argument(
        "--log-level", default="WARNING",
        help="Logging level: DEBUG, INFO, WARNING, ERROR",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # ---- inspect ----
    p_inspect = sub.add_parser("inspect", help="List the area tables of a workbook")
    p_inspect.add_argument("workbook", help="Path to the workbook (.xlsx)")

    # ---- diff ----
    p_diff = sub.add_parser(
        "diff",
        help="Show the changes an edited workbook makes to an exported one",
    )
    p_diff.add_argument("current", help="Workbook as exported from the drawing")
    p_diff.add_argument("edited", help="The same workbook after editing")

    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        settings = load_settings(args.config)
        if args.command == "inspect":
            return inspect_workbook(args.workbook, settings)
        return diff_workbooks(args.current, args.edited, settings)
    except (AreaTableLinkError, FileNotFoundError, ValidationError) as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
