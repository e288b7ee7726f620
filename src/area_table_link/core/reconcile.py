"""Merge tables read from a sheet into the tables of the drawing.

Tables are matched by handle. Number, parcel and address are always
updated; areas are updated unless the current value is read-only. Nothing
is created or deleted, and a failure on one field does not stop the rest.
"""

import logging
from collections.abc import Mapping

from pydantic import BaseModel, Field, ValidationError

from .diagnostics import ChangeInstruction, Diagnostic, DiagnosticKind, record
from .errors import AreaParseError
from .models import (
    Item,
    SubItem,
    Table,
    areas_equal,
    canonical_address,
    parse_area,
    restore_line_breaks,
)

logger = logging.getLogger(__name__)

_TEXT_FIELDS = ("number", "parzelle")


class ReconcileResult(BaseModel):
    changes: list[ChangeInstruction] = Field(default_factory=list)
    diagnostics: list[Diagnostic] = Field(default_factory=list)


def _change(result: ReconcileResult, change: ChangeInstruction) -> None:
    result.changes.append(change)
    logger.info("Updating %s", change)


def _reconcile_text(table: Table, imported: Table, result: ReconcileResult) -> None:
    for field in _TEXT_FIELDS:
        old = getattr(table, field)
        new = getattr(imported, field)
        if old != new:
            setattr(table, field, new)
            _change(result, ChangeInstruction(handle=table.handle, field=field, old_value=old, new_value=new))

    old_address = canonical_address(table.address)
    new_address = canonical_address(imported.address)
    if old_address != new_address:
        table.address = new_address
        _change(
            result,
            ChangeInstruction(
                handle=table.handle,
                field="address",
                old_value=restore_line_breaks(old_address),
                new_value=restore_line_breaks(new_address),
            ),
        )


def _reconcile_area(
    table: Table,
    target: Item | SubItem,
    imported_area: object,
    result: ReconcileResult,
    item: str,
    sub_item: str | None = None,
) -> None:
    label = item if sub_item is None else f"{item} -{sub_item}"
    try:
        new_area = parse_area(imported_area)
        if areas_equal(target.area, new_area):
            return
        if target.readonly:
            record(
                result.diagnostics,
                DiagnosticKind.READONLY_SKIP,
                f"Not overriding field in {label} for table {table.handle}",
                handle=table.handle,
                field=label,
            )
            return
        old_area = target.area
        target.area = new_area
    except (AreaParseError, ValidationError) as exc:
        record(
            result.diagnostics,
            DiagnosticKind.PARSE_FAILURE,
            f"Invalid area in {label} for table {table.handle}: {exc}",
            handle=table.handle,
            field=label,
        )
        return

    _change(
        result,
        ChangeInstruction(
            handle=table.handle,
            field="area",
            item=item,
            sub_item=sub_item,
            old_value=old_area,
            new_value=new_area,
        ),
    )


def reconcile_table(table: Table, imported: Table, result: ReconcileResult) -> None:
    """Update one matched table in place, recording changes and diagnostics in ``result``."""
    _reconcile_text(table, imported, result)

    for item in table.items:
        imported_item = imported.get_item(item.name)
        if imported_item is not None:
            _reconcile_area(table, item, imported_item.area, result, item.name)

        for sub_item in item.sub_items:
            if imported_item is None:
                record(
                    result.diagnostics,
                    DiagnosticKind.UNMATCHED_ITEM,
                    f"No imported {item.name} for {item.name} -{sub_item.name} in table {table.handle}",
                    handle=table.handle,
                    field=f"{item.name} -{sub_item.name}",
                )
                continue
            imported_sub_item = imported_item.get_sub_item(sub_item.name)
            if imported_sub_item is not None:
                _reconcile_area(
                    table, sub_item, imported_sub_item.area, result, item.name, sub_item.name
                )


def reconcile(current: Mapping[str, Table], imported: Mapping[str, Table]) -> ReconcileResult:
    """Merge imported tables into the current ones, matching by handle.

    Parameters
    ----------
    current : Mapping[str, Table]
        Tables of the drawing keyed by handle. Matched tables are updated in place.
    imported : Mapping[str, Table]
        Tables read from the sheet keyed by handle.

    Returns
    -------
    ReconcileResult
        Change instructions for the drawing, and diagnostics for unmatched
        handles, read-only fields and invalid areas.
    """
    result = ReconcileResult()
    for imported_table in imported.values():
        table = current.get(imported_table.handle)
        if table is None:
            record(
                result.diagnostics,
                DiagnosticKind.UNMATCHED_HANDLE,
                f"No table found with handle: {imported_table.handle}",
                handle=imported_table.handle,
            )
            continue
        reconcile_table(table, imported_table, result)
    return result
