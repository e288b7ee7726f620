"""Turn the data rows of an "Area Tables" sheet back into area tables."""

import logging
from collections.abc import Iterable, Sequence

from pydantic import BaseModel, Field, ValidationError

from .diagnostics import Diagnostic, DiagnosticKind, record
from .errors import AreaParseError
from .layout import ColumnLayout
from .models import Item, SubItem, Table
from .schemas import (
    ADDRESS_KEY,
    HANDLE_KEY,
    NUMBER_KEY,
    PARZELLE_KEY,
    CategoryArity,
    category_arity,
)

logger = logging.getLogger(__name__)

FIRST_DATA_ROW = 3


class ImportResult(BaseModel):
    """Tables read from a sheet, keyed by handle, and what went wrong on the way."""

    tables: dict[str, Table] = Field(default_factory=dict)
    diagnostics: list[Diagnostic] = Field(default_factory=list)


def cell_text(value: object) -> str:
    """Trimmed text of a cell; whole numbers lose their ".0"."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _cell(row: Sequence[object], column: int | None) -> object:
    if column is None or column < 1 or column > len(row):
        return None
    return row[column - 1]


def _is_blank(value: object) -> bool:
    return cell_text(value) == ""


def _read_variant_category(table: Table, row: Sequence[object], layout: ColumnLayout, name: str) -> None:
    area = _cell(row, layout.column(name))
    if _is_blank(area):
        return
    variant = cell_text(_cell(row, layout.variant_column(name)))
    if variant:
        table.items.append(Item(name=name, sub_items=[SubItem(name=variant, area=area)]))
    else:
        table.items.append(Item(name=name, area=area))


def _read_parameter_category(table: Table, row: Sequence[object], layout: ColumnLayout, name: str) -> None:
    slots = layout.parameter_columns(name)
    if not slots:
        area = _cell(row, layout.column(name))
        if not _is_blank(area):
            table.items.append(Item(name=name, area=area))
        return

    for column in slots:
        parameter = cell_text(_cell(row, column))
        area = _cell(row, column - 1)
        if parameter:
            table.add_item(name).sub_items.append(SubItem(name=parameter, area=area))
        elif not _is_blank(area):
            table.add_item(name).area = area


def read_row(row: Sequence[object], layout: ColumnLayout) -> Table:
    """Build one table from a data row.

    Raises
    ------
    pydantic.ValidationError
        If a cell holds an invalid area or the handle is empty.
    """
    table = Table(
        handle=cell_text(_cell(row, layout.column(HANDLE_KEY))),
        parzelle=cell_text(_cell(row, layout.column(PARZELLE_KEY))),
        number=cell_text(_cell(row, layout.column(NUMBER_KEY))),
        address=cell_text(_cell(row, layout.column(ADDRESS_KEY))),
    )
    for name in layout.categories:
        if category_arity(name) is CategoryArity.PARAMETERS:
            _read_parameter_category(table, row, layout, name)
        else:
            _read_variant_category(table, row, layout, name)
    return table


def deserialize(
    rows: Iterable[Sequence[object]],
    layout: ColumnLayout,
    first_row: int = FIRST_DATA_ROW,
) -> ImportResult:
    """Read the data rows of a sheet.

    Rows with an empty handle are skipped. A row that fails to parse is
    dropped as a whole and reported with its row number; so is a row whose
    handle was already read.

    Parameters
    ----------
    rows : Iterable[Sequence[object]]
        Data rows, starting below the header.
    layout : ColumnLayout
        Layout recovered from the header by :func:`read_layout`.
    first_row : int
        Sheet row number of the first data row, used in diagnostics.
    """
    result = ImportResult()
    for row_number, row in enumerate(rows, first_row):
        handle = cell_text(_cell(row, layout.column(HANDLE_KEY))).upper()
        if not handle:
            continue

        if handle in result.tables:
            record(
                result.diagnostics,
                DiagnosticKind.DUPLICATE_HANDLE,
                f"Ignoring duplicate handle {handle} in row {row_number}",
                handle=handle,
                row=row_number,
            )
            continue

        try:
            table = read_row(row, layout)
        except (AreaParseError, ValidationError) as exc:
            record(
                result.diagnostics,
                DiagnosticKind.PARSE_FAILURE,
                f"Invalid data in row {row_number}: {_reason(exc)}",
                handle=handle,
                row=row_number,
            )
            continue

        result.tables[handle] = table

    logger.debug("Read %d tables", len(result.tables))
    return result


def _reason(exc: Exception) -> str:
    if isinstance(exc, ValidationError):
        return "; ".join(error["msg"] for error in exc.errors())
    return str(exc)
