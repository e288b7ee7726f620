"""Read area tables from AutoCAD table cells and write updates back.

Scanning the drawing for tables with the "AreaTables" style and opening
transactions is done by the host; each table arrives here as a grid of
cell texts with the mtext formatting already removed.

Cell positions inside an area table::

    [0][0] number      [0][1] parcel
                       [1][1] address (multi-line)
    row 3 onwards:     [r][1] item name ("-name" for a sub-item)
                       [r][2] area text
"""

import logging
from collections.abc import Iterable, Mapping

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..core.diagnostics import ChangeInstruction, Diagnostic, DiagnosticKind, record
from ..core.errors import AreaParseError, ChangeTargetError
from ..core.models import Item, SubItem, Table, format_area, parse_area

logger = logging.getLogger(__name__)

NUMBER_CELL = (0, 0)
PARZELLE_CELL = (0, 1)
ADDRESS_CELL = (1, 1)
FIRST_ITEM_ROW = 3
NAME_COLUMN = 1
AREA_COLUMN = 2

SUB_ENTRY_PREFIX = "-"


class DrawingTable(BaseModel):
    """Cell texts of one area table in the drawing."""

    handle: str = Field(min_length=1)
    cells: list[list[str]] = Field(default_factory=list)
    field_rows: set[int] = Field(
        default_factory=set,
        description="Rows whose area cell is linked to a field; these areas are read-only",
    )

    @field_validator("handle", mode="before")
    @classmethod
    def _upper_handle(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    def text(self, row: int, column: int) -> str:
        """Trimmed text of a cell, "" when the cell does not exist."""
        if row < 0 or row >= len(self.cells):
            return ""
        cells = self.cells[row]
        if column < 0 or column >= len(cells):
            return ""
        return (cells[column] or "").strip()


def area_mtext(area: float | None) -> str:
    """Area cell text with a formatted "m²" suffix."""
    if area is None:
        return ""
    return "{" + format_area(area) + r" m\H0.7x;\S2^;}"


def read_drawing_table(drawing: DrawingTable) -> tuple[Table, list[Diagnostic]]:
    """Read one area table.

    Parameters
    ----------
    drawing : DrawingTable
        Cell texts of the table.

    Returns
    -------
    tuple[Table, list[Diagnostic]]
        The table, and a diagnostic for every sub-item without a main item
        above it and every area that could not be read.
    """
    diagnostics: list[Diagnostic] = []
    table = Table(
        handle=drawing.handle,
        number=drawing.text(*NUMBER_CELL),
        parzelle=drawing.text(*PARZELLE_CELL),
        address=drawing.text(*ADDRESS_CELL),
    )

    current_item: Item | None = None
    for row in range(FIRST_ITEM_ROW, len(drawing.cells)):
        name = drawing.text(row, NAME_COLUMN)
        if not name:
            continue

        area_text = drawing.text(row, AREA_COLUMN)
        try:
            area = parse_area(area_text)
        except AreaParseError as exc:
            # the area is left empty rather than guessed
            record(
                diagnostics,
                DiagnosticKind.PARSE_FAILURE,
                f"{exc} in table {table.handle} row {row + 1}",
                handle=table.handle,
                row=row + 1,
                field=name,
            )
            area = None
        readonly = row in drawing.field_rows

        try:
            if name.startswith(SUB_ENTRY_PREFIX):
                if current_item is None:
                    record(
                        diagnostics,
                        DiagnosticKind.ORPHAN_SUB_ITEM,
                        f"Ignoring {name} in table {table.handle}: no main area above it",
                        handle=table.handle,
                        row=row + 1,
                        field=name,
                    )
                    continue
                current_item.sub_items.append(SubItem(name=name, area=area, readonly=readonly))
            else:
                current_item = Item(name=name, area=area, readonly=readonly)
                table.items.append(current_item)
        except ValidationError as exc:
            record(
                diagnostics,
                DiagnosticKind.PARSE_FAILURE,
                f"Invalid entry {name!r} in table {table.handle} row {row + 1}: {exc.errors()[0]['msg']}",
                handle=table.handle,
                row=row + 1,
                field=name,
            )

    return table, diagnostics


def read_drawing_tables(drawings: Iterable[DrawingTable]) -> tuple[dict[str, Table], list[Diagnostic]]:
    """Read all area tables into a dict keyed by handle; the first of a repeated handle wins."""
    tables: dict[str, Table] = {}
    diagnostics: list[Diagnostic] = []
    for drawing in drawings:
        table, table_diagnostics = read_drawing_table(drawing)
        diagnostics.extend(table_diagnostics)
        if table.handle in tables:
            record(
                diagnostics,
                DiagnosticKind.DUPLICATE_HANDLE,
                f"Ignoring duplicate table handle {table.handle}",
                handle=table.handle,
            )
            continue
        tables[table.handle] = table
    logger.debug("Read %d area tables from the drawing", len(tables))
    return tables, diagnostics


def locate_cell(drawing: DrawingTable, change: ChangeInstruction) -> tuple[int, int]:
    """Find the (row, column) of the cell a change instruction targets.

    Raises
    ------
    ChangeTargetError
        If the table has no such cell.
    """
    if change.field == "number":
        return NUMBER_CELL
    if change.field == "parzelle":
        return PARZELLE_CELL
    if change.field == "address":
        return ADDRESS_CELL
    if change.field == "area" and change.item is not None:
        in_item = False
        for row in range(FIRST_ITEM_ROW, len(drawing.cells)):
            name = drawing.text(row, NAME_COLUMN)
            if not name:
                continue
            if not name.startswith(SUB_ENTRY_PREFIX):
                in_item = name == change.item
                if in_item and change.sub_item is None:
                    return row, AREA_COLUMN
            elif in_item and name[len(SUB_ENTRY_PREFIX):].strip() == change.sub_item:
                return row, AREA_COLUMN
    raise ChangeTargetError(f"No cell for {change.path} in table {drawing.handle}")


def apply_change(drawing: DrawingTable, change: ChangeInstruction) -> tuple[int, int]:
    """Write one change instruction into the table's cells and return the cell updated."""
    row, column = locate_cell(drawing, change)
    if row >= len(drawing.cells) or column >= len(drawing.cells[row]):
        raise ChangeTargetError(f"Table {drawing.handle} has no cell [{row}, {column}]")

    if change.field == "area":
        text = area_mtext(parse_area(change.new_value))
    else:
        text = "" if change.new_value is None else str(change.new_value)
    drawing.cells[row][column] = text
    logger.info("Updating %s for table %s", change.path, drawing.handle)
    return row, column


def apply_changes(drawings: Mapping[str, DrawingTable], changes: Iterable[ChangeInstruction]) -> int:
    """Apply change instructions to the tables they name; returns the number applied."""
    applied = 0
    for change in changes:
        drawing = drawings.get(change.handle)
        if drawing is None:
            raise ChangeTargetError(f"No table found with handle: {change.handle}")
        apply_change(drawing, change)
        applied += 1
    return applied
