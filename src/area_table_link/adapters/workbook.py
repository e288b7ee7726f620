"""Write area tables to an Excel workbook and read them back.

The workbook has one sheet ("Area Tables" by default) with two header rows
and one row per area table. Styling follows the layout's column blocks:
merged block labels, a box around each block and a thin box around each
area/parameter pair.
"""

import logging
from collections.abc import Sequence
from pathlib import Path

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from ..config import LinkSettings
from ..core.deserializer import FIRST_DATA_ROW, ImportResult, deserialize
from ..core.errors import SheetNotFoundError
from ..core.header_reader import read_layout
from ..core.layout import ColumnLayout, plan_layout
from ..core.models import Table
from ..core.schemas import ADDRESS_KEY, HANDLE_KEY, NUMBER_KEY
from ..core.serializer import serialize

logger = logging.getLogger(__name__)

HEADER_ROWS = FIRST_DATA_ROW - 1

HEADER_FONT = Font(name="Calibri", bold=True, size=11)
HEADER_ALIGN = Alignment(horizontal="left", vertical="center", wrap_text=True)
CELL_ALIGN = Alignment(horizontal="left", vertical="center", wrap_text=True)
TEXT_FORMAT = "@"

MEDIUM = "medium"
THIN = "thin"


def _outline(ws, min_row: int, min_col: int, max_row: int, max_col: int, style: str) -> None:
    """Draw a box around a cell range, keeping the inner borders of its edge cells."""
    side = Side(style=style)
    for row in range(min_row, max_row + 1):
        for col in range(min_col, max_col + 1):
            if min_row < row < max_row and min_col < col < max_col:
                continue
            cell = ws.cell(row=row, column=col)
            border = cell.border
            cell.border = Border(
                left=side if col == min_col else border.left,
                right=side if col == max_col else border.right,
                top=side if row == min_row else border.top,
                bottom=side if row == max_row else border.bottom,
            )


def _style_sheet(ws, layout: ColumnLayout, last_row: int, settings: LinkSettings) -> None:
    last_col = layout.width
    header_fill = PatternFill(
        start_color=settings.header_fill, end_color=settings.header_fill, fill_type="solid"
    )
    address_fill = PatternFill(
        start_color=settings.address_fill, end_color=settings.address_fill, fill_type="solid"
    )
    address_col = layout.column(ADDRESS_KEY)

    for row in range(1, HEADER_ROWS + 1):
        for col in range(1, last_col + 1):
            cell = ws.cell(row=row, column=col)
            cell.font = HEADER_FONT
            cell.alignment = HEADER_ALIGN
            cell.fill = address_fill if col == address_col else header_fill

    for row in range(HEADER_ROWS + 1, last_row + 1):
        for col in range(1, last_col + 1):
            ws.cell(row=row, column=col).alignment = CELL_ALIGN
        # Handle and Enteig stay text so Excel does not turn "0012" into 12
        for key in (HANDLE_KEY, NUMBER_KEY):
            col = layout.column(key)
            if col is not None:
                ws.cell(row=row, column=col).number_format = TEXT_FORMAT
        _outline(ws, row, 1, row, last_col, THIN)

    # one box per column outside the spans, one per span
    spanned = set()
    for span in layout.spans:
        ws.merge_cells(start_row=1, start_column=span.start, end_row=1, end_column=span.end)
        spanned.update(range(span.start, span.end + 1))
        if span.width > 2:
            for col in range(span.start, span.end, 2):
                _outline(ws, 2, col, last_row, col + 1, THIN)
        else:
            _outline(ws, 2, span.start, 2, span.end, THIN)
        _outline(ws, 1, span.start, last_row, span.end, MEDIUM)
    for col in range(1, last_col + 1):
        if col not in spanned:
            _outline(ws, 1, col, last_row, col, MEDIUM)

    _outline(ws, 1, 1, HEADER_ROWS, last_col, MEDIUM)
    _outline(ws, 1, 1, last_row, last_col, MEDIUM)

    for col in range(1, last_col + 1):
        width = settings.address_column_width if col == address_col else settings.column_width
        ws.column_dimensions[get_column_letter(col)].width = width

    if settings.hide_handle_column:
        handle_col = layout.column(HANDLE_KEY)
        if handle_col is not None:
            ws.column_dimensions[get_column_letter(handle_col)].hidden = True

    # Freeze header rows
    ws.freeze_panes = ws.cell(row=HEADER_ROWS + 1, column=1).coordinate


def write_workbook(
    path: str | Path, tables: Sequence[Table], settings: LinkSettings | None = None
) -> ColumnLayout:
    """Export area tables to a new workbook, replacing any existing file.

    Parameters
    ----------
    path : str | Path
        Path of the .xlsx file to write.
    tables : Sequence[Table]
        Tables in export order.
    settings : LinkSettings | None
        Sheet name and styling; defaults when omitted.

    Returns
    -------
    ColumnLayout
        The layout the sheet was written with.
    """
    settings = settings or LinkSettings()
    path = Path(path)

    layout = plan_layout(tables)
    grid = serialize(tables, layout)

    wb = Workbook()
    ws = wb.active
    ws.title = settings.sheet_name
    for row_idx, row in enumerate(grid, 1):
        for col_idx, value in enumerate(row, 1):
            if value is not None:
                ws.cell(row=row_idx, column=col_idx, value=value)

    _style_sheet(ws, layout, len(grid), settings)

    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    logger.info("Area tables exported to %s (%d tables)", path, len(tables))
    return layout


def read_rows(path: str | Path, sheet_name: str) -> list[list[object]]:
    """Read all cell values of a sheet, row by row.

    Raises
    ------
    FileNotFoundError
        If the workbook does not exist.
    SheetNotFoundError
        If the workbook has no sheet called ``sheet_name``.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Workbook not found: {path}")
    wb = load_workbook(path, read_only=True, data_only=True)
    try:
        if sheet_name not in wb.sheetnames:
            raise SheetNotFoundError(f'Can\'t find worksheet "{sheet_name}" in {path.name}')
        ws = wb[sheet_name]
        return [list(row) for row in ws.iter_rows(values_only=True)]
    finally:
        wb.close()


def read_workbook(path: str | Path, settings: LinkSettings | None = None) -> ImportResult:
    """Import the area tables of an exported (and possibly edited) workbook.

    Raises
    ------
    MissingColumnError
        If a mandatory header is missing; no rows are read.
    """
    settings = settings or LinkSettings()
    rows = read_rows(path, settings.sheet_name)
    layout = read_layout(rows[:HEADER_ROWS])
    result = deserialize(rows[HEADER_ROWS:], layout, first_row=FIRST_DATA_ROW)
    logger.info("Read %d area tables from %s", len(result.tables), path)
    return result
