"""Project area tables into the flat rows of the "Area Tables" sheet."""

from collections.abc import Iterable

from .layout import ColumnLayout
from .models import Table
from .schemas import (
    ADDRESS_KEY,
    ADDRESS_LABEL,
    AREA_UNIT_LABEL,
    HANDLE_KEY,
    IDENTITY_COLUMNS,
    NUMBER_KEY,
    PARZELLE_KEY,
    VARIANT_LABEL,
    CategoryArity,
    category_arity,
    parameter_key,
    parameter_label,
)

Cell = str | float | None


def header_rows(layout: ColumnLayout) -> list[list[Cell]]:
    """Render the two header rows for a layout.

    Row 1 holds the label of each column block, row 2 the labels of the
    individual columns ("Nr", "m²", "Art", "parameter <n>").
    """
    first: list[Cell] = [None] * layout.width
    second: list[Cell] = [None] * layout.width

    for key, (label, sub_label) in IDENTITY_COLUMNS.items():
        column = layout.column(key)
        if column is not None:
            first[column - 1] = label
            second[column - 1] = sub_label or None

    for name in layout.categories:
        column = layout.columns[name]
        first[column - 1] = name
        second[column - 1] = AREA_UNIT_LABEL

        variant = layout.variant_column(name)
        if variant is not None:
            second[variant - 1] = VARIANT_LABEL

        for index, name_column in enumerate(layout.parameter_columns(name), 1):
            second[name_column - 2] = AREA_UNIT_LABEL
            second[name_column - 1] = parameter_label(index)

    column = layout.column(ADDRESS_KEY)
    if column is not None:
        first[column - 1] = ADDRESS_LABEL

    return [first, second]


def serialize_table(table: Table, layout: ColumnLayout) -> list[Cell]:
    """Build the data row for one table.

    Items whose category is not in the layout are skipped. An item of a variant
    category with more than one sub-item cannot be shown and is left out.
    """
    row: list[Cell] = [None] * layout.width

    def put(column: int | None, value: Cell) -> None:
        if column is not None and value != "":
            row[column - 1] = value

    put(layout.column(HANDLE_KEY), table.handle)
    put(layout.column(PARZELLE_KEY), table.parzelle)
    put(layout.column(NUMBER_KEY), table.number)

    for item in table.items:
        if item.name not in layout.categories:
            continue
        if not item.sub_items:
            put(layout.column(item.name), item.area)
        elif category_arity(item.name) is CategoryArity.PARAMETERS:
            for index, sub_item in enumerate(item.sub_items, 1):
                column = layout.column(parameter_key(item.name, index))
                if column is None:
                    continue
                put(column - 1, sub_item.area)
                put(column, sub_item.name)
        elif len(item.sub_items) == 1:
            column = layout.variant_column(item.name)
            if column is None:
                continue
            sub_item = item.sub_items[0]
            put(column - 1, sub_item.area)
            put(column, sub_item.name)

    put(layout.column(ADDRESS_KEY), table.address)
    return row


def serialize(tables: Iterable[Table], layout: ColumnLayout) -> list[list[Cell]]:
    """Two header rows followed by one row per table, in the tables' order."""
    grid = header_rows(layout)
    for table in tables:
        grid.append(serialize_table(table, layout))
    return grid
