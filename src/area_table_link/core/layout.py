"""Column layout of the "Area Tables" sheet.

The layout is a pure function of the shape of the record set: the fixed
identity columns, then one block per area category in the order the
categories are first met while walking the tables, then the address.
It is recomputed for every export and never stored.
"""

import logging
from collections.abc import Iterable

from pydantic import BaseModel, Field

from .models import Table
from .schemas import (
    ADDRESS_KEY,
    IDENTITY_COLUMNS,
    MANDATORY_COLUMNS,
    CategoryArity,
    category_arity,
    parameter_key,
    variant_key,
)

logger = logging.getLogger(__name__)

_FIXED_KEYS = frozenset(MANDATORY_COLUMNS.values())


class ColumnSpan(BaseModel):
    """Contiguous block of columns belonging to one category, 1-based and inclusive."""

    category: str
    start: int = Field(ge=1)
    end: int = Field(ge=1)

    @property
    def width(self) -> int:
        return self.end - self.start + 1


class ColumnLayout(BaseModel):
    """Maps layout keys to 1-based column numbers.

    Keys are ``handle``, ``parzelle``, ``number``, ``address``, the category
    names, ``<category>!Art`` and ``<category>!parameter <n>``. ``columns``
    keeps insertion order, which is the column order.
    """

    columns: dict[str, int] = Field(default_factory=dict)
    categories: list[str] = Field(default_factory=list)
    spans: list[ColumnSpan] = Field(default_factory=list)

    @property
    def width(self) -> int:
        return max(self.columns.values(), default=0)

    def column(self, key: str) -> int | None:
        return self.columns.get(key)

    def variant_column(self, category: str) -> int | None:
        return self.columns.get(variant_key(category))

    def parameter_columns(self, category: str) -> list[int]:
        """Name columns of the category's parameter pairs, in parameter order."""
        found = []
        index = 1
        while parameter_key(category, index) in self.columns:
            found.append(self.columns[parameter_key(category, index)])
            index += 1
        return found


def collect_categories(tables: Iterable[Table]) -> dict[str, list[str]]:
    """Distinct item names with their distinct sub-item names, both in first-seen order.

    Items named like a fixed column (handle, parzelle, number, address) are left out.
    """
    categories: dict[str, list[str]] = {}
    for table in tables:
        for item in table.items:
            if item.name in _FIXED_KEYS:
                logger.warning(
                    "Skipping item %r in table %s: name clashes with a fixed column",
                    item.name, table.handle,
                )
                continue
            sub_names = categories.setdefault(item.name, [])
            for sub_item in item.sub_items:
                if sub_item.name not in sub_names:
                    sub_names.append(sub_item.name)
    return categories


def plan_layout(tables: Iterable[Table]) -> ColumnLayout:
    """Derive the column layout for a set of tables.

    Parameters
    ----------
    tables : Iterable[Table]
        The tables to export, in export order. They are not modified.

    Returns
    -------
    ColumnLayout
        Column numbers for every key, and a span for each category block
        wider than one column.
    """
    categories = collect_categories(tables)

    layout = ColumnLayout()
    column = 0
    for key in IDENTITY_COLUMNS:
        column += 1
        layout.columns[key] = column

    for name, sub_names in categories.items():
        column += 1
        start = column
        layout.columns[name] = start
        layout.categories.append(name)

        if category_arity(name) is CategoryArity.PARAMETERS:
            # (area, "parameter n") pairs; the first pair reuses the category's own area column
            for index in range(1, len(sub_names) + 1):
                if index > 1:
                    column += 1
                column += 1
                layout.columns[parameter_key(name, index)] = column
        elif sub_names:
            if len(sub_names) > 1:
                logger.warning(
                    "%s has %d different variants; only %r gets an Art column",
                    name, len(sub_names), sub_names[0],
                )
            column += 1
            layout.columns[variant_key(name)] = column

        if column > start:
            layout.spans.append(ColumnSpan(category=name, start=start, end=column))

    column += 1
    layout.columns[ADDRESS_KEY] = column

    logger.debug("Planned %d columns for %d categories", column, len(layout.categories))
    return layout
