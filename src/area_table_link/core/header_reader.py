"""Recover the column layout of an "Area Tables" sheet from its two header rows."""

import logging
from collections.abc import Sequence

from .errors import MissingColumnError
from .layout import ColumnLayout, ColumnSpan
from .schemas import (
    MANDATORY_COLUMNS,
    PARAMETER_LABEL,
    VARIANT_LABEL,
    CategoryArity,
    find_category,
    parameter_key,
    variant_key,
)

logger = logging.getLogger(__name__)

_FIXED_LABELS = {label.casefold(): key for label, key in MANDATORY_COLUMNS.items()}


def _label(row: Sequence[object], column: int) -> str:
    """Trimmed text of a 1-based cell, "" when empty or past the end of the row."""
    if column < 1 or column > len(row):
        return ""
    value = row[column - 1]
    if value is None:
        return ""
    return str(value).strip()


def read_layout(header: Sequence[Sequence[object]]) -> ColumnLayout:
    """Reconstruct the column layout from the header rows.

    Row 1 is scanned left to right for the known labels, ignoring case. A
    variant category claims the next column when its row 2 label is "Art";
    a parameter category claims every second column after it while the row 2
    label starts with "parameter".

    Parameters
    ----------
    header : Sequence[Sequence[object]]
        The first two rows of the sheet.

    Returns
    -------
    ColumnLayout
        The recovered layout.

    Raises
    ------
    MissingColumnError
        If Handle, Parz., Enteig or Address is not found.
    """
    first = header[0] if len(header) > 0 else []
    second = header[1] if len(header) > 1 else []
    width = max(len(first), len(second))

    layout = ColumnLayout()
    column = 1
    while column <= width:
        label = _label(first, column)
        if not label:
            column += 1
            continue

        key = _FIXED_LABELS.get(label.casefold())
        category = find_category(label)
        if key is not None:
            layout.columns.setdefault(key, column)
        elif category is not None and category.name not in layout.columns:
            name = category.name
            layout.columns[name] = column
            layout.categories.append(name)
            end = column

            if category.arity is CategoryArity.VARIANT:
                if _label(second, column + 1) == VARIANT_LABEL:
                    end = column + 1
                    layout.columns[variant_key(name)] = end
                    column += 1
            else:
                index = 1
                offset = 1
                while _label(second, column + offset).lower().startswith(PARAMETER_LABEL):
                    end = column + offset
                    layout.columns[parameter_key(name, index)] = end
                    index += 1
                    offset += 2

            if end > layout.columns[name]:
                layout.spans.append(ColumnSpan(category=name, start=layout.columns[name], end=end))
        else:
            logger.debug("Ignoring header %r in column %d", label, column)

        column += 1

    missing = [label for label, key in MANDATORY_COLUMNS.items() if key not in layout.columns]
    if missing:
        raise MissingColumnError(missing)

    logger.debug("Read layout with %d columns: %s", len(layout.columns), ", ".join(layout.columns))
    return layout
