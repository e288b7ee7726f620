"""Column vocabulary and category definitions for the "Area Tables" sheet.

The exported sheet carries no structural metadata besides its two header
rows, so the labels below are the file format. Both the writer and the
reader consult ``CATEGORIES`` to decide how many columns a category spans.
"""

from enum import Enum

from pydantic import BaseModel

SCHEMA_VERSION = 1

# Layout keys for the fixed columns
HANDLE_KEY = "handle"
PARZELLE_KEY = "parzelle"
NUMBER_KEY = "number"
ADDRESS_KEY = "address"

# Row 1 labels of the fixed columns
HANDLE_LABEL = "Handle"
PARZELLE_LABEL = "Parz."
NUMBER_LABEL = "Enteig"
ADDRESS_LABEL = "Address"

# Row 2 labels
NR_LABEL = "Nr"
AREA_UNIT_LABEL = "m²"
VARIANT_LABEL = "Art"
PARAMETER_LABEL = "parameter"

# Headers that must be present for a sheet to be importable
MANDATORY_COLUMNS = {
    HANDLE_LABEL: HANDLE_KEY,
    PARZELLE_LABEL: PARZELLE_KEY,
    NUMBER_LABEL: NUMBER_KEY,
    ADDRESS_LABEL: ADDRESS_KEY,
}

# Fixed leading columns: layout key → (row 1 label, row 2 label)
IDENTITY_COLUMNS = {
    HANDLE_KEY: (HANDLE_LABEL, ""),
    PARZELLE_KEY: (PARZELLE_LABEL, NR_LABEL),
    NUMBER_KEY: (NUMBER_LABEL, NR_LABEL),
}

# Line break used by the host table inside multi-line cells
HOST_LINE_BREAK = "\r\n"


class CategoryArity(str, Enum):
    """How a category's sub-items are laid out in columns."""

    # area column, plus one "Art" column naming a single variant
    VARIANT = "variant"
    # repeating (area, "parameter <n>") column pairs, one per variant
    PARAMETERS = "parameters"


class CategoryDefinition(BaseModel):
    """A known area category and its column shape."""

    name: str
    arity: CategoryArity


LANDERWERB = "Landerwerb"
DIENSTBARKEIT = "Dienstbarkeit"
TEMP_NUTZUNG = "Temp. Nutzung"

CATEGORIES = [
    CategoryDefinition(name=LANDERWERB, arity=CategoryArity.VARIANT),
    CategoryDefinition(name=DIENSTBARKEIT, arity=CategoryArity.VARIANT),
    CategoryDefinition(name=TEMP_NUTZUNG, arity=CategoryArity.PARAMETERS),
]


def find_category(label: str) -> CategoryDefinition | None:
    """Look up a category by its header label, ignoring case."""
    label = label.strip().casefold()
    for category in CATEGORIES:
        if category.name.casefold() == label:
            return category
    return None


def category_arity(name: str) -> CategoryArity:
    """Return the column shape for a category; unknown names get variant arity."""
    category = find_category(name)
    if category is None:
        return CategoryArity.VARIANT
    return category.arity


def variant_key(name: str) -> str:
    return f"{name}!{VARIANT_LABEL}"


def parameter_label(index: int) -> str:
    return f"{PARAMETER_LABEL} {index}"


def parameter_key(name: str, index: int) -> str:
    return f"{name}!{parameter_label(index)}"
