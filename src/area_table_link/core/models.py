"""Data models for area tables, their area items and sub-items."""

import math
import re
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator

from .errors import AreaParseError
from .schemas import HOST_LINE_BREAK

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_AREA_SUFFIX = re.compile(r"\s*m(?:2|²)/?\s*$")
_SUB_ENTRY_PREFIX = "-"


def canonical_address(address: str) -> str:
    """Put a multi-line address on one line, lines separated by ", "."""
    lines = (line.strip() for line in _LINE_BREAK.split(address))
    return ", ".join(line for line in lines if line)


def restore_line_breaks(address: str) -> str:
    """Reverse :func:`canonical_address` for writing back to the host table."""
    return address.replace(", ", HOST_LINE_BREAK)


def parse_area(value: object) -> float | None:
    """Read an area from a cell value.

    Parameters
    ----------
    value : object
        A number, or text such as ``"120.5"`` or ``"120.5 m2"``.

    Returns
    -------
    float | None
        The area, or None for an empty cell.

    Raises
    ------
    AreaParseError
        If the value is not a finite number.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise AreaParseError(value)
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = _AREA_SUFFIX.sub("", str(value).strip().lower())
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            raise AreaParseError(value) from None
    if not math.isfinite(number):
        raise AreaParseError(value)
    return number


def format_area(area: float | None) -> str:
    """Fixed text form of an area: shortest round-trip decimal, "" when absent."""
    if area is None:
        return ""
    return repr(float(area))


def areas_equal(a: float | None, b: float | None) -> bool:
    """Two absent areas are equal, absent and present are not, numbers compare exactly."""
    if a is None or b is None:
        return a is None and b is None
    return a == b


def _clean_name(value: object) -> object:
    if not isinstance(value, str):
        return value
    name = value.strip()
    if name.startswith(_SUB_ENTRY_PREFIX):
        name = name[len(_SUB_ENTRY_PREFIX):].strip()
    return name


Name = Annotated[str, Field(min_length=1), BeforeValidator(_clean_name)]
Area = Annotated[float | None, BeforeValidator(parse_area)]


class SubItem(BaseModel):
    """A named variant of an area item, e.g. an "Art" or a numbered parameter."""

    model_config = ConfigDict(validate_assignment=True)

    name: Name
    area: Area = Field(default=None, description="Area in m²")
    readonly: bool = Field(
        default=False, description="Area is bound to a computed field and must not be overwritten"
    )


class Item(BaseModel):
    """A named area category within a table."""

    model_config = ConfigDict(validate_assignment=True)

    name: Name
    area: Area = Field(
        default=None, description="Area in m², usually empty when sub-items carry the values"
    )
    readonly: bool = False
    sub_items: list[SubItem] = Field(default_factory=list)

    def get_sub_item(self, name: str) -> SubItem | None:
        for sub_item in self.sub_items:
            if sub_item.name == name:
                return sub_item
        return None


class Table(BaseModel):
    """One area table of the host drawing, keyed by its entity handle."""

    model_config = ConfigDict(validate_assignment=True)

    handle: str = Field(min_length=1, description="Entity handle, upper case")
    number: str = Field(default="", description="Enteig number")
    parzelle: str = Field(default="", description="Parcel number")
    address: str = Field(default="", description="Single-line, comma separated")
    items: list[Item] = Field(default_factory=list)

    @field_validator("handle", mode="before")
    @classmethod
    def _upper_handle(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("number", "parzelle", mode="before")
    @classmethod
    def _strip_text(cls, value: object) -> object:
        if value is None:
            return ""
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("address", mode="before")
    @classmethod
    def _single_line_address(cls, value: object) -> object:
        if value is None:
            return ""
        if isinstance(value, str):
            return canonical_address(value)
        return value

    def get_item(self, name: str) -> Item | None:
        """Return the first item with this name."""
        for item in self.items:
            if item.name == name:
                return item
        return None

    def get_sub_item(self, item_name: str, sub_item_name: str) -> SubItem | None:
        item = self.get_item(item_name)
        if item is None:
            return None
        return item.get_sub_item(sub_item_name)

    def add_item(self, name: str) -> Item:
        """Return the item with this name, appending an empty one if missing."""
        item = self.get_item(name)
        if item is None:
            item = Item(name=name)
            self.items.append(item)
        return item
