"""Tests for area table data models."""

import pytest
from pydantic import ValidationError

from area_table_link.core.errors import AreaParseError
from area_table_link.core.models import (
    Item,
    SubItem,
    Table,
    areas_equal,
    canonical_address,
    format_area,
    parse_area,
    restore_line_breaks,
)


def test_table_defaults():
    table = Table(handle="1a2f")
    assert table.handle == "1A2F"
    assert table.number == ""
    assert table.parzelle == ""
    assert table.address == ""
    assert table.items == []


def test_table_requires_handle():
    with pytest.raises(ValidationError):
        Table(handle="  ")


def test_table_text_is_trimmed():
    table = Table(handle="A1", number=" 100 ", parzelle="7 ")
    assert table.number == "100"
    assert table.parzelle == "7"


def test_address_is_put_on_one_line():
    table = Table(handle="A1", address="Hauptstrasse 1\r\n\r\n3000 Bern\n")
    assert table.address == "Hauptstrasse 1, 3000 Bern"


def test_address_assignment_is_canonical():
    table = Table(handle="A1")
    table.address = "Gasse 2\rBern"
    assert table.address == "Gasse 2, Bern"


def test_canonical_address_is_idempotent():
    assert canonical_address("Gasse 2, Bern") == "Gasse 2, Bern"


def test_restore_line_breaks():
    assert restore_line_breaks("Hauptstrasse 1, 3000 Bern") == "Hauptstrasse 1\r\n3000 Bern"


def test_item_name_loses_sub_entry_prefix():
    assert Item(name="Landerwerb").name == "Landerwerb"
    assert SubItem(name=" - Kiosk").name == "Kiosk"


def test_empty_name_is_rejected():
    with pytest.raises(ValidationError):
        Item(name="-")
    with pytest.raises(ValidationError):
        SubItem(name="")


def test_item_defaults():
    item = Item(name="Temp. Nutzung")
    assert item.area is None
    assert item.readonly is False
    assert item.sub_items == []


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, None),
        ("", None),
        ("   ", None),
        (12, 12.0),
        (12.25, 12.25),
        ("120.5", 120.5),
        ("30 M²", 30.0),
        ("45 m2/", 45.0),
        (" 7 m2 ", 7.0),
    ],
)
def test_parse_area(value, expected):
    assert parse_area(value) == expected


@pytest.mark.parametrize("value", ["abc", "12,5.3", "nan", "inf", True])
def test_parse_area_rejects_invalid(value):
    with pytest.raises(AreaParseError, match="Invalid area"):
        parse_area(value)


def test_area_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse_area("zwölf")


def test_invalid_area_is_never_zero():
    with pytest.raises(ValidationError):
        Item(name="Landerwerb", area="abc")


def test_area_text_is_parsed_on_construction():
    assert Item(name="Landerwerb", area="120.5 m2").area == 120.5


def test_area_assignment_is_validated():
    item = Item(name="Landerwerb", area=10)
    item.area = "7.5"
    assert item.area == 7.5
    with pytest.raises(ValidationError):
        item.area = "x"
    assert item.area == 7.5


def test_format_area():
    assert format_area(120.5) == "120.5"
    assert format_area(30.0) == "30.0"
    assert format_area(None) == ""


def test_areas_equal():
    assert areas_equal(None, None)
    assert not areas_equal(None, 0.0)
    assert not areas_equal(0.0, None)
    assert areas_equal(50.0, 50.0)
    assert not areas_equal(50.0, 50.0000001)


def test_get_item_and_sub_item():
    table = Table(
        handle="A2",
        items=[
            Item(name="Temp. Nutzung", sub_items=[SubItem(name="Kiosk", area=30.0)]),
        ],
    )
    assert table.get_item("Temp. Nutzung") is table.items[0]
    assert table.get_item("Landerwerb") is None
    assert table.get_sub_item("Temp. Nutzung", "Kiosk").area == 30.0
    assert table.get_sub_item("Temp. Nutzung", "Lager") is None
    assert table.get_sub_item("Landerwerb", "Kiosk") is None


def test_add_item_returns_existing_item():
    table = Table(handle="A2")
    item = table.add_item("Temp. Nutzung")
    assert table.add_item("Temp. Nutzung") is item
    assert len(table.items) == 1
