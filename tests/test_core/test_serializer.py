"""Tests for writing area tables into sheet rows."""

from area_table_link.core.layout import plan_layout
from area_table_link.core.models import Item, SubItem, Table
from area_table_link.core.serializer import header_rows, serialize, serialize_table


def _tables() -> list[Table]:
    return [
        Table(
            handle="A1",
            number="12",
            parzelle="7",
            address="Bahnhofstrasse 1\nBern",
            items=[Item(name="Landerwerb", area=120.5)],
        ),
        Table(
            handle="A2",
            items=[
                Item(name="Dienstbarkeit", sub_items=[SubItem(name="Fussweg", area=10)]),
                Item(
                    name="Temp. Nutzung",
                    sub_items=[SubItem(name="Kiosk", area=30.0), SubItem(name="Lager", area=12.25)],
                ),
            ],
        ),
    ]


def test_header_rows():
    first, second = header_rows(plan_layout(_tables()))
    assert first == [
        "Handle", "Parz.", "Enteig", "Landerwerb", "Dienstbarkeit", None,
        "Temp. Nutzung", None, None, None, "Address",
    ]
    assert second == [
        None, "Nr", "Nr", "m²", "m²", "Art",
        "m²", "parameter 1", "m²", "parameter 2", None,
    ]


def test_single_category_row():
    tables = _tables()[:1]
    grid = serialize(tables, plan_layout(tables))
    assert len(grid) == 3
    assert grid[2] == ["A1", "7", "12", 120.5, "Bahnhofstrasse 1, Bern"]


def test_variant_and_parameter_rows():
    tables = _tables()
    grid = serialize(tables, plan_layout(tables))
    assert grid[2] == ["A1", "7", "12", 120.5, None, None, None, None, None, None, "Bahnhofstrasse 1, Bern"]
    assert grid[3] == ["A2", None, None, None, 10.0, "Fussweg", 30.0, "Kiosk", 12.25, "Lager", None]


def test_single_parameter_is_written():
    table = Table(handle="A3", items=[Item(name="Temp. Nutzung", sub_items=[SubItem(name="Kiosk", area=8)])])
    row = serialize_table(table, plan_layout([table]))
    assert row == ["A3", None, None, 8.0, "Kiosk", None]


def test_plain_item_in_parameter_category_uses_first_column():
    tables = _tables()
    plain = Table(handle="A4", items=[Item(name="Temp. Nutzung", area=5.5)])
    row = serialize_table(plain, plan_layout(tables))
    assert row[6] == 5.5
    assert row[7] is None


def test_categories_missing_from_layout_are_skipped():
    tables = _tables()
    layout = plan_layout(tables[:1])
    row = serialize_table(tables[1], layout)
    assert row == ["A2", None, None, None, None]


def test_variant_category_with_several_sub_items_is_left_empty():
    table = Table(
        handle="A5",
        items=[
            Item(name="Landerwerb", sub_items=[SubItem(name="Kauf", area=1), SubItem(name="Tausch", area=2)]),
        ],
    )
    row = serialize_table(table, plan_layout([table]))
    assert row == ["A5", None, None, None, None, None]


def test_one_row_per_table():
    tables = [Table(handle="X1"), Table(handle="X2"), Table(handle="X3")]
    grid = serialize(tables, plan_layout(tables))
    assert [row[0] for row in grid[2:]] == ["X1", "X2", "X3"]


def test_serialize_does_not_modify_tables():
    tables = _tables()
    before = [table.model_copy(deep=True) for table in tables]
    serialize(tables, plan_layout(tables))
    assert tables == before


def test_item_named_like_fixed_column_keeps_fixed_value():
    table = Table(
        handle="A6",
        number="100",
        items=[Item(name="number", area=4), Item(name="address", area=5)],
    )
    grid = serialize([table], plan_layout([table]))
    assert grid[2] == ["A6", None, "100", None]
