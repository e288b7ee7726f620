"""Writing tables to sheet rows and reading them back."""

from area_table_link.core import (
    DiagnosticKind,
    Item,
    SubItem,
    Table,
    deserialize,
    plan_layout,
    read_layout,
    reconcile,
    serialize,
)
from area_table_link.core.deserializer import FIRST_DATA_ROW


def _read_back(grid):
    layout = read_layout(grid[:2])
    return layout, deserialize(grid[2:], layout)


def test_single_area_round_trip():
    tables = [
        Table(
            handle="A1",
            number="12",
            parzelle="7",
            address="Bahnhofstrasse 1\r\nBern",
            items=[Item(name="Landerwerb", area=120.5)],
        )
    ]
    layout, result = _read_back(serialize(tables, plan_layout(tables)))
    assert layout == plan_layout(tables)
    assert result.diagnostics == []
    assert result.tables == {"A1": tables[0]}
    assert result.tables["A1"].address == "Bahnhofstrasse 1, Bern"


def test_variants_and_parameters_round_trip():
    tables = [
        Table(
            handle="A2",
            number="3",
            items=[
                Item(name="Dienstbarkeit", sub_items=[SubItem(name="Fussweg", area=10)]),
                Item(
                    name="Temp. Nutzung",
                    sub_items=[SubItem(name="Kiosk", area=30), SubItem(name="Lager", area=12.25)],
                ),
            ],
        ),
        Table(handle="A3", items=[Item(name="Temp. Nutzung", sub_items=[SubItem(name="Kiosk", area=8)])]),
    ]
    _, result = _read_back(serialize(tables, plan_layout(tables)))
    assert result.tables == {table.handle: table for table in tables}


def test_round_trip_is_stable():
    tables = [
        Table(handle="C1", items=[Item(name="Landerwerb", area=1), Item(name="Temp. Nutzung", area=2)]),
        Table(handle="C2", items=[Item(name="Landerwerb", sub_items=[SubItem(name="Kauf", area=3)])]),
    ]
    grid = serialize(tables, plan_layout(tables))
    _, first = _read_back(grid)
    again = list(first.tables.values())
    assert serialize(again, plan_layout(again)) == grid


def test_items_come_back_in_layout_order():
    tables = [
        Table(handle="D1", items=[Item(name="Landerwerb", area=1)]),
        Table(handle="D2", items=[Item(name="Dienstbarkeit", area=2), Item(name="Landerwerb", area=3)]),
    ]
    _, result = _read_back(serialize(tables, plan_layout(tables)))
    assert [item.name for item in result.tables["D2"].items] == ["Landerwerb", "Dienstbarkeit"]


def test_duplicate_handle_in_sheet():
    tables = [Table(handle="E1", number="1"), Table(handle="E2", number="2")]
    grid = serialize(tables, plan_layout(tables))
    grid[3][0] = "e1"
    _, result = _read_back(grid)
    assert list(result.tables) == ["E1"]
    assert result.diagnostics[0].kind is DiagnosticKind.DUPLICATE_HANDLE
    assert result.diagnostics[0].row == FIRST_DATA_ROW + 1


def test_unedited_sheet_reconciles_to_nothing():
    tables = {
        "F1": Table(
            handle="F1",
            number="100",
            address="Weg 1\r\nBern",
            items=[
                Item(name="Landerwerb", area=5),
                Item(name="Temp. Nutzung", sub_items=[SubItem(name="Kiosk", area=30)]),
            ],
        )
    }
    _, result = _read_back(serialize(list(tables.values()), plan_layout(list(tables.values()))))
    assert reconcile(tables, result.tables).changes == []


def test_edited_sheet_reconciles_to_changes():
    tables = {
        "F1": Table(
            handle="F1",
            number="100",
            items=[Item(name="Temp. Nutzung", sub_items=[SubItem(name="Kiosk", area=30)])],
        )
    }
    layout = plan_layout(list(tables.values()))
    grid = serialize(list(tables.values()), layout)
    grid[2][layout.column("number") - 1] = "105"
    grid[2][layout.column("Temp. Nutzung") - 1] = 31

    _, result = _read_back(grid)
    changes = reconcile(tables, result.tables).changes

    assert [change.path for change in changes] == ["number", "Temp. Nutzung/Kiosk"]
    assert tables["F1"].get_sub_item("Temp. Nutzung", "Kiosk").area == 31.0


def test_item_named_like_fixed_column_still_reads_back():
    tables = [
        Table(
            handle="H1",
            number="100",
            items=[Item(name="number", area=4), Item(name="Landerwerb", area=2)],
        ),
    ]
    layout, result = _read_back(serialize(tables, plan_layout(tables)))
    assert layout.column("number") == 3
    assert result.tables["H1"].number == "100"
    assert result.tables["H1"].items == [Item(name="Landerwerb", area=2)]
