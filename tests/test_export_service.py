import pytest

from app.services.catalog_service import add_item
from app.services.export_service import (
    INVALID_TABLE_CSV,
    TableKind,
    export_table,
    render_csv,
)
from app.services.result_serializer import Table


class TestRenderCsv:

    def test_header_then_rows(self):
        table = Table(columns=["id", "name"], rows=[(1, "Licorice"), (2, "Twix")])

        assert render_csv(table) == "id,name\n1,Licorice\n2,Twix\n"

    def test_quotes_cells_with_commas_and_quotes(self):
        table = Table(columns=["id", "name"], rows=[(1, 'Nuts, "Salted"'), (2, 'Say "Hi"')])

        assert render_csv(table) == 'id,name\n1,"Nuts, ""Salted"""\n2,"Say ""Hi"""\n'

    def test_none_renders_empty(self):
        table = Table(columns=["a", "b", "c"], rows=[(1, None, "x")])

        assert render_csv(table) == "a,b,c\n1,,x\n"

    def test_empty_table_is_header_only(self):
        assert render_csv(Table(columns=["id", "name"])) == "id,name\n"


def test_table_kind_parse():
    assert TableKind.parse("distributor_prices") is TableKind.DISTRIBUTOR_PRICES
    assert TableKind.parse("users") is None
    assert TableKind.parse(None) is None


@pytest.mark.asyncio
async def test_unknown_table_is_error_line():
    assert await export_table("sqlite_master") == INVALID_TABLE_CSV == "error,invalid_table\n"


@pytest.mark.asyncio
async def test_inventory_export_uses_names(seeded_db):
    csv_text = await export_table("inventory")

    assert csv_text.startswith("inventory_id,item_name,amount_in_stock,total_capacity\n")
    assert "8,Candy Corn,30,40\n" in csv_text
    # Raw id pairs side by side would mean the foreign key leaked into the export
    assert ",8,8," not in csv_text
    assert csv_text.count("\n") == 18


@pytest.mark.asyncio
async def test_distributor_prices_export(seeded_db):
    lines = (await export_table("distributor_prices")).splitlines()

    assert lines[0] == "price_id,distributor_name,item_name,unit_cost"
    assert lines[1] == "1,Candy Corp,Licorice,0.81"
    assert len(lines) == 28


@pytest.mark.asyncio
async def test_raw_table_exports(seeded_db):
    items = (await export_table("items")).splitlines()
    distributors = (await export_table("distributors")).splitlines()

    assert items[0] == "id,name"
    assert items[2] == "2,Good & Plenty"
    assert distributors == ["id,name", "1,Candy Corp", "2,The Sweet Suite", "3,Dentists Hate Us"]


@pytest.mark.asyncio
async def test_export_quotes_stored_names(seeded_db):
    await add_item('Nuts, "Salted"')

    csv_text = await export_table("items")

    assert csv_text.endswith('18,"Nuts, ""Salted"""\n')
