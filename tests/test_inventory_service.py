import pytest

from app.core.exceptions import Conflict, NotFound
from app.models import Inventory
from app.services.catalog_service import add_item
from app.services.inventory_service import (
    is_out_of_stock,
    is_overstocked,
    is_low_stock,
    list_inventory,
    get_inventory_by_id,
    get_out_of_stock,
    get_overstocked,
    get_low_stock,
    add_inventory,
    update_inventory,
    delete_inventory,
)


class TestPredicates:

    def test_out_of_stock(self):
        assert is_out_of_stock(0, 10)
        assert not is_out_of_stock(1, 10)

    def test_overstocked_is_strict(self):
        assert is_overstocked(11, 10)
        assert not is_overstocked(10, 10)

    def test_low_stock_threshold_is_strict(self):
        assert is_low_stock(34, 100)
        assert not is_low_stock(35, 100)
        assert is_low_stock(0, 10)

    def test_zero_capacity_is_never_low_stock(self):
        assert not is_low_stock(0, 0)
        assert not is_low_stock(3, 0)

    def test_predicates_can_overlap(self):
        # Nothing in stock and no room at all: out of stock, yet not overstocked
        assert is_out_of_stock(0, 0) and not is_overstocked(0, 0)
        # Empty shelf is both out of stock and low stock
        assert is_out_of_stock(0, 20) and is_low_stock(0, 20)


class TestReports:

    @pytest.mark.asyncio
    async def test_seeded_low_stock_rows(self, seeded_db):
        rows = await get_low_stock()

        assert [row["item_name"] for row in rows] == [
            "Good & Plenty", "Twix", "Starburst", "Butterfinger", "Sour Patch Kids",
        ]

    @pytest.mark.asyncio
    async def test_seed_has_no_out_of_stock_or_overstock(self, seeded_db):
        assert await get_out_of_stock() == []
        # Circus Peanuts is exactly at capacity
        assert await get_overstocked() == []

    @pytest.mark.asyncio
    async def test_reports_follow_current_levels(self, seeded_db):
        await update_inventory(7, 0, 10)
        await update_inventory(8, 55, 40)

        assert [row["id"] for row in await get_out_of_stock()] == [7]
        assert [row["id"] for row in await get_overstocked()] == [8]
        assert 7 in [row["id"] for row in await get_low_stock()]

    @pytest.mark.asyncio
    async def test_every_row_lands_in_matching_reports(self, seeded_db):
        await update_inventory(3, 0, 25)
        await update_inventory(4, 70, 50)

        out_of_stock = {row["id"] for row in await get_out_of_stock()}
        overstocked = {row["id"] for row in await get_overstocked()}
        low_stock = {row["id"] for row in await get_low_stock()}

        for row in await list_inventory():
            stock, capacity = row["amount_in_stock"], row["total_capacity"]
            assert (row["id"] in out_of_stock) == (stock == 0)
            assert (row["id"] in overstocked) == (stock > capacity)
            assert (row["id"] in low_stock) == (capacity > 0 and stock / capacity < 0.35)

    @pytest.mark.asyncio
    async def test_get_by_id(self, seeded_db):
        rows = await get_inventory_by_id(8)

        assert rows == [{
            "id": 8,
            "item_id": 8,
            "item_name": "Candy Corn",
            "amount_in_stock": 30,
            "total_capacity": 40,
        }]
        assert await get_inventory_by_id(999) == []


class TestMutations:

    @pytest.mark.asyncio
    async def test_add_update_delete_round(self, seeded_db):
        item = await add_item("Pop Rocks")

        row = await add_inventory(item["id"], 4, 9)
        assert row["item_name"] == "Pop Rocks"
        assert row["amount_in_stock"] == 4
        assert row["total_capacity"] == 9
        assert list(row) == ["id", "item_id", "item_name", "amount_in_stock", "total_capacity"]

        assert await update_inventory(row["id"], 7, 12) == {"status": "ok"}
        updated = await get_inventory_by_id(row["id"])
        assert updated[0]["amount_in_stock"] == 7
        assert updated[0]["total_capacity"] == 12

        assert await delete_inventory(row["id"]) == {"status": "ok"}
        assert await get_inventory_by_id(row["id"]) == []

    @pytest.mark.asyncio
    async def test_overstock_is_accepted_on_write(self, seeded_db):
        item = await add_item("Jawbreakers")

        row = await add_inventory(item["id"], 50, 10)

        assert row["amount_in_stock"] == 50

    @pytest.mark.asyncio
    async def test_second_inventory_row_for_item_is_a_conflict(self, seeded_db):
        with pytest.raises(Conflict) as excinfo:
            await add_inventory(1, 5, 10)

        assert "item 1" in excinfo.value.message
        assert await Inventory.filter(item_id=1).count() == 1

    @pytest.mark.asyncio
    async def test_inventory_for_unknown_item_is_not_found(self, seeded_db):
        with pytest.raises(NotFound) as excinfo:
            await add_inventory(999, 5, 10)

        assert excinfo.value.message == "Item 999 not found"
        assert await Inventory.all().count() == 17

    @pytest.mark.asyncio
    async def test_update_and_delete_missing_row_are_not_found(self, seeded_db):
        before = await list_inventory()

        assert await update_inventory(999, 1, 1) == {"status": "not_found"}
        assert await delete_inventory(999) == {"status": "not_found"}

        assert await list_inventory() == before
