import logging
from typing import Any, Callable, Dict, List
from tortoise.transactions import in_transaction
from app.core.config import LOW_STOCK_RATIO
from app.core.db import storage_errors
from app.core.exceptions import StorageFailure
from app.models.inventory import Inventory
from app.services.result_serializer import Projection, to_records

log = logging.getLogger("inventory.service")

# Inventory rows joined with their item, as every inventory endpoint reports them
INVENTORY_VIEW = Projection(
    id="id",
    item_id="item_id",
    item_name="item__name",
    amount_in_stock="stock",
    total_capacity="capacity",
)


# --- Classification predicates ---
# A row may satisfy several predicates (e.g. stock 0 is also low stock).

def is_out_of_stock(stock: int, capacity: int) -> bool:
    return stock == 0


def is_overstocked(stock: int, capacity: int) -> bool:
    return stock > capacity


def is_low_stock(stock: int, capacity: int) -> bool:
    # The fill ratio of a zero-capacity row is undefined; such rows are never low stock.
    if capacity <= 0:
        return False
    return stock / capacity < LOW_STOCK_RATIO


# --- Reads ---

async def list_inventory(queryset=None) -> List[Dict[str, Any]]:
    """Every inventory row joined with its item name, ordered by inventory id."""
    if queryset is None:
        queryset = Inventory.all()
    with storage_errors():
        table = await INVENTORY_VIEW.fetch(queryset.order_by("id"))
    return to_records(table)


async def get_inventory_by_id(inventory_id: int) -> List[Dict[str, Any]]:
    """Zero or one rows; an unknown id is an empty result, not an error."""
    return await list_inventory(Inventory.filter(id=inventory_id))


async def _classified(predicate: Callable[[int, int], bool]) -> List[Dict[str, Any]]:
    return [
        row for row in await list_inventory()
        if predicate(row["amount_in_stock"], row["total_capacity"])
    ]


async def get_out_of_stock() -> List[Dict[str, Any]]:
    return await _classified(is_out_of_stock)


async def get_overstocked() -> List[Dict[str, Any]]:
    return await _classified(is_overstocked)


async def get_low_stock() -> List[Dict[str, Any]]:
    return await _classified(is_low_stock)


# --- Mutations ---

async def add_inventory(item_id: int, stock: int, capacity: int) -> Dict[str, Any]:
    """
    Creates the inventory row of an item and returns it in the joined view shape.
    Raises Conflict when the item already has inventory, NotFound when the item is unknown.
    """
    async with in_transaction() as conn:
        with storage_errors(
            conflict=f"Inventory already exists for item {item_id}",
            missing=f"Item {item_id} not found",
        ):
            inventory = await Inventory.create(item_id=item_id, stock=stock, capacity=capacity, using_db=conn)

    rows = await get_inventory_by_id(inventory.id)
    if not rows:
        raise StorageFailure("Failed to retrieve new inventory row")
    log.info(f"Inventory {inventory.id} created for item {item_id} ({stock}/{capacity}).")
    return rows[0]


async def update_inventory(inventory_id: int, stock: int, capacity: int) -> Dict[str, str]:
    """Overwrites stock and capacity together; reports not_found when no row matched."""
    with storage_errors():
        updated = await Inventory.filter(id=inventory_id).update(stock=stock, capacity=capacity)
    return {"status": "ok" if updated else "not_found"}


async def delete_inventory(inventory_id: int) -> Dict[str, str]:
    with storage_errors():
        deleted = await Inventory.filter(id=inventory_id).delete()
    return {"status": "ok" if deleted else "not_found"}
