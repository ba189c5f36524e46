import logging
from fastapi import APIRouter, status
from app.core.exceptions import InventoryServiceError
from app.schemas.inventory import InventoryRequest, InventoryUpdateRequest
from app.services.inventory_service import (
    list_inventory,
    get_inventory_by_id,
    get_out_of_stock,
    get_overstocked,
    get_low_stock,
    add_inventory,
    update_inventory,
    delete_inventory,
)

log = logging.getLogger("uvicorn")
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

router = APIRouter()


@router.get("")
async def get_inventory():
    """Every inventory row with its item name."""
    return await list_inventory()


# Fixed report paths are declared before /{inventory_id}
@router.get("/out-of-stock")
async def get_out_of_stock_inventory():
    """Rows with nothing in stock."""
    return await get_out_of_stock()


@router.get("/overstocked")
async def get_overstocked_inventory():
    """Rows holding more than their capacity."""
    return await get_overstocked()


@router.get("/low-stock")
async def get_low_stock_inventory():
    """Rows filled below 35% of capacity."""
    return await get_low_stock()


@router.get("/{inventory_id}")
async def get_inventory_row(inventory_id: int):
    """A list with the matching row, or an empty list."""
    return await get_inventory_by_id(inventory_id)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_inventory(inventory_data: InventoryRequest):
    """
    Starts tracking stock for an item. Each item has at most one inventory row:
    a second one is rejected with 409, an unknown item with 404.
    """
    try:
        return await add_inventory(
            inventory_data.item_id,
            inventory_data.stock,
            inventory_data.capacity,
        )
    except InventoryServiceError as e:
        log.error(f"Error adding inventory for item {inventory_data.item_id}: {e.message}")
        raise


@router.put("/{inventory_id}")
async def replace_inventory_levels(inventory_id: int, levels: InventoryUpdateRequest):
    """Overwrites stock and capacity; returns {"status": "not_found"} for an unknown id."""
    return await update_inventory(inventory_id, levels.stock, levels.capacity)


@router.delete("/{inventory_id}")
async def remove_inventory(inventory_id: int):
    return await delete_inventory(inventory_id)
