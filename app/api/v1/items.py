import logging
from fastapi import APIRouter, status
from app.core.exceptions import InventoryServiceError
from app.schemas.item import ItemRequest
from app.services.catalog_service import list_items, add_item, delete_item
from app.services.pricing_service import offerings_by_item, cheapest_offer

router = APIRouter()
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
log = logging.getLogger("uvicorn")


@router.get("")
async def get_items():
    """Lists every item."""
    return await list_items()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_item(item_data: ItemRequest):
    """Adds an item. A duplicate name is rejected with 409 'Item already exists'."""
    try:
        return await add_item(item_data.name)
    except InventoryServiceError as e:
        log.error(f"Error adding item '{item_data.name}': {e.message}")
        raise


@router.delete("/{item_id}")
async def remove_item(item_id: int):
    """Deletes an item together with its inventory row and price offerings."""
    return await delete_item(item_id)


@router.get("/{item_id}/distributors")
async def get_item_distributors(item_id: int):
    """Lists every distributor offering the item and at what cost."""
    return await offerings_by_item(item_id)


@router.get("/{item_id}/restock/{quantity}/cheapest")
async def get_cheapest_restock(item_id: int, quantity: int):
    """Finds the cheapest distributor for restocking `quantity` units of the item."""
    try:
        return await cheapest_offer(item_id, quantity)
    except InventoryServiceError as e:
        log.error(f"Error pricing restock of item {item_id}: {e.message}")
        raise
