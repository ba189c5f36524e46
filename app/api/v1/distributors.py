import logging
from fastapi import APIRouter, status
from app.core.exceptions import InventoryServiceError
from app.schemas.distributor import DistributorRequest, PriceRequest, PriceUpdateRequest
from app.services.catalog_service import (
    list_distributors,
    add_distributor,
    delete_distributor,
    add_price,
    update_price,
)
from app.services.pricing_service import offerings_by_distributor

router = APIRouter()
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
log = logging.getLogger("uvicorn")


@router.get("")
async def get_distributors():
    return await list_distributors()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_distributor(distributor_data: DistributorRequest):
    try:
        return await add_distributor(distributor_data.name)
    except InventoryServiceError as e:
        log.error(f"Error adding distributor '{distributor_data.name}': {e.message}")
        raise


@router.delete("/{distributor_id}")
async def remove_distributor(distributor_id: int):
    """Deletes the distributor and every price it offers."""
    return await delete_distributor(distributor_id)


@router.get("/{distributor_id}/items")
async def get_distributor_items(distributor_id: int):
    """Lists the items a distributor sells, with their cost."""
    return await offerings_by_distributor(distributor_id)


@router.post("/{distributor_id}/catalog", status_code=status.HTTP_201_CREATED)
async def create_price(distributor_id: int, price_data: PriceRequest):
    """Adds a price offering; earlier offerings for the same item are kept."""
    try:
        return await add_price(distributor_id, price_data.item_id, price_data.cost)
    except InventoryServiceError as e:
        log.error(f"Error adding price for distributor {distributor_id}: {e.message}")
        raise


@router.put("/{distributor_id}/catalog/{item_id}")
async def change_price(distributor_id: int, item_id: int, price_data: PriceUpdateRequest):
    """Sets the cost of every offering of the item by this distributor."""
    return await update_price(distributor_id, item_id, price_data.cost)
