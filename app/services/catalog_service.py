import logging
from decimal import Decimal
from typing import Any, Dict, List
from app.core.db import storage_errors
from app.core.exceptions import ValidationError
from app.models.item import Item
from app.models.distributor import Distributor, DistributorPrice
from app.services.result_serializer import Projection, to_records

log = logging.getLogger("catalog.service")

ITEM_VIEW = Projection(id="id", name="name")
DISTRIBUTOR_VIEW = Projection(id="id", name="name")
# Costs are stored in cents; finer amounts would be rounded by storage
COST_STEP = Decimal("0.01")


def _status(affected: int) -> Dict[str, str]:
    return {"status": "ok" if affected else "not_found"}


def _checked_cost(cost: Decimal) -> Decimal:
    if cost < 0 or cost != cost.quantize(COST_STEP):
        raise ValidationError(f"cost: must be a non-negative amount with at most 2 decimal places, got {cost}")
    return cost


# --- Items ---

async def list_items() -> List[Dict[str, Any]]:
    with storage_errors():
        return to_records(await ITEM_VIEW.fetch(Item.all().order_by("id")))


async def add_item(name: str) -> Dict[str, Any]:
    """Inserts a new item. A name that is already taken raises Conflict."""
    with storage_errors(conflict="Item already exists"):
        item = await Item.create(name=name)
    log.info(f"Item {item.id} '{item.name}' created.")
    return {"id": item.id, "name": item.name}


async def delete_item(item_id: int) -> Dict[str, str]:
    """Deletes an item; storage cascades the delete to its inventory row and prices."""
    with storage_errors():
        deleted = await Item.filter(id=item_id).delete()
    return _status(deleted)


# --- Distributors ---

async def list_distributors() -> List[Dict[str, Any]]:
    with storage_errors():
        return to_records(await DISTRIBUTOR_VIEW.fetch(Distributor.all().order_by("id")))


async def add_distributor(name: str) -> Dict[str, Any]:
    with storage_errors(conflict="Distributor already exists"):
        distributor = await Distributor.create(name=name)
    log.info(f"Distributor {distributor.id} '{distributor.name}' created.")
    return {"status": "ok", "id": distributor.id}


async def delete_distributor(distributor_id: int) -> Dict[str, str]:
    """Deletes a distributor together with its price offerings."""
    with storage_errors():
        deleted = await Distributor.filter(id=distributor_id).delete()
    return _status(deleted)


# --- Price offerings ---

async def add_price(distributor_id: int, item_id: int, cost: Decimal) -> Dict[str, Any]:
    """
    Adds an offering row. Existing offerings for the same distributor and item are
    left in place, so a pair can carry several prices.
    """
    cost = _checked_cost(cost)
    with storage_errors(missing=f"Distributor {distributor_id} or item {item_id} not found"):
        price = await DistributorPrice.create(distributor_id=distributor_id, item_id=item_id, cost=cost)
    log.info(f"Price {price.id} added: distributor {distributor_id}, item {item_id}, cost {cost}.")
    return {"status": "ok", "id": price.id}


async def update_price(distributor_id: int, item_id: int, cost: Decimal) -> Dict[str, str]:
    """Sets the cost of every offering of the item by the distributor."""
    cost = _checked_cost(cost)
    with storage_errors():
        updated = await DistributorPrice.filter(distributor_id=distributor_id, item_id=item_id).update(cost=cost)
    if updated > 1:
        log.info(f"Price update for distributor {distributor_id}, item {item_id} touched {updated} offerings.")
    return _status(updated)
