from typing import Any, Dict, List
from app.core.db import storage_errors
from app.core.exceptions import ValidationError
from app.models.distributor import DistributorPrice
from app.services.result_serializer import Projection, to_records

DISTRIBUTOR_OFFERINGS = Projection(offering_id="id", item_name="item__name", cost="cost")
ITEM_OFFERINGS = Projection(offering_id="id", distributor_name="distributor__name", cost="cost")
OFFER_CANDIDATES = Projection(
    distributor_id="distributor_id",
    distributor_name="distributor__name",
    unit_cost="cost",
)


async def offerings_by_distributor(distributor_id: int) -> List[Dict[str, Any]]:
    """Every item a distributor sells, with its cost."""
    with storage_errors():
        table = await DISTRIBUTOR_OFFERINGS.fetch(
            DistributorPrice.filter(distributor_id=distributor_id).order_by("id")
        )
    return to_records(table)


async def offerings_by_item(item_id: int) -> List[Dict[str, Any]]:
    """Every distributor offering an item, with its cost."""
    with storage_errors():
        table = await ITEM_OFFERINGS.fetch(DistributorPrice.filter(item_id=item_id).order_by("id"))
    return to_records(table)


async def cheapest_offer(item_id: int, quantity: int) -> Dict[str, Any]:
    """
    Picks the lowest unit cost among the item's offerings and prices the restock.

    Equal costs resolve to the offering stored first. A zero quantity prices to
    zero. An item nobody sells yields a ``message`` payload instead of an error.
    """
    if quantity < 0:
        raise ValidationError("quantity must not be negative")

    with storage_errors():
        table = await OFFER_CANDIDATES.fetch(DistributorPrice.filter(item_id=item_id).order_by("id"))
    offers = to_records(table)
    if not offers:
        return {"message": f"No offerings found for item {item_id}"}

    # min() keeps the first of equal elements
    best = min(offers, key=lambda offer: offer["unit_cost"])
    best["total_cost"] = best["unit_cost"] * quantity
    return best
