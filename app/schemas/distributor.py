from decimal import Decimal
from pydantic import AliasChoices, BaseModel, Field
from app.schemas.item import NamedEntityRequest


class DistributorRequest(NamedEntityRequest):
    """Schema for adding a distributor."""


class PriceRequest(BaseModel):
    item_id: int = Field(
        ...,
        strict=True,
        validation_alias=AliasChoices("item_id", "item"),
        description="Id of the item being offered.",
    )
    cost: Decimal = Field(..., ge=0, description="Unit cost charged by the distributor.")


class PriceUpdateRequest(BaseModel):
    cost: Decimal = Field(..., ge=0)
