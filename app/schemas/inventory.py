from pydantic import AliasChoices, BaseModel, Field


class InventoryRequest(BaseModel):
    # The web client sends the item reference as "item"
    item_id: int = Field(
        ...,
        strict=True,
        validation_alias=AliasChoices("item_id", "item"),
        description="Id of the item this inventory row tracks.",
    )
    stock: int = Field(..., strict=True, ge=0, description="Units currently in stock.")
    capacity: int = Field(..., strict=True, ge=0, description="Units the shelf can hold.")


class InventoryUpdateRequest(BaseModel):
    """Both fields are required; a partial update is rejected."""
    stock: int = Field(..., strict=True, ge=0)
    capacity: int = Field(..., strict=True, ge=0)
