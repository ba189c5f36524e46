from pydantic import BaseModel, Field, field_validator


class NamedEntityRequest(BaseModel):
    """Body shared by item and distributor creation."""
    name: str = Field(..., description="Unique display name; surrounding whitespace is dropped.")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class ItemRequest(NamedEntityRequest):
    """Schema for adding a candy item (e.g., Swedish Fish)."""
