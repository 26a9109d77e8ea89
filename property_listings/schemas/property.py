"""Pydantic v2 request/response schemas for property endpoints."""

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class PropertyCreate(BaseModel):
    """Schema for creating a new property.

    Only the JSON shape is checked here. Required-field and positive-price
    rules are enforced by the client before it calls the API.
    """

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    address: str | None = None
    price: float | None = Field(None, allow_inf_nan=False)
    description: str | None = None
    images: list[str] | None = None
    owner_name: str | None = None
    owner_email: str | None = None
    owner_phone: str | None = None
    documents: list[str] | None = None
    available_for_visit: bool = True


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class PropertyResponse(BaseModel):
    """A decoded property as returned from the API."""

    id: int
    name: str | None = None
    address: str | None = None
    price: float | None = None
    description: str | None = None
    images: list[str] = []
    owner_name: str | None = None
    owner_email: str | None = None
    owner_phone: str | None = None
    documents: list[str] = []
    available_for_visit: bool = True
