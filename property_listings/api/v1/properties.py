"""Properties CRUD API routes."""

import logging

from fastapi import APIRouter, Depends

from property_listings.api.deps import get_store
from property_listings.exceptions import NotFoundError
from property_listings.schemas.common import ErrorResponse, MessageResponse
from property_listings.schemas.property import PropertyCreate, PropertyResponse
from property_listings.services.property_store import PropertyStore

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/properties",
    tags=["properties"],
    responses={500: {"model": ErrorResponse}},
)


@router.get(
    "",
    response_model=list[PropertyResponse],
    summary="List all properties",
)
async def list_properties(
    store: PropertyStore = Depends(get_store),
) -> list[PropertyResponse]:
    """Return every stored property."""
    rows = await store.get_all()
    properties = [PropertyResponse.model_validate(store.decode(row)) for row in rows]
    for prop in properties:
        logger.debug("Retrieved property %s with %d images", prop.id, len(prop.images))
    return properties


@router.get(
    "/{property_id}",
    response_model=PropertyResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get a property by ID",
)
async def get_property(
    property_id: int,
    store: PropertyStore = Depends(get_store),
) -> PropertyResponse:
    """Retrieve a single property. Returns 404 if not found."""
    row = await store.get_by_id(property_id)
    return PropertyResponse.model_validate(store.decode(row))


@router.post(
    "",
    response_model=PropertyResponse,
    summary="Create a new property",
)
async def create_property(
    body: PropertyCreate,
    store: PropertyStore = Depends(get_store),
) -> PropertyResponse:
    """Store a property and return it with its assigned id."""
    fields = body.model_dump()
    logger.info(
        "Received property %r at %r (price=%s, images=%d, documents=%d, available_for_visit=%s)",
        body.name,
        body.address,
        body.price,
        len(body.images or []),
        len(body.documents or []),
        body.available_for_visit,
    )

    property_id = await store.insert(fields)
    # A concurrent delete of the new id between these two calls surfaces as 404.
    row = await store.get_by_id(property_id)
    prop = PropertyResponse.model_validate(store.decode(row))
    logger.info("Returning property %s with %d images", prop.id, len(prop.images))
    return prop


@router.delete(
    "/{property_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Delete a property",
)
async def delete_property(
    property_id: int,
    store: PropertyStore = Depends(get_store),
) -> MessageResponse:
    """Hard-delete a property. Returns 404 if not found."""
    deleted = await store.delete_by_id(property_id)
    if deleted == 0:
        raise NotFoundError(property_id)
    return MessageResponse(message="Property deleted successfully")
