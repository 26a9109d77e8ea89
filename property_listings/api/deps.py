"""Shared API dependencies, a single import point for all routers.

The property store is opened once in the application lifespan and kept on
``app.state``; routers receive it through :func:`get_store`::

    from property_listings.api.deps import get_store
"""

from fastapi import Request

from property_listings.services.property_store import PropertyStore


def get_store(request: Request) -> PropertyStore:
    """Return the store opened at application startup."""
    return request.app.state.store


__all__ = [
    "get_store",
]
