"""Async HTTP client for the Property Listings API.

Validates new properties before submitting them and converts local image
files into data URIs that can be embedded in the request body. Failures are
reported as :class:`PropertyClientError` with a short user-facing message;
calls are never retried.
"""

import base64
import logging
import mimetypes
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import httpx

from property_listings.exceptions import PropertyClientError, PropertyValidationError

logger = logging.getLogger(__name__)

MAX_IMAGE_BYTES = 5 * 1024 * 1024

_TEXT_FIELDS = ("name", "address", "description", "owner_name", "owner_email", "owner_phone")


# ---------------------------------------------------------------------------
# Local file helpers
# ---------------------------------------------------------------------------


def file_to_data_uri(path: str | Path) -> str:
    """Read a file and return it as a ``data:<mime>;base64,...`` URI."""
    path = Path(path)
    mime_type, _ = mimetypes.guess_type(path.name)
    encoded = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:{mime_type or 'application/octet-stream'};base64,{encoded}"


def load_images(paths: Iterable[str | Path], max_size: int = MAX_IMAGE_BYTES) -> list[str]:
    """Convert image files to data URIs, refusing any file over ``max_size`` bytes."""
    paths = [Path(p) for p in paths]
    too_large = [p for p in paths if p.stat().st_size > max_size]
    if too_large:
        limit_mb = max_size // (1024 * 1024)
        raise PropertyValidationError(
            {"images": "; ".join(f"File {p.name} exceeds {limit_mb}MB" for p in too_large)}
        )
    return [file_to_data_uri(p) for p in paths]


def validate_property(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Check required fields and price, returning a trimmed payload.

    Raises:
        PropertyValidationError: name or address is blank, or price is not
            greater than 0.
    """
    errors: dict[str, str] = {}
    if not str(fields.get("name") or "").strip():
        errors["name"] = "Name is required."
    if not str(fields.get("address") or "").strip():
        errors["address"] = "Address is required."
    price = fields.get("price")
    if isinstance(price, bool) or not isinstance(price, (int, float)) or price <= 0:
        errors["price"] = "Price must be greater than 0."
    if errors:
        raise PropertyValidationError(errors)

    payload = {field: str(fields.get(field) or "").strip() for field in _TEXT_FIELDS}
    payload["price"] = price
    payload["images"] = list(fields.get("images") or [])
    payload["documents"] = list(fields.get("documents") or [])
    payload["available_for_visit"] = bool(fields.get("available_for_visit", True))
    return payload


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class PropertyClient:
    """Client for the ``/api/properties`` endpoints.

    Pass ``http_client`` to reuse an existing ``httpx.AsyncClient`` (its
    ``base_url`` is used as is and it is not closed by :meth:`aclose`).
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def __aenter__(self) -> "PropertyClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request(self, method: str, url: str, failure_message: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("%s: %s", failure_message, exc)
            raise PropertyClientError(failure_message) from exc

    async def list_properties(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/api/properties", "Failed to fetch properties")

    async def get_property(self, property_id: int) -> dict[str, Any]:
        return await self._request(
            "GET", f"/api/properties/{property_id}", "Failed to fetch property details"
        )

    async def create_property(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        """Validate ``fields`` and submit them; return the stored property."""
        payload = validate_property(fields)
        logger.debug(
            "Submitting property %r with %d images", payload["name"], len(payload["images"])
        )
        return await self._request(
            "POST", "/api/properties", "Failed to add property", json=payload
        )

    async def delete_property(self, property_id: int) -> dict[str, Any]:
        return await self._request(
            "DELETE", f"/api/properties/{property_id}", "Failed to delete property"
        )
