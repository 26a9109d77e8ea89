"""Property store: owns the ``properties`` table and its column encoding.

Composite fields (``images``, ``documents``) are kept as JSON text in scalar
columns and ``available_for_visit`` as a 0/1 integer. :class:`PropertyStore`
writes the flat representation and :meth:`PropertyStore.decode` turns a row
back into plain Python values.
"""

import json
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from property_listings.database import Base, make_engine, make_session_factory
from property_listings.exceptions import DecodeError, NotFoundError, StorageError
from property_listings.models.property import Property

logger = logging.getLogger(__name__)

# Bounds of a SQLite INTEGER; no row can carry an id outside them.
SQLITE_MIN_INT = -(2**63)
SQLITE_MAX_INT = 2**63 - 1


# ---------------------------------------------------------------------------
# Column encoding
# ---------------------------------------------------------------------------


def encode_sequence(values: Iterable[str] | None) -> str:
    """Serialize a sequence of strings for a TEXT column.

    ``None`` and empty sequences both encode to ``"[]"``, never to NULL.
    """
    return json.dumps(list(values or []))


def decode_sequence(text: str | None) -> list[str]:
    """Parse a TEXT column written by :func:`encode_sequence`.

    Raises:
        DecodeError: the column is NULL, is not valid JSON, or does not hold
            a list of strings.
    """
    if text is None:
        raise DecodeError("column is NULL")
    try:
        value = json.loads(text)
    except ValueError as exc:
        raise DecodeError(str(exc)) from exc
    if not isinstance(value, list):
        raise DecodeError(f"expected a list, got {type(value).__name__}")
    if not all(isinstance(item, str) for item in value):
        raise DecodeError("list contains non-string items")
    return value


def _decode_or_empty(row: Property, field: str) -> list[str]:
    try:
        return decode_sequence(getattr(row, field))
    except DecodeError as exc:
        logger.warning("Error parsing %s for property %s: %s", field, row.id, exc)
        return []


def _storage_error(exc: SQLAlchemyError) -> StorageError:
    """Wrap an engine error, keeping the driver's message when there is one."""
    orig = getattr(exc, "orig", None)
    return StorageError(str(orig) if orig is not None else str(exc))


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class PropertyStore:
    """Durable keyed storage of :class:`Property` rows.

    One instance is opened at application startup and shared by every
    request; each operation runs in its own short-lived session.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self._session_factory = make_session_factory(engine)

    @classmethod
    def open(cls, url: str, echo: bool = False) -> "PropertyStore":
        """Create a store backed by the database at ``url``."""
        logger.info("Opening property store at %s", url)
        return cls(make_engine(url, echo=echo))

    async def close(self) -> None:
        """Dispose of the engine's connections."""
        await self.engine.dispose()
        logger.info("Property store closed")

    async def create_table(self) -> None:
        """Create the ``properties`` table if it does not exist yet."""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as exc:
            logger.exception("Error creating properties table")
            raise _storage_error(exc) from exc
        logger.info("Properties table created or already exists")

    async def insert(self, fields: Mapping[str, Any]) -> int:
        """Insert a property and return its newly assigned id.

        Missing ``images``/``documents`` are stored as empty lists and a
        missing ``available_for_visit`` is stored as 1.
        """
        row = Property(
            name=fields.get("name"),
            address=fields.get("address"),
            price=fields.get("price"),
            description=fields.get("description"),
            images=encode_sequence(fields.get("images")),
            owner_name=fields.get("owner_name"),
            owner_email=fields.get("owner_email"),
            owner_phone=fields.get("owner_phone"),
            documents=encode_sequence(fields.get("documents")),
            available_for_visit=1 if fields.get("available_for_visit", True) else 0,
        )
        try:
            async with self._session_factory() as session:
                session.add(row)
                await session.commit()
        except SQLAlchemyError as exc:
            logger.exception("Error inserting property")
            raise _storage_error(exc) from exc

        logger.info("Inserted property with id %s", row.id)
        return row.id

    async def get_by_id(self, property_id: int) -> Property:
        """Return the row for ``property_id``.

        Raises:
            NotFoundError: no row has that id.
            StorageError: the query failed.
        """
        if not SQLITE_MIN_INT <= property_id <= SQLITE_MAX_INT:
            raise NotFoundError(property_id)
        try:
            async with self._session_factory() as session:
                row = await session.get(Property, property_id)
        except SQLAlchemyError as exc:
            logger.exception("Error retrieving property %s", property_id)
            raise _storage_error(exc) from exc

        if row is None:
            raise NotFoundError(property_id)
        return row

    async def get_all(self) -> list[Property]:
        """Return every row, in whatever order the engine yields them."""
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(Property))
                return list(result.scalars().all())
        except SQLAlchemyError as exc:
            logger.exception("Error listing properties")
            raise _storage_error(exc) from exc

    async def delete_by_id(self, property_id: int) -> int:
        """Hard-delete the row for ``property_id``; return the number of rows removed."""
        if not SQLITE_MIN_INT <= property_id <= SQLITE_MAX_INT:
            return 0
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    delete(Property).where(Property.id == property_id)
                )
                await session.commit()
        except SQLAlchemyError as exc:
            logger.exception("Error deleting property %s", property_id)
            raise _storage_error(exc) from exc

        if result.rowcount:
            logger.info("Deleted property %s", property_id)
        return result.rowcount

    def decode(self, row: Property) -> dict[str, Any]:
        """Convert a stored row into plain values.

        A malformed ``images`` or ``documents`` column decodes to an empty
        list (and is logged) so that the rest of the record stays readable.
        """
        return {
            "id": row.id,
            "name": row.name,
            "address": row.address,
            "price": row.price,
            "description": row.description,
            "images": _decode_or_empty(row, "images"),
            "owner_name": row.owner_name,
            "owner_email": row.owner_email,
            "owner_phone": row.owner_phone,
            "documents": _decode_or_empty(row, "documents"),
            "available_for_visit": row.available_for_visit == 1,
        }
