"""Property model, one row per real-estate listing."""

from sqlalchemy import Float, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from property_listings.database import Base


class Property(Base):
    """A listed property.

    ``images`` and ``documents`` hold JSON-encoded lists of strings and
    ``available_for_visit`` holds a 0/1 flag; use
    :meth:`PropertyStore.decode` to get the structured form.
    """

    __tablename__ = "properties"
    # AUTOINCREMENT keeps SQLite from reusing the ids of deleted rows.
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str | None] = mapped_column(Text, default=None)
    address: Mapped[str | None] = mapped_column(Text, default=None)
    price: Mapped[float | None] = mapped_column(Float, default=None)
    description: Mapped[str | None] = mapped_column(Text, default=None)
    images: Mapped[str | None] = mapped_column(Text, default=None)
    owner_name: Mapped[str | None] = mapped_column(Text, default=None)
    owner_email: Mapped[str | None] = mapped_column(Text, default=None)
    owner_phone: Mapped[str | None] = mapped_column(Text, default=None)
    documents: Mapped[str | None] = mapped_column(Text, default=None)
    available_for_visit: Mapped[int] = mapped_column(Integer, server_default="1")

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, name={self.name!r}, address={self.address!r})>"
