"""SQLAlchemy models for Property Listings.

All models are imported here so that ``Base.metadata.create_all`` can
discover them. If you add a new model, import it in this file.
"""

from property_listings.models.property import Property

__all__ = [
    "Property",
]
