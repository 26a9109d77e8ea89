"""Exception hierarchy for the property store and service."""


class PropertyListingsError(Exception):
    """Base exception for all property-listings errors."""


class NotFoundError(PropertyListingsError):
    """Raised when no property row exists for the requested id."""

    def __init__(self, property_id: int) -> None:
        self.property_id = property_id
        super().__init__("Property not found")


class StorageError(PropertyListingsError):
    """Raised when the storage engine fails (I/O or constraint failures)."""


class DecodeError(PropertyListingsError):
    """Raised when a serialized sequence column cannot be parsed.

    The store recovers from this locally; it never reaches an API caller.
    """


class PropertyClientError(PropertyListingsError):
    """Raised by the API client when a call fails; carries a user-facing message."""


class PropertyValidationError(PropertyListingsError):
    """Raised by the API client when a property fails client-side validation.

    ``errors`` maps each offending field to its message.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = errors
        super().__init__("; ".join(errors.values()))
