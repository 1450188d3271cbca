"""Exceptions raised by the data-access layer."""


class BookingStoreError(Exception):
    """Base exception for booking store read failures."""


class StoreUnavailableError(BookingStoreError):
    """Raised when the backing store cannot be reached or read."""


class CorruptRecordError(BookingStoreError):
    """Raised when a stored record does not match the expected schema."""
