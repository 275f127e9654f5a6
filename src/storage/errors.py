"""Storage error kinds raised by the storage roots."""
from __future__ import annotations


class StorageError(Exception):
    """Base class for storage failures."""


class StorageUnavailable(StorageError):
    """The storage root cannot be created, accessed or listed."""


class InvalidName(StorageError):
    """A client filename sanitizes to nothing or escapes the storage root."""

    def __init__(self, name: str, reason: str = "invalid file name") -> None:
        super().__init__(f"{reason}: {name!r}")
        self.name = name
        self.reason = reason


class WriteFailure(StorageError):
    """Streaming content to the destination failed."""
