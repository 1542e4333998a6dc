"""
Delivery Desk Persistence — Errors
====================================
Load failures abort initialization as a whole: no partial data is
kept, and a storage entry that exists but cannot be read counts as a
load failure. Storage failures on write are contained by the event bus.
"""


class PersistenceError(Exception):
    """Base error for the persistence bridge."""
    pass


class DataLoadError(PersistenceError):
    """
    A startup document (or the stored archive) could not be read or parsed.

    Initialization treats any DataLoadError as total failure.
    """

    def __init__(self, document: str, detail: str):
        self.document = document
        self.detail = detail
        super().__init__(f"Failed to load '{document}': {detail}")


class StorageWriteError(PersistenceError):
    """Durable key-value storage refused a write."""

    def __init__(self, key: str, detail: str):
        self.key = key
        self.detail = detail
        super().__init__(f"Failed to write storage key '{key}': {detail}")


class StorageReadError(PersistenceError):
    """Durable key-value storage could not read an entry that exists."""

    def __init__(self, key: str, detail: str):
        self.key = key
        self.detail = detail
        super().__init__(f"Failed to read storage key '{key}': {detail}")
