"""
Delivery Desk Persistence — Public API
========================================
Seed document loading, durable key-value storage, archive sync and
the theme preference.
"""

from adapters.persistence.archive_sync import DEFAULT_ARCHIVE_KEY, ArchiveSync
from adapters.persistence.errors import (
    DataLoadError,
    PersistenceError,
    StorageReadError,
    StorageWriteError,
)
from adapters.persistence.loader import (
    DOCUMENT_NAMES,
    DirectoryDocumentSource,
    DocumentSource,
    HttpDocumentSource,
    LoadedDocuments,
    document_source_for,
    load_documents,
)
from adapters.persistence.storage import (
    InMemoryKeyValueStorage,
    JsonFileKeyValueStorage,
    KeyValueStorage,
)
from adapters.persistence.theme import DARK, LIGHT, ThemePreference

__all__ = [
    "ArchiveSync",
    "DEFAULT_ARCHIVE_KEY",
    "PersistenceError",
    "DataLoadError",
    "StorageReadError",
    "StorageWriteError",
    "DOCUMENT_NAMES",
    "DocumentSource",
    "DirectoryDocumentSource",
    "HttpDocumentSource",
    "LoadedDocuments",
    "document_source_for",
    "load_documents",
    "KeyValueStorage",
    "InMemoryKeyValueStorage",
    "JsonFileKeyValueStorage",
    "ThemePreference",
    "LIGHT",
    "DARK",
]
