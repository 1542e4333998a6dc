"""
Delivery Desk Persistence — Startup Document Loader
=====================================================
Reads the three seed documents (invoices, drivers, stock) concurrently.
All three must succeed: the first failure aborts the whole load with
a DataLoadError and nothing is returned.

Sources:
- DirectoryDocumentSource: <directory>/<name>.json, read in worker threads
- HttpDocumentSource:      <base_url>/<name>.json over httpx

No retry, no cancellation policy. HTTP timeouts are the client's.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import httpx

from adapters.persistence.errors import DataLoadError

logger = logging.getLogger("desk.persistence")

INVOICES_DOCUMENT = "invoices"
DRIVERS_DOCUMENT = "drivers"
STOCK_DOCUMENT = "stock"

DOCUMENT_NAMES = (INVOICES_DOCUMENT, DRIVERS_DOCUMENT, STOCK_DOCUMENT)


@dataclass(frozen=True)
class LoadedDocuments:
    invoices: List[Dict[str, Any]]
    drivers: List[Dict[str, Any]]
    stock: List[Dict[str, Any]]


# ══════════════════════════════════════════════════════════════
# SOURCES
# ══════════════════════════════════════════════════════════════

class DocumentSource:
    """
    Base class for seed document sources.

    Used as an async context manager around one load so HTTP sources
    can share a client across the concurrent fetches.
    """

    async def __aenter__(self) -> "DocumentSource":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def fetch(self, name: str) -> Any:
        """Return the parsed JSON of document `name`."""
        raise NotImplementedError


class DirectoryDocumentSource(DocumentSource):
    def __init__(self, directory: Union[str, Path]) -> None:
        self._directory = Path(directory)

    def __repr__(self) -> str:
        return f"DirectoryDocumentSource({str(self._directory)!r})"

    def _read(self, name: str) -> Any:
        path = self._directory / f"{name}.json"
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)

    async def fetch(self, name: str) -> Any:
        return await asyncio.to_thread(self._read, name)


class HttpDocumentSource(DocumentSource):
    """
    Fetches documents relative to `base_url`.

    An injected client is used as-is and never closed here; otherwise
    one client is opened for the duration of the `async with` block.
    """

    def __init__(
        self,
        base_url: str,
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = client
        self._owns_client = client is None
        self._timeout = timeout

    def __repr__(self) -> str:
        return f"HttpDocumentSource({self._base_url!r})"

    async def __aenter__(self) -> "HttpDocumentSource":
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch(self, name: str) -> Any:
        if self._client is None:
            raise RuntimeError("HttpDocumentSource must be used inside 'async with'.")
        response = await self._client.get(f"{self._base_url}/{name}.json")
        response.raise_for_status()
        return response.json()


def document_source_for(location: str) -> DocumentSource:
    """http(s) URLs load over HTTP; anything else is a directory path."""
    if location.startswith(("http://", "https://")):
        return HttpDocumentSource(location)
    return DirectoryDocumentSource(location)


# ══════════════════════════════════════════════════════════════
# LOAD
# ══════════════════════════════════════════════════════════════

async def _fetch_document(source: DocumentSource, name: str) -> List[Dict[str, Any]]:
    try:
        document = await source.fetch(name)
    except Exception as exc:
        raise DataLoadError(name, f"{type(exc).__name__}: {exc}") from exc

    if not isinstance(document, list):
        raise DataLoadError(name, f"expected a JSON array, got {type(document).__name__}")
    for position, record in enumerate(document):
        if not isinstance(record, dict):
            raise DataLoadError(
                name, f"record {position} is {type(record).__name__}, expected object"
            )
    return document


async def load_documents(source: DocumentSource) -> LoadedDocuments:
    """
    Fetch invoices, drivers and stock concurrently.

    Raises DataLoadError if any document fails.
    """
    async with source:
        # wait for all three before the source closes; first failure wins
        results = await asyncio.gather(
            *(_fetch_document(source, name) for name in DOCUMENT_NAMES),
            return_exceptions=True,
        )
    for result in results:
        if isinstance(result, BaseException):
            raise result
    invoices, drivers, stock = results

    logger.info(
        f"Loaded documents from {source!r}: {len(invoices)} invoices, "
        f"{len(drivers)} drivers, {len(stock)} stock items"
    )
    return LoadedDocuments(invoices=invoices, drivers=drivers, stock=stock)
