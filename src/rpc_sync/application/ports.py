from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable

import aiohttp

from src.rpc_sync.domain.models import Catalog


@runtime_checkable
class RegistrySourcePort(Protocol):
    async def fetch_document(self, session: aiohttp.ClientSession) -> str: ...
    """Return the raw registry document or raise FetchError."""


@runtime_checkable
class EndpointProberPort(Protocol):
    async def verify(self, session: aiohttp.ClientSession, urls: Sequence[str]) -> list[str]: ...
    """Return the live subset of urls in input order."""


@runtime_checkable
class CatalogSinkPort(Protocol):
    def write_catalog(self, catalog: Catalog) -> Path: ...
    """Replace the published catalog."""

    def read_catalog(self) -> Catalog: ...
    """Load the published catalog or raise ParseError."""


@runtime_checkable
class VersionStorePort(Protocol):
    def read(self) -> int: ...

    def bump(self) -> tuple[int, int]: ...
