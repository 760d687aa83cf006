"""Domain models and deterministic rules for catalog synchronization."""

from src.rpc_sync.domain.errors import (
    EntryMalformed,
    FetchError,
    ParseError,
    ProbeFailure,
    RpcSyncError,
    VersionReadError,
)
from src.rpc_sync.domain.extractor import extract_catalog
from src.rpc_sync.domain.models import (
    CandidateEntry,
    Catalog,
    NetworkCatalogEntry,
    ProbeResult,
    SyncSummary,
)
from src.rpc_sync.domain.rules import PRIMARY_NETWORK_ID, eligible_urls, is_eligible

__all__ = [
    "CandidateEntry",
    "Catalog",
    "eligible_urls",
    "EntryMalformed",
    "extract_catalog",
    "FetchError",
    "is_eligible",
    "NetworkCatalogEntry",
    "ParseError",
    "PRIMARY_NETWORK_ID",
    "ProbeFailure",
    "ProbeResult",
    "RpcSyncError",
    "SyncSummary",
    "VersionReadError",
]
