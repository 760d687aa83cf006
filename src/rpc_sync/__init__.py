"""RPC endpoint catalog synchronization package."""

from src.rpc_sync.domain.models import SyncSummary
from src.rpc_sync.sync import (
    probe_urls,
    probe_urls_async,
    run_sync,
    run_sync_async,
    run_validate,
    run_validate_async,
)

__all__ = [
    "probe_urls",
    "probe_urls_async",
    "run_sync",
    "run_sync_async",
    "run_validate",
    "run_validate_async",
    "SyncSummary",
]
