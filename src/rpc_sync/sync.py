from __future__ import annotations
import asyncio
from pathlib import Path
from typing import Sequence

import aiohttp

from src.config.settings import settings
from src.rpc_sync.application.workflows.sync_catalog import SyncCatalogWorkflow, SyncWorkflowConfig
from src.rpc_sync.application.workflows.validate_catalog import (
    ValidateCatalogWorkflow,
    ValidateWorkflowConfig,
)
from src.rpc_sync.domain.models import ProbeResult, SyncSummary
from src.rpc_sync.infrastructure.catalog_sink import JsonCatalogSink
from src.rpc_sync.infrastructure.registry_client import RegistryDocumentClient
from src.rpc_sync.infrastructure.rpc_prober import RpcEndpointProber
from src.rpc_sync.infrastructure.version_store import FileVersionStore


async def run_sync_async(
    *,
    source_url: str = settings.source_url,
    output_path: str | Path = settings.output_path,
    version_path: str | Path = settings.version_path,
    export_name: str = settings.export_name,
    fetch_timeout: float = settings.fetch_timeout,
    probe_timeout: float = settings.probe_timeout,
    concurrency: int = settings.probe_concurrency,
    user_agent: str | None = settings.user_agent,
    skip_probe: bool = False,
    show_progress: bool = True,
) -> SyncSummary:
    workflow = SyncCatalogWorkflow(
        source=RegistryDocumentClient(
            source_url=source_url,
            timeout_seconds=fetch_timeout,
            user_agent=user_agent,
        ),
        prober=RpcEndpointProber(timeout_seconds=probe_timeout, concurrency=concurrency),
        sink=JsonCatalogSink(output_path),
        version_store=FileVersionStore(version_path),
        config=SyncWorkflowConfig(
            export_name=export_name,
            skip_probe=skip_probe,
            show_progress=show_progress,
        ),
    )
    return await workflow.run()


def run_sync(
    *,
    source_url: str = settings.source_url,
    output_path: str | Path = settings.output_path,
    version_path: str | Path = settings.version_path,
    export_name: str = settings.export_name,
    fetch_timeout: float = settings.fetch_timeout,
    probe_timeout: float = settings.probe_timeout,
    concurrency: int = settings.probe_concurrency,
    user_agent: str | None = settings.user_agent,
    skip_probe: bool = False,
    show_progress: bool = True,
) -> SyncSummary:
    return asyncio.run(
        run_sync_async(
            source_url=source_url,
            output_path=output_path,
            version_path=version_path,
            export_name=export_name,
            fetch_timeout=fetch_timeout,
            probe_timeout=probe_timeout,
            concurrency=concurrency,
            user_agent=user_agent,
            skip_probe=skip_probe,
            show_progress=show_progress,
        )
    )


async def run_validate_async(
    *,
    output_path: str | Path = settings.output_path,
    version_path: str | Path = settings.version_path,
    probe_timeout: float = settings.validate_timeout,
    concurrency: int = settings.validate_concurrency,
    show_progress: bool = True,
) -> SyncSummary:
    workflow = ValidateCatalogWorkflow(
        prober=RpcEndpointProber(timeout_seconds=probe_timeout, concurrency=concurrency),
        sink=JsonCatalogSink(output_path),
        version_store=FileVersionStore(version_path),
        config=ValidateWorkflowConfig(show_progress=show_progress),
    )
    return await workflow.run()


def run_validate(
    *,
    output_path: str | Path = settings.output_path,
    version_path: str | Path = settings.version_path,
    probe_timeout: float = settings.validate_timeout,
    concurrency: int = settings.validate_concurrency,
    show_progress: bool = True,
) -> SyncSummary:
    return asyncio.run(
        run_validate_async(
            output_path=output_path,
            version_path=version_path,
            probe_timeout=probe_timeout,
            concurrency=concurrency,
            show_progress=show_progress,
        )
    )


async def probe_urls_async(
    urls: Sequence[str],
    *,
    probe_timeout: float = settings.probe_timeout,
    concurrency: int = settings.probe_concurrency,
) -> list[ProbeResult]:
    prober = RpcEndpointProber(timeout_seconds=probe_timeout, concurrency=concurrency)
    connector = aiohttp.TCPConnector(limit=0, ttl_dns_cache=300)
    async with aiohttp.ClientSession(connector=connector) as session:
        return await prober.probe_all(session, urls)


def probe_urls(
    urls: Sequence[str],
    *,
    probe_timeout: float = settings.probe_timeout,
    concurrency: int = settings.probe_concurrency,
) -> list[ProbeResult]:
    return asyncio.run(probe_urls_async(urls, probe_timeout=probe_timeout, concurrency=concurrency))
