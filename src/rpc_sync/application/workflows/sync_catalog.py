from dataclasses import dataclass

import aiohttp

from src.config.logger_config import logger
from src.rpc_sync.application.ports import (
    CatalogSinkPort,
    EndpointProberPort,
    RegistrySourcePort,
    VersionStorePort,
)
from src.rpc_sync.application.workflows.verify_networks import verify_networks
from src.rpc_sync.domain.extractor import extract_catalog
from src.rpc_sync.domain.models import Catalog, SyncSummary
from src.rpc_sync.domain.rules import PRIMARY_NETWORK_ID, eligible_urls


@dataclass(frozen=True)
class SyncWorkflowConfig:
    export_name: str = "extraRpcs"
    skip_probe: bool = False
    connector_limit: int = 0
    connector_ttl_dns_cache: int = 300
    show_progress: bool = True


class SyncCatalogWorkflow:
    def __init__(
        self,
        source: RegistrySourcePort,
        prober: EndpointProberPort,
        sink: CatalogSinkPort,
        version_store: VersionStorePort,
        config: SyncWorkflowConfig | None = None,
    ) -> None:
        self.source = source
        self.prober = prober
        self.sink = sink
        self.version_store = version_store
        self.config = config or SyncWorkflowConfig()

    async def run(self) -> SyncSummary:
        connector = aiohttp.TCPConnector(
            limit=self.config.connector_limit,
            ttl_dns_cache=self.config.connector_ttl_dns_cache,
        )
        async with aiohttp.ClientSession(connector=connector) as session:
            raw = await self.source.fetch_document(session)
            networks = extract_catalog(raw, export_name=self.config.export_name)
            logger.info("Found {} networks", len(networks))

            eligible = {network_id: eligible_urls(entry) for network_id, entry in networks.items()}
            candidates_total = sum(len(entry.candidates) for entry in networks.values())
            eligible_total = sum(len(urls) for urls in eligible.values())
            logger.info(
                "Inclusion filter kept {} of {} candidate endpoints",
                eligible_total,
                candidates_total,
            )

            if self.config.skip_probe:
                logger.info("Probing skipped, publishing eligible endpoints as-is")
                catalog: Catalog = {network_id: list(urls) for network_id, urls in eligible.items()}
            else:
                catalog = await verify_networks(
                    self.prober,
                    session,
                    eligible,
                    show_progress=self.config.show_progress,
                )

        output_path = self.sink.write_catalog(catalog)
        previous_version, version = self.version_store.bump()

        summary = SyncSummary(
            networks_total=len(catalog),
            candidates_total=candidates_total,
            eligible_total=eligible_total,
            verified_total=sum(len(urls) for urls in catalog.values()),
            primary_network_verified=len(catalog.get(PRIMARY_NETWORK_ID, [])),
            previous_version=previous_version,
            version=version,
            output_path=str(output_path),
            probed=not self.config.skip_probe,
        )
        logger.info(
            "Sync complete: networks={}, verified_urls={}, network_{}_urls={}, version={} -> {}",
            summary.networks_total,
            summary.verified_total,
            PRIMARY_NETWORK_ID,
            summary.primary_network_verified,
            summary.previous_version,
            summary.version,
        )
        return summary
