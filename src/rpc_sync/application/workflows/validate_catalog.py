from dataclasses import dataclass

import aiohttp

from src.config.logger_config import logger
from src.rpc_sync.application.ports import CatalogSinkPort, EndpointProberPort, VersionStorePort
from src.rpc_sync.application.workflows.verify_networks import verify_networks
from src.rpc_sync.domain.models import SyncSummary
from src.rpc_sync.domain.rules import PRIMARY_NETWORK_ID


@dataclass(frozen=True)
class ValidateWorkflowConfig:
    connector_limit: int = 0
    connector_ttl_dns_cache: int = 300
    show_progress: bool = True


class ValidateCatalogWorkflow:
    """Re-probe the published catalog and drop endpoints that stopped answering."""

    def __init__(
        self,
        prober: EndpointProberPort,
        sink: CatalogSinkPort,
        version_store: VersionStorePort,
        config: ValidateWorkflowConfig | None = None,
    ) -> None:
        self.prober = prober
        self.sink = sink
        self.version_store = version_store
        self.config = config or ValidateWorkflowConfig()

    async def run(self) -> SyncSummary:
        current = self.sink.read_catalog()
        urls_total = sum(len(urls) for urls in current.values())
        logger.info("Validating {} endpoints across {} networks", urls_total, len(current))

        connector = aiohttp.TCPConnector(
            limit=self.config.connector_limit,
            ttl_dns_cache=self.config.connector_ttl_dns_cache,
        )
        async with aiohttp.ClientSession(connector=connector) as session:
            catalog = await verify_networks(
                self.prober,
                session,
                current,
                show_progress=self.config.show_progress,
            )

        output_path = self.sink.write_catalog(catalog)
        previous_version, version = self.version_store.bump()
        verified_total = sum(len(urls) for urls in catalog.values())
        logger.info(
            "Validation complete: kept {} of {} endpoints, version={} -> {}",
            verified_total,
            urls_total,
            previous_version,
            version,
        )
        return SyncSummary(
            networks_total=len(catalog),
            candidates_total=urls_total,
            eligible_total=urls_total,
            verified_total=verified_total,
            primary_network_verified=len(catalog.get(PRIMARY_NETWORK_ID, [])),
            previous_version=previous_version,
            version=version,
            output_path=str(output_path),
        )
