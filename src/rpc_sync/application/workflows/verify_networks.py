import asyncio
from typing import Mapping, Sequence

import aiohttp
from tqdm import tqdm

from src.config.logger_config import logger
from src.rpc_sync.application.ports import EndpointProberPort
from src.rpc_sync.domain.models import Catalog


async def verify_networks(
    prober: EndpointProberPort,
    session: aiohttp.ClientSession,
    eligible: Mapping[str, Sequence[str]],
    show_progress: bool = True,
) -> Catalog:
    verified_total = 0

    with tqdm(
        total=len(eligible),
        desc="Probing networks",
        unit=" network",
        leave=True,
        disable=not show_progress,
    ) as progress:

        async def _verify_network(network_id: str, urls: Sequence[str]) -> list[str]:
            nonlocal verified_total
            verified: list[str] = []
            if urls:
                try:
                    verified = await prober.verify(session, urls)
                except Exception as exc:
                    logger.exception(
                        "Probing failed for network {} with error type {}: {}",
                        network_id,
                        type(exc).__name__,
                        exc,
                    )
            verified_total += len(verified)
            progress.update(1)
            progress.set_postfix(verified=verified_total)
            logger.debug("Network {}: {}/{} endpoints verified", network_id, len(verified), len(urls))
            return verified

        results = await asyncio.gather(
            *(_verify_network(network_id, urls) for network_id, urls in eligible.items())
        )

    catalog: Catalog = dict(zip(eligible.keys(), results))
    logger.info("Probing complete: networks={}, verified_urls={}", len(catalog), verified_total)
    return catalog
