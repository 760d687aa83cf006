import asyncio
import json
from time import perf_counter
from typing import Any, Sequence

import aiohttp
from aiohttp import ClientError

from src.config.logger_config import logger
from src.rpc_sync.domain.errors import ProbeFailure
from src.rpc_sync.domain.models import ProbeResult

PROBE_PAYLOAD: dict[str, Any] = {
    "jsonrpc": "2.0",
    "method": "eth_blockNumber",
    "params": [],
    "id": 1,
}
PROBE_HEADERS = {"Content-Type": "application/json"}
HEX_PREFIX = "0x"


def parse_block_number(data: Any) -> str:
    if not isinstance(data, dict):
        raise ProbeFailure(f"Unexpected response body type {type(data).__name__}")
    result = data.get("result")
    if not isinstance(result, str):
        error = data.get("error")
        if error is not None:
            raise ProbeFailure(f"RPC error: {error}")
        raise ProbeFailure("Response has no string 'result'")
    if not result.startswith(HEX_PREFIX):
        raise ProbeFailure(f"Result is not hex: {result[:32]!r}")
    return result


class RpcEndpointProber:
    def __init__(self, timeout_seconds: float = 5.0, concurrency: int = 10) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self.timeout_seconds = timeout_seconds
        self.concurrency = concurrency
        self._semaphore = asyncio.Semaphore(concurrency)

    async def probe(self, session: aiohttp.ClientSession, url: str) -> ProbeResult:
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        async with self._semaphore:
            started = perf_counter()
            try:
                async with session.post(
                    url,
                    json=PROBE_PAYLOAD,
                    headers=PROBE_HEADERS,
                    timeout=timeout,
                ) as resp:
                    if not 200 <= resp.status < 300:
                        raise ProbeFailure(f"HTTP {resp.status}")
                    try:
                        data = await resp.json(content_type=None)
                    except (json.JSONDecodeError, ValueError) as exc:
                        raise ProbeFailure(f"Malformed JSON body: {exc}") from exc
                block_number = parse_block_number(data)
            except ProbeFailure as exc:
                return self._failed(url, str(exc), started)
            except asyncio.TimeoutError:
                return self._failed(url, f"Timeout after {self.timeout_seconds}s", started)
            except ClientError as exc:
                return self._failed(url, f"{type(exc).__name__}: {exc}", started)
            except Exception as exc:
                logger.debug("Unexpected probe error for {}: {!r}", url, exc)
                return self._failed(url, f"{type(exc).__name__}: {exc}", started)

        elapsed_ms = int((perf_counter() - started) * 1000)
        logger.debug("Probe ok: {} block={} ({} ms)", url, block_number, elapsed_ms)
        return ProbeResult(url=url, ok=True, block_number=block_number, elapsed_ms=elapsed_ms)

    async def probe_all(self, session: aiohttp.ClientSession, urls: Sequence[str]) -> list[ProbeResult]:
        if not urls:
            return []
        # gather keeps input order regardless of completion order
        return list(await asyncio.gather(*(self.probe(session, url) for url in urls)))

    async def verify(self, session: aiohttp.ClientSession, urls: Sequence[str]) -> list[str]:
        results = await self.probe_all(session, urls)
        return [result.url for result in results if result.ok]

    @staticmethod
    def _failed(url: str, error: str, started: float) -> ProbeResult:
        elapsed_ms = int((perf_counter() - started) * 1000)
        logger.debug("Probe failed: {} ({})", url, error)
        return ProbeResult(url=url, ok=False, error=error, elapsed_ms=elapsed_ms)
