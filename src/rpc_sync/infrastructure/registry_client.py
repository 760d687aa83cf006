import asyncio

import aiohttp
from aiohttp import ClientError

from src.config.logger_config import logger
from src.rpc_sync.domain.errors import FetchError


class RegistryDocumentClient:
    def __init__(
        self,
        source_url: str,
        timeout_seconds: float = 30.0,
        user_agent: str | None = None,
    ) -> None:
        self.source_url = source_url
        self.timeout_seconds = timeout_seconds
        self.user_agent = user_agent

    async def fetch_document(self, session: aiohttp.ClientSession) -> str:
        logger.info("Fetching registry document from {}", self.source_url)
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        headers = {"User-Agent": self.user_agent} if self.user_agent else None
        try:
            async with session.get(self.source_url, timeout=timeout, headers=headers) as resp:
                if resp.status != 200:
                    raise FetchError(
                        self.source_url,
                        f"Failed to fetch registry document: HTTP {resp.status}",
                        status=resp.status,
                    )
                body = await resp.text()
        except asyncio.TimeoutError as exc:
            raise FetchError(
                self.source_url,
                f"Timed out after {self.timeout_seconds}s fetching registry document",
            ) from exc
        except ClientError as exc:
            raise FetchError(
                self.source_url,
                f"Failed to fetch registry document: {type(exc).__name__}: {exc}",
            ) from exc

        logger.debug("Registry document size: {} chars", len(body))
        return body
