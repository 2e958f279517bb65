import asyncio

import aiohttp
from aiohttp import (
    ClientConnectorError,
    ClientPayloadError,
    ClientResponseError,
    ServerDisconnectedError,
)

from src.config.logger_config import logger
from src.release_cleanup.domain.errors import ConsoleUnavailable, DeletionFailed
from src.release_cleanup.domain.extractor import snapshot_from_html
from src.release_cleanup.domain.models import DeletionResult, PageSnapshot
from src.release_cleanup.domain.rules import DEFAULT_REGISTRY_BASE_URL, build_history_url


class PublicHistorySource:
    """Read-only view of a project's public release history page.

    Needs no login and no browser, so it only serves dry runs.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_REGISTRY_BASE_URL,
        session: aiohttp.ClientSession | None = None,
        retries: int = 3,
    ) -> None:
        self.base_url = base_url
        self.retries = retries
        self._session = session
        self._owns_session = session is None
        self._html: str | None = None

    async def __aenter__(self) -> "PublicHistorySource":
        if self._session is None:
            connector = aiohttp.TCPConnector(limit=0, limit_per_host=10, ttl_dns_cache=300)
            self._session = aiohttp.ClientSession(
                connector=connector,
                headers={"User-Agent": "release-cleanup/1.0 (+https://pypi.org)"},
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def open_manage_page(self, package_name: str) -> str:
        url = build_history_url(package_name, self.base_url)
        logger.info("Fetching public release history: {}", url)
        self._html = await self._fetch(url)
        return url

    async def log_in_if_required(self, username: str, password: str) -> bool:
        return False

    async def verify_manage_page(self) -> bool:
        return self._html is not None and "release history" in self._html.lower()

    async def get_page_text(self) -> PageSnapshot:
        if self._html is None:
            raise ConsoleUnavailable("Release history page has not been fetched")
        return snapshot_from_html(self._html)

    async def trigger_deletion(self, version: str) -> DeletionResult:
        raise DeletionFailed(
            f"Cannot delete {version}: the public history page is read-only, use PAGE_SOURCE=browser"
        )

    async def _fetch(self, url: str) -> str:
        if self._session is None:
            raise ConsoleUnavailable("HTTP session is not started")
        timeout = aiohttp.ClientTimeout(total=45, connect=10)
        for attempt in range(1, self.retries + 1):
            try:
                async with self._session.get(url, timeout=timeout) as resp:
                    if resp.status >= 500 or resp.status == 429:
                        logger.warning("Server error {}. Attempt {}/{}", resp.status, attempt, self.retries)
                        raise ClientResponseError(
                            resp.request_info,
                            resp.history,
                            status=resp.status,
                            message="Server Error",
                        )
                    if resp.status == 404:
                        raise ConsoleUnavailable(f"Project page not found: {url}")
                    if resp.status != 200:
                        raise ConsoleUnavailable(f"HTTP {resp.status} for {url}")
                    return await resp.text()
            except (
                ClientResponseError,
                ClientConnectorError,
                ServerDisconnectedError,
                asyncio.TimeoutError,
                ClientPayloadError,
            ) as exc:
                if attempt == self.retries:
                    logger.error("Failed after {} attempts. Error: {}", self.retries, exc)
                    raise ConsoleUnavailable(f"Failed to fetch {url}: {exc}") from exc
                wait_time = 2**attempt
                logger.warning("Connection unstable ({}). Retrying in {}s...", exc, wait_time)
                await asyncio.sleep(wait_time)
        raise ConsoleUnavailable(f"Failed to fetch {url}")
