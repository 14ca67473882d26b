"""Shared HTTP plumbing for quote provider clients"""

import asyncio
import logging
from typing import Any, Dict, Optional

import aiohttp

from portfolio_base import PriceClient, PriceHistory, PriceSourceAPIError, PriceSourceConnectionError


class HttpPriceClient(PriceClient):
    """PriceClient over aiohttp with a shared session and one in-flight request per ISIN"""

    def __init__(self, timeout_seconds: float = 30.0, session: Optional[aiohttp.ClientSession] = None,
                 logger: Optional[logging.Logger] = None):
        self.timeout_seconds = timeout_seconds
        self.logger = logger or logging.getLogger(__name__)
        self._session = session
        self._owns_session = session is None
        self._pending: Dict[str, asyncio.Task] = {}

    async def get_price_history(self, isin: str) -> PriceHistory:
        """Concurrent calls for the same ISIN share a single request"""
        task = self._pending.get(isin)
        if task is None:
            task = asyncio.ensure_future(self._fetch_price_history(isin))
            self._pending[isin] = task
            task.add_done_callback(lambda done: self._forget(isin, done))
        return await asyncio.shield(task)

    def _forget(self, isin: str, task: asyncio.Task):
        if self._pending.get(isin) is task:
            del self._pending[isin]

    async def _fetch_price_history(self, isin: str) -> PriceHistory:
        url = self.build_url(isin)
        self.logger.debug(f"Retrieving {self.data_source} prices for {isin} from {url}")
        payload = await self._get_json(url, isin)
        history = self.parse_payload(isin, payload)
        self.logger.info(f"Retrieved {len(history.history)} {self.data_source} prices for {isin}, last {history.price}")
        return history

    async def _get_json(self, url: str, isin: str) -> Any:
        session = await self._get_session()
        try:
            async with session.get(
                url,
                headers=self.headers(),
                timeout=aiohttp.ClientTimeout(total=self.timeout_seconds)
            ) as response:
                if response.status != 200:
                    self.logger.error(f"Failed to fetch prices for ISIN {isin}. Status code: {response.status}")
                    raise PriceSourceAPIError(
                        f"Failed to fetch prices for ISIN {isin}. Status code: {response.status}"
                    )
                return await response.json(content_type=None)
        except asyncio.TimeoutError as e:
            self.logger.error(f"Timed out fetching prices for ISIN {isin} after {self.timeout_seconds}s")
            raise PriceSourceConnectionError(f"Timed out fetching prices for ISIN {isin}") from e
        except aiohttp.ClientError as e:
            self.logger.error(f"HTTP error fetching prices for ISIN {isin}: {e}")
            raise PriceSourceConnectionError(f"HTTP error fetching prices for ISIN {isin}: {e}") from e
        except ValueError as e:
            self.logger.error(f"Invalid JSON response for ISIN {isin}: {e}")
            raise PriceSourceAPIError(f"Invalid JSON response for ISIN {isin}: {e}") from e

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self):
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    def headers(self) -> Dict[str, str]:
        return {'accept': 'application/json, text/plain, */*'}

    def build_url(self, isin: str) -> str:
        raise NotImplementedError

    def parse_payload(self, isin: str, payload: Any) -> PriceHistory:
        raise NotImplementedError
