from __future__ import annotations

import logging
from typing import Optional

import httpx

from ..errors import FetchError

log = logging.getLogger("chatkeeper.fetcher")


class ExternalFetcher:
    """Single-shot GET against a third-party endpoint. No retries."""

    def __init__(self, timeout: float = 0, client: Optional[httpx.AsyncClient] = None) -> None:
        if client is None:
            # 0 keeps httpx's own default timeout.
            client = httpx.AsyncClient(timeout=timeout) if timeout > 0 else httpx.AsyncClient()
        self._client = client

    async def fetch(self, url: str) -> str:
        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchError(url, f"HTTP {e.response.status_code} from {url}") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetchError(url, f"{type(e).__name__}: {e}" if str(e) else type(e).__name__) from e
        log.debug("Fetched %d bytes from %s", len(response.content), url)
        return response.text

    async def aclose(self) -> None:
        await self._client.aclose()
