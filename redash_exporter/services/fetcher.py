from __future__ import annotations

import logging
from typing import Optional

import httpx

from ..errors import NetworkError, ReadError

logger = logging.getLogger(__name__)

STATUS_PATH = "/status.json"
TASKS_PATH = "/api/admin/queries/tasks"


class StatusFetcher:
    """Issues authenticated GET requests against one Redash instance.

    The api key is appended to the URL as a query parameter, so neither the
    URL nor the request object is ever included in a log line or an error
    message produced here.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout_seconds: Optional[float] = 5.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url
        self._api_key = api_key
        self._client = client or httpx.AsyncClient(timeout=timeout_seconds)

    def _url(self, path: str) -> str:
        return self.base_url + path + "?api_key=" + self._api_key

    async def fetch(self, path: str) -> bytes:
        try:
            request = self._client.build_request("GET", self._url(path))
            response = await self._client.send(request, stream=True)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise NetworkError(path, _describe(exc)) from None

        try:
            body = await response.aread()
        except httpx.HTTPError as exc:
            raise ReadError(path, _describe(exc)) from None
        finally:
            await response.aclose()

        if not response.is_success:
            # Redash answers a bad api key with an error page; the decoder
            # reports it, this only adds the status code to the log.
            logger.warning("GET %s returned HTTP %s", path, response.status_code)
        return body

    async def aclose(self) -> None:
        await self._client.aclose()


def _describe(exc: Exception) -> str:
    # httpx messages for URL errors can echo the URL back, query included.
    if isinstance(exc, httpx.InvalidURL):
        return "invalid Redash URL"
    return f"{type(exc).__name__}: {exc}" if str(exc) else type(exc).__name__
