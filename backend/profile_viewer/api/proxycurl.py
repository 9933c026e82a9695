from typing import Any, Dict, Mapping, Optional

import httpx

from ..config import ProxycurlConfig
from ..errors import FetchException, ParseException
from ..logging_config import get_logger

logger = get_logger(__name__)


def build_query_params(url: str, params: Mapping[str, str]) -> Dict[str, str]:
    """
    Builds the query string parameters for a profile lookup.
    `url` always comes first; a `url` key in `params` is ignored.
    """
    query = {"url": url}
    for key, value in params.items():
        if key == "url":
            continue
        query[key] = value
    return query


class UpstreamResponse:
    def __init__(self, status_code: int, data: Any):
        self.status_code = status_code
        self.data = data

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class ProxycurlClient:
    """Forwards a single profile lookup to the Proxycurl API."""

    def __init__(
        self,
        config: ProxycurlConfig,
        api_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.api_key = api_key
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        self._client = httpx.AsyncClient(
            timeout=self.config.timeout_seconds, transport=self._transport
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._client:
            await self._client.aclose()
            self._client = None

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key or ''}"}

    async def fetch_profile(self, url: str) -> UpstreamResponse:
        """
        Fetches the profile payload for a LinkedIn profile URL.
        The upstream status code is kept as-is, errors included.

        Raises:
            FetchException: the request could not be completed
            ParseException: the upstream body is not JSON
        """
        if self._client is None:
            raise RuntimeError("ProxycurlClient must be used as an async context manager")

        query = build_query_params(url, self.config.params)
        logger.info(f"Fetching profile for {url}")

        try:
            response = await self._client.get(
                self.config.endpoint, params=query, headers=self._headers()
            )
        except httpx.TimeoutException as e:
            logger.error(f"Profile API timed out for {url}: {e!r}")
            raise FetchException(
                "Profile API request timed out", details={"url": url}
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Profile API request failed for {url}: {e!r}")
            raise FetchException(
                f"Profile API request failed: {e}", details={"url": url}
            ) from e

        try:
            data = response.json()
        except ValueError as e:
            logger.error(
                f"Profile API returned a non-JSON body (status {response.status_code})"
            )
            raise ParseException(
                "Profile API returned a non-JSON response",
                details={"status_code": response.status_code},
            ) from e

        logger.info(f"Profile API responded with status {response.status_code}")
        logger.debug(f"Profile API response: {data}")
        return UpstreamResponse(response.status_code, data)
