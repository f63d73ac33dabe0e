import logging
from typing import Optional

import httpx

from chgateway.core.config import settings
from chgateway.core.exceptions import StoreProtocolError, StoreTransportError

logger = logging.getLogger(__name__)


class StoreClient:
    """
    Talks to ClickHouse over its HTTP interface.

    Every command is sent as the whole body of a single POST; the raw
    response body is returned untouched.
    """

    def __init__(self, url: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.url = url
        self._client = httpx.AsyncClient(transport=transport)

    async def execute(self, command: str, action: str = "execute command") -> bytes:
        try:
            response = await self._client.post(
                self.url,
                content=command.encode("utf-8"),
                headers={"Content-Type": "text/plain"},
            )
        except httpx.RequestError as error:
            raise StoreTransportError(
                f"request to store at {self.url} failed: {error!r}"
            ) from error

        if response.status_code != httpx.codes.OK:
            raise StoreProtocolError(response.status_code, response.text, action)

        return response.content

    async def aclose(self) -> None:
        await self._client.aclose()


# One client shared by every request, closed when the app shuts down
store_client = StoreClient(settings.CLICKHOUSE_URL)


# This is the "Bridge" that gives my routes access to ClickHouse
def get_store() -> StoreClient:
    return store_client
