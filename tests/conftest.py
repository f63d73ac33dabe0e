from typing import Any, Callable, Dict, List

import httpx
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from chgateway.main import app
from chgateway.core.store import StoreClient, get_store

STORE_URL = "http://127.0.0.1:8123/"


def clickhouse_json(rows: List[Dict[str, Any]]) -> httpx.Response:
    """Build a response shaped like ClickHouse FORMAT JSON output."""
    return httpx.Response(
        200,
        json={
            "meta": [{"name": "id", "type": "Int64"}, {"name": "name", "type": "String"}],
            "data": rows,
            "rows": len(rows),
            "statistics": {"elapsed": 0.0001, "rows_read": len(rows), "bytes_read": 100},
        },
    )


class FakeClickHouse:
    """Stands in for the ClickHouse HTTP interface and remembers every command."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.commands: List[str] = []
        self.responder: Callable[[str], httpx.Response] = lambda command: clickhouse_json([])

    def handler(self, request: httpx.Request) -> httpx.Response:
        command = request.content.decode("utf-8")
        self.requests.append(request)
        self.commands.append(command)
        return self.responder(command)

    def serve_rows(self, rows: List[Dict[str, Any]]):
        self.responder = lambda command: clickhouse_json(rows)

    def fail_with(self, status_code: int, text: str):
        self.responder = lambda command: httpx.Response(status_code, text=text)


@pytest.fixture
def clickhouse():
    return FakeClickHouse()


# Store client wired to the fake server, closed after each test
@pytest_asyncio.fixture(scope="function")
async def store(clickhouse: FakeClickHouse):
    client = StoreClient(STORE_URL, transport=httpx.MockTransport(clickhouse.handler))
    yield client
    await client.aclose()


# Client
@pytest_asyncio.fixture(scope="function")
async def client(store: StoreClient):
    app.dependency_overrides[get_store] = lambda: store

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


# Rows as ClickHouse returns them: Int64 quoted, other columns plain strings
@pytest.fixture
def seed_rows():
    return [
        {
            "id": "1",
            "name": "gacj",
            "id_card": "33333333",
            "phone": "15534212521",
            "affiliation": "1223321",
            "additional_info": "hacker",
        },
        {
            "id": "2",
            "name": "hacker",
            "id_card": "3333",
            "phone": "15534212521",
            "affiliation": "15534212521",
            "additional_info": "15534212521",
        },
    ]
