import logging
import re
from typing import Annotated, List

from fastapi import Depends
from pydantic import ValidationError

from chgateway.core.config import settings
from chgateway.core.exceptions import EnvelopeDecodeError, SortTokenRejected
from chgateway.core.schemas import Record, StoreEnvelope
from chgateway.core.store import StoreClient, get_store

logger = logging.getLogger(__name__)

# Catches "select * from" smuggled into the ORDER BY clause.
# NOTE: this is a tripwire, not an injection defense; the token is still
# interpolated verbatim when it does not match.
FORBIDDEN_SORT_PATTERN = re.compile(r"select\s+\*+\s+from", re.IGNORECASE)


def validate_sort_token(sort_token: str) -> str:
    if FORBIDDEN_SORT_PATTERN.search(sort_token):
        raise SortTokenRejected(sort_token)
    return sort_token


def build_query(table: str, sort_token: str, response_format: str = "JSON") -> str:
    return f"SELECT * FROM {table} ORDER BY id {sort_token} FORMAT {response_format}"


def parse_envelope(body: bytes) -> StoreEnvelope:
    try:
        return StoreEnvelope.model_validate_json(body)
    except ValidationError as error:
        raise EnvelopeDecodeError(f"could not decode store response: {error}") from error


class QueryGateway:
    def __init__(
        self,
        store: StoreClient,
        table: str = settings.TABLE_NAME,
        response_format: str = settings.RESPONSE_FORMAT,
    ):
        self.store = store
        self.table = table
        self.response_format = response_format

    async def fetch(self, sort_token: str = "") -> List[Record]:
        """
        Run the ordered SELECT and return the decoded records.

        Rows come back in the order the store sent them.
        """
        validate_sort_token(sort_token)
        query = build_query(self.table, sort_token, self.response_format)

        body = await self.store.execute(query, action="fetch records")
        logger.debug("Response Body: %s", body.decode("utf-8", errors="replace"))

        return parse_envelope(body).records()


def get_gateway(store: Annotated[StoreClient, Depends(get_store)]) -> QueryGateway:
    return QueryGateway(store)
