import logging
from typing import Optional

from chgateway.core.config import settings
from chgateway.core.exceptions import ProvisioningError, StoreError, StoreProtocolError
from chgateway.core.models import (
    create_table_statement,
    describe_statement,
    insert_statement,
)
from chgateway.core.store import StoreClient

logger = logging.getLogger(__name__)


async def table_exists(store: StoreClient, table: str) -> bool:
    # Any non-200 answer to DESC counts as "missing", not only UNKNOWN_TABLE
    try:
        await store.execute(describe_statement(table), action=f"describe {table}")
    except StoreProtocolError as error:
        logger.info(f"Table {table} not found (status {error.status_code})")
        return False
    return True


async def ensure_ready(store: StoreClient, table: Optional[str] = None) -> bool:
    """
    Create the records table and its seed rows unless it already exists.

    Returns True when the table was created by this call.
    Raises ProvisioningError on any store failure.
    """
    table = table or settings.qualified_table

    try:
        if await table_exists(store, table):
            logger.info(f"Table {table} already exists")
            return False

        await store.execute(create_table_statement(table), action=f"create {table}")
        await store.execute(insert_statement(table), action="insert mock data")
    except StoreError as error:
        raise ProvisioningError(f"failed to create table and insert data: {error}") from error

    logger.info(f"Created {table} and inserted seed rows")
    return True
