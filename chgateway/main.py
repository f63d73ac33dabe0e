import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from chgateway.core import provision
from chgateway.core.exceptions import ProvisioningError
from chgateway.core.store import store_client
from chgateway.api.router import api_router

logger = logging.getLogger(__name__)


# Provision the table before serving, close the store client once everything is done
@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        await provision.ensure_ready(store_client)
    except ProvisioningError as error:
        # Refuse to start: uvicorn aborts when the lifespan startup raises
        logger.error(f"Provisioning error during startup: {error}")
        raise

    yield
    await store_client.aclose()


app = FastAPI(title="ClickHouse Records Gateway", lifespan=lifespan)

# Include the master router containing all our endpoints
app.include_router(api_router)
