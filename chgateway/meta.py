from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from chgateway.core.config import settings

# Separate app on its own port; shares nothing with the records gateway
meta_app = FastAPI(title="ClickHouse Gateway Metadata")


@meta_app.get("/meta-data", response_class=PlainTextResponse)
async def meta_data():
    return settings.META_DATA_TEXT
