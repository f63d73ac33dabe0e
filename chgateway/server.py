import asyncio
import logging
import sys
from typing import Tuple

import uvicorn

from chgateway.core.config import settings
from chgateway.main import app
from chgateway.meta import meta_app

logger = logging.getLogger(__name__)


def build_servers() -> Tuple[uvicorn.Server, uvicorn.Server]:
    log_level = settings.LOG_LEVEL.lower()
    gateway = uvicorn.Server(
        uvicorn.Config(
            app, host=settings.HOST, port=settings.PORT, lifespan="on", log_level=log_level
        )
    )
    meta = uvicorn.Server(
        uvicorn.Config(
            meta_app,
            host=settings.HOST,
            port=settings.META_PORT,
            lifespan="off",
            log_level=log_level,
        )
    )
    return gateway, meta


async def serve(gateway: uvicorn.Server, meta: uvicorn.Server) -> bool:
    """
    Run both servers until either one stops.

    The metadata server only starts once the gateway has finished its
    lifespan startup (table provisioning). Returns False if the gateway
    never started.
    """
    gateway_task = asyncio.create_task(gateway.serve())

    while not gateway.started and not gateway_task.done():
        await asyncio.sleep(0.1)

    if not gateway.started:
        await gateway_task
        return False

    meta_task = asyncio.create_task(meta.serve())
    await asyncio.wait({gateway_task, meta_task}, return_when=asyncio.FIRST_COMPLETED)

    # When one server stops, stop the other too
    gateway.should_exit = True
    meta.should_exit = True
    await asyncio.gather(gateway_task, meta_task)
    return True


def main() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    if not asyncio.run(serve(*build_servers())):
        logger.error("Failed to start: table provisioning did not complete")
        sys.exit(1)


if __name__ == "__main__":
    main()
