from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.templating import Jinja2Templates

from chgateway.core.exceptions import GatewayError
from chgateway.core.gateway import QueryGateway, get_gateway

TEMPLATES_DIR = Path(__file__).resolve().parents[2] / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["Records"])

gateway_dep = Annotated[QueryGateway, Depends(get_gateway)]


@router.get("/", response_class=HTMLResponse)
async def list_records(request: Request, gateway: gateway_dep, sort: str = ""):
    """Render the records table ordered by id; `sort` goes into ORDER BY as-is."""
    try:
        records = await gateway.fetch(sort)
    except GatewayError as error:
        # Raw error text, no structured body
        return PlainTextResponse(
            str(error), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    return templates.TemplateResponse(request, "index.html", {"records": records})
