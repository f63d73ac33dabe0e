from fastapi import APIRouter
from chgateway.api.endpoints import records

api_router = APIRouter()

# Combine all sub-routers into one
api_router.include_router(records.router)
