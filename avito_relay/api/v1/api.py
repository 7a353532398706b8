from __future__ import annotations

from fastapi import APIRouter

from avito_relay.api.v1.routers import avito

api_router = APIRouter(prefix="/v1")
api_router.include_router(avito.router)
