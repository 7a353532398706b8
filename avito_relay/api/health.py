from __future__ import annotations

from fastapi import APIRouter, Request
from sqlalchemy import text

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(request: Request) -> dict:
    # Basic DB connectivity check
    async with request.app.state.session_maker() as session:
        await session.execute(text("SELECT 1"))
    return {"status": "ok"}
