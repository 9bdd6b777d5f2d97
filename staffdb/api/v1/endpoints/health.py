from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from staffdb.core.config import settings
from staffdb.core.queries import PROFILE_COLLECTIONS
from staffdb.services.profile_store import ProfileStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


def _store(request: Request) -> ProfileStore | None:
    return getattr(request.app.state, "profile_store", None)


@router.get("")
async def health_check(request: Request):
    store = _store(request)
    if store is None:
        mongodb = "not_configured"
    elif await store.check_connection():
        mongodb = "ok"
    else:
        mongodb = "error"

    return {
        "status": "degraded" if mongodb == "error" else "healthy",
        "version": settings.APP_VERSION,
        "services": {"mongodb": mongodb},
        "database": settings.MONGO_DATABASE,
        "collections": list(PROFILE_COLLECTIONS),
    }


@router.get("/ready")
async def readiness_probe(request: Request):
    if _store(request) is None:
        logger.debug("Readiness check: profile store not connected")
        return JSONResponse(status_code=503, content={"ready": False})
    return {"ready": True}
