from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from staffdb.api.v1.router import api_router
from staffdb.core.config import settings
from staffdb.services.profile_store import ProfileStore, StoreConnectionError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    application.state.profile_store = None
    uri = settings.mongo_uri()
    if not uri:
        logger.warning("MongoDB credentials missing, profile store not initialized")
    else:
        try:
            application.state.profile_store = await ProfileStore.connect(
                uri,
                settings.MONGO_DATABASE,
                timeout_seconds=settings.MONGO_TIMEOUT_SECONDS,
            )
        except StoreConnectionError:
            logger.exception("Failed to initialize ProfileStore, continuing without DB")
    try:
        yield
    finally:
        if application.state.profile_store is not None:
            await application.state.profile_store.close()
            application.state.profile_store = None


app = FastAPI(
    title="staffdb API",
    description="Employee profiles across Employee, Department, Developer and Tester collections",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

app.include_router(api_router)


@app.get("/")
async def root():
    return {"message": "staffdb API"}
