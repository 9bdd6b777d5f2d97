from __future__ import annotations

from fastapi import HTTPException, Request, status

from staffdb.services.profile_store import ProfileStore


def get_profile_store(request: Request) -> ProfileStore:
    store: ProfileStore | None = getattr(request.app.state, "profile_store", None)
    if store is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Profile store is not configured",
        )
    return store
