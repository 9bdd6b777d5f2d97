from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pymongo.errors import PyMongoError

from staffdb.core.dependencies import get_profile_store
from staffdb.models.profile import (
    EmployeeProfile,
    ProfileCreate,
    ProfileUpdate,
    ProfileUpdateResult,
    ProfileWriteResult,
)
from staffdb.services.profile_store import ProfileStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("", response_model=list[EmployeeProfile])
async def list_profiles(store: ProfileStore = Depends(get_profile_store)):  # noqa: B008
    try:
        return [profile async for profile in store.read_profiles_joined()]
    except PyMongoError as err:
        logger.exception("Failed to read profiles")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve profiles",
        ) from err


@router.post("", response_model=ProfileWriteResult, status_code=status.HTTP_201_CREATED)
async def create_profile(
    body: ProfileCreate,
    store: ProfileStore = Depends(get_profile_store),  # noqa: B008
):
    result = await store.create_profile(*body.records())
    if not result.ok:
        logger.warning("Profile %s created with failures in %s", body.emp_id, ", ".join(result.failed))
    return result


@router.put("/{emp_id}", response_model=ProfileUpdateResult)
async def update_profile(
    emp_id: int,
    body: ProfileUpdate,
    store: ProfileStore = Depends(get_profile_store),  # noqa: B008
):
    try:
        return await store.update_profile(emp_id, body.name, body.salary)
    except PyMongoError as err:
        logger.exception("Failed to update employee %s", emp_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update employee",
        ) from err


@router.delete("/{emp_id}", response_model=ProfileWriteResult)
async def delete_profile(
    emp_id: int,
    store: ProfileStore = Depends(get_profile_store),  # noqa: B008
):
    result = await store.delete_profile(emp_id)
    if not result.ok:
        logger.warning("Profile %s deleted with failures in %s", emp_id, ", ".join(result.failed))
    return result
