from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pymongo.errors import PyMongoError

from staffdb.core.dependencies import get_profile_store
from staffdb.models.profile import EmployeeRecord
from staffdb.services.profile_store import ProfileStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("", response_model=list[EmployeeRecord])
async def list_employees(store: ProfileStore = Depends(get_profile_store)):  # noqa: B008
    try:
        return await store.list_employees()
    except PyMongoError as err:
        logger.exception("Failed to list employees")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve employees",
        ) from err


@router.post("", status_code=status.HTTP_201_CREATED)
async def insert_employees(
    employees: list[EmployeeRecord],
    store: ProfileStore = Depends(get_profile_store),  # noqa: B008
):
    if not employees:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="At least one employee is required",
        )
    try:
        inserted_ids = await store.insert_employees(employees)
    except PyMongoError as err:
        logger.exception("Failed to insert %d employees", len(employees))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to insert employees",
        ) from err

    return {"inserted_ids": inserted_ids}
