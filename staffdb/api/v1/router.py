from fastapi import APIRouter

from staffdb.api.v1.endpoints import employees, health, profiles

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health.router)
api_router.include_router(profiles.router)
api_router.include_router(employees.router)
