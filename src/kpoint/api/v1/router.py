"""Primary API router definition."""

from fastapi import APIRouter

from . import accounts, admin, departments, transfers

api_router = APIRouter()

api_router.include_router(accounts.router)
api_router.include_router(transfers.router)
api_router.include_router(departments.router)
api_router.include_router(admin.router)


@api_router.get("/health", tags=["health"])
async def healthcheck() -> dict[str, str]:
    """Basic health probe endpoint."""
    return {"status": "ok"}
