"""Root API router with health endpoints and module mounting."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from orders_api.api.dependencies import OrderStoreDep
from orders_api.core.store import StoreError
from orders_api.modules.orders import router as orders_router


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str


class ReadinessResponse(BaseModel):
    """Readiness check response schema."""

    status: str
    checks: dict[str, str]


# Create root API router
api_router = APIRouter()

# Health check endpoints (unversioned)
health_router = APIRouter(tags=["health"])


@health_router.get(
    "/health/live",
    response_model=HealthResponse,
    summary="Liveness check",
    description="Returns 200 if the process is running.",
)
async def liveness() -> HealthResponse:
    """Liveness check endpoint."""
    return HealthResponse(status="alive")


@health_router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    description="Checks store connectivity.",
)
async def readiness(store: OrderStoreDep) -> JSONResponse:
    """Readiness check endpoint."""
    checks: dict[str, str] = {}

    try:
        await store.ping()
        checks["store"] = "ok"
    except StoreError as e:
        checks["store"] = str(e)

    all_ok = all(v == "ok" for v in checks.values())

    return JSONResponse(
        status_code=status.HTTP_200_OK
        if all_ok
        else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "ready" if all_ok else "degraded",
            "checks": checks,
        },
    )


api_router.include_router(health_router)
api_router.include_router(orders_router)
