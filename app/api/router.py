"""API router factory with core endpoints."""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from app.api.subjects import router as subjects_router
from app.exceptions import DatabaseConnectionError

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


def create_api_router() -> APIRouter:
    """Create router with all API endpoints.

    All routes are mounted under the /api prefix.

    Returns:
        APIRouter with subject endpoints and health checks.
    """
    router = APIRouter(prefix=API_PREFIX)

    @router.get("/health", tags=["Health"], status_code=status.HTTP_200_OK)
    async def health_check() -> dict:
        """Health check endpoint - basic application health.

        Returns:
            Health status response.
        """
        return {"status": "healthy", "service": "subjects-api"}

    @router.get(
        "/health/db",
        tags=["Health"],
        status_code=status.HTTP_200_OK,
        response_model=None,
    )
    async def health_check_db(request: Request) -> JSONResponse:
        """Deep health check - includes database connectivity check.

        Returns:
            Health status with database connectivity information.
        """
        try:
            await request.app.state.mongo.verify_connection()
        except DatabaseConnectionError as e:
            logger.error(f"Database health check failed: {e}")
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={
                    "status": "unhealthy",
                    "database": "disconnected",
                    "error": str(e),
                },
            )
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={"status": "healthy", "database": "connected"},
        )

    router.include_router(subjects_router)

    return router
