"""Health check router."""

from fastapi import APIRouter
from datetime import datetime, timezone
from sqlalchemy import text

from nubian.config import APP_VERSION
from nubian.schemas.health import HealthResponse, ServiceStatus
from nubian.dependencies import CurrentPrincipalOptional, DbSession
from nubian.utils.logger import get_logger

router = APIRouter()
log = get_logger(__name__)


@router.get("/health", response_model=HealthResponse)
async def health_check(db: DbSession, principal: CurrentPrincipalOptional) -> HealthResponse:
    """
    Health check for the service and its database.

    A failing database degrades the status instead of failing the request.

    Returns:
        HealthResponse with status and service details
    """
    services = {}
    overall_status = "ok"

    try:
        await db.execute(text("SELECT 1"))
        services["database"] = ServiceStatus(status="healthy", message="Connected")
    except Exception as e:
        log.error("health check failed", service="database", error=str(e))
        services["database"] = ServiceStatus(status="unhealthy", message="Service unavailable")
        overall_status = "degraded"

    return HealthResponse(
        status=overall_status,
        version=APP_VERSION,
        authenticated=principal is not None,
        services=services,
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    )
