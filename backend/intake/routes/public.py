# /intake/routes/public.py

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import PlainTextResponse
from prometheus_client import generate_latest
from datetime import datetime

from intake.config.settings import settings
from intake.models.api import APIResponse
from intake.services.flow_store import RedisFlowStore, flow_store
from intake.utils.dependencies import verify_metrics_access

# This file defines public-facing endpoints that do not require a session,
# such as health checks and the main root endpoint. The /metrics endpoint is
# conditionally protected by an API key.

router = APIRouter()

@router.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": "Person-case intake workflow",
        "version": "1.0.0",
        "status": "operational",
        "environment": settings.environment
    }

@router.get("/health", summary="Basic Health Check")
async def health_check():
    """Basic health check for load balancers."""
    return {"status": "healthy", "timestamp": datetime.utcnow()}

@router.get("/health/ready", summary="Readiness Probe")
async def readiness_check():
    """Readiness probe; checks the session store when it is remote."""
    if isinstance(flow_store, RedisFlowStore):
        try:
            await flow_store.ping()
        except Exception as e:
            raise HTTPException(status_code=503, detail=f"Service not ready: {e}")
    return {"status": "ready"}

@router.get("/health/live", summary="Liveness Probe")
async def liveness_check():
    """Liveness probe."""
    return {"status": "alive"}

@router.get("/health/detailed", response_model=APIResponse, tags=["Admin"])
async def comprehensive_health_check(_: bool = Depends(verify_metrics_access)):
    """Detailed health status of the session store."""
    health_status = {"status": "healthy", "services": {"session_store": settings.session_type}}

    if isinstance(flow_store, RedisFlowStore):
        try:
            await flow_store.ping()
            health_status["services"]["cache"] = "connected"
        except Exception:
            health_status["services"]["cache"] = "error"
            health_status["status"] = "degraded"

    return APIResponse(
        success=True,
        message="Comprehensive health status retrieved.",
        data=health_status,
        version=settings.api_version
    )


@router.get("/metrics", tags=["Monitoring"])
async def metrics(request: Request, _: bool = Depends(verify_metrics_access)):
    """Secured Prometheus metrics endpoint."""
    return PlainTextResponse(generate_latest(), media_type="text/plain")
