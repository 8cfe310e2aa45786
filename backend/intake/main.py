# /intake/main.py

import os
import time
import uvicorn
import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from starlette.middleware.sessions import SessionMiddleware

from intake.config.settings import settings
from intake.errors.app_error import AppError
from intake.utils.lifecycle import lifespan
from intake.utils.metrics import response_time_histogram
from intake.routes import person_case, protected, public

log = structlog.get_logger(__name__)

# Initialize the FastAPI application
app = FastAPI(
    title="Person-case Intake",
    version="1.0.0",
    description="Multi-page, multi-tab intake workflow for in-person applications",
    lifespan=lifespan,
    openapi_url=f"/api/{settings.api_version}/openapi.json" if settings.environment != "production" else None,
    docs_url=f"/api/{settings.api_version}/docs" if settings.environment != "production" else None,
    redoc_url=None,
)

# --- Error Handling ---
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    log.error(
        "Application error",
        error_code=exc.error_code.value,
        correlation_id=exc.correlation_id,
        path=request.url.path,
        message=exc.msg,
    )
    return JSONResponse(exc.to_dict(), status_code=exc.status_code)

# --- Middleware ---
cors_origins = [origin.strip() for origin in settings.cors_allowed_origins.split(",") if origin.strip()]
if cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

if settings.environment != "test":
    allowed_hosts = [host.strip() for host in settings.allowed_hosts.split(",") if host.strip()]
    if allowed_hosts:
        app.add_middleware(TrustedHostMiddleware, allowed_hosts=allowed_hosts)

app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret_key,
    session_cookie=settings.session_cookie_name,
    max_age=settings.session_expires_seconds,
    same_site=settings.session_cookie_same_site,
    https_only=settings.session_cookie_secure,
)

@app.middleware("http")
async def performance_middleware(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response_time_histogram.labels(endpoint=request.url.path).observe(process_time)
    response.headers["X-Process-Time"] = str(process_time)
    return response

# --- API Routers ---
app.include_router(public.router)
app.include_router(protected.router)
app.include_router(person_case.router)

# --- Main Entry Point for Uvicorn (for local development) ---
if __name__ == "__main__":
    port = int(os.getenv("PORT", "8000"))
    host = os.getenv("HOST", "127.0.0.1")

    uvicorn.run(
        "intake.main:app",
        host=host,
        port=port,
        reload=True if settings.environment == "development" else False,
        workers=settings.workers if settings.environment == "production" else 1
    )
