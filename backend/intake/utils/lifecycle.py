# /intake/utils/lifecycle.py

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

from intake.errors.app_error import AppError
from intake.errors.error_codes import ErrorCodes
from intake.services.flow_store import flow_store
from intake.utils.logging import setup_logging
from intake.workflows.validator import validate_definition

# This file manages the application's lifespan: logging and workflow checks on
# startup, closing the session store connection on shutdown.

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    setup_logging()

    logger.info("Application starting up...")

    result = validate_definition()
    if not result["is_valid"]:
        logger.critical(f"Workflow definition is invalid: {result['message']}")
        raise AppError(result["message"], ErrorCodes.INVALID_DEFINITION)

    logger.info("Application startup complete. Ready to accept requests.")

    yield  # Application is now running

    logger.info("Application shutting down...")
    await flow_store.close()
