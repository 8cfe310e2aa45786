# /intake/utils/dependencies.py

import secrets
import uuid
import structlog
from fastapi import Request, HTTPException

from intake.config.settings import settings
from intake.services.flow_store import FlowSession, flow_store

log = structlog.get_logger(__name__)

SESSION_ID_KEY = "sid"


async def get_flow_session(request: Request) -> FlowSession:
    """
    Binds the caller's HTTP session to the flow registry. The signed session
    cookie only carries an opaque session id; snapshots stay server-side.
    """
    session_id = request.session.get(SESSION_ID_KEY)
    if not session_id:
        session_id = uuid.uuid4().hex
        request.session[SESSION_ID_KEY] = session_id
        log.debug("Started new session", session_id=session_id)
    structlog.contextvars.bind_contextvars(session_id=session_id)
    return FlowSession(session_id, flow_store)


async def verify_metrics_access(request: Request):
    if settings.api_key:
        provided_key = request.headers.get("X-API-KEY")
        if not (provided_key and secrets.compare_digest(provided_key, settings.api_key)):
            raise HTTPException(status_code=403, detail="Invalid or missing API key")
