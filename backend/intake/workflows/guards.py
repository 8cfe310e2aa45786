# /intake/workflows/guards.py

from dataclasses import dataclass
from typing import Optional, Union

import structlog
from starlette.requests import Request

from intake.config.settings import settings
from intake.errors.app_error import AppError
from intake.errors.error_codes import ErrorCodes
from intake.models.flow import StateName
from intake.services.flow_store import FlowSession
from intake.utils.i18n_utils import get_language
from intake.utils.metrics import guard_redirects_counter
from intake.utils.route_utils import generate_path, get_route_by_id
from intake.workflows.persistence import FlowActor, load_actor

# Every workflow page loads its flow through load_context_or_redirect(). A missing
# tab id or an unknown flow is an expected condition (stale bookmark, expired
# session, typed URL) and always sends the user back to a valid entry point.

log = structlog.get_logger(__name__)

DEFAULT_REDIRECT_ROUTE_ID = settings.default_redirect_route_id


@dataclass(frozen=True)
class LoadedFlowContext:
    actor: FlowActor
    flow_id: str


@dataclass(frozen=True)
class RedirectTo:
    location: str
    reason: str


def i18n_redirect_location(route_id: str, request: Request, params: Optional[dict] = None) -> str:
    """Path of route_id in the request's language."""
    language = get_language(request)

    if language is None:
        raise AppError("No language found in request", ErrorCodes.NO_LANGUAGE_FOUND)

    route = get_route_by_id(route_id)
    return generate_path(route["paths"][language], params)


async def load_context_or_redirect(
    session: FlowSession,
    request: Request,
    target_state: Optional[StateName] = None,
    redirect_route_id: str = DEFAULT_REDIRECT_ROUTE_ID,
) -> Union[LoadedFlowContext, RedirectTo]:
    """
    Loads the flow named by the request's tab id, or tells the caller where to go instead.

    Returns:
        LoadedFlowContext when the tab id is present and the session holds that flow;
        RedirectTo (pointing at redirect_route_id) in every other case
    """
    flow_id = request.query_params.get(settings.flow_id_query_param)

    if not flow_id:
        log.debug("Could not find tab id in request; redirecting", redirect_route_id=redirect_route_id)
        guard_redirects_counter.labels(reason="missing_flow_id").inc()
        return RedirectTo(i18n_redirect_location(redirect_route_id, request), "missing_flow_id")

    actor = await load_actor(session, flow_id, target_state)

    if actor is None:
        log.warning("Could not find a machine snapshot in session; redirecting", flow_id=flow_id, redirect_route_id=redirect_route_id)
        guard_redirects_counter.labels(reason="missing_flow").inc()
        return RedirectTo(i18n_redirect_location(redirect_route_id, request), "missing_flow")

    return LoadedFlowContext(actor=actor, flow_id=flow_id)
