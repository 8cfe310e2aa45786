# /intake/routes/person_case.py

import uuid
import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from intake.config.routes import PERSON_CASE_START_ROUTE_ID, PROTECTED_HOME_ROUTE_ID
from intake.models.api import PageActionRequest, PageResponse
from intake.models.flow import StateName
from intake.services.flow_store import FlowSession
from intake.utils.dependencies import get_flow_session
from intake.utils.route_utils import get_route_by_id
from intake.workflows.actions import handle_page_action
from intake.workflows.definitions import SECTION_BY_STATE, WORKFLOW
from intake.workflows.guards import RedirectTo, i18n_redirect_location, load_context_or_redirect
from intake.workflows.locations import resolve_location
from intake.workflows.persistence import create_actor
from intake.workflows.sections import SECTION_ADAPTERS

# This file registers the person-case pages. Every workflow state gets a GET
# (page data) and a POST (page action) endpoint on each of its language paths.
# Both load the flow positioned on the page's own state, so a page reached by
# "back", a bookmark or a review "edit" link always acts on the right section.

log = structlog.get_logger(__name__)

router = APIRouter(tags=["Person Case"])


async def start_flow(request: Request, session: FlowSession = Depends(get_flow_session)):
    """Starts a new, independent flow (one per browser tab) and opens its first page."""
    flow_id = uuid.uuid4().hex
    actor = await create_actor(session, flow_id)
    log.info("Started person-case flow", flow_id=flow_id)
    return RedirectResponse(resolve_location(actor, request), status_code=303)


def build_page_response(state: StateName, flow_id: str, snapshot) -> PageResponse:
    section = SECTION_BY_STATE.get(state)
    form_values = None
    form_errors = None

    if section:
        draft = snapshot.context.form_data.get(section)
        record = getattr(snapshot.context, section)
        if draft is not None:
            form_values, form_errors = draft.values, draft.errors
        elif record is not None:
            form_values = SECTION_ADAPTERS[section].dump_python(record, mode="json")

    return PageResponse(
        state=snapshot.state.value,
        tab_id=flow_id,
        section=section,
        form_values=form_values,
        form_errors=form_errors,
        context=snapshot.context.model_dump(mode="json") if state == StateName.REVIEW else None,
    )


def page_loader(state: StateName):
    async def loader(request: Request, session: FlowSession = Depends(get_flow_session)):
        loaded = await load_context_or_redirect(session, request, target_state=state)
        if isinstance(loaded, RedirectTo):
            return RedirectResponse(loaded.location, status_code=302)
        if loaded.actor.snapshot.state != state:
            # an exited flow stays on its own page
            return RedirectResponse(resolve_location(loaded.actor, request), status_code=302)
        return build_page_response(state, loaded.flow_id, loaded.actor.snapshot)

    return loader


def page_action(state: StateName):
    async def action(body: PageActionRequest, request: Request, session: FlowSession = Depends(get_flow_session)):
        loaded = await load_context_or_redirect(session, request, target_state=state)
        if isinstance(loaded, RedirectTo):
            return RedirectResponse(loaded.location, status_code=302)
        if loaded.actor.snapshot.state != state:
            return RedirectResponse(resolve_location(loaded.actor, request), status_code=303)

        if body.action == "back" and state == loaded.actor.workflow["initial_state"]:
            # the first page goes back to the protected landing page
            return RedirectResponse(i18n_redirect_location(PROTECTED_HOME_ROUTE_ID, request), status_code=303)

        actor = await handle_page_action(loaded.actor, state, body)
        return RedirectResponse(resolve_location(actor, request), status_code=303)

    return action


for language, path in get_route_by_id(PERSON_CASE_START_ROUTE_ID)["paths"].items():
    router.add_api_route(path, start_flow, methods=["POST"], name=f"person-case-start-{language}")

for state, definition in WORKFLOW["states"].items():
    route = get_route_by_id(definition["meta"]["route_id"])
    for language, path in route["paths"].items():
        router.add_api_route(path, page_loader(state), methods=["GET"], name=f"{state.value}-{language}")
        router.add_api_route(path, page_action(state), methods=["POST"], name=f"{state.value}-{language}-action")
