# /intake/workflows/actions.py

import structlog

from intake.errors.app_error import AppError
from intake.errors.error_codes import ErrorCodes
from intake.models.api import PageActionRequest
from intake.models.flow import SectionDraft, StateName
from intake.workflows.definitions import SECTION_BY_STATE, STATE_BY_SECTION
from intake.workflows.events import SUBMIT_EVENT_BY_SECTION, Cancel, Exit, Prev, SetFormData, SubmitReview
from intake.workflows.engine import is_terminal
from intake.workflows.persistence import FlowActor, load_actor
from intake.workflows.sections import validate_section

# Translates the buttons of a workflow page ("back", "next", "abandon", "exit" and,
# on the review page, "edit") into workflow events. Invalid input never reaches a
# submit event: it is stored as a draft and the flow stays on the same page.

log = structlog.get_logger(__name__)


async def handle_page_action(actor: FlowActor, state: StateName, request: PageActionRequest) -> FlowActor:
    """
    Apply a page action and return the actor whose state decides the next location.

    Raises:
        AppError: For an action the page does not offer, or an unknown section key
    """
    action = request.action

    if is_terminal(state, actor.workflow) or is_terminal(actor.snapshot.state, actor.workflow):
        raise AppError(f"Unrecognized action: {action}", ErrorCodes.UNRECOGNIZED_ACTION, status_code=400)

    if action == "back":
        await actor.send(Prev())

    elif action == "abandon":
        await actor.send(Cancel())

    elif action == "exit":
        await actor.send(Exit())

    elif action == "next" and state == StateName.REVIEW:
        await actor.send(SubmitReview())

    elif action == "next":
        section = SECTION_BY_STATE[state]
        result = validate_section(section, request.data)

        if result["is_valid"]:
            await actor.send(SUBMIT_EVENT_BY_SECTION[section](data=result["data"]))
        else:
            log.debug("Section failed validation", flow_id=actor.id, section=section, fields=list(result["errors"]))
            draft = SectionDraft(values=request.data, errors=result["errors"])
            await actor.send(SetFormData(data={section: draft}))

    elif action == "edit" and state == StateName.REVIEW:
        return await jump_to_section(actor, request.section)

    else:
        raise AppError(f"Unrecognized action: {action}", ErrorCodes.UNRECOGNIZED_ACTION, status_code=400)

    return actor


async def jump_to_section(actor: FlowActor, section: str | None) -> FlowActor:
    """Moves the flow to the page that collects section, keeping all entered data."""
    target_state = STATE_BY_SECTION.get(section or "")

    if target_state is None:
        raise AppError(f"Unrecognized section: {section}", ErrorCodes.UNRECOGNIZED_SECTION, status_code=400)

    jumped = await load_actor(actor.session, actor.id, target_state)
    await actor.session.put(actor.id, jumped.snapshot)
    return jumped
