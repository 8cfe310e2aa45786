# /intake/workflows/definitions.py

"""
Person-case workflow definition.

This module declares the workflow as pure data (no logic). The workflow specifies:
- id: Stable identifier of the workflow
- initial_state: The state every new flow starts in
- global_events: Events accepted from every non-terminal state, declared once
- states: A dictionary mapping state names to state definitions

Each state defines:
- meta: Navigation metadata (the route id of the page that renders the state)
- on: Accepted events mapped to a transition
- terminal: True for states with no way out

Each transition defines:
- target: Destination state (None keeps the current state)
- assign: Section key written from the event payload (its draft is cleared)
- reset: True to restore the initial, all-empty context
- merge_form_data: True to merge the event payload into form_data
- hook: Named extension point invoked by the actor runtime
"""

from typing import Dict, List, Optional, TypedDict

from intake.models.flow import StateName


class StateMeta(TypedDict):
    route_id: str


class Transition(TypedDict, total=False):
    target: Optional[StateName]
    assign: str
    reset: bool
    merge_form_data: bool
    hook: str


class StateDefinition(TypedDict, total=False):
    meta: StateMeta
    on: Dict[str, Transition]
    terminal: bool


class WorkflowDefinition(TypedDict):
    id: str
    initial_state: StateName
    global_events: Dict[str, Transition]
    states: Dict[StateName, StateDefinition]


FINAL_SUBMISSION_HOOK = "final_submission"

# Product-mandated order of the data-collection pages.
STATE_CHAIN: List[StateName] = [
    StateName.PRIVACY_STATEMENT,
    StateName.REQUEST_DETAILS,
    StateName.PRIMARY_DOCS,
    StateName.SECONDARY_DOCS,
    StateName.NAME_INFO,
    StateName.PERSONAL_INFO,
    StateName.BIRTH_INFO,
    StateName.PARENT_INFO,
    StateName.PREVIOUS_SIN_INFO,
    StateName.CONTACT_INFO,
    StateName.REVIEW,
]

# Section collected by each data-collection state (review collects nothing).
SECTION_BY_STATE: Dict[StateName, str] = {
    StateName.PRIVACY_STATEMENT: "privacy_statement",
    StateName.REQUEST_DETAILS: "request_details",
    StateName.PRIMARY_DOCS: "primary_documents",
    StateName.SECONDARY_DOCS: "secondary_document",
    StateName.NAME_INFO: "current_name_info",
    StateName.PERSONAL_INFO: "personal_information",
    StateName.BIRTH_INFO: "birth_details",
    StateName.PARENT_INFO: "parent_details",
    StateName.PREVIOUS_SIN_INFO: "previous_sin",
    StateName.CONTACT_INFO: "contact_information",
}

STATE_BY_SECTION: Dict[str, StateName] = {section: state for state, section in SECTION_BY_STATE.items()}

WORKFLOW: WorkflowDefinition = {
    "id": "person-case",
    "initial_state": StateName.PRIVACY_STATEMENT,
    "global_events": {
        "cancel": {"target": StateName.PRIVACY_STATEMENT, "reset": True},
        "exit": {"target": StateName.EXITED},
        "set_form_data": {"target": None, "merge_form_data": True},
    },
    "states": {
        StateName.PRIVACY_STATEMENT: {
            "meta": {"route_id": "INP-0001"},
            "on": {
                "submit_privacy_statement": {"target": StateName.REQUEST_DETAILS, "assign": "privacy_statement"},
            },
        },
        StateName.REQUEST_DETAILS: {
            "meta": {"route_id": "INP-0003"},
            "on": {
                "prev": {"target": StateName.PRIVACY_STATEMENT},
                "submit_request_details": {"target": StateName.PRIMARY_DOCS, "assign": "request_details"},
            },
        },
        StateName.PRIMARY_DOCS: {
            "meta": {"route_id": "INP-0002"},
            "on": {
                "prev": {"target": StateName.REQUEST_DETAILS},
                "submit_primary_documents": {"target": StateName.SECONDARY_DOCS, "assign": "primary_documents"},
            },
        },
        StateName.SECONDARY_DOCS: {
            "meta": {"route_id": "INP-0006"},
            "on": {
                "prev": {"target": StateName.PRIMARY_DOCS},
                "submit_secondary_document": {"target": StateName.NAME_INFO, "assign": "secondary_document"},
            },
        },
        StateName.NAME_INFO: {
            "meta": {"route_id": "INP-0004"},
            "on": {
                "prev": {"target": StateName.SECONDARY_DOCS},
                "submit_current_name": {"target": StateName.PERSONAL_INFO, "assign": "current_name_info"},
            },
        },
        StateName.PERSONAL_INFO: {
            "meta": {"route_id": "INP-0005"},
            "on": {
                "prev": {"target": StateName.NAME_INFO},
                "submit_personal_info": {"target": StateName.BIRTH_INFO, "assign": "personal_information"},
            },
        },
        StateName.BIRTH_INFO: {
            "meta": {"route_id": "INP-0007"},
            "on": {
                "prev": {"target": StateName.PERSONAL_INFO},
                "submit_birth_details": {"target": StateName.PARENT_INFO, "assign": "birth_details"},
            },
        },
        StateName.PARENT_INFO: {
            "meta": {"route_id": "INP-0008"},
            "on": {
                "prev": {"target": StateName.BIRTH_INFO},
                "submit_parent_details": {"target": StateName.PREVIOUS_SIN_INFO, "assign": "parent_details"},
            },
        },
        StateName.PREVIOUS_SIN_INFO: {
            "meta": {"route_id": "INP-0009"},
            "on": {
                "prev": {"target": StateName.PARENT_INFO},
                "submit_previous_sin": {"target": StateName.CONTACT_INFO, "assign": "previous_sin"},
            },
        },
        StateName.CONTACT_INFO: {
            "meta": {"route_id": "INP-0010"},
            "on": {
                "prev": {"target": StateName.PREVIOUS_SIN_INFO},
                "submit_contact_info": {"target": StateName.REVIEW, "assign": "contact_information"},
            },
        },
        StateName.REVIEW: {
            "meta": {"route_id": "INP-0011"},
            "on": {
                "prev": {"target": StateName.CONTACT_INFO},
                # Loops back to the start; final submission plugs in through the hook.
                "submit_review": {"target": StateName.PRIVACY_STATEMENT, "hook": FINAL_SUBMISSION_HOOK},
            },
        },
        StateName.EXITED: {
            "meta": {"route_id": "INP-0000"},
            "on": {},
            "terminal": True,
        },
    },
}

# Happy-path submit event accepted by each data-collection state.
SUBMIT_EVENT_BY_STATE: Dict[StateName, str] = {
    state: next(event for event in definition["on"] if event.startswith("submit_"))
    for state, definition in WORKFLOW["states"].items()
    if not definition.get("terminal")
}
