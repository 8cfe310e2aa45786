# /intake/workflows/validator.py

"""
Pure validation functions for the workflow definition.

This module provides deterministic, side-effect-free checks of a workflow
definition's structure: states, navigation metadata, transitions and the
linear back-navigation chain. Run once at start-up; a definition that fails
any check must never serve requests.

All functions are:
- Pure (no side effects)
- Deterministic (same input = same output)
- No session access
- No logging
"""

from typing import List, Optional, TypedDict

from intake.config.routes import I18N_ROUTES, I18nRoute
from intake.models.flow import StateName
from intake.workflows.definitions import STATE_CHAIN, WORKFLOW, WorkflowDefinition
from intake.utils.route_utils import find_route_by_id


class ValidationResult(TypedDict):
    """Result of a validation check."""
    is_valid: bool
    error_code: Optional[str]
    message: Optional[str]


def _valid() -> ValidationResult:
    return {"is_valid": True, "error_code": None, "message": None}


def _invalid(error_code: str, message: str) -> ValidationResult:
    return {"is_valid": False, "error_code": error_code, "message": message}


def validate_initial_state(workflow: WorkflowDefinition) -> ValidationResult:
    """
    Validate that the initial state is declared and is not terminal.
    """
    initial_state = workflow["initial_state"]
    definition = workflow["states"].get(initial_state)

    if definition is None:
        return _invalid("UNKNOWN_INITIAL_STATE", f"Initial state '{initial_state}' is not declared")

    if definition.get("terminal"):
        return _invalid("TERMINAL_INITIAL_STATE", f"Initial state '{initial_state}' cannot be terminal")

    return _valid()


def validate_state_meta(workflow: WorkflowDefinition, routes: List[I18nRoute] = I18N_ROUTES) -> ValidationResult:
    """
    Validate that every state has navigation metadata pointing at a known route.
    """
    for state, definition in workflow["states"].items():
        meta = definition.get("meta")
        if not meta or not meta.get("route_id"):
            return _invalid("MISSING_META", f"State '{state}' has no navigation metadata")

        if find_route_by_id(meta["route_id"], routes) is None:
            return _invalid("UNKNOWN_ROUTE", f"State '{state}' points at unknown route '{meta['route_id']}'")

    return _valid()


def validate_transitions(workflow: WorkflowDefinition) -> ValidationResult:
    """
    Validate that every transition targets a declared state and that terminal
    states have no outgoing transitions.
    """
    states = workflow["states"]
    transitions = list(workflow["global_events"].items())

    for state, definition in states.items():
        if definition.get("terminal") and definition.get("on"):
            return _invalid("TERMINAL_HAS_TRANSITIONS", f"Terminal state '{state}' must not accept events")
        transitions.extend(definition.get("on", {}).items())

    for event_type, transition in transitions:
        target = transition.get("target")
        if target is not None and target not in states:
            return _invalid("UNKNOWN_TARGET", f"Event '{event_type}' targets undeclared state '{target}'")

    return _valid()


def validate_chain(workflow: WorkflowDefinition, chain: List[StateName] = STATE_CHAIN) -> ValidationResult:
    """
    Validate the linear chain: each state submits to its successor and goes
    back to its predecessor.
    """
    states = workflow["states"]

    if not chain or chain[0] != workflow["initial_state"]:
        return _invalid("BROKEN_CHAIN", "The chain must start at the initial state")

    for index, state in enumerate(chain):
        on = states.get(state, {}).get("on", {})
        submits = [event for event in on if event.startswith("submit_")]
        if len(submits) != 1:
            return _invalid("BROKEN_CHAIN", f"State '{state}' must accept exactly one submit event")

        expected_next = chain[index + 1] if index + 1 < len(chain) else workflow["initial_state"]
        if on[submits[0]].get("target") != expected_next:
            return _invalid("BROKEN_CHAIN", f"State '{state}' must submit to '{expected_next}'")

        if index > 0 and on.get("prev", {}).get("target") != chain[index - 1]:
            return _invalid("BROKEN_CHAIN", f"State '{state}' must go back to '{chain[index - 1]}'")

    return _valid()


def validate_definition(workflow: WorkflowDefinition = WORKFLOW) -> ValidationResult:
    """
    Run every structural check in order, returning the first failure.
    """
    for check in (validate_initial_state, validate_state_meta, validate_transitions, validate_chain):
        result = check(workflow)
        if not result["is_valid"]:
            return result
    return _valid()
