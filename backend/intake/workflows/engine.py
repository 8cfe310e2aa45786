# /intake/workflows/engine.py

"""
Pure workflow execution engine.

This module computes the next snapshot of a flow from its current snapshot and
one event. It:
- Resolves the transition from the current state, falling back to the global events
- Writes validated section payloads into context and clears that section's draft
- Merges drafts into form_data without changing state
- Resets context on cancel
- Ignores events the current state does not accept

All functions are:
- Pure (no side effects)
- Deterministic (same input = same output)
- No session access
- No logging
"""

from typing import Optional, Tuple, TypedDict

from intake.errors.app_error import AppError
from intake.errors.error_codes import ErrorCodes
from intake.models.flow import MachineContext, Snapshot, StateName
from intake.workflows.definitions import WORKFLOW, StateMeta, Transition, WorkflowDefinition
from intake.workflows.events import Event


class EngineResult(TypedDict):
    """Result of applying one event to a snapshot."""
    applied: bool
    reason: Optional[str]
    snapshot: Snapshot
    hooks: Tuple[str, ...]


def initial_snapshot(workflow: WorkflowDefinition = WORKFLOW) -> Snapshot:
    """Snapshot of a brand-new flow: initial state, every section empty."""
    return Snapshot(state=workflow["initial_state"], context=MachineContext())


def get_state_meta(state: StateName, workflow: WorkflowDefinition = WORKFLOW) -> Optional[StateMeta]:
    definition = workflow["states"].get(state)
    return definition.get("meta") if definition else None


def is_terminal(state: StateName, workflow: WorkflowDefinition = WORKFLOW) -> bool:
    return bool(workflow["states"].get(state, {}).get("terminal"))


def resolve_snapshot(state: StateName, context: MachineContext, workflow: WorkflowDefinition = WORKFLOW) -> Snapshot:
    """
    Build a snapshot at an arbitrary declared state, keeping the given context.
    No transition side effects are replayed.
    """
    try:
        state = StateName(state)
    except ValueError:
        raise AppError(f"Unknown workflow state: {state}", ErrorCodes.UNKNOWN_STATE) from None

    if state not in workflow["states"] or get_state_meta(state, workflow) is None:
        raise AppError(f"State '{state.value}' is not navigable", ErrorCodes.UNKNOWN_STATE)

    return Snapshot(state=state, context=context)


def find_transition(state: StateName, event_type: str, workflow: WorkflowDefinition = WORKFLOW) -> Optional[Transition]:
    """
    Returns the transition taken by event_type in state, or None if the event is
    not accepted there. State-level transitions win over global ones.
    """
    definition = workflow["states"].get(state)
    if definition is None or definition.get("terminal"):
        return None

    transition = definition.get("on", {}).get(event_type)
    if transition is None:
        transition = workflow["global_events"].get(event_type)
    return transition


def _next_context(context: MachineContext, transition: Transition, event: Event) -> MachineContext:
    if transition.get("reset"):
        return MachineContext()

    if transition.get("merge_form_data"):
        return context.model_copy(update={"form_data": {**context.form_data, **event.data}})

    section = transition.get("assign")
    if section:
        remaining = {key: draft for key, draft in context.form_data.items() if key != section}
        return context.model_copy(update={section: event.data, "form_data": remaining})

    return context


def apply_event(snapshot: Snapshot, event: Event, workflow: WorkflowDefinition = WORKFLOW) -> EngineResult:
    """
    Apply an event to a snapshot.

    Args:
        snapshot: The current snapshot (never mutated)
        event: A typed event from intake.workflows.events

    Returns:
        EngineResult with applied=True and the new snapshot when the current
        state accepts the event; applied=False and the untouched snapshot otherwise
    """
    transition = find_transition(snapshot.state, event.type, workflow)

    if transition is None:
        return {
            "applied": False,
            "reason": f"Event '{event.type}' is not accepted in state '{snapshot.state.value}'",
            "snapshot": snapshot,
            "hooks": (),
        }

    target = transition.get("target") or snapshot.state
    next_snapshot = Snapshot(state=target, context=_next_context(snapshot.context, transition, event))
    hook = transition.get("hook")

    return {
        "applied": True,
        "reason": None,
        "snapshot": next_snapshot,
        "hooks": (hook,) if hook else (),
    }
