# /intake/workflows/persistence.py

from typing import Mapping, Optional

import structlog

from intake.models.flow import Snapshot, StateName
from intake.services.flow_store import FlowSession
from intake.utils.metrics import flow_actors_counter
from intake.workflows.actor import Hook, WorkflowActor
from intake.workflows.engine import is_terminal, resolve_snapshot
from intake.workflows.events import Event

# Session-backed persistence for workflow actors. Only snapshots are stored;
# a fresh actor is rebuilt from the stored snapshot on every request and every
# applied event is written back before send() returns.

log = structlog.get_logger(__name__)


class FlowActor:
    """A started WorkflowActor bound to one entry of a session's flow registry."""

    def __init__(self, actor: WorkflowActor, session: FlowSession):
        self.actor = actor
        self.session = session

    @property
    def id(self) -> str:
        return self.actor.id

    @property
    def snapshot(self) -> Snapshot:
        return self.actor.snapshot

    @property
    def workflow(self):
        return self.actor.workflow

    async def send(self, event: Event) -> Snapshot:
        """Applies the event, then persists the resulting snapshot."""
        snapshot = self.actor.send(event)
        await self.session.put(self.id, snapshot)
        return snapshot


async def create_actor(session: FlowSession, flow_id: str, hooks: Optional[Mapping[str, Hook]] = None) -> FlowActor:
    """
    Creates a brand-new flow at the initial state and registers it in the session.
    The registry entry exists as soon as this returns.
    """
    actor = WorkflowActor(flow_id, hooks=hooks).start()
    await session.put(flow_id, actor.snapshot)
    flow_actors_counter.labels(operation="create").inc()
    log.debug("Created new person-case state machine", session_id=session.id, flow_id=flow_id)

    return FlowActor(actor, session)


async def load_actor(
    session: FlowSession,
    flow_id: str,
    target_state: Optional[StateName] = None,
    hooks: Optional[Mapping[str, Hook]] = None,
) -> Optional[FlowActor]:
    """
    Loads a flow from the session, or returns None if the session has never seen it.

    With a target_state the flow resumes at that state with its stored context
    (direct navigation); otherwise, or when the stored flow has reached a
    terminal state, it resumes exactly where it left off.
    """
    stored = await session.get(flow_id)

    if stored is None:
        log.debug("Could not find a machine snapshot in session", session_id=session.id, flow_id=flow_id)
        return None

    # if a desired state has been provided, we load it, otherwise use the state
    # that has been stored in session; a terminal flow never moves again
    if target_state and not is_terminal(stored.state):
        snapshot = resolve_snapshot(target_state, stored.context)
    else:
        snapshot = stored

    actor = WorkflowActor(flow_id, snapshot=snapshot, hooks=hooks).start()
    flow_actors_counter.labels(operation="load").inc()
    log.debug("Loaded person-case state machine", session_id=session.id, flow_id=flow_id, state=snapshot.state.value)

    return FlowActor(actor, session)
