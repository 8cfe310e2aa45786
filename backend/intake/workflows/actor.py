# /intake/workflows/actor.py

from typing import Callable, Dict, List, Mapping, Optional

import structlog

from intake.errors.app_error import AppError
from intake.errors.error_codes import ErrorCodes
from intake.models.flow import Snapshot
from intake.utils.metrics import workflow_events_counter
from intake.workflows.definitions import WORKFLOW, WorkflowDefinition
from intake.workflows.engine import apply_event, initial_snapshot
from intake.workflows.events import Event

# A live, request-scoped instance of the workflow. It owns the current snapshot,
# applies events one at a time through the pure engine and notifies subscribers
# synchronously, in subscription order, once per produced snapshot.

log = structlog.get_logger(__name__)

SnapshotCallback = Callable[[Snapshot], None]
Hook = Callable[[Snapshot, Snapshot], None]


class WorkflowActor:
    def __init__(
        self,
        id: str,
        snapshot: Optional[Snapshot] = None,
        hooks: Optional[Mapping[str, Hook]] = None,
        workflow: WorkflowDefinition = WORKFLOW,
    ):
        self.id = id
        self.workflow = workflow
        self.hooks: Dict[str, Hook] = dict(hooks or {})
        self._snapshot = snapshot if snapshot is not None else initial_snapshot(workflow)
        self._subscribers: List[SnapshotCallback] = []
        self.started = False

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    def start(self) -> "WorkflowActor":
        self.started = True
        return self

    def subscribe(self, callback: SnapshotCallback) -> Callable[[], None]:
        """Registers a callback for every future snapshot; returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def send(self, event: Event) -> Snapshot:
        """
        Applies one event and returns the resulting snapshot.
        Events the current state does not accept leave the snapshot untouched.
        """
        if not self.started:
            raise AppError(f"Actor {self.id} must be started before sending events", ErrorCodes.ACTOR_NOT_STARTED)

        previous = self._snapshot
        result = apply_event(previous, event, self.workflow)
        workflow_events_counter.labels(
            state=previous.state.value, event=event.type, applied=str(result["applied"]).lower()
        ).inc()

        if not result["applied"]:
            log.debug("Event ignored", flow_id=self.id, reason=result["reason"])
            return previous

        self._snapshot = result["snapshot"]
        for name in result["hooks"]:
            self._run_hook(name, previous)

        for callback in list(self._subscribers):
            callback(self._snapshot)

        return self._snapshot

    def _run_hook(self, name: str, previous: Snapshot) -> None:
        hook = self.hooks.get(name)
        if hook is None:
            log.info("No handler registered for workflow hook", hook=name, flow_id=self.id)
            return
        hook(previous, self._snapshot)
