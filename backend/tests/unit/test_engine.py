# backend/tests/unit/test_engine.py
import pytest

from intake.errors.app_error import AppError
from intake.errors.error_codes import ErrorCodes
from intake.models.flow import MachineContext, SectionDraft, Snapshot, StateName
from intake.workflows.definitions import FINAL_SUBMISSION_HOOK, STATE_CHAIN, WORKFLOW
from intake.workflows.engine import apply_event, find_transition, initial_snapshot, is_terminal, resolve_snapshot
from intake.workflows.events import (
    Cancel,
    Exit,
    Prev,
    SetFormData,
    SubmitBirthDetails,
    SubmitPrivacyStatement,
    SubmitRequestDetails,
    SubmitReview,
)


def test_initial_snapshot_is_privacy_statement_with_empty_context():
    snapshot = initial_snapshot()
    assert snapshot.state == StateName.PRIVACY_STATEMENT
    assert snapshot.context == MachineContext()
    assert snapshot.context.form_data == {}


def test_submit_then_prev_keeps_entered_data():
    """Accepting the privacy statement moves forward; going back keeps the answer."""
    result = apply_event(initial_snapshot(), SubmitPrivacyStatement(data={"agreed_to_terms": True}))

    assert result["applied"] is True
    assert result["snapshot"].state == StateName.REQUEST_DETAILS
    assert result["snapshot"].context.privacy_statement.agreed_to_terms is True
    assert "privacy_statement" not in result["snapshot"].context.form_data

    back = apply_event(result["snapshot"], Prev())
    assert back["snapshot"].state == StateName.PRIVACY_STATEMENT
    assert back["snapshot"].context == result["snapshot"].context


def test_apply_event_is_deterministic_and_does_not_mutate_input():
    snapshot = initial_snapshot()
    before = snapshot.model_dump()
    event = SubmitPrivacyStatement(data={"agreed_to_terms": True})

    first = apply_event(snapshot, event)
    second = apply_event(snapshot, event)

    assert first["snapshot"] == second["snapshot"]
    assert snapshot.model_dump() == before


def test_submit_clears_only_its_own_draft():
    draft = SectionDraft(values={"agreed_to_terms": False}, errors={"agreed_to_terms": ["Input should be True"]})
    other = SectionDraft(values={"type": ""})
    snapshot = Snapshot(
        state=StateName.PRIVACY_STATEMENT,
        context=MachineContext(form_data={"privacy_statement": draft, "request_details": other}),
    )

    result = apply_event(snapshot, SubmitPrivacyStatement(data={"agreed_to_terms": True}))

    assert result["snapshot"].context.form_data == {"request_details": other}


def test_set_form_data_merges_without_changing_state():
    snapshot = Snapshot(state=StateName.REQUEST_DETAILS, context=MachineContext())
    draft = SectionDraft(values={"type": ""}, errors={"type": ["String should have at least 1 character"]})

    result = apply_event(snapshot, SetFormData(data={"request_details": draft}))

    assert result["applied"] is True
    assert result["snapshot"].state == StateName.REQUEST_DETAILS
    assert result["snapshot"].context.form_data["request_details"] == draft
    assert result["snapshot"].context.request_details is None


def test_cancel_resets_context_from_any_state(happy_path_event):
    snapshot = initial_snapshot()
    for state in STATE_CHAIN[:4]:
        snapshot = apply_event(snapshot, happy_path_event(state))["snapshot"]
    assert snapshot.state == StateName.NAME_INFO

    result = apply_event(snapshot, Cancel())

    assert result["snapshot"] == initial_snapshot()


def test_exit_reaches_terminal_state_that_ignores_everything():
    result = apply_event(Snapshot(state=StateName.BIRTH_INFO), Exit())
    exited = result["snapshot"]

    assert exited.state == StateName.EXITED
    assert is_terminal(exited.state)
    for event in (Cancel(), Prev(), Exit(), SubmitReview()):
        ignored = apply_event(exited, event)
        assert ignored["applied"] is False
        assert ignored["snapshot"] is exited


def test_unaccepted_events_are_ignored():
    snapshot = initial_snapshot()

    prev_result = apply_event(snapshot, Prev())
    assert prev_result["applied"] is False
    assert prev_result["snapshot"] is snapshot
    assert "prev" in prev_result["reason"]

    wrong_submit = SubmitBirthDetails(data={"country": "CAN", "from_multiple_birth": False})
    assert apply_event(snapshot, wrong_submit)["applied"] is False


def test_submit_in_wrong_state_does_not_touch_context():
    snapshot = Snapshot(state=StateName.PRIMARY_DOCS)
    result = apply_event(snapshot, SubmitRequestDetails(data={"type": "first-sin", "scenario": "for-self"}))
    assert result["snapshot"].context.request_details is None


def test_happy_path_walks_every_state_once_and_fires_final_hook(happy_path_event):
    snapshot = initial_snapshot()
    visited = [snapshot.state]
    hooks = ()

    for state in STATE_CHAIN:
        result = apply_event(snapshot, happy_path_event(state))
        assert result["applied"] is True
        snapshot = result["snapshot"]
        visited.append(snapshot.state)
        hooks = result["hooks"]

    assert visited[:-1] == STATE_CHAIN
    assert visited[-1] == StateName.PRIVACY_STATEMENT
    assert hooks == (FINAL_SUBMISSION_HOOK,)
    assert snapshot.context.contact_information is not None
    assert snapshot.context.form_data == {}


def test_prev_walks_the_chain_backwards(happy_path_event):
    snapshot = initial_snapshot()
    for state in STATE_CHAIN[:-1]:
        snapshot = apply_event(snapshot, happy_path_event(state))["snapshot"]
    assert snapshot.state == StateName.REVIEW

    for expected in reversed(STATE_CHAIN[:-1]):
        snapshot = apply_event(snapshot, Prev())["snapshot"]
        assert snapshot.state == expected


def test_state_transitions_win_over_global_events():
    custom = {
        **WORKFLOW,
        "states": {
            **WORKFLOW["states"],
            StateName.REVIEW: {
                **WORKFLOW["states"][StateName.REVIEW],
                "on": {**WORKFLOW["states"][StateName.REVIEW]["on"], "exit": {"target": StateName.CONTACT_INFO}},
            },
        },
    }
    assert find_transition(StateName.REVIEW, "exit", custom)["target"] == StateName.CONTACT_INFO
    assert find_transition(StateName.CONTACT_INFO, "exit", custom)["target"] == StateName.EXITED


def test_resolve_snapshot_keeps_context():
    context = MachineContext(privacy_statement={"agreed_to_terms": True})
    snapshot = resolve_snapshot(StateName.CONTACT_INFO, context)
    assert snapshot.state == StateName.CONTACT_INFO
    assert snapshot.context == context


def test_resolve_snapshot_rejects_unknown_state():
    with pytest.raises(AppError) as exc_info:
        resolve_snapshot("not-a-state", MachineContext())
    assert exc_info.value.error_code == ErrorCodes.UNKNOWN_STATE
