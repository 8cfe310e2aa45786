# backend/tests/unit/test_guards.py
import pytest
from unittest.mock import AsyncMock

from intake.errors.app_error import AppError
from intake.errors.error_codes import ErrorCodes
from intake.models.flow import StateName
from intake.workflows.events import SubmitPrivacyStatement
from intake.workflows.guards import LoadedFlowContext, RedirectTo, load_context_or_redirect
from intake.workflows.persistence import create_actor

PAGE = "/en/protected/person-case/contact-information"


@pytest.mark.asyncio
async def test_missing_tab_id_redirects_without_touching_session(flow_session, make_request, mocker):
    mock_load = mocker.patch("intake.workflows.guards.load_actor", new_callable=AsyncMock)

    result = await load_context_or_redirect(flow_session, make_request(PAGE))

    assert result == RedirectTo(location="/en/protected", reason="missing_flow_id")
    mock_load.assert_not_awaited()


@pytest.mark.asyncio
async def test_empty_tab_id_redirects(flow_session, make_request):
    result = await load_context_or_redirect(flow_session, make_request(PAGE, "tid="))
    assert isinstance(result, RedirectTo)
    assert result.reason == "missing_flow_id"


@pytest.mark.asyncio
async def test_unknown_flow_redirects_in_request_language(flow_session, make_request):
    request = make_request("/fr/protege/cas-personnel/coordonnees", "tid=does-not-exist")

    result = await load_context_or_redirect(flow_session, request)

    assert result == RedirectTo(location="/fr/protege", reason="missing_flow")


@pytest.mark.asyncio
async def test_custom_redirect_route(flow_session, make_request):
    result = await load_context_or_redirect(flow_session, make_request(PAGE), redirect_route_id="INP-0012")
    assert result.location == "/en/protected/person-case/start"


@pytest.mark.asyncio
async def test_known_flow_loads_at_target_state(flow_session, make_request):
    actor = await create_actor(flow_session, "tab-1")
    await actor.send(SubmitPrivacyStatement(data={"agreed_to_terms": True}))

    result = await load_context_or_redirect(
        flow_session, make_request(PAGE, "tid=tab-1"), target_state=StateName.CONTACT_INFO
    )

    assert isinstance(result, LoadedFlowContext)
    assert result.flow_id == "tab-1"
    assert result.actor.snapshot.state == StateName.CONTACT_INFO
    assert result.actor.snapshot.context.privacy_statement is not None


@pytest.mark.asyncio
async def test_known_flow_without_target_resumes_stored_state(flow_session, make_request):
    await create_actor(flow_session, "tab-1")
    result = await load_context_or_redirect(flow_session, make_request(PAGE, "tid=tab-1"))
    assert result.actor.snapshot.state == StateName.PRIVACY_STATEMENT


@pytest.mark.asyncio
async def test_redirect_without_language_is_a_configuration_error(flow_session, make_request):
    with pytest.raises(AppError) as exc_info:
        await load_context_or_redirect(flow_session, make_request("/person-case/review"))
    assert exc_info.value.error_code == ErrorCodes.NO_LANGUAGE_FOUND
