# backend/tests/conftest.py
from pathlib import Path

import pytest
from dotenv import load_dotenv
from fastapi.testclient import TestClient
from starlette.requests import Request

# Load the test environment FIRST, before any intake imports, so that the
# module-level settings object is built from it.
load_dotenv(dotenv_path=Path(__file__).resolve().parent.parent / ".env.test")

from intake.main import app  # noqa: E402
from intake.services.flow_store import FlowSession, MemoryFlowStore  # noqa: E402
from intake.workflows.definitions import SECTION_BY_STATE  # noqa: E402
from intake.workflows.events import SUBMIT_EVENT_BY_SECTION, SubmitReview  # noqa: E402
from intake.models.flow import StateName  # noqa: E402


VALID_SECTIONS = {
    "privacy_statement": {"agreed_to_terms": True},
    "request_details": {"type": "first-sin", "scenario": "for-self"},
    "primary_documents": {
        "citizenship_date": "2000-01-01",
        "client_number": "1234567890",
        "current_status_in_canada": "canadian-citizen-born-outside-canada",
        "date_of_birth": "1990-05-17",
        "document_type": "certificate-of-canadian-citizenship",
        "gender": "female",
        "given_name": "Jane",
        "last_name": "Doe",
        "registration_number": "12345678",
    },
    "secondary_document": {"document_type": "passport", "expiry_month": "06", "expiry_year": "2030"},
    "current_name_info": {"preferred_same_as_document_name": True},
    "personal_information": {"last_name_at_birth": "Doe", "gender": "female"},
    "birth_details": {"country": "CAN", "province": "ON", "city": "Ottawa", "from_multiple_birth": False},
    "parent_details": [
        {"unavailable": True},
        {
            "unavailable": False,
            "given_name": "John",
            "last_name": "Doe",
            "birth_location": {"country": "CAN", "province": "ON", "city": "Toronto"},
        },
    ],
    "previous_sin": {"has_previous_sin": "no"},
    "contact_information": {
        "preferred_language": "en",
        "primary_phone_number": "+16135550100",
        "country": "CAN",
        "address": "123 Main St",
        "postal_code": "K1A 0B1",
        "city": "Ottawa",
        "province": "ON",
    },
}


@pytest.fixture
def valid_sections():
    """Raw input that passes validation, per section key."""
    return {key: value for key, value in VALID_SECTIONS.items()}


@pytest.fixture
def happy_path_event():
    """Returns the submit event a state accepts on the happy path."""
    def build(state: StateName):
        if state == StateName.REVIEW:
            return SubmitReview()
        section = SECTION_BY_STATE[state]
        return SUBMIT_EVENT_BY_SECTION[section](data=VALID_SECTIONS[section])
    return build


@pytest.fixture
def flow_store():
    return MemoryFlowStore(ttl=3600)


@pytest.fixture
def flow_session(flow_store):
    return FlowSession("session-123", flow_store)


@pytest.fixture
def make_request():
    """Builds a bare Starlette request for the given path and query string."""
    def build(path: str = "/en/protected/person-case/review", query: str = "", path_params: dict | None = None) -> Request:
        scope = {
            "type": "http",
            "method": "GET",
            "scheme": "http",
            "server": ("testserver", 80),
            "root_path": "",
            "path": path,
            "query_string": query.encode("utf-8"),
            "headers": [(b"host", b"testserver")],
            "path_params": path_params or {},
        }
        return Request(scope)
    return build


@pytest.fixture(scope="function")
def test_client():
    """
    Provides a TestClient for API integration tests. The app's lifespan
    (startup/shutdown events) is managed by the TestClient.
    """
    with TestClient(app) as client:
        yield client
