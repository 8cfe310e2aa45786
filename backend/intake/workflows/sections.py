# /intake/workflows/sections.py

"""
Section validators.

Each section's raw page input is validated against the section's pydantic
model. Success yields the validated record that goes into a submit_* event;
failure yields field errors keyed by dotted field path, ready to be stored as
a draft through set_form_data.
"""

from typing import Any, Dict, Optional, TypedDict

from pydantic import TypeAdapter, ValidationError

from intake.errors.app_error import AppError
from intake.errors.error_codes import ErrorCodes
from intake.models.flow import FieldErrors
from intake.models.sections import (
    BirthDetailsData,
    ContactInformationData,
    CurrentNameData,
    ParentDetailsData,
    PersonalInfoData,
    PreviousSinData,
    PrimaryDocumentData,
    PrivacyStatementData,
    RequestDetailsData,
    SecondaryDocumentData,
)

SECTION_ADAPTERS: Dict[str, TypeAdapter] = {
    "privacy_statement": TypeAdapter(PrivacyStatementData),
    "request_details": TypeAdapter(RequestDetailsData),
    "primary_documents": TypeAdapter(PrimaryDocumentData),
    "secondary_document": TypeAdapter(SecondaryDocumentData),
    "current_name_info": TypeAdapter(CurrentNameData),
    "personal_information": TypeAdapter(PersonalInfoData),
    "birth_details": TypeAdapter(BirthDetailsData),
    "parent_details": TypeAdapter(ParentDetailsData),
    "previous_sin": TypeAdapter(PreviousSinData),
    "contact_information": TypeAdapter(ContactInformationData),
}


class SectionResult(TypedDict):
    """Result of validating one section."""
    is_valid: bool
    data: Optional[Any]
    errors: Optional[FieldErrors]


def _field_errors(error: ValidationError) -> FieldErrors:
    errors: FieldErrors = {}
    for detail in error.errors():
        path = ".".join(str(part) for part in detail["loc"]) or "_root"
        errors.setdefault(path, []).append(detail["msg"])
    return errors


def validate_section(section: str, raw: Any) -> SectionResult:
    """
    Validate raw input for a section.

    Raises:
        AppError: If the section key is unknown
    """
    adapter = SECTION_ADAPTERS.get(section)
    if adapter is None:
        raise AppError(f"Unrecognized section: {section}", ErrorCodes.UNRECOGNIZED_SECTION, status_code=400)

    try:
        data = adapter.validate_python(raw)
    except ValidationError as e:
        return {"is_valid": False, "data": None, "errors": _field_errors(e)}

    return {"is_valid": True, "data": data, "errors": None}
