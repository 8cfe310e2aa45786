# /intake/models/flow.py

from enum import Enum
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

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


class StateName(str, Enum):
    """Every state of the person-case workflow."""
    PRIVACY_STATEMENT = "privacy-statement"
    REQUEST_DETAILS = "request-details"
    PRIMARY_DOCS = "primary-docs"
    SECONDARY_DOCS = "secondary-docs"
    NAME_INFO = "name-info"
    PERSONAL_INFO = "personal-info"
    BIRTH_INFO = "birth-info"
    PARENT_INFO = "parent-info"
    PREVIOUS_SIN_INFO = "previous-sin-info"
    CONTACT_INFO = "contact-info"
    REVIEW = "review"
    EXITED = "exited"


SectionKey = Literal[
    "privacy_statement",
    "request_details",
    "primary_documents",
    "secondary_document",
    "current_name_info",
    "personal_information",
    "birth_details",
    "parent_details",
    "previous_sin",
    "contact_information",
]

FieldErrors = Dict[str, List[str]]


class SectionDraft(BaseModel):
    """Unvalidated input and field errors kept for redisplay after a failed submit."""
    model_config = ConfigDict(frozen=True)

    values: Optional[Any] = None
    errors: Optional[FieldErrors] = None


class MachineContext(BaseModel):
    """
    Data carried by the workflow.

    Each section field holds validated output only and is written exclusively by
    that section's submit transition. form_data is the scratch area for drafts.
    """
    model_config = ConfigDict(frozen=True)

    privacy_statement: Optional[PrivacyStatementData] = None
    request_details: Optional[RequestDetailsData] = None
    primary_documents: Optional[PrimaryDocumentData] = None
    secondary_document: Optional[SecondaryDocumentData] = None
    current_name_info: Optional[CurrentNameData] = None
    personal_information: Optional[PersonalInfoData] = None
    birth_details: Optional[BirthDetailsData] = None
    parent_details: Optional[ParentDetailsData] = None
    previous_sin: Optional[PreviousSinData] = None
    contact_information: Optional[ContactInformationData] = None
    form_data: Dict[SectionKey, SectionDraft] = Field(default_factory=dict)


class Snapshot(BaseModel):
    """The full, serializable condition of one flow at one point in time."""
    model_config = ConfigDict(frozen=True)

    state: StateName
    context: MachineContext = Field(default_factory=MachineContext)

    def to_json(self) -> str:
        return self.model_dump_json()

    @classmethod
    def from_json(cls, raw: str | bytes) -> "Snapshot":
        return cls.model_validate_json(raw)
