# /intake/workflows/events.py

"""
Events accepted by the person-case workflow.

Events form a closed set discriminated on their `type` tag. Generic control
events (prev, cancel, exit, set_form_data) carry no section data; every
submit_* event carries the validated payload of exactly one section.
"""

from typing import Annotated, Dict, Literal, Union
from pydantic import BaseModel, ConfigDict, Field

from intake.models.flow import SectionDraft, SectionKey
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


class BaseEvent(BaseModel):
    model_config = ConfigDict(frozen=True)


class Prev(BaseEvent):
    type: Literal["prev"] = "prev"


class Cancel(BaseEvent):
    type: Literal["cancel"] = "cancel"


class Exit(BaseEvent):
    type: Literal["exit"] = "exit"


class SetFormData(BaseEvent):
    type: Literal["set_form_data"] = "set_form_data"
    data: Dict[SectionKey, SectionDraft]


class SubmitPrivacyStatement(BaseEvent):
    type: Literal["submit_privacy_statement"] = "submit_privacy_statement"
    data: PrivacyStatementData


class SubmitRequestDetails(BaseEvent):
    type: Literal["submit_request_details"] = "submit_request_details"
    data: RequestDetailsData


class SubmitPrimaryDocuments(BaseEvent):
    type: Literal["submit_primary_documents"] = "submit_primary_documents"
    data: PrimaryDocumentData


class SubmitSecondaryDocument(BaseEvent):
    type: Literal["submit_secondary_document"] = "submit_secondary_document"
    data: SecondaryDocumentData


class SubmitCurrentName(BaseEvent):
    type: Literal["submit_current_name"] = "submit_current_name"
    data: CurrentNameData


class SubmitPersonalInfo(BaseEvent):
    type: Literal["submit_personal_info"] = "submit_personal_info"
    data: PersonalInfoData


class SubmitBirthDetails(BaseEvent):
    type: Literal["submit_birth_details"] = "submit_birth_details"
    data: BirthDetailsData


class SubmitParentDetails(BaseEvent):
    type: Literal["submit_parent_details"] = "submit_parent_details"
    data: ParentDetailsData


class SubmitPreviousSin(BaseEvent):
    type: Literal["submit_previous_sin"] = "submit_previous_sin"
    data: PreviousSinData


class SubmitContactInfo(BaseEvent):
    type: Literal["submit_contact_info"] = "submit_contact_info"
    data: ContactInformationData


class SubmitReview(BaseEvent):
    type: Literal["submit_review"] = "submit_review"


SubmitEvent = Union[
    SubmitPrivacyStatement,
    SubmitRequestDetails,
    SubmitPrimaryDocuments,
    SubmitSecondaryDocument,
    SubmitCurrentName,
    SubmitPersonalInfo,
    SubmitBirthDetails,
    SubmitParentDetails,
    SubmitPreviousSin,
    SubmitContactInfo,
]

Event = Annotated[
    Union[Prev, Cancel, Exit, SetFormData, SubmitEvent, SubmitReview],
    Field(discriminator="type"),
]

# Submit event class per section key, used by the page actions.
SUBMIT_EVENT_BY_SECTION: Dict[str, type] = {
    "privacy_statement": SubmitPrivacyStatement,
    "request_details": SubmitRequestDetails,
    "primary_documents": SubmitPrimaryDocuments,
    "secondary_document": SubmitSecondaryDocument,
    "current_name_info": SubmitCurrentName,
    "personal_information": SubmitPersonalInfo,
    "birth_details": SubmitBirthDetails,
    "parent_details": SubmitParentDetails,
    "previous_sin": SubmitPreviousSin,
    "contact_information": SubmitContactInfo,
}
