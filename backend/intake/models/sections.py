# /intake/models/sections.py

from typing import List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

# This file defines the validated output shape of every form section of the
# in-person application. The workflow only ever stores instances of these models
# in its context; field-level business rules (picklists, formats) live with the
# page validators, not here.


class SectionModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class PrivacyStatementData(SectionModel):
    agreed_to_terms: Literal[True]


class RequestDetailsData(SectionModel):
    type: str = Field(..., min_length=1)
    scenario: str = Field(..., min_length=1)


class PrimaryDocumentData(SectionModel):
    citizenship_date: str
    client_number: str
    current_status_in_canada: str
    date_of_birth: str
    document_type: str
    gender: str
    given_name: str
    last_name: str
    registration_number: str


class SecondaryDocumentData(SectionModel):
    document_type: str
    expiry_month: str
    expiry_year: str


class SupportingDocumentsNotRequired(SectionModel):
    required: Literal[False]


class SupportingDocumentsRequired(SectionModel):
    required: Literal[True]
    document_types: List[str] = Field(..., min_length=1)


class CurrentNameSameAsDocument(SectionModel):
    """The applicant goes by the name printed on the primary document."""
    preferred_same_as_document_name: Literal[True]


class CurrentNameOther(SectionModel):
    preferred_same_as_document_name: Literal[False]
    first_name: str
    middle_name: Optional[str] = None
    last_name: str
    supporting_documents: Union[SupportingDocumentsNotRequired, SupportingDocumentsRequired]


CurrentNameData = Union[CurrentNameSameAsDocument, CurrentNameOther]


class PersonalInfoData(SectionModel):
    first_name_previously_used: Optional[List[str]] = None
    last_name_at_birth: str
    last_name_previously_used: Optional[List[str]] = None
    gender: str


class BirthDetailsData(SectionModel):
    country: str
    province: Optional[str] = None
    city: Optional[str] = None
    from_multiple_birth: bool


class BirthLocation(SectionModel):
    country: Optional[str] = None
    province: Optional[str] = None
    city: Optional[str] = None


class UnavailableParent(SectionModel):
    unavailable: Literal[True]


class KnownParent(SectionModel):
    unavailable: Literal[False]
    given_name: str
    last_name: str
    birth_location: BirthLocation


ParentDetailsData = List[Union[UnavailableParent, KnownParent]]


class PreviousSinData(SectionModel):
    has_previous_sin: str
    social_insurance_number: Optional[str] = None


class ContactInformationData(SectionModel):
    preferred_language: str
    primary_phone_number: str
    secondary_phone_number: Optional[str] = None
    email_address: Optional[str] = None
    country: str
    address: str
    postal_code: str
    city: str
    province: str
