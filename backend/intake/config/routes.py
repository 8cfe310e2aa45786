# /intake/config/routes.py

from typing import Dict, List, TypedDict

# This file contains the bilingual route table. Every navigable page has a stable
# id and one path per supported language. Paths may carry `:param` segments
# (or `:param?` for optional ones) that are filled in by generate_path().

SUPPORTED_LANGUAGES = ("en", "fr")


class I18nRoute(TypedDict):
    id: str
    name: str
    paths: Dict[str, str]


I18N_ROUTES: List[I18nRoute] = [
    {
        "id": "PROT-0001",
        "name": "protected/index",
        "paths": {"en": "/en/protected", "fr": "/fr/protege"},
    },
    {
        "id": "INP-0000",
        "name": "person-case/abandon",
        "paths": {
            "en": "/en/protected/person-case/abandon",
            "fr": "/fr/protege/cas-personnel/abandonner",
        },
    },
    {
        "id": "INP-0012",
        "name": "person-case/start",
        "paths": {
            "en": "/en/protected/person-case/start",
            "fr": "/fr/protege/cas-personnel/commencer",
        },
    },
    {
        "id": "INP-0001",
        "name": "person-case/privacy-statement",
        "paths": {
            "en": "/en/protected/person-case/privacy-statement",
            "fr": "/fr/protege/cas-personnel/declaration-de-confidentialite",
        },
    },
    {
        "id": "INP-0002",
        "name": "person-case/primary-docs",
        "paths": {
            "en": "/en/protected/person-case/primary-documents",
            "fr": "/fr/protege/cas-personnel/documents-primaires",
        },
    },
    {
        "id": "INP-0003",
        "name": "person-case/request-details",
        "paths": {
            "en": "/en/protected/person-case/request-details",
            "fr": "/fr/protege/cas-personnel/faire-une-demande",
        },
    },
    {
        "id": "INP-0004",
        "name": "person-case/current-name",
        "paths": {
            "en": "/en/protected/person-case/current-name",
            "fr": "/fr/protege/cas-personnel/nom-actuel",
        },
    },
    {
        "id": "INP-0005",
        "name": "person-case/personal-info",
        "paths": {
            "en": "/en/protected/person-case/personal-information",
            "fr": "/fr/protege/cas-personnel/informations-personnelles",
        },
    },
    {
        "id": "INP-0006",
        "name": "person-case/secondary-doc",
        "paths": {
            "en": "/en/protected/person-case/secondary-document",
            "fr": "/fr/protege/cas-personnel/document-secondaire",
        },
    },
    {
        "id": "INP-0007",
        "name": "person-case/birth-details",
        "paths": {
            "en": "/en/protected/person-case/birth-details",
            "fr": "/fr/protege/cas-personnel/details-de-naissance",
        },
    },
    {
        "id": "INP-0008",
        "name": "person-case/parent-details",
        "paths": {
            "en": "/en/protected/person-case/parent-details",
            "fr": "/fr/protege/cas-personnel/details-des-parents",
        },
    },
    {
        "id": "INP-0009",
        "name": "person-case/previous-sin",
        "paths": {
            "en": "/en/protected/person-case/previous-sin",
            "fr": "/fr/protege/cas-personnel/nas-precedent",
        },
    },
    {
        "id": "INP-0010",
        "name": "person-case/contact-information",
        "paths": {
            "en": "/en/protected/person-case/contact-information",
            "fr": "/fr/protege/cas-personnel/coordonnees",
        },
    },
    {
        "id": "INP-0011",
        "name": "person-case/review",
        "paths": {
            "en": "/en/protected/person-case/review",
            "fr": "/fr/protege/cas-personnel/revision",
        },
    },
]

PROTECTED_HOME_ROUTE_ID = "PROT-0001"
PERSON_CASE_START_ROUTE_ID = "INP-0012"
