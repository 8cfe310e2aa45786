# /intake/utils/i18n_utils.py

from typing import Optional, Union
from starlette.datastructures import URL
from starlette.requests import Request

from intake.config.routes import SUPPORTED_LANGUAGES

# The display language is always the first segment of the path ("/en/...", "/fr/...").


def get_language(resource: Union[Request, URL, str]) -> Optional[str]:
    """
    Returns the language ("en" or "fr") for a request, URL or path,
    or None when the path does not start with a supported language.
    """
    if isinstance(resource, Request):
        pathname = resource.url.path
    elif isinstance(resource, URL):
        pathname = resource.path
    else:
        pathname = resource

    for language in SUPPORTED_LANGUAGES:
        if pathname == f"/{language}" or pathname.startswith(f"/{language}/"):
            return language
    return None


def get_alt_language(language: str) -> Optional[str]:
    """Returns the other supported language ('en' -> 'fr', 'fr' -> 'en')."""
    return {"en": "fr", "fr": "en"}.get(language)
