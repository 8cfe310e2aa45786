# /intake/workflows/locations.py

from starlette.requests import Request

from intake.config.settings import settings
from intake.errors.app_error import AppError
from intake.errors.error_codes import ErrorCodes
from intake.utils.i18n_utils import get_language
from intake.utils.route_utils import generate_path, get_route_by_id
from intake.workflows.engine import get_state_meta


def resolve_location(actor, request: Request) -> str:
    """
    Returns the absolute URL of the page for the actor's current state.

    The path is the state's route in the request's language with the request's
    path parameters filled in; the query string is kept and the flow id is set
    so the next request re-enters the same flow.

    Raises:
        AppError: If the language cannot be determined, or the current state
            has no navigation metadata (both are configuration bugs).
    """
    language = get_language(request)

    if not language:
        raise AppError("The current language could not be determined from the request", ErrorCodes.MISSING_LANG_PARAM)

    state = actor.snapshot.state
    meta = get_state_meta(state, actor.workflow)

    if not meta:
        # this should never happen if the state machine is configured correctly
        raise AppError(f"The metadata for machine state '{state.value}' could not be determined", ErrorCodes.MISSING_META)

    route = get_route_by_id(meta["route_id"])
    pathname = generate_path(route["paths"][language], request.path_params)

    url = request.url.replace(path=pathname)
    return str(url.include_query_params(**{settings.flow_id_query_param: actor.id}))
