# /intake/utils/route_utils.py

import re
from typing import List, Mapping, Optional

from intake.config.routes import I18N_ROUTES, I18nRoute
from intake.errors.app_error import AppError
from intake.errors.error_codes import ErrorCodes

# Helpers for looking up bilingual routes and turning path templates into paths.

PARAM_SEGMENT_RE = re.compile(r"^:(\w+)(\?)?$")


def normalize_path(pathname: str) -> str:
    """Removes trailing slashes (the root path stays '/')."""
    return pathname.rstrip("/") or "/"


def find_route_by_id(route_id: str, routes: List[I18nRoute] = I18N_ROUTES) -> Optional[I18nRoute]:
    for route in routes:
        if route["id"] == route_id:
            return route
    return None


def get_route_by_id(route_id: str, routes: List[I18nRoute] = I18N_ROUTES) -> I18nRoute:
    route = find_route_by_id(route_id, routes)
    if route is None:
        raise AppError(f"No route found for {route_id} (this should never happen)", ErrorCodes.ROUTE_NOT_FOUND)
    return route


def find_route_by_path(pathname: str, routes: List[I18nRoute] = I18N_ROUTES) -> Optional[I18nRoute]:
    """Matches a concrete pathname against every language's path of every route."""
    segments = normalize_path(pathname).split("/")
    for route in routes:
        for template in route["paths"].values():
            if _matches(normalize_path(template).split("/"), segments):
                return route
    return None


def _matches(template_segments: List[str], segments: List[str]) -> bool:
    required = [s for s in template_segments if not s.endswith("?")]
    if not len(required) <= len(segments) <= len(template_segments):
        return False
    for template_segment, segment in zip(template_segments, segments):
        if PARAM_SEGMENT_RE.match(template_segment):
            continue
        if template_segment != segment:
            return False
    return True


def generate_path(template: str, params: Optional[Mapping[str, str]] = None) -> str:
    """
    Substitutes `:name` segments of a path template with values from params.
    Optional `:name?` segments are dropped when no value is supplied.
    """
    params = params or {}
    output: List[str] = []
    for segment in template.split("/"):
        match = PARAM_SEGMENT_RE.match(segment)
        if not match:
            output.append(segment)
            continue

        name, optional = match.group(1), match.group(2)
        value = params.get(name)
        if value is None or value == "":
            if optional:
                continue
            raise AppError(f"Missing ':{name}' param for path {template}", ErrorCodes.MISSING_ROUTE_PARAM)
        output.append(str(value))

    return "/".join(output) or "/"
