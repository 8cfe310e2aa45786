# /intake/routes/protected.py

from fastapi import APIRouter, Depends, Request

from intake.config.routes import PERSON_CASE_START_ROUTE_ID, PROTECTED_HOME_ROUTE_ID
from intake.services.flow_store import FlowSession
from intake.utils.dependencies import get_flow_session
from intake.utils.i18n_utils import get_language
from intake.utils.route_utils import get_route_by_id

# The protected landing page. Every guard redirect and the "back" button of the
# first workflow page end up here, so it must always be served. It lists the
# workflows that can be started and the flows already open in this session.

router = APIRouter(tags=["Protected"])


async def protected_home(request: Request, session: FlowSession = Depends(get_flow_session)):
    language = get_language(request)
    start_path = get_route_by_id(PERSON_CASE_START_ROUTE_ID)["paths"][language]

    return {
        "route_id": PROTECTED_HOME_ROUTE_ID,
        "language": language,
        "workflows": [{"id": "person-case", "start": {"method": "POST", "path": start_path}}],
        "open_flows": await session.flow_ids(),
    }


for language, path in get_route_by_id(PROTECTED_HOME_ROUTE_ID)["paths"].items():
    router.add_api_route(path, protected_home, methods=["GET"], name=f"protected-home-{language}")
