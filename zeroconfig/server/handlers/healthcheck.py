from typing import TypedDict

from aiohttp import web
from aiohttp.web_request import Request

from zeroconfig.server.app_keys import ENGINE
from zeroconfig.version import get_version


class HealthcheckResponseParams(TypedDict):
    status: str
    version: str
    project: str


async def healthcheck(request: Request) -> web.Response:
    return web.json_response(HealthcheckResponseParams(
        status='ok',
        version=get_version(),
        project=request.app[ENGINE].config.project,
    ), status=200)
