from typing import TypedDict

from aiohttp import web
from aiohttp.web_request import Request

from zeroconfig.server.app_keys import ENGINE

DEFAULT_TAIL = 100


class LogsRequestParams(TypedDict):
    service: str
    tail: int | None


class LogsResponseParams(TypedDict):
    logs: list[str]


async def services_logs(request: Request) -> web.Response:
    params: LogsRequestParams = {'tail': DEFAULT_TAIL} | await request.json()
    logs = [line async for line in request.app[ENGINE].logs(params['service'], tail=params['tail'])]
    return web.json_response(LogsResponseParams(logs=logs), status=200)
