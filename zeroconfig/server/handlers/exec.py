from typing import TypedDict

from aiohttp import web
from aiohttp.web_request import Request

from zeroconfig.server.app_keys import ENGINE


class ExecRequestParams(TypedDict):
    service: str
    command: list[str]


class ExecResponseParams(TypedDict):
    output: str


async def services_exec(request: Request) -> web.Response:
    params: ExecRequestParams = await request.json()
    output = await request.app[ENGINE].exec_with_output(params['service'], params['command'])
    return web.json_response(ExecResponseParams(output=output), status=200)
