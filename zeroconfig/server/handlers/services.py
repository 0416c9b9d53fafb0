from typing import TypedDict

from aiohttp import web
from aiohttp.web_request import Request

from zeroconfig.server.app_keys import ENGINE


class ServicesResponseParams(TypedDict):
    project: str
    services: list[dict]
    ports: dict[str, int]


async def http_get_services(request: Request) -> web.Response:
    engine = request.app[ENGINE]
    containers = await engine.list_services()
    return web.json_response(ServicesResponseParams(
        project=engine.config.project,
        services=containers.as_json(),
        ports=engine.ports,
    ), status=200)
