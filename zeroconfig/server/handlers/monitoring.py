from typing import TypedDict

from aiohttp import web
from aiohttp.web_request import Request

from zeroconfig.server.app_keys import ENGINE


class HealthResponseParams(TypedDict):
    health: list[dict]


class StatsResponseParams(TypedDict):
    stats: list[dict]


async def http_get_health(request: Request) -> web.Response:
    health = await request.app[ENGINE].health()
    return web.json_response(HealthResponseParams(health=[status.as_json() for status in health]), status=200)


async def http_get_stats(request: Request) -> web.Response:
    stats = await request.app[ENGINE].all_stats()
    return web.json_response(StatsResponseParams(stats=[entry.as_json() for entry in stats]), status=200)
