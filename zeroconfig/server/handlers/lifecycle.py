from typing import TypedDict

from aiohttp import web
from aiohttp.web_request import Request

from zeroconfig.server.app_keys import ENGINE


class ServicesRequestParams(TypedDict):
    services: list[str] | None


class StartResponseParams(TypedDict):
    containers: dict[str, str]
    ports: dict[str, int]


class StopResponseParams(TypedDict):
    stopped: list[str]


class RestartResponseParams(TypedDict):
    restarted: list[str]


async def _params(request: Request) -> ServicesRequestParams:
    if not request.can_read_body:
        return ServicesRequestParams(services=None)
    return ServicesRequestParams(services=None) | await request.json()


async def services_start(request: Request) -> web.Response:
    params = await _params(request)
    engine = request.app[ENGINE]

    if not params['services']:
        containers = await engine.start()
    else:
        containers = {service: await engine.start_service(service) for service in params['services']}
    return web.json_response(StartResponseParams(containers=containers, ports=engine.ports), status=200)


async def services_stop(request: Request) -> web.Response:
    params = await _params(request)
    engine = request.app[ENGINE]

    if not params['services']:
        await engine.stop()
        return web.json_response(StopResponseParams(stopped=list(engine.services)), status=200)

    stopped = [service for service in params['services'] if await engine.stop_service(service)]
    return web.json_response(StopResponseParams(stopped=stopped), status=200)


async def services_restart(request: Request) -> web.Response:
    params = await _params(request)
    engine = request.app[ENGINE]

    if not params['services']:
        await engine.restart_all()
        return web.json_response(RestartResponseParams(restarted=list(engine.services)), status=200)

    restarted = [service for service in params['services'] if await engine.restart_service(service)]
    return web.json_response(RestartResponseParams(restarted=restarted), status=200)
