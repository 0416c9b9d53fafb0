import traceback
from typing import Awaitable
from typing import Callable
from typing import TypedDict

from aiohttp import web
from aiohttp.web_request import Request

from zeroconfig.core.config import Config
from zeroconfig.core.engine import Engine
from zeroconfig.core.project_file import load_services
from zeroconfig.errors import ZeroConfigError
from zeroconfig.server.app_keys import ENGINE
from zeroconfig.server.commands import EXEC_PATH
from zeroconfig.server.commands import HEALTHCHECK_PATH
from zeroconfig.server.commands import HEALTH_PATH
from zeroconfig.server.commands import LOGS_PATH
from zeroconfig.server.commands import RESTART_PATH
from zeroconfig.server.commands import SERVICES_PATH
from zeroconfig.server.commands import START_PATH
from zeroconfig.server.commands import STATS_PATH
from zeroconfig.server.commands import STOP_PATH
from zeroconfig.server.handlers.exec import services_exec
from zeroconfig.server.handlers.healthcheck import healthcheck
from zeroconfig.server.handlers.lifecycle import services_restart
from zeroconfig.server.handlers.lifecycle import services_start
from zeroconfig.server.handlers.lifecycle import services_stop
from zeroconfig.server.handlers.logs import services_logs
from zeroconfig.server.handlers.monitoring import http_get_health
from zeroconfig.server.handlers.monitoring import http_get_stats
from zeroconfig.server.handlers.services import http_get_services


class ErrorResponseParams(TypedDict):
    error: str


@web.middleware
async def error_middleware(request: Request,
                           handler: Callable[[Request], Awaitable[web.StreamResponse]]) -> web.StreamResponse:
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except ZeroConfigError as e:
        return web.json_response(ErrorResponseParams(error=e.message), status=422)
    except Exception as e:
        return web.json_response(ErrorResponseParams(
            error=f'Something went terribly wrong:\n{str(e)}\n\n{traceback.format_exc()}'
        ), status=500)


def make_app(engine: Engine | None = None) -> web.Application:
    app = web.Application(middlewares=[error_middleware])
    if engine is not None:
        app[ENGINE] = engine

    app.add_routes([
        web.get(HEALTHCHECK_PATH, healthcheck),
        web.get(SERVICES_PATH, http_get_services),
        web.post(START_PATH, services_start),
        web.post(STOP_PATH, services_stop),
        web.post(RESTART_PATH, services_restart),
        web.post(EXEC_PATH, services_exec),
        web.post(LOGS_PATH, services_logs),
        web.get(HEALTH_PATH, http_get_health),
        web.get(STATS_PATH, http_get_stats),
    ])
    return app


async def connect_engine(app: web.Application) -> None:
    config = Config()
    engine = await Engine.connect(load_services(config.project_file_path), config)
    await engine.build()
    app[ENGINE] = engine


def run_server():
    app = make_app()
    app.on_startup.append(connect_engine)
    web.run_app(app, port=Config().server_port)
