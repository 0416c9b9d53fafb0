from aiohttp import web

from zeroconfig.core.engine import Engine

ENGINE = web.AppKey('engine', Engine)
