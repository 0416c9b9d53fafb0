import aiohttp
from aiohttp import ClientConnectorError
from rtry import retry

from zeroconfig.errors import ZeroConfigError
from zeroconfig.server.commands import EXEC_PATH
from zeroconfig.server.commands import HEALTHCHECK_PATH
from zeroconfig.server.commands import HEALTH_PATH
from zeroconfig.server.commands import LOGS_PATH
from zeroconfig.server.commands import RESTART_PATH
from zeroconfig.server.commands import SERVICES_PATH
from zeroconfig.server.commands import START_PATH
from zeroconfig.server.commands import STATS_PATH
from zeroconfig.server.commands import STOP_PATH
from zeroconfig.server.handlers.exec import ExecRequestParams
from zeroconfig.server.handlers.exec import ExecResponseParams
from zeroconfig.server.handlers.lifecycle import RestartResponseParams
from zeroconfig.server.handlers.lifecycle import ServicesRequestParams
from zeroconfig.server.handlers.lifecycle import StartResponseParams
from zeroconfig.server.handlers.lifecycle import StopResponseParams
from zeroconfig.server.handlers.logs import LogsRequestParams
from zeroconfig.server.handlers.logs import LogsResponseParams
from zeroconfig.server.handlers.monitoring import HealthResponseParams
from zeroconfig.server.handlers.monitoring import StatsResponseParams
from zeroconfig.server.handlers.services import ServicesResponseParams
from zeroconfig.server.zeroconfig_server import ErrorResponseParams

HTTP_UNPROCESSABLE = 422


class ZeroConfigClient:
    def __init__(self, host, port=80):
        self._server_host = host
        self._server_port = port
        self._server_url = f'{self._server_host}:{self._server_port}'

    async def _check(self, response: aiohttp.ClientResponse) -> dict:
        if response.status == HTTP_UNPROCESSABLE:
            raise ZeroConfigError(ErrorResponseParams(**await response.json())['error'])
        assert response.status == 200, response
        return await response.json()

    @retry(attempts=10, delay=1, swallow=ClientConnectorError)
    async def healthcheck(self) -> str:
        async with aiohttp.ClientSession() as session:
            url = f'{self._server_url}{HEALTHCHECK_PATH}'
            async with session.get(url) as response:
                assert response.status == 200, response
                state = await response.json()
                assert state.get('status') == 'ok', state
                return state['version']

    @retry(attempts=5, delay=1, swallow=ClientConnectorError)
    async def services(self) -> ServicesResponseParams:
        async with aiohttp.ClientSession() as session:
            async with session.get(f'{self._server_url}{SERVICES_PATH}') as response:
                return ServicesResponseParams(**await self._check(response))

    async def start(self, services: list[str] | None = None) -> StartResponseParams:
        async with aiohttp.ClientSession() as session:
            async with session.post(f'{self._server_url}{START_PATH}',
                                    json=ServicesRequestParams(services=services)) as response:
                return StartResponseParams(**await self._check(response))

    async def stop(self, services: list[str] | None = None) -> list[str]:
        async with aiohttp.ClientSession() as session:
            async with session.post(f'{self._server_url}{STOP_PATH}',
                                    json=ServicesRequestParams(services=services)) as response:
                return StopResponseParams(**await self._check(response))['stopped']

    async def restart(self, services: list[str] | None = None) -> list[str]:
        async with aiohttp.ClientSession() as session:
            async with session.post(f'{self._server_url}{RESTART_PATH}',
                                    json=ServicesRequestParams(services=services)) as response:
                return RestartResponseParams(**await self._check(response))['restarted']

    async def exec(self, service: str, command: list[str]) -> str:
        async with aiohttp.ClientSession() as session:
            async with session.post(f'{self._server_url}{EXEC_PATH}',
                                    json=ExecRequestParams(service=service, command=command)) as response:
                return ExecResponseParams(**await self._check(response))['output']

    async def logs(self, service: str, tail: int | None = None) -> list[str]:
        async with aiohttp.ClientSession() as session:
            async with session.post(f'{self._server_url}{LOGS_PATH}',
                                    json=LogsRequestParams(service=service, tail=tail)) as response:
                return LogsResponseParams(**await self._check(response))['logs']

    @retry(attempts=5, delay=1, swallow=ClientConnectorError)
    async def health(self) -> list[dict]:
        async with aiohttp.ClientSession() as session:
            async with session.get(f'{self._server_url}{HEALTH_PATH}') as response:
                return HealthResponseParams(**await self._check(response))['health']

    @retry(attempts=5, delay=1, swallow=ClientConnectorError)
    async def stats(self) -> list[dict]:
        async with aiohttp.ClientSession() as session:
            async with session.get(f'{self._server_url}{STATS_PATH}') as response:
                return StatsResponseParams(**await self._check(response))['stats']
