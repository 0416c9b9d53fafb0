import asyncio
import shlex
from typing import AsyncIterator
from typing import Iterable

import docker
from docker.errors import APIError
from docker.errors import DockerException
from docker.errors import NotFound
from docker.types import CancellableStream
from docker.utils import parse_repository_tag
from rich.text import Text

from zeroconfig.core.container_data_types import ContainerInspect
from zeroconfig.core.container_data_types import ContainerSpec
from zeroconfig.core.container_data_types import ContainersState
from zeroconfig.core.container_data_types import ContainerStats
from zeroconfig.core.container_data_types import ContainerSummary
from zeroconfig.core.container_data_types import ExecResult
from zeroconfig.errors import EngineCallError
from zeroconfig.errors import EngineUnavailable
from zeroconfig.output.console import CONSOLE
from zeroconfig.output.styles import Style
from zeroconfig.runtime.engine_interface import ContainerEngineInterface
from zeroconfig.runtime.engine_interface import ProgressCallback

_DONE = object()
HTTP_CONFLICT = 409


class DockerApiInterface(ContainerEngineInterface):
    """Talks to the engine API socket through the docker SDK, blocking calls run in worker threads."""
    name = 'docker-api'

    def __init__(self, client: docker.DockerClient):
        self._client = client
        self._api = client.api

    @classmethod
    async def connect(cls, base_url: str | None = None) -> 'DockerApiInterface':
        def make_client() -> docker.DockerClient:
            if base_url:
                return docker.DockerClient(base_url=base_url)
            return docker.from_env()

        try:
            client = await asyncio.to_thread(make_client)
        except DockerException as e:
            raise EngineUnavailable(f"Can't connect to docker API at {base_url or 'default socket'}: {e}") from e
        interface = cls(client)
        await interface.ping()
        return interface

    async def _call(self, operation: str, target: str, fn, *args, **kwargs):
        try:
            return await asyncio.to_thread(fn, *args, **kwargs)
        except DockerException as e:
            raise EngineCallError(operation, target, str(e)) from e

    async def _iterate(self, operation: str, target: str, stream: Iterable) -> AsyncIterator:
        iterator = iter(stream)
        try:
            while True:
                try:
                    chunk = await asyncio.to_thread(next, iterator, _DONE)
                except DockerException as e:
                    raise EngineCallError(operation, target, str(e)) from e
                if chunk is _DONE:
                    return
                yield chunk
        finally:
            if isinstance(stream, CancellableStream):
                stream.close()

    async def ping(self) -> None:
        try:
            await self._call('ping', 'engine', self._api.ping)
        except EngineCallError as e:
            raise EngineUnavailable(f'Docker is not running or not accessible: {e.details}') from e

    async def create_network(self, name: str) -> bool:
        def create() -> bool:
            if any(network.name == name for network in self._client.networks.list(names=[name])):
                return False
            try:
                self._client.networks.create(name, driver='bridge')
            except APIError as e:
                if e.status_code == HTTP_CONFLICT or 'already exists' in str(e):
                    return False
                raise
            return True

        return await self._call('network create', name, create)

    async def pull_image(self, image: str, progress: ProgressCallback | None = None) -> None:
        repository, tag = parse_repository_tag(image)
        stream = await self._call('pull', image, self._api.pull, repository, tag=tag or 'latest',
                                  stream=True, decode=True)
        async for event in self._iterate('pull', image, stream):
            if 'error' in event:
                raise EngineCallError('pull', image, event['error'])
            status = event.get('status', '')
            if progress is not None and ('Download' in status or 'Pull' in status):
                progress(status)

    async def remove_container(self, name: str) -> bool:
        def remove() -> bool:
            try:
                self._api.remove_container(name, force=True)
            except NotFound:
                return False
            return True

        return await self._call('remove', name, remove)

    async def create_container(self, spec: ContainerSpec) -> str:
        CONSOLE.print(Text(f'create {spec.name} from {spec.image}', style=Style.context))
        container = await self._call(
            'create', spec.name,
            self._client.containers.create,
            spec.image,
            command=spec.command,
            name=spec.name,
            environment=spec.env_list(),
            ports={f'{spec.container_port}/tcp': ('0.0.0.0', spec.host_port)},
            volumes=spec.binds or None,
            network=spec.network,
            labels=dict(spec.labels),
        )
        return container.id

    async def start_container(self, name: str) -> None:
        await self._call('start', name, self._api.start, name)

    async def stop_container(self, name: str, timeout: int = 10) -> bool:
        def stop() -> bool:
            try:
                self._api.stop(name, timeout=timeout)
            except NotFound:
                return False
            return True

        return await self._call('stop', name, stop)

    async def restart_container(self, name: str, timeout: int = 10) -> None:
        await self._call('restart', name, self._api.restart, name, timeout=timeout)

    async def list_containers(self, name_filter: str) -> ContainersState:
        containers = await self._call('list', name_filter, self._api.containers,
                                      all=True, filters={'name': name_filter})
        return ContainersState([ContainerSummary.from_api(container) for container in containers])

    async def inspect_container(self, name: str) -> ContainerInspect:
        return ContainerInspect.from_api(await self._call('inspect', name, self._api.inspect_container, name))

    async def exec_run(self, name: str, argv: list[str]) -> ExecResult:
        def run() -> ExecResult:
            exec_id = self._api.exec_create(name, argv, stdout=True, stderr=True)['Id']
            output = self._api.exec_start(exec_id)
            exit_code = self._api.exec_inspect(exec_id).get('ExitCode')
            return ExecResult(exit_code=exit_code or 0, output=output or b'')

        return await self._call('exec', name, run)

    async def exec_stream(self, name: str, argv: list[str], stdout: bool = True,
                          stderr: bool = True) -> AsyncIterator[bytes]:
        exec_id = (await self._call('exec', name, self._api.exec_create, name, argv,
                                    stdout=stdout, stderr=stderr))['Id']
        stream = await self._call('exec', name, self._api.exec_start, exec_id, stream=True)
        async for chunk in self._iterate('exec', name, stream):
            yield chunk

        exit_code = (await self._call('exec', name, self._api.exec_inspect, exec_id)).get('ExitCode')
        if exit_code:
            raise EngineCallError('exec', name, f'{shlex.join(argv)} exited with code {exit_code}')

    async def logs(self, name: str, follow: bool = False, tail: int | None = None) -> AsyncIterator[bytes]:
        stream = await self._call('logs', name, self._api.logs, name, stdout=True, stderr=True, stream=True,
                                  follow=follow, tail=tail if tail is not None else 'all')
        async for chunk in self._iterate('logs', name, stream):
            yield chunk

    async def stats(self, name: str) -> ContainerStats:
        snapshot = await self._call('stats', name, self._api.stats, name, stream=False)
        return ContainerStats.from_api_snapshot(name, snapshot)
