import shlex
from pathlib import Path
from typing import AsyncIterator
from typing import Iterable

from rich.text import Text

from zeroconfig.core.container_data_types import ContainerSpec
from zeroconfig.core.container_data_types import ContainersState
from zeroconfig.core.container_data_types import ContainerStats
from zeroconfig.core.container_data_types import ContainerSummary
from zeroconfig.core.container_data_types import ServiceSpec
from zeroconfig.core.naming import belongs_to_project
from zeroconfig.core.naming import container_name
from zeroconfig.core.naming import matches_service
from zeroconfig.core.naming import network_name
from zeroconfig.core.service_tables import CREDENTIAL_RULES
from zeroconfig.core.service_tables import get_container_port
from zeroconfig.core.service_tables import get_service_image
from zeroconfig.core.service_tables import get_service_type
from zeroconfig.credentials import CredentialStore
from zeroconfig.credentials import generator
from zeroconfig.credentials.env_secrets import credential_key
from zeroconfig.credentials.env_secrets import resolve_declared_env
from zeroconfig.errors import ContainerCreateFailure
from zeroconfig.errors import ContainerNotFound
from zeroconfig.errors import ContainerOperationFailure
from zeroconfig.errors import EngineCallError
from zeroconfig.errors import ExecFailure
from zeroconfig.errors import ImagePullFailure
from zeroconfig.errors import NetworkCreateFailure
from zeroconfig.helpers.labels import Label
from zeroconfig.output.console import CONSOLE
from zeroconfig.output.styles import Style
from zeroconfig.runtime.engine_interface import ContainerEngineInterface


async def split_lines(chunks: AsyncIterator[bytes]) -> AsyncIterator[str]:
    tail = b''
    async for chunk in chunks:
        *lines, tail = (tail + chunk).split(b'\n')
        for line in lines:
            yield line.decode('utf-8', errors='replace').rstrip('\r')
    if tail:
        yield tail.decode('utf-8', errors='replace').rstrip('\r')


class ContainerOrchestrator:
    """
    Turns declared services into containers of one project.

    Containers are addressed by `{project}_{service}` only, their state is
    always queried from the engine.
    """

    def __init__(self,
                 project: str,
                 interface: ContainerEngineInterface,
                 credentials: CredentialStore,
                 project_root: Path = Path('.'),
                 stop_timeout: int = 10):
        self.project = project
        self.network = network_name(project)
        self.interface = interface
        self.credentials = credentials
        self.project_root = project_root
        self.stop_timeout = stop_timeout

    def container_name(self, service: str) -> str:
        return container_name(self.project, service)

    async def create_network(self) -> bool:
        try:
            created = await self.interface.create_network(self.network)
        except EngineCallError as e:
            raise NetworkCreateFailure(f"Can't create network {self.network}: {e.details}") from e

        if created:
            CONSOLE.print(Text('Created network: ', style=Style.info)
                          .append(Text(self.network, style=Style.mark_neutral)))
        else:
            CONSOLE.print(Text(f'Network {self.network} already exists', style=Style.context))
        return created

    async def pull_image(self, service: str, image: str) -> None:
        CONSOLE.print(Text('Pulling image: ', style=Style.info).append(Text(image, style=Style.mark_neutral)))

        def on_progress(status: str):
            CONSOLE.print(Text(f'  {service}: {status}', style=Style.context))

        try:
            await self.interface.pull_image(image, on_progress)
        except EngineCallError as e:
            raise ImagePullFailure(f"Can't pull image {image} for service {service}: {e.details}") from e

    async def generated_environment(self, service: str) -> dict[str, str]:
        service_type = get_service_type(service)
        if service_type not in CREDENTIAL_RULES:
            return {}
        rule = CREDENTIAL_RULES[service_type]
        secret = await self.credentials.get_or_generate(
            credential_key(service, rule.secret_env), generator.db_password
        )
        return rule.static_env | {rule.secret_env: secret}

    def resolve_binds(self, volumes: Iterable[str]) -> list[str]:
        binds = []
        for volume in volumes:
            source, separator, destination = volume.partition(':')
            if separator and source.startswith('.'):
                source = str((self.project_root / source).resolve())
            binds.append(f'{source}{separator}{destination}')
        return binds

    async def build_container_spec(self, service: ServiceSpec, host_port: int) -> ContainerSpec:
        environment = await self.generated_environment(service.name)
        environment |= await resolve_declared_env(service.name, service.environment, self.credentials)

        return ContainerSpec(
            name=self.container_name(service.name),
            image=get_service_image(service.name, service.version),
            environment=environment,
            binds=self.resolve_binds(service.volumes),
            host_port=host_port,
            container_port=get_container_port(service.name),
            network=self.network,
            command=shlex.split(service.command) if service.command else None,
            labels={
                Label.PROJECT: self.project,
                Label.SERVICE: service.name,
                Label.MANAGED: 'true',
            },
        )

    async def start_service(self, service: ServiceSpec, host_port: int) -> str:
        name = self.container_name(service.name)
        image = get_service_image(service.name, service.version)

        await self.pull_image(service.name, image)

        try:
            await self.interface.remove_container(name)
        except EngineCallError as e:
            CONSOLE.print(Text(f"Can't remove existing container {name}: {e.details}", style=Style.suspicious))

        spec = await self.build_container_spec(service, host_port)
        try:
            container_id = await self.interface.create_container(spec)
            await self.interface.start_container(name)
        except EngineCallError as e:
            raise ContainerCreateFailure(f"Can't {e.operation} container {name} for service {service.name}: "
                                         f"{e.details}") from e

        CONSOLE.print(
            Text(' ✔ Started ', style=Style.good)
            .append(Text(name, style=Style.mark_neutral))
            .append(Text(f' on port {host_port}', style=Style.regular))
        )
        return container_id

    async def _stop_container(self, name: str) -> bool:
        try:
            stopped = await self.interface.stop_container(name, self.stop_timeout)
        except EngineCallError as e:
            raise ContainerOperationFailure(f"Can't stop container {name}: {e.details}") from e

        if stopped:
            CONSOLE.print(Text('Stopped container: ', style=Style.info)
                          .append(Text(name, style=Style.mark_neutral)))
        else:
            CONSOLE.print(Text(f'Container {name} not found', style=Style.suspicious))
        return stopped

    async def _restart_container(self, name: str) -> None:
        try:
            await self.interface.restart_container(name, self.stop_timeout)
        except EngineCallError as e:
            raise ContainerOperationFailure(f"Can't restart container {name}: {e.details}") from e
        CONSOLE.print(Text('Restarted container: ', style=Style.info)
                      .append(Text(name, style=Style.mark_neutral)))

    async def stop_service(self, service: str) -> bool:
        return await self._stop_container(self.container_name(service))

    async def restart_service(self, service: str) -> bool:
        name = self.container_name(service)
        containers = await self.list_containers()
        if containers.get_any_for(lambda container: container.name == name) is None:
            CONSOLE.print(Text(f'Container {name} not found', style=Style.suspicious))
            return False
        await self._restart_container(name)
        return True

    async def list_containers(self) -> ContainersState:
        try:
            containers = await self.interface.list_containers(self.project)
        except EngineCallError as e:
            raise ContainerOperationFailure(f"Can't list containers of project {self.project}: {e.details}") from e
        return containers.get_all_for(lambda container: belongs_to_project(self.project, container.name))

    async def stop_all(self) -> None:
        for container in await self.list_containers():
            if container.is_running:
                await self._stop_container(container.name)

    async def restart_all(self) -> None:
        for container in await self.list_containers():
            await self._restart_container(container.name)

    async def locate_container(self, service: str) -> ContainerSummary:
        containers = await self.list_containers()
        container = containers.get_any_for(lambda c: matches_service(self.project, service, c.name))
        if container is None:
            raise ContainerNotFound(f"Service '{service}' not found or not running")
        return container

    async def exec_command(self, service: str, argv: list[str]) -> None:
        container = await self.locate_container(service)
        try:
            async for chunk in self.interface.exec_stream(container.name, argv):
                CONSOLE.print(Text(chunk.decode('utf-8', errors='replace'), style=Style.regular), end='')
        except EngineCallError as e:
            raise ExecFailure(f"Can't exec {shlex.join(argv)} in service {service}: {e.details}") from e

    async def exec_command_with_output(self, service: str, argv: list[str], stderr: bool = True) -> str:
        container = await self.locate_container(service)
        chunks = []
        try:
            async for chunk in self.interface.exec_stream(container.name, argv, stdout=True, stderr=stderr):
                chunks.append(chunk)
        except EngineCallError as e:
            raise ExecFailure(f"Can't exec {shlex.join(argv)} in service {service}: {e.details}") from e
        return b''.join(chunks).decode('utf-8', errors='replace')

    async def get_logs(self, service: str, follow: bool = False, tail: int | None = None) -> AsyncIterator[str]:
        container = await self.locate_container(service)
        try:
            async for line in split_lines(self.interface.logs(container.name, follow=follow, tail=tail)):
                yield line
        except EngineCallError as e:
            raise ContainerOperationFailure(f"Can't read logs of service {service}: {e.details}") from e

    async def _stats(self, name: str) -> ContainerStats:
        try:
            return await self.interface.stats(name)
        except EngineCallError as e:
            raise ContainerOperationFailure(f"Can't get stats of container {name}: {e.details}") from e

    async def get_stats(self, service: str) -> ContainerStats:
        container = await self.locate_container(service)
        return await self._stats(container.name)

    async def get_all_stats(self) -> list[ContainerStats]:
        stats = []
        for container in await self.list_containers():
            if not container.is_running:
                continue
            try:
                stats.append(await self._stats(container.name))
            except ContainerOperationFailure as e:
                CONSOLE.print(Text(f'Failed to get stats for {container.name}: {e.message}', style=Style.suspicious))
        return stats
