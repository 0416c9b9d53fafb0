import asyncio
from typing import AsyncIterator
from typing import Callable
from typing import Iterable

from rich.text import Text

from zeroconfig.core.config import Config
from zeroconfig.core.container_data_types import ContainersState
from zeroconfig.core.container_data_types import ContainerStats
from zeroconfig.core.container_data_types import ServiceSpec
from zeroconfig.core.orchestrator import ContainerOrchestrator
from zeroconfig.core.ports import PortAllocator
from zeroconfig.credentials import CredentialStore
from zeroconfig.errors import ContainerNotFound
from zeroconfig.errors import ServiceNotDeclared
from zeroconfig.health import HealthChecker
from zeroconfig.health import HealthState
from zeroconfig.health import HealthStatus
from zeroconfig.output.console import CONSOLE
from zeroconfig.output.styles import Style
from zeroconfig.runtime.boundary import make_engine_interface
from zeroconfig.runtime.discovery import RuntimeDetector
from zeroconfig.runtime.discovery import RuntimeDiscovery


class Engine:
    """
    Project level surface over the orchestrator.

    Holds the declared services and their port allocation for the run,
    everything about containers is asked from the engine on demand.
    """

    def __init__(self,
                 config: Config,
                 services: Iterable[ServiceSpec],
                 orchestrator: ContainerOrchestrator,
                 health_checker: HealthChecker,
                 discovery: RuntimeDiscovery | None = None):
        self.config = config
        self.services: dict[str, ServiceSpec] = {service.name: service for service in services}
        self.orchestrator = orchestrator
        self.health_checker = health_checker
        self.discovery = discovery
        self.port_allocator = PortAllocator(config.base_port)
        self._built = False

    @classmethod
    async def connect(cls, services: Iterable[ServiceSpec], config: Config | None = None,
                      detector: RuntimeDetector | None = None) -> 'Engine':
        if config is None:
            config = Config()
        if detector is None:
            detector = RuntimeDetector()

        CONSOLE.print(Text('Initializing ZeroConfig engine for project: ', style=Style.info)
                      .append(Text(config.project, style=Style.mark)))
        discovery = await detector.detect()
        interface = await make_engine_interface(discovery.preferred, config)
        orchestrator = ContainerOrchestrator(
            project=config.project,
            interface=interface,
            credentials=CredentialStore(config.credentials_file_path),
            project_root=config.project_root,
            stop_timeout=config.stop_timeout,
        )
        return cls(config, services, orchestrator, HealthChecker(interface), discovery)

    @property
    def ports(self) -> dict[str, int]:
        return self.port_allocator.allocation

    def get_service(self, name: str) -> ServiceSpec:
        if name not in self.services:
            raise ServiceNotDeclared(f"Service '{name}' not found in configuration")
        return self.services[name]

    async def build(self) -> dict[str, int]:
        CONSOLE.print(Text('Building environment...', style=Style.info))
        await self.orchestrator.create_network()
        ports = self.port_allocator.allocate(self.services.values())
        self._built = True
        for service, port in ports.items():
            CONSOLE.print(Text(f'  {service:{20}}', style=Style.regular).append(Text(str(port), style=Style.mark)))
        return ports

    async def _start(self, service: ServiceSpec) -> str:
        container_id = await self.orchestrator.start_service(service, self.port_allocator.get(service.name))
        if self.config.wait_healthy_on_start:
            await self.wait_healthy(service.name)
        return container_id

    async def start(self) -> dict[str, str]:
        if not self._built:
            await self.build()
        CONSOLE.print(Text('Starting services...', style=Style.info))
        container_ids = await asyncio.gather(*[self._start(service) for service in self.services.values()])
        CONSOLE.print(Text(' ✔ All services started', style=Style.good))
        return dict(zip(self.services, container_ids))

    async def stop(self) -> None:
        CONSOLE.print(Text('Stopping all services...', style=Style.info))
        await self.orchestrator.stop_all()

    async def start_service(self, name: str) -> str:
        service = self.get_service(name)
        if not self._built:
            await self.build()
        return await self._start(service)

    async def stop_service(self, name: str) -> bool:
        self.get_service(name)
        return await self.orchestrator.stop_service(name)

    async def restart_service(self, name: str) -> bool:
        self.get_service(name)
        return await self.orchestrator.restart_service(name)

    async def restart_all(self) -> None:
        await self.orchestrator.restart_all()

    async def list_services(self) -> ContainersState:
        return await self.orchestrator.list_containers()

    def logs(self, service: str, follow: bool = False, tail: int | None = None) -> AsyncIterator[str]:
        return self.orchestrator.get_logs(service, follow=follow, tail=tail)

    async def exec(self, service: str, argv: list[str]) -> None:
        await self.orchestrator.exec_command(service, argv)

    async def exec_with_output(self, service: str, argv: list[str], stderr: bool = True) -> str:
        return await self.orchestrator.exec_command_with_output(service, argv, stderr=stderr)

    async def stats(self, service: str) -> ContainerStats:
        return await self.orchestrator.get_stats(service)

    async def all_stats(self) -> list[ContainerStats]:
        return await self.orchestrator.get_all_stats()

    async def check_health(self, service: str) -> HealthStatus:
        try:
            container = await self.orchestrator.locate_container(service)
        except ContainerNotFound as e:
            return HealthStatus(service_name=service, state=HealthState.NOT_RUNNING, is_healthy=False,
                                message=e.message, latency_ms=0)
        return await self.health_checker.check_container(container.name, service)

    async def health(self) -> list[HealthStatus]:
        return list(await asyncio.gather(*[self.check_health(service) for service in self.services]))

    async def wait_healthy(self, service: str, timeout: float | None = None) -> HealthStatus:
        return await self.health_checker.wait_for_healthy(
            self.orchestrator.container_name(service),
            service,
            timeout=timeout if timeout is not None else self.config.health_check_timeout,
            interval=self.config.health_check_interval,
        )

    def watch_logs(self, service: str, on_line: Callable[[str], None], tail: int | None = None) -> asyncio.Task:
        async def follow_logs():
            async for line in self.logs(service, follow=True, tail=tail):
                on_line(line)

        return asyncio.create_task(follow_logs(), name=f'logs:{service}')

    def watch_stats(self, service: str, on_stats: Callable[[ContainerStats], None],
                    interval: float = 2) -> asyncio.Task:
        async def poll_stats():
            while True:
                on_stats(await self.stats(service))
                await asyncio.sleep(interval)

        return asyncio.create_task(poll_stats(), name=f'stats:{service}')
