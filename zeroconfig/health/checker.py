import time
from dataclasses import dataclass
from dataclasses import field
from datetime import datetime
from datetime import timezone
from enum import Enum

from rich.text import Text
from rtry import CancelledError
from rtry import retry

from zeroconfig.core.container_data_types import ContainerHealth
from zeroconfig.core.container_data_types import ContainerState
from zeroconfig.core.service_tables import HEALTH_PROBES
from zeroconfig.core.service_tables import HEALTHY_MARKERS
from zeroconfig.core.service_tables import get_service_type
from zeroconfig.errors import EngineCallError
from zeroconfig.errors import HealthCheckTimeout
from zeroconfig.helpers.state_keeper import StateKeeper
from zeroconfig.output.console import CONSOLE
from zeroconfig.output.logger import Logger
from zeroconfig.output.styles import Style
from zeroconfig.runtime.engine_interface import ContainerEngineInterface

DEFAULT_INTERVAL_S = 2


class HealthState(Enum):
    NOT_RUNNING = 'not_running'
    RUNNING_NO_HEALTHCHECK = 'running_no_healthcheck'
    HEALTHY = 'healthy'
    UNHEALTHY = 'unhealthy'
    INSPECT_FAILED = 'inspect_failed'


@dataclass(frozen=True)
class HealthStatus:
    service_name: str
    state: HealthState
    is_healthy: bool
    message: str
    latency_ms: int
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def as_rich_text(self, style: Style = Style()) -> Text:
        mark, mark_style = (' ✔ ', style.good) if self.is_healthy else (' ✗ ', style.bad)
        return (
            Text(mark, style=mark_style)
            .append(Text(f'{self.service_name:{20}}', style=style.regular))
            .append(Text(f' - {self.message}', style=style.regular))
            .append(Text(f' ({self.latency_ms}ms)', style=style.context))
        )

    def as_json(self) -> dict:
        return {
            'service': self.service_name,
            'state': self.state.value,
            'is_healthy': self.is_healthy,
            'message': self.message,
            'latency_ms': self.latency_ms,
            'checked_at': self.checked_at.isoformat(),
        }


class HealthChecker:
    def __init__(self, interface: ContainerEngineInterface):
        self._interface = interface

    async def _probe(self, container: str, service: str) -> tuple[HealthState, str]:
        service_type = get_service_type(service)
        probe = HEALTH_PROBES.get(service_type)
        if probe is None:
            return HealthState.RUNNING_NO_HEALTHCHECK, 'Running (no health check available)'

        try:
            result = await self._interface.exec_run(container, probe)
        except EngineCallError as e:
            return HealthState.UNHEALTHY, f'Health check failed: {e.details}'

        if result.exit_code != 0:
            return HealthState.UNHEALTHY, f'Health check failed: {result.text.strip() or result.exit_code}'
        if any(marker in result.text for marker in HEALTHY_MARKERS):
            return HealthState.HEALTHY, 'Healthy'
        return HealthState.RUNNING_NO_HEALTHCHECK, 'Running'

    async def check_container(self, container: str, service: str) -> HealthStatus:
        started = time.monotonic()

        def status(state: HealthState, message: str) -> HealthStatus:
            return HealthStatus(
                service_name=service,
                state=state,
                is_healthy=state in (HealthState.HEALTHY, HealthState.RUNNING_NO_HEALTHCHECK),
                message=message,
                latency_ms=int((time.monotonic() - started) * 1000),
            )

        try:
            inspect = await self._interface.inspect_container(container)
        except EngineCallError as e:
            return status(HealthState.INSPECT_FAILED, f'Failed to inspect container: {e.details}')

        if inspect.status != ContainerState.RUNNING:
            return status(HealthState.NOT_RUNNING, f'Container not running: {inspect.status or "unknown"}')

        if inspect.health is not None:
            if inspect.health == ContainerHealth.HEALTHY:
                return status(HealthState.HEALTHY, inspect.health)
            return status(HealthState.UNHEALTHY, inspect.health)

        return status(*await self._probe(container, service))

    async def wait_for_healthy(self, container: str, service: str, timeout: float,
                               interval: float = DEFAULT_INTERVAL_S) -> HealthStatus:
        state_keeper: StateKeeper[HealthState] = StateKeeper()
        logger = Logger(CONSOLE, title=Text(f'Waiting for {service} to become healthy', style=Style.info))

        async def check() -> HealthStatus:
            health_status = await self.check_container(container, service)
            if not health_status.is_healthy and state_keeper.changed(health_status.state):
                logger.log(health_status.as_rich_text())
                logger.flush()
            return health_status

        until_healthy = retry(timeout=timeout, delay=interval, until=lambda health_status: not health_status.is_healthy)
        poll = until_healthy(check)
        try:
            health_status = await poll()
        except CancelledError:
            raise HealthCheckTimeout(f'Timeout waiting for {service} to become healthy after {timeout}s') from None

        logger.log(health_status.as_rich_text())
        logger.flush()
        return health_status
