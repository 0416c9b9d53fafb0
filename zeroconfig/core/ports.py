from typing import Iterable

from zeroconfig.core.container_data_types import ServiceSpec
from zeroconfig.errors import PortConflict


class PortAllocator:
    """
    Host port per declared service.

    Ports are handed out from `base_port` upwards in declaration order.
    A service keeps its port across rebuilds while it stays declared;
    services with a fixed `port` are taken as is and must not collide.
    """

    def __init__(self, base_port: int):
        self._base_port = base_port
        self._allocation: dict[str, int] = {}

    @property
    def allocation(self) -> dict[str, int]:
        return dict(self._allocation)

    def get(self, service: str) -> int | None:
        return self._allocation.get(service)

    def _next_free(self, taken: set[int], start: int) -> int:
        port = start
        while port in taken:
            port += 1
        return port

    def allocate(self, services: Iterable[ServiceSpec]) -> dict[str, int]:
        services = list(services)
        declared = {service.name for service in services}

        allocation = {name: port for name, port in self._allocation.items() if name in declared}
        owners = {port: name for name, port in allocation.items()}

        for service in services:
            if service.port is None or allocation.get(service.name) == service.port:
                continue
            if service.port in owners and owners[service.port] != service.name:
                raise PortConflict(
                    f'Port {service.port} of service {service.name} is already allocated '
                    f'to service {owners[service.port]}'
                )
            if service.name in allocation:
                owners.pop(allocation[service.name])
            allocation[service.name] = service.port
            owners[service.port] = service.name

        next_port = self._base_port
        for service in services:
            if service.name in allocation:
                continue
            next_port = self._next_free(set(owners), next_port)
            allocation[service.name] = next_port
            owners[next_port] = service.name

        self._allocation = {service.name: allocation[service.name] for service in services}
        return self.allocation
