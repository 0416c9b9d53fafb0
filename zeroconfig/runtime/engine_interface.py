from typing import AsyncIterator
from typing import Callable

from zeroconfig.core.container_data_types import ContainerInspect
from zeroconfig.core.container_data_types import ContainerSpec
from zeroconfig.core.container_data_types import ContainersState
from zeroconfig.core.container_data_types import ContainerStats
from zeroconfig.core.container_data_types import ExecResult

ProgressCallback = Callable[[str], None]


class ContainerEngineInterface:
    """
    Engine-agnostic async boundary of the container engine.

    Every failure is raised as `EngineCallError`. Idempotent cleanup calls
    report "nothing to do" through their return value instead:
    `create_network` and `remove_container` / `stop_container` return False
    when the network already exists or the container is missing.
    """
    name: str = 'engine'
    has_native_restart: bool = True

    async def ping(self) -> None:
        raise NotImplementedError()

    async def create_network(self, name: str) -> bool:
        raise NotImplementedError()

    async def pull_image(self, image: str, progress: ProgressCallback | None = None) -> None:
        raise NotImplementedError()

    async def remove_container(self, name: str) -> bool:
        raise NotImplementedError()

    async def create_container(self, spec: ContainerSpec) -> str:
        raise NotImplementedError()

    async def start_container(self, name: str) -> None:
        raise NotImplementedError()

    async def stop_container(self, name: str, timeout: int = 10) -> bool:
        raise NotImplementedError()

    async def restart_container(self, name: str, timeout: int = 10) -> None:
        raise NotImplementedError()

    async def list_containers(self, name_filter: str) -> ContainersState:
        raise NotImplementedError()

    async def inspect_container(self, name: str) -> ContainerInspect:
        raise NotImplementedError()

    async def exec_run(self, name: str, argv: list[str]) -> ExecResult:
        raise NotImplementedError()

    def exec_stream(self, name: str, argv: list[str], stdout: bool = True,
                    stderr: bool = True) -> AsyncIterator[bytes]:
        """Yields output chunks, raises EngineCallError after the last one on non-zero exit code."""
        raise NotImplementedError()

    def logs(self, name: str, follow: bool = False, tail: int | None = None) -> AsyncIterator[bytes]:
        raise NotImplementedError()

    async def stats(self, name: str) -> ContainerStats:
        raise NotImplementedError()
