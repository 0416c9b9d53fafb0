from zeroconfig.core.config import Config
from zeroconfig.errors import EngineUnavailable
from zeroconfig.runtime.descriptors import EngineBoundary
from zeroconfig.runtime.discovery import RuntimeStatus
from zeroconfig.runtime.docker_api_interface import DockerApiInterface
from zeroconfig.runtime.engine_interface import ContainerEngineInterface
from zeroconfig.runtime.shell_interface import ShellEngineInterface


async def make_engine_interface(status: RuntimeStatus, config: Config) -> ContainerEngineInterface:
    runtime = status.runtime
    match runtime.boundary:
        case EngineBoundary.API:
            return await DockerApiInterface.connect(config.docker_host)
        case EngineBoundary.CLI:
            interface = ShellEngineInterface(runtime, verbose=config.verbose_engine_commands)
            await interface.ping()
            return interface
        case _:
            raise EngineUnavailable(
                f'{runtime.name} has no container lifecycle boundary, '
                f'install Docker, Podman or nerdctl to run services'
            )
