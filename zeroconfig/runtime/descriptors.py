"""
Static knowledge about every supported container engine variant.

One `RuntimeDescriptor` record per variant holds the command name and the
argument templates of each logical operation. Templates are tuples of
strings where `{container}` is substituted with the target container.
Callers never switch on the runtime name: they render through the record.
"""
from enum import Enum
from enum import auto
from typing import NamedTuple

CONTAINER = '{container}'


class EngineBoundary(Enum):
    API = auto()  # local API socket, docker SDK
    CLI = auto()  # docker-compatible command line
    NONE = auto()  # no container lifecycle of its own (clusters, VM managers)


class LogFlags(NamedTuple):
    follow: str | None = '-f'
    tail: str | None = '--tail'


class RuntimeDescriptor(NamedTuple):
    name: str
    command: str
    version_args: tuple[str, ...]
    status_args: tuple[str, ...]
    list_args: tuple[str, ...]
    start_args: tuple[str, ...]
    stop_args: tuple[str, ...]
    restart_args: tuple[str, ...] | None
    logs_args: tuple[str, ...]
    log_flags: LogFlags = LogFlags()
    boundary: EngineBoundary = EngineBoundary.NONE
    docker_compatible: bool = False
    kubernetes_compatible: bool = False

    def _render(self, template: tuple[str, ...], container: str = '') -> list[str]:
        return [self.command] + [arg.replace(CONTAINER, container) for arg in template]

    def version(self) -> list[str]:
        return self._render(self.version_args)

    def status(self) -> list[str]:
        return self._render(self.status_args)

    def list_containers(self) -> list[str]:
        return self._render(self.list_args)

    def start(self, container: str) -> list[str]:
        return self._render(self.start_args, container)

    def stop(self, container: str) -> list[str]:
        return self._render(self.stop_args, container)

    @property
    def has_native_restart(self) -> bool:
        return self.restart_args is not None

    def restart(self, container: str) -> list[str]:
        if not self.has_native_restart:
            raise ValueError(f'{self.name} has no native restart, use stop + start')
        return self._render(self.restart_args, container)

    def logs(self, container: str, follow: bool = False, tail: int | None = None) -> list[str]:
        flags = []
        if follow and self.log_flags.follow:
            flags += [self.log_flags.follow]
        if tail is not None and self.log_flags.tail:
            flags += [self.log_flags.tail, str(tail)]
        *prefix, target = self.logs_args
        return self._render(tuple(prefix) + tuple(flags) + (target,), container)


DOCKER = RuntimeDescriptor(
    name='Docker',
    command='docker',
    version_args=('--version',),
    status_args=('ps',),
    list_args=('ps', '-a', '--format', 'json'),
    start_args=('start', CONTAINER),
    stop_args=('stop', CONTAINER),
    restart_args=('restart', CONTAINER),
    logs_args=('logs', CONTAINER),
    boundary=EngineBoundary.API,
    docker_compatible=True,
)

PODMAN = DOCKER._replace(
    name='Podman',
    command='podman',
    boundary=EngineBoundary.CLI,
)

MINIKUBE = RuntimeDescriptor(
    name='Minikube',
    command='minikube',
    version_args=('version',),
    status_args=('status',),
    list_args=('kubectl', '--', 'get', 'pods', '-o', 'json'),
    start_args=('kubectl', '--', 'apply', '-f', CONTAINER),
    stop_args=('kubectl', '--', 'delete', 'pod', CONTAINER),
    restart_args=('kubectl', '--', 'rollout', 'restart', 'deployment', CONTAINER),
    logs_args=('kubectl', '--', 'logs', CONTAINER),
    kubernetes_compatible=True,
)

KUBERNETES = RuntimeDescriptor(
    name='Kubernetes',
    command='kubectl',
    version_args=('version', '--client'),
    status_args=('cluster-info',),
    list_args=('get', 'pods', '-o', 'json'),
    start_args=('apply', '-f', CONTAINER),
    stop_args=('delete', 'pod', CONTAINER),
    restart_args=('rollout', 'restart', 'deployment', CONTAINER),
    logs_args=('logs', CONTAINER),
    kubernetes_compatible=True,
)

DOCKER_COMPOSE = RuntimeDescriptor(
    name='Docker Compose',
    command='docker-compose',
    version_args=('--version',),
    status_args=('ps',),
    list_args=('ps', '--format', 'json'),
    start_args=('up', '-d', CONTAINER),
    stop_args=('stop', CONTAINER),
    restart_args=('restart', CONTAINER),
    logs_args=('logs', CONTAINER),
)

CONTAINERD = RuntimeDescriptor(
    name='containerd',
    command='ctr',
    version_args=('version',),
    status_args=('containers', 'list'),
    list_args=('containers', 'list'),
    start_args=('tasks', 'start', CONTAINER),
    stop_args=('tasks', 'kill', CONTAINER),
    restart_args=None,
    logs_args=('logs', CONTAINER),
    log_flags=LogFlags(follow=None, tail=None),
)

CRI_O = RuntimeDescriptor(
    name='CRI-O',
    command='crictl',
    version_args=('version',),
    status_args=('ps',),
    list_args=('ps', '-a', '--output', 'json'),
    start_args=('start', CONTAINER),
    stop_args=('stop', CONTAINER),
    restart_args=None,
    logs_args=('logs', CONTAINER),
    log_flags=LogFlags(follow=None, tail=None),
)

NERDCTL = DOCKER._replace(
    name='nerdctl',
    command='nerdctl',
    boundary=EngineBoundary.CLI,
)

# colima manages a VM exposing a docker socket, lifecycle goes through that API
COLIMA = RuntimeDescriptor(
    name='Colima',
    command='colima',
    version_args=('version',),
    status_args=('status',),
    list_args=('list',),
    start_args=('start',),
    stop_args=('stop',),
    restart_args=('restart',),
    logs_args=('logs',),
    log_flags=LogFlags(follow=None, tail=None),
    boundary=EngineBoundary.API,
    docker_compatible=True,
)

# priority order for preferred runtime selection
RUNTIMES: tuple[RuntimeDescriptor, ...] = (
    DOCKER,
    PODMAN,
    MINIKUBE,
    KUBERNETES,
    DOCKER_COMPOSE,
    CONTAINERD,
    CRI_O,
    NERDCTL,
    COLIMA,
)
