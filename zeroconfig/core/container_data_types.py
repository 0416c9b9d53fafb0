import json
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable
from typing import Iterator
from typing import Mapping
from typing import NamedTuple

from rich.text import Text

from zeroconfig.output.styles import Style


class ContainerState:
    RUNNING = 'running'
    CREATED = 'created'
    EXITED = 'exited'
    PAUSED = 'paused'
    DEAD = 'dead'


class ContainerHealth:
    HEALTHY = 'healthy'
    UNHEALTHY = 'unhealthy'
    STARTING = 'starting'


class ServiceSpec(NamedTuple):
    name: str
    version: str
    environment: Mapping[str, str] = MappingProxyType({})
    volumes: tuple[str, ...] = ()
    command: str | None = None
    port: int | None = None


class ContainerSpec(NamedTuple):
    name: str
    image: str
    environment: dict[str, str]
    binds: list[str]
    host_port: int
    container_port: int
    network: str
    command: list[str] | None = None
    labels: Mapping[str, str] = MappingProxyType({})

    def env_list(self) -> list[str]:
        return [f'{key}={value}' for key, value in self.environment.items()]


def _parse_labels(labels: dict | str | None) -> dict[str, str]:
    if not labels:
        return {}
    if isinstance(labels, dict):
        return dict(labels)
    return {
        (label_split := label.split('=', maxsplit=1))[0]: label_split[1] if len(label_split) == 2 else ''
        for label in labels.split(',')
        if label
    }


def _first_name(names: list[str] | str | None) -> str:
    if not names:
        return ''
    if isinstance(names, str):
        names = names.split(',')
    return names[0].lstrip('/')


@dataclass
class ContainerSummary:
    id: str
    name: str
    image: str
    state: str
    status: str  # "Up X seconds"
    labels: dict[str, str]

    @classmethod
    def from_api(cls, container: dict) -> 'ContainerSummary':
        return cls(
            id=container['Id'],
            name=_first_name(container.get('Names')),
            image=container.get('Image', ''),
            state=container.get('State', ''),
            status=container.get('Status', ''),
            labels=_parse_labels(container.get('Labels')),
        )

    @classmethod
    def from_cli(cls, container: dict) -> 'ContainerSummary':
        return cls(
            id=container.get('ID') or container.get('Id', ''),
            name=_first_name(container.get('Names')),
            image=container.get('Image', ''),
            state=str(container.get('State', '')).lower(),
            status=container.get('Status', ''),
            labels=_parse_labels(container.get('Labels')),
        )

    @property
    def is_running(self) -> bool:
        return self.state == ContainerState.RUNNING

    def as_rich_text(self, style: Style = Style()) -> Text:
        container_string = Text('     ')
        container_string.append(Text(f"{self.name:{40}}", style=style.regular))

        match self.state:
            case ContainerState.RUNNING:
                style_result = style.good
            case ContainerState.EXITED | ContainerState.CREATED:
                style_result = style.suspicious
            case _:
                style_result = style.bad
        container_string.append(Text(f"{self.state:{12}}", style=style_result))
        container_string.append(Text(self.status, style=style.regular))
        container_string.append(Text('\n', style=style.regular))
        return container_string

    def as_json(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'image': self.image,
            'state': self.state,
            'status': self.status,
            'labels': self.labels,
        }


class ContainersState:
    def __init__(self, containers: list[ContainerSummary]):
        self._containers = list(containers)

    @classmethod
    def from_cli_output(cls, output: str) -> 'ContainersState':
        output = output.strip()
        if not output:
            return cls([])
        if output.startswith('['):
            rows = json.loads(output)
        else:
            rows = [json.loads(line) for line in output.split('\n') if line.strip()]
        return cls([ContainerSummary.from_cli(row) for row in rows])

    def __iter__(self) -> Iterator[ContainerSummary]:
        return iter(self._containers)

    def __len__(self) -> int:
        return len(self._containers)

    def __contains__(self, item) -> bool:
        return item in self._containers

    def get_all_for(self, filter: Callable[[ContainerSummary], bool]) -> 'ContainersState':
        return ContainersState([container for container in self._containers if filter(container)])

    def get_any_for(self, filter: Callable[[ContainerSummary], bool]) -> ContainerSummary | None:
        for container in self._containers:
            if filter(container):
                return container
        return None

    def as_rich_text(self, filter: Callable[[ContainerSummary], bool] = lambda x: True,
                     style: Style = Style()) -> Text:
        containers_text = Text()
        for container in self._containers:
            if filter(container):
                containers_text.append(container.as_rich_text(style))
        return containers_text

    def as_json(self, filter: Callable[[ContainerSummary], bool] = lambda x: True) -> list[dict]:
        return [container.as_json() for container in self._containers if filter(container)]

    def __repr__(self):
        return f'{type(self).__name__}(<{self._containers}>)'


class ContainerInspect(NamedTuple):
    id: str
    name: str
    status: str
    health: str | None
    exit_code: int | None

    @classmethod
    def from_api(cls, inspect: dict) -> 'ContainerInspect':
        state = inspect.get('State') or {}
        health = state.get('Health') or {}
        return cls(
            id=inspect.get('Id', ''),
            name=inspect.get('Name', '').lstrip('/'),
            status=str(state.get('Status', '')).lower(),
            health=str(health['Status']).lower() if health.get('Status') else None,
            exit_code=state.get('ExitCode'),
        )


class ExecResult(NamedTuple):
    exit_code: int
    output: bytes

    @property
    def text(self) -> str:
        return self.output.decode('utf-8', errors='replace')


def calculate_cpu_percent(snapshot: dict) -> float:
    cpu_stats = snapshot.get('cpu_stats') or {}
    precpu_stats = snapshot.get('precpu_stats') or {}

    cpu_delta = ((cpu_stats.get('cpu_usage') or {}).get('total_usage', 0)
                 - (precpu_stats.get('cpu_usage') or {}).get('total_usage', 0))
    system_delta = cpu_stats.get('system_cpu_usage', 0) - precpu_stats.get('system_cpu_usage', 0)

    online_cpus = cpu_stats.get('online_cpus') or len((cpu_stats.get('cpu_usage') or {}).get('percpu_usage') or []) or 1

    if cpu_delta <= 0 or system_delta <= 0:
        return 0.0
    return (cpu_delta / system_delta) * online_cpus * 100.0


_SIZE_UNITS = {
    'b': 1,
    'kb': 1000, 'mb': 1000 ** 2, 'gb': 1000 ** 3, 'tb': 1000 ** 4,
    'kib': 1024, 'mib': 1024 ** 2, 'gib': 1024 ** 3, 'tib': 1024 ** 4,
}
_SIZE_RE = re.compile(r'^\s*([\d.]+)\s*([a-zA-Z]*)\s*$')


def parse_size(value: str) -> int:
    match = _SIZE_RE.match(value or '')
    if not match:
        return 0
    number, unit = match.groups()
    return int(float(number) * _SIZE_UNITS.get(unit.lower() or 'b', 1))


def _parse_percent(value: str) -> float:
    try:
        return float((value or '0').strip().rstrip('%') or 0)
    except ValueError:
        return 0.0


def _split_pair(value: str) -> tuple[int, int]:
    left, _, right = (value or '').partition('/')
    return parse_size(left), parse_size(right)


@dataclass
class ContainerStats:
    name: str
    cpu_percent: float
    memory_usage: int
    memory_limit: int
    network_rx: int
    network_tx: int
    block_read: int
    block_write: int
    pids: int = 0

    @property
    def memory_percent(self) -> float:
        if not self.memory_limit:
            return 0.0
        return self.memory_usage / self.memory_limit * 100.0

    @classmethod
    def from_api_snapshot(cls, name: str, snapshot: dict) -> 'ContainerStats':
        memory_stats = snapshot.get('memory_stats') or {}
        networks = snapshot.get('networks') or {}
        blkio = (snapshot.get('blkio_stats') or {}).get('io_service_bytes_recursive') or []

        return cls(
            name=name,
            cpu_percent=calculate_cpu_percent(snapshot),
            memory_usage=memory_stats.get('usage', 0),
            memory_limit=memory_stats.get('limit', 0),
            network_rx=sum(network.get('rx_bytes', 0) for network in networks.values()),
            network_tx=sum(network.get('tx_bytes', 0) for network in networks.values()),
            block_read=sum(entry.get('value', 0) for entry in blkio if str(entry.get('op')).lower() == 'read'),
            block_write=sum(entry.get('value', 0) for entry in blkio if str(entry.get('op')).lower() == 'write'),
            pids=(snapshot.get('pids_stats') or {}).get('current', 0),
        )

    @classmethod
    def from_cli_row(cls, name: str, row: dict) -> 'ContainerStats':
        memory_usage, memory_limit = _split_pair(row.get('MemUsage', ''))
        network_rx, network_tx = _split_pair(row.get('NetIO', ''))
        block_read, block_write = _split_pair(row.get('BlockIO', ''))
        try:
            pids = int(row.get('PIDs', 0))
        except ValueError:
            pids = 0
        return cls(
            name=name,
            cpu_percent=_parse_percent(row.get('CPUPerc', '')),
            memory_usage=memory_usage,
            memory_limit=memory_limit,
            network_rx=network_rx,
            network_tx=network_tx,
            block_read=block_read,
            block_write=block_write,
            pids=pids,
        )

    def as_json(self) -> dict:
        return {
            'name': self.name,
            'cpu_percent': round(self.cpu_percent, 2),
            'memory_usage': self.memory_usage,
            'memory_limit': self.memory_limit,
            'memory_percent': round(self.memory_percent, 2),
            'network_rx': self.network_rx,
            'network_tx': self.network_tx,
            'block_read': self.block_read,
            'block_write': self.block_write,
            'pids': self.pids,
        }
