import asyncio
from dataclasses import dataclass
from dataclasses import replace
from typing import Awaitable
from typing import Callable
from typing import Iterable
from typing import NamedTuple

from rich.text import Text

from zeroconfig.errors import EngineUnavailable
from zeroconfig.output.console import CONSOLE
from zeroconfig.output.styles import Style
from zeroconfig.runtime.descriptors import EngineBoundary
from zeroconfig.runtime.descriptors import RUNTIMES
from zeroconfig.runtime.descriptors import RuntimeDescriptor

PROBE_TIMEOUT_S = 10


class ProbeResult(NamedTuple):
    ok: bool
    output: str = ''


Probe = Callable[[list[str]], Awaitable[ProbeResult]]


async def run_probe(argv: list[str], timeout_s: float = PROBE_TIMEOUT_S) -> ProbeResult:
    try:
        process = await asyncio.create_subprocess_exec(
            *argv,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        return ProbeResult(False, str(e))

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout_s)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return ProbeResult(False, f'{" ".join(argv)} timed out after {timeout_s}s')

    output = (stdout.strip() or stderr.strip()).decode('utf-8', errors='replace')
    return ProbeResult(process.returncode == 0, output)


@dataclass(frozen=True)
class RuntimeStatus:
    runtime: RuntimeDescriptor
    installed: bool
    running: bool
    version: str | None = None
    preferred: bool = False

    @property
    def docker_compatible(self) -> bool:
        return self.runtime.docker_compatible

    @property
    def kubernetes_compatible(self) -> bool:
        return self.runtime.kubernetes_compatible

    @property
    def is_ready(self) -> bool:
        return self.installed and self.running

    def status_string(self) -> str:
        if not self.installed:
            return f'{self.runtime.name}: Not installed'
        if not self.running:
            return f'{self.runtime.name}: Installed but not running'
        return f'{self.runtime.name}: Ready ({self.version or "version unknown"})'

    def as_rich_text(self, style: Style = Style()) -> Text:
        mark, mark_style = (' ✔ ', style.good) if self.is_ready else (' ✗ ', style.bad)
        if self.installed and not self.running:
            mark_style = style.suspicious
        text = Text(mark, style=mark_style).append(Text(self.status_string(), style=style.regular))
        if self.preferred:
            text.append(Text('  <- preferred', style=style.mark))
        return text

    def as_json(self) -> dict:
        return {
            'runtime': self.runtime.name,
            'command': self.runtime.command,
            'installed': self.installed,
            'running': self.running,
            'version': self.version,
            'preferred': self.preferred,
            'docker_compatible': self.docker_compatible,
            'kubernetes_compatible': self.kubernetes_compatible,
        }


class RuntimeDiscovery(NamedTuple):
    statuses: tuple[RuntimeStatus, ...]
    preferred: RuntimeStatus

    @property
    def available(self) -> list[RuntimeStatus]:
        return [status for status in self.statuses if status.installed]


def select_preferred(statuses: Iterable[RuntimeStatus]) -> RuntimeStatus:
    # runtimes with a container lifecycle boundary win over cluster-only ones
    candidates = sorted(statuses, key=lambda status: status.runtime.boundary == EngineBoundary.NONE)
    for status in candidates:
        if status.is_ready:
            return status
    for status in candidates:
        if status.installed:
            return status
    raise EngineUnavailable(
        'No container runtime found. Please install Docker, Podman, or another container runtime.'
    )


class RuntimeDetector:
    def __init__(self, descriptors: Iterable[RuntimeDescriptor] = RUNTIMES, probe: Probe = run_probe):
        self._descriptors = tuple(descriptors)
        self._probe = probe

    async def probe_runtime(self, runtime: RuntimeDescriptor) -> RuntimeStatus:
        version_result = await self._probe(runtime.version())
        if not version_result.ok:
            return RuntimeStatus(runtime=runtime, installed=False, running=False)

        status_result = await self._probe(runtime.status())
        return RuntimeStatus(
            runtime=runtime,
            installed=True,
            running=status_result.ok,
            version=version_result.output or None,
        )

    async def probe_all(self) -> tuple[RuntimeStatus, ...]:
        return tuple(await asyncio.gather(*[
            self.probe_runtime(runtime) for runtime in self._descriptors
        ]))

    async def detect(self) -> RuntimeDiscovery:
        statuses = await self.probe_all()
        for status in statuses:
            if status.installed:
                CONSOLE.print(Text(f'Found {status.runtime.name} - {status.version or "version unknown"}',
                                   style=Style.context))

        preferred = replace(select_preferred(statuses), preferred=True)
        statuses = tuple(preferred if status.runtime == preferred.runtime else status for status in statuses)
        CONSOLE.print(
            Text('Using runtime: ', style=Style.info)
            .append(Text(preferred.runtime.name, style=Style.mark))
        )
        return RuntimeDiscovery(statuses=statuses, preferred=preferred)

    async def doctor(self) -> tuple[RuntimeStatus, ...]:
        CONSOLE.print(Text('Checking container runtimes...', style=Style.info))
        statuses = await self.probe_all()
        try:
            preferred = select_preferred(statuses)
        except EngineUnavailable as e:
            for status in statuses:
                CONSOLE.print(status.as_rich_text())
            CONSOLE.print(Text(f' ✗ {e.message}', style=Style.bad))
            return statuses

        statuses = tuple(
            replace(status, preferred=True) if status.runtime == preferred.runtime else status
            for status in statuses
        )
        for status in statuses:
            CONSOLE.print(status.as_rich_text())
        if preferred.is_ready:
            CONSOLE.print(Text(' ✔ All checks passed', style=Style.good))
        else:
            CONSOLE.print(Text(f' ✗ {preferred.runtime.name} is installed but not running', style=Style.suspicious))
        return statuses
