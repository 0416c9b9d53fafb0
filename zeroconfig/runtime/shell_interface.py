import asyncio
import json
import os
import shlex
from typing import AsyncIterator

from rich.text import Text

from zeroconfig.core.container_data_types import ContainerInspect
from zeroconfig.core.container_data_types import ContainerSpec
from zeroconfig.core.container_data_types import ContainersState
from zeroconfig.core.container_data_types import ContainerStats
from zeroconfig.core.container_data_types import ExecResult
from zeroconfig.errors import EngineCallError
from zeroconfig.errors import EngineUnavailable
from zeroconfig.helpers.jobs_result import JobResult
from zeroconfig.helpers.jobs_result import OperationError
from zeroconfig.helpers.jobs_result import result_of
from zeroconfig.output.console import CONSOLE
from zeroconfig.output.styles import Style
from zeroconfig.runtime.descriptors import RuntimeDescriptor
from zeroconfig.runtime.engine_interface import ContainerEngineInterface
from zeroconfig.runtime.engine_interface import ProgressCallback
from zeroconfig.runtime.process_output import ProcessOutput
from zeroconfig.runtime.process_output import collect_process_output

NO_SUCH_CONTAINER = ('no such container', 'no container with name or id')


def _is_missing_container(output: ProcessOutput) -> bool:
    error = output.error_text().lower()
    return any(marker in error for marker in NO_SUCH_CONTAINER)


class ShellEngineInterface(ContainerEngineInterface):
    """
    Docker-compatible command line (docker, podman, nerdctl).

    Lifecycle commands covered by the runtime descriptor are rendered
    through it, the rest use the docker CLI grammar shared by these engines.
    """

    def __init__(self, runtime: RuntimeDescriptor, execution_envs: dict = None, verbose: bool = False):
        self.runtime = runtime
        self.name = runtime.command
        self.has_native_restart = runtime.has_native_restart
        self.execution_envs = dict(os.environ)
        if execution_envs is not None:
            self.execution_envs |= execution_envs
        self.verbose = verbose

    def _cmd(self, *args: str) -> list[str]:
        return [self.runtime.command, *args]

    async def _run(self, argv: list[str]) -> tuple[JobResult | OperationError, ProcessOutput]:
        CONSOLE.print(Text(shlex.join(argv), style=Style.context))
        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                env=self.execution_envs,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            output = ProcessOutput(127, b'', str(e).encode())
            return OperationError(output), output

        output = await collect_process_output(process, self.verbose)
        return result_of(output), output

    async def _checked(self, operation: str, target: str, argv: list[str]) -> bytes:
        job_result, output = await self._run(argv)
        if job_result != JobResult.GOOD:
            raise EngineCallError(operation, target, output.error_text())
        return output.stdout

    async def _stream(self, operation: str, target: str, argv: list[str],
                      merge_stderr: bool = True) -> AsyncIterator[bytes]:
        CONSOLE.print(Text(shlex.join(argv), style=Style.context))
        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                env=self.execution_envs,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT if merge_stderr else asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise EngineCallError(operation, target, str(e)) from e

        try:
            while line := await process.stdout.readline():
                yield line
            stderr = b'' if merge_stderr else await process.stderr.read()
            await process.wait()
        finally:
            if process.returncode is None:
                process.kill()
                await process.wait()

        if process.returncode != 0:
            raise EngineCallError(operation, target,
                                  ProcessOutput(process.returncode, b'', stderr).error_text())

    async def ping(self) -> None:
        job_result, output = await self._run(self.runtime.status())
        if job_result != JobResult.GOOD:
            raise EngineUnavailable(f'{self.runtime.name} is not running or not accessible: {output.error_text()}')

    async def create_network(self, name: str) -> bool:
        job_result, _ = await self._run(self._cmd('network', 'inspect', name))
        if job_result == JobResult.GOOD:
            return False

        job_result, output = await self._run(self._cmd('network', 'create', '--driver', 'bridge', name))
        if job_result != JobResult.GOOD:
            if 'already exists' in output.error_text():
                return False
            raise EngineCallError('network create', name, output.error_text())
        return True

    async def pull_image(self, image: str, progress: ProgressCallback | None = None) -> None:
        async for line in self._stream('pull', image, self._cmd('pull', image)):
            if progress is not None:
                progress(line.decode('utf-8', errors='replace').strip())

    async def remove_container(self, name: str) -> bool:
        job_result, output = await self._run(self._cmd('rm', '-f', name))
        if job_result != JobResult.GOOD:
            if _is_missing_container(output):
                return False
            raise EngineCallError('remove', name, output.error_text())
        return True

    async def create_container(self, spec: ContainerSpec) -> str:
        argv = self._cmd(
            'create',
            '--name', spec.name,
            '--network', spec.network,
            '-p', f'{spec.host_port}:{spec.container_port}',
        )
        for env in spec.env_list():
            argv += ['-e', env]
        for bind in spec.binds:
            argv += ['-v', bind]
        for label, value in spec.labels.items():
            argv += ['--label', f'{label}={value}']
        argv += [spec.image, *(spec.command or [])]

        stdout = await self._checked('create', spec.name, argv)
        return stdout.decode('utf-8').strip().split('\n')[-1]

    async def start_container(self, name: str) -> None:
        await self._checked('start', name, self.runtime.start(name))

    async def stop_container(self, name: str, timeout: int = 10) -> bool:
        job_result, output = await self._run(self.runtime.stop(name))
        if job_result != JobResult.GOOD:
            if _is_missing_container(output):
                return False
            raise EngineCallError('stop', name, output.error_text())
        return True

    async def restart_container(self, name: str, timeout: int = 10) -> None:
        if self.runtime.has_native_restart:
            await self._checked('restart', name, self.runtime.restart(name))
            return
        await self.stop_container(name, timeout)
        await self.start_container(name)

    async def list_containers(self, name_filter: str) -> ContainersState:
        stdout = await self._checked('list', name_filter,
                                     self.runtime.list_containers() + ['--filter', f'name={name_filter}'])
        return ContainersState.from_cli_output(stdout.decode('utf-8'))

    async def inspect_container(self, name: str) -> ContainerInspect:
        stdout = await self._checked('inspect', name, self._cmd('inspect', '--type', 'container', name))
        inspected = json.loads(stdout.decode('utf-8'))
        if isinstance(inspected, list):
            if not inspected:
                raise EngineCallError('inspect', name, 'empty inspect output')
            inspected = inspected[0]
        return ContainerInspect.from_api(inspected)

    async def exec_run(self, name: str, argv: list[str]) -> ExecResult:
        _, output = await self._run(self._cmd('exec', name, *argv))
        return ExecResult(exit_code=output.returncode, output=output.stdout + output.stderr)

    async def exec_stream(self, name: str, argv: list[str], stdout: bool = True,
                          stderr: bool = True) -> AsyncIterator[bytes]:
        async for chunk in self._stream('exec', name, self._cmd('exec', name, *argv), merge_stderr=stderr):
            yield chunk

    async def logs(self, name: str, follow: bool = False, tail: int | None = None) -> AsyncIterator[bytes]:
        async for line in self._stream('logs', name, self.runtime.logs(name, follow, tail)):
            yield line

    async def stats(self, name: str) -> ContainerStats:
        stdout = await self._checked('stats', name,
                                     self._cmd('stats', '--no-stream', '--format', '{{json .}}', name))
        rows = [line for line in stdout.decode('utf-8').split('\n') if line.strip()]
        if not rows:
            raise EngineCallError('stats', name, 'no stats reported')
        return ContainerStats.from_cli_row(name, json.loads(rows[0]))
