import asyncio
import sys
from typing import BinaryIO
from typing import NamedTuple

ECHO_PREFIX = b' > '


class ProcessOutput(NamedTuple):
    returncode: int
    stdout: bytes
    stderr: bytes

    def error_text(self) -> str:
        text = (self.stderr.strip() or self.stdout.strip()).decode('utf-8', errors='replace')
        return text or f'exited with code {self.returncode}'


async def _read_lines(stream: asyncio.StreamReader, echo_to: BinaryIO | None) -> bytes:
    lines = []
    while line := await stream.readline():
        if echo_to is not None:
            echo_to.write(ECHO_PREFIX + line)
        lines.append(line)
    return b''.join(lines)


async def collect_process_output(process: asyncio.subprocess.Process, echo: bool = False) -> ProcessOutput:
    stdout, stderr = await asyncio.gather(
        _read_lines(process.stdout, sys.stdout.buffer if echo else None),
        _read_lines(process.stderr, sys.stderr.buffer if echo else None),
    )
    await process.wait()

    if echo:
        sys.stdout.flush()
        sys.stderr.flush()

    return ProcessOutput(process.returncode, stdout, stderr)
