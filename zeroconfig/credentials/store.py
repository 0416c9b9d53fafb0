import asyncio
import contextlib
import inspect
import os
from pathlib import Path
from typing import Awaitable
from typing import Callable
from uuid import uuid4

from rich.text import Text

from zeroconfig.errors import CredentialIOError
from zeroconfig.output.console import CONSOLE
from zeroconfig.output.styles import Style

HEADER = (
    '# ZeroConfig Generated Credentials\n'
    '# DO NOT COMMIT THIS FILE TO VERSION CONTROL\n'
    '\n'
)

SecretFactory = Callable[[], str] | Callable[[], Awaitable[str]]


def parse_credentials(content: str) -> dict[str, str]:
    credentials = {}
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        key, separator, value = line.partition('=')
        if not separator:
            continue
        credentials[key.strip()] = value
    return credentials


def render_credentials(credentials: dict[str, str]) -> str:
    return HEADER + ''.join(f'{key}={credentials[key]}\n' for key in sorted(credentials))


class CredentialStore:
    """
    Per-project key -> secret map persisted as a flat KEY=value file.

    Generation is write-through: the file is atomically replaced before the
    new value is handed out, and a single lock per store serializes
    lookups, generation and writes.
    """

    def __init__(self, file_path: Path | str):
        self._file_path = Path(file_path)
        self._lock = asyncio.Lock()
        self._credentials: dict[str, str] = self._read()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def _read(self) -> dict[str, str]:
        if not self._file_path.exists():
            return {}
        try:
            return parse_credentials(self._file_path.read_text(encoding='utf-8'))
        except (OSError, UnicodeDecodeError) as e:
            raise CredentialIOError(f"Can't read credentials from {self._file_path}: {e}") from e

    def _write(self, credentials: dict[str, str]) -> None:
        tmp_path = self._file_path.with_name(f'.{self._file_path.name}.{uuid4().hex}.tmp')
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, 'w', encoding='utf-8') as credentials_file:
                credentials_file.write(render_credentials(credentials))
                credentials_file.flush()
                os.fsync(credentials_file.fileno())
            os.chmod(tmp_path, 0o600)
            os.replace(tmp_path, self._file_path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            raise CredentialIOError(f"Can't write credentials to {self._file_path}: {e}") from e

    async def _persist(self, credentials: dict[str, str]) -> None:
        await asyncio.to_thread(self._write, credentials)
        self._credentials = credentials

    async def get_or_generate(self, key: str, generator: SecretFactory) -> str:
        async with self._lock:
            if key in self._credentials:
                return self._credentials[key]

            value = generator()
            if inspect.isawaitable(value):
                value = await value

            await self._persist(self._credentials | {key: value})
            CONSOLE.print(
                Text('Generated credential: ', style=Style.info)
                .append(Text(key, style=Style.mark_neutral))
            )
            return value

    async def set(self, key: str, value: str) -> None:
        async with self._lock:
            await self._persist(self._credentials | {key: value})

    def get(self, key: str) -> str | None:
        return self._credentials.get(key)

    def get_all(self) -> dict[str, str]:
        return dict(self._credentials)
