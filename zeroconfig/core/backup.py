"""
Database dumps through the exec channel of running containers.

The dump is piped through `base64` inside the container so binary formats
survive the text exec stream, restores push the file back the same way in
base64 chunks appended to a temporary file.
"""
import asyncio
import shlex
from datetime import datetime
from datetime import timezone
from pathlib import Path
from uuid import uuid4

from rich.text import Text

from zeroconfig.core.orchestrator import ContainerOrchestrator
from zeroconfig.core.service_tables import BACKUP_TOOLS
from zeroconfig.core.service_tables import BackupTool
from zeroconfig.core.service_tables import get_service_type
from zeroconfig.errors import UnsupportedServiceType
from zeroconfig.helpers.base64_transport import base64_chunks
from zeroconfig.helpers.base64_transport import base64_decode
from zeroconfig.helpers.base64_transport import base64_encode
from zeroconfig.output.console import CONSOLE
from zeroconfig.output.styles import Style

TIMESTAMP_FORMAT = '%Y%m%dT%H%M%SZ'
IN_CONTAINER_TMP = '/tmp'


def get_backup_tool(service: str) -> BackupTool:
    service_type = get_service_type(service)
    if service_type not in BACKUP_TOOLS:
        raise UnsupportedServiceType(
            f"Backup is not supported for service '{service}', supported: {', '.join(BACKUP_TOOLS)}"
        )
    return BACKUP_TOOLS[service_type]


def sh(script: str) -> list[str]:
    return ['sh', '-c', script]


class BackupManager:
    def __init__(self, orchestrator: ContainerOrchestrator, backups_path: Path):
        self._orchestrator = orchestrator
        self._backups_path = backups_path

    def backup_path(self, service: str, extension: str, now: datetime | None = None) -> Path:
        now = now or datetime.now(timezone.utc)
        return self._backups_path / f'{service}-{now.strftime(TIMESTAMP_FORMAT)}.{extension}'

    def list_backups(self, service: str | None = None) -> list[Path]:
        if not self._backups_path.exists():
            return []
        pattern = f'{service}-*' if service else '*'
        return sorted(path for path in self._backups_path.glob(pattern) if path.is_file())

    async def backup(self, service: str) -> Path:
        tool = get_backup_tool(service)
        CONSOLE.print(Text('Backing up service: ', style=Style.info).append(Text(service, style=Style.mark)))

        dump_path = f'{IN_CONTAINER_TMP}/zeroconfig-backup-{uuid4().hex}.{tool.extension}'
        encoded = await self._orchestrator.exec_command_with_output(
            service,
            sh(f'{tool.dump} > {dump_path} && base64 {dump_path}; status=$?; rm -f {dump_path}; exit $status'),
            stderr=False,
        )
        dump = base64_decode(encoded)

        path = self.backup_path(service, tool.extension)
        await asyncio.to_thread(self._write, path, dump)
        CONSOLE.print(Text(f' ✔ Backup saved to {path} ({len(dump)} bytes)', style=Style.good))
        return path

    def _write(self, path: Path, dump: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(dump)

    async def restore(self, service: str, backup_file: Path) -> None:
        tool = get_backup_tool(service)
        CONSOLE.print(Text('Restoring service: ', style=Style.info)
                      .append(Text(service, style=Style.mark))
                      .append(Text(f' from {backup_file}', style=Style.regular)))

        encoded = base64_encode(await asyncio.to_thread(Path(backup_file).read_bytes))

        restore_id = uuid4().hex
        encoded_path = f'{IN_CONTAINER_TMP}/zeroconfig-restore-{restore_id}.b64'
        dump_path = f'{IN_CONTAINER_TMP}/zeroconfig-restore-{restore_id}.{tool.extension}'

        await self._orchestrator.exec_command_with_output(service, sh(f': > {encoded_path}'))
        for chunk in base64_chunks(encoded):
            await self._orchestrator.exec_command_with_output(
                service, sh(f'printf %s {shlex.quote(chunk)} >> {encoded_path}')
            )

        try:
            await self._orchestrator.exec_command_with_output(service, sh(
                f'base64 -d {encoded_path} > {dump_path} && {tool.restore.format(file=dump_path)}'
            ))
        finally:
            await self._orchestrator.exec_command_with_output(service, sh(f'rm -f {encoded_path} {dump_path}'))

        CONSOLE.print(Text(f' ✔ Service {service} restored', style=Style.good))
