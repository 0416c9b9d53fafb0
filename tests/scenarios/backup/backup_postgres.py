import base64
import re

import vedro

from contexts.engine import orchestrator
from contexts.fake_engine import fake_engine
from contexts.project_root import project_root
from contexts.zeroconfig_config import zeroconfig_config
from zeroconfig import BackupManager
from zeroconfig.core.container_data_types import ExecResult


class Scenario(vedro.Scenario):
    async def given_running_postgres_with_dump(self):
        self.dump = b'PGDMP\x00\x01\xff binary custom format'
        self.interface = fake_engine()
        self.interface.add_container('demo_postgres')
        self.interface.exec_handler = lambda name, argv: ExecResult(0, base64.encodebytes(self.dump))
        self.config = zeroconfig_config(project_root())
        self.manager = BackupManager(orchestrator(self.config, self.interface), self.config.backups_path)

    async def when_user_backs_up_postgres(self):
        self.path = await self.manager.backup('postgres')

    async def then_dump_should_be_saved_decoded(self):
        assert self.path.read_bytes() == self.dump

    async def and_file_should_be_named_by_service_and_timestamp(self):
        assert self.path.parent == self.config.backups_path
        assert re.fullmatch(r'postgres-\d{8}T\d{6}Z\.dump', self.path.name)

    async def and_dump_should_be_piped_through_base64(self):
        [(name, argv)] = self.interface.exec_calls
        assert name == 'demo_postgres'
        assert argv[:2] == ['sh', '-c']
        assert argv[2].startswith('pg_dump -U zeroconfig -Fc zeroconfig > /tmp/zeroconfig-backup-')
        assert '&& base64 ' in argv[2]

    async def and_backup_should_be_listed(self):
        assert self.manager.list_backups('postgres') == [self.path]
