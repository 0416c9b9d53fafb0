import os
import shlex

import vedro

from contexts.engine import orchestrator
from contexts.fake_engine import fake_engine
from contexts.project_root import project_root
from contexts.zeroconfig_config import zeroconfig_config
from zeroconfig import BackupManager
from zeroconfig.core.container_data_types import ExecResult
from zeroconfig.helpers.base64_transport import base64_decode


class Scenario(vedro.Scenario):
    async def given_backup_file_larger_than_one_chunk(self):
        self.root = project_root()
        self.dump = os.urandom(100 * 1024)
        self.backup_file = self.root / 'postgres.dump'
        self.backup_file.write_bytes(self.dump)

    async def given_running_postgres(self):
        self.interface = fake_engine()
        self.interface.add_container('demo_postgres')
        self.interface.exec_handler = lambda name, argv: ExecResult(0, b'')
        config = zeroconfig_config(self.root)
        self.manager = BackupManager(orchestrator(config, self.interface), config.backups_path)

    async def when_user_restores_postgres(self):
        await self.manager.restore('postgres', self.backup_file)

    async def then_payload_should_be_pushed_in_several_chunks(self):
        scripts = [shlex.split(argv[2]) for _, argv in self.interface.exec_calls]
        self.chunks = [script[2] for script in scripts if script[0] == 'printf']
        assert len(self.chunks) > 1

    async def and_chunks_should_reassemble_original_dump(self):
        assert base64_decode(''.join(self.chunks)) == self.dump

    async def and_dump_should_be_restored_then_cleaned_up(self):
        *_, restore, cleanup = [argv[2] for _, argv in self.interface.exec_calls]
        assert 'base64 -d ' in restore
        assert 'pg_restore -U zeroconfig -d zeroconfig --clean --if-exists ' in restore
        assert cleanup.startswith('rm -f ')
