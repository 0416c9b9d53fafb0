import vedro

from contexts.engine import orchestrator
from contexts.fake_engine import fake_engine
from contexts.project_root import project_root
from contexts.zeroconfig_config import zeroconfig_config
from zeroconfig import ServiceSpec


class Scenario(vedro.Scenario):
    async def given_orchestrator(self):
        self.orchestrator = orchestrator(zeroconfig_config(project_root()), fake_engine())

    async def given_unknown_service_with_command(self):
        self.service = ServiceSpec(name='webapp', version='1.2', command='npm run dev -- --host "0.0.0.0"',
                                   volumes=['/srv/cache:/cache'])

    async def when_user_builds_container_spec(self):
        self.spec = await self.orchestrator.build_container_spec(self.service, 5002)

    async def then_image_should_fall_back_to_name_and_version(self):
        assert self.spec.image == 'webapp:1.2'

    async def and_container_port_should_fall_back_to_default(self):
        assert self.spec.container_port == 8080

    async def and_command_should_be_split_as_shell_words(self):
        assert self.spec.command == ['npm', 'run', 'dev', '--', '--host', '0.0.0.0']

    async def and_no_credentials_should_be_generated(self):
        assert self.spec.environment == {}

    async def and_absolute_volume_should_be_kept(self):
        assert self.spec.binds == ['/srv/cache:/cache']
