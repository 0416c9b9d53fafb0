import vedro
from vedro import catched

from contexts.engine import orchestrator
from contexts.fake_engine import fake_engine
from contexts.project_root import project_root
from contexts.zeroconfig_config import zeroconfig_config
from zeroconfig.core.container_data_types import ExecResult
from zeroconfig.errors import ContainerNotFound
from zeroconfig.errors import ExecFailure


class Scenario(vedro.Scenario):
    async def given_running_redis(self):
        self.interface = fake_engine()
        self.interface.add_container('demo_redis')
        self.interface.exec_handler = lambda name, argv: (
            ExecResult(0, b'PONG\n') if argv == ['redis-cli', 'ping'] else ExecResult(127, b'not found\n')
        )
        self.orchestrator = orchestrator(zeroconfig_config(project_root()), self.interface)

    async def when_user_execs_command_with_output(self):
        self.output = await self.orchestrator.exec_command_with_output('redis', ['redis-cli', 'ping'])

    async def then_output_should_be_accumulated(self):
        assert self.output == 'PONG\n'

    async def and_command_should_run_in_service_container(self):
        assert self.interface.exec_calls == [('demo_redis', ['redis-cli', 'ping'])]

    async def when_user_execs_failing_command(self):
        with catched(ExecFailure) as self.exec_failure:
            await self.orchestrator.exec_command_with_output('redis', ['unknown-binary'])

    async def then_it_should_fail_with_exec_failure(self):
        assert self.exec_failure.type is ExecFailure
        assert 'redis' in self.exec_failure.value.message

    async def when_user_execs_in_absent_service(self):
        with catched(ContainerNotFound) as self.not_found:
            await self.orchestrator.exec_command('kafka', ['kafka-topics', '--list'])

    async def then_it_should_fail_with_container_not_found(self):
        assert self.not_found.type is ContainerNotFound
