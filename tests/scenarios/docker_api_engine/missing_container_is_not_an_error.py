import vedro
from vedro import catched

from contexts.stub_docker_client import docker_api_engine
from contexts.stub_docker_client import stub_docker_client
from zeroconfig.errors import EngineCallError


class Scenario(vedro.Scenario):
    async def given_engine_without_container(self):
        self.client = stub_docker_client()
        self.interface = docker_api_engine(self.client)

    async def when_user_stops_and_removes_it(self):
        self.stopped = await self.interface.stop_container('demo_gone', timeout=3)
        self.removed = await self.interface.remove_container('demo_gone')

    async def then_both_should_report_nothing_done(self):
        assert self.stopped is False
        assert self.removed is False

    async def and_stop_timeout_should_be_passed(self):
        assert self.client.api.calls == [('stop', 'demo_gone', 3), ('remove', 'demo_gone', True)]

    async def when_user_restarts_it(self):
        with catched(EngineCallError) as self.exc_info:
            await self.interface.restart_container('demo_gone')

    async def then_restart_should_fail_with_engine_call_error(self):
        assert self.exc_info.type is EngineCallError
        assert self.exc_info.value.operation == 'restart'
        assert 'No such container: demo_gone' in self.exc_info.value.details
