import vedro

from contexts.engine import orchestrator
from contexts.fake_engine import fake_engine
from contexts.project_root import project_root
from contexts.zeroconfig_config import zeroconfig_config
from zeroconfig import ServiceSpec


class Scenario(vedro.Scenario):
    async def given_started_redis(self):
        self.interface = fake_engine()
        self.orchestrator = orchestrator(zeroconfig_config(project_root()), self.interface)
        await self.orchestrator.create_network()
        self.first_id = await self.orchestrator.start_service(ServiceSpec(name='redis', version='7'), 5000)

    async def when_user_starts_it_again(self):
        self.second_id = await self.orchestrator.start_service(ServiceSpec(name='redis', version='7'), 5000)

    async def then_previous_container_should_be_replaced(self):
        assert list(self.interface.containers) == ['demo_redis']
        assert self.interface.containers['demo_redis'].id == self.second_id != self.first_id
