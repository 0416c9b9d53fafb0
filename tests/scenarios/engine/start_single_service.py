import vedro

from contexts.engine import engine_with_services
from contexts.fake_engine import fake_engine
from contexts.project_root import project_root
from contexts.zeroconfig_config import zeroconfig_config
from zeroconfig import ServiceSpec


class Scenario(vedro.Scenario):
    async def given_engine_with_two_services(self):
        self.interface = fake_engine()
        self.engine = engine_with_services(zeroconfig_config(project_root()), self.interface, [
            ServiceSpec(name='postgres', version='16'),
            ServiceSpec(name='redis', version='7'),
        ])

    async def when_user_starts_only_redis(self):
        self.container_id = await self.engine.start_service('redis')

    async def then_redis_should_get_its_declared_slot_port(self):
        assert self.interface.containers['demo_redis'].spec.host_port == 5001

    async def and_postgres_should_not_be_started(self):
        assert 'demo_postgres' not in self.interface.containers

    async def when_user_restarts_redis(self):
        self.restarted = await self.engine.restart_service('redis')

    async def then_redis_should_be_restarted_in_place(self):
        assert self.restarted is True
        assert self.interface.containers['demo_redis'].id == self.container_id
        assert self.interface.containers['demo_redis'].restarts == 1
