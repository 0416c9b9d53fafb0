import vedro
from vedro import catched

from contexts.engine import orchestrator
from contexts.fake_engine import fake_engine
from contexts.project_root import project_root
from contexts.zeroconfig_config import zeroconfig_config
from zeroconfig import ServiceSpec


class Scenario(vedro.Scenario):
    async def given_two_services_without_environment(self):
        self.redis = ServiceSpec(name='redis', version='7')
        self.memcached = ServiceSpec(name='memcached', version='1.6')

    async def when_user_writes_into_default_environment(self):
        with catched(TypeError) as self.exc_info:
            self.redis.environment['REDIS_ARGS'] = '--appendonly yes'

    async def then_default_should_be_read_only(self):
        assert self.exc_info.type is TypeError

    async def and_other_service_should_keep_empty_defaults(self):
        assert dict(self.memcached.environment) == {}
        assert self.memcached.volumes == ()

    async def when_user_builds_container_spec(self):
        self.orchestrator = orchestrator(zeroconfig_config(project_root()), fake_engine())
        self.spec = await self.orchestrator.build_container_spec(self.redis, 5000)
        self.spec.environment['REDIS_ARGS'] = '--appendonly yes'

    async def then_service_defaults_should_stay_untouched(self):
        assert dict(self.redis.environment) == {}
        assert dict(self.memcached.environment) == {}
        assert dict(ServiceSpec(name='nats', version='2').environment) == {}
