import vedro
from vedro import catched

from contexts.engine import orchestrator
from contexts.fake_engine import fake_engine
from contexts.project_root import project_root
from contexts.zeroconfig_config import zeroconfig_config
from zeroconfig import ServiceSpec
from zeroconfig.errors import ImagePullFailure


class Scenario(vedro.Scenario):
    async def given_engine_without_requested_image(self):
        self.interface = fake_engine()
        self.interface.broken_images.add('redis:404')
        self.orchestrator = orchestrator(zeroconfig_config(project_root()), self.interface)

    async def when_user_starts_service(self):
        with catched(ImagePullFailure) as self.exc_info:
            await self.orchestrator.start_service(ServiceSpec(name='redis', version='404'), 5000)

    async def then_it_should_fail_with_image_pull_failure(self):
        assert self.exc_info.type is ImagePullFailure
        assert 'redis:404' in self.exc_info.value.message

    async def and_no_container_should_be_created(self):
        assert self.interface.containers == {}
