import time

import vedro

from contexts.fake_engine import fake_engine
from zeroconfig import HealthChecker
from zeroconfig.core.container_data_types import ExecResult
from zeroconfig.health import HealthState


class Scenario(vedro.Scenario):
    async def given_redis_answering_ping(self):
        self.interface = fake_engine()
        self.interface.add_container('demo_redis')
        self.interface.exec_handler = lambda name, argv: ExecResult(0, b'PONG\n')
        self.checker = HealthChecker(self.interface)

    async def when_user_waits_for_healthy_with_long_interval(self):
        started = time.monotonic()
        self.status = await self.checker.wait_for_healthy('demo_redis', 'redis', timeout=30, interval=5)
        self.elapsed = time.monotonic() - started

    async def then_healthy_status_should_be_returned(self):
        assert self.status.state == HealthState.HEALTHY

    async def and_container_should_be_checked_once(self):
        assert len(self.interface.exec_calls) == 1

    async def and_it_should_not_wait_for_next_interval(self):
        assert self.elapsed < 1
