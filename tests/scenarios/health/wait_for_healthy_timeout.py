import time

import vedro
from vedro import catched

from contexts.fake_engine import fake_engine
from zeroconfig import HealthChecker
from zeroconfig.core.container_data_types import ExecResult
from zeroconfig.errors import HealthCheckTimeout


class Scenario(vedro.Scenario):
    async def given_postgres_never_accepting_connections(self):
        self.interface = fake_engine()
        self.interface.add_container('demo_postgres')
        self.interface.exec_handler = lambda name, argv: ExecResult(2, b'no response\n')
        self.checker = HealthChecker(self.interface)

    async def when_user_waits_for_healthy(self):
        started = time.monotonic()
        with catched(HealthCheckTimeout) as self.exc_info:
            await self.checker.wait_for_healthy('demo_postgres', 'postgres', timeout=0.3, interval=0.1)
        self.elapsed = time.monotonic() - started

    async def then_it_should_fail_with_timeout(self):
        assert self.exc_info.type is HealthCheckTimeout
        assert self.exc_info.value.message == 'Timeout waiting for postgres to become healthy after 0.3s'

    async def and_it_should_stop_near_deadline(self):
        assert self.elapsed < 2

    async def and_probe_should_be_polled_repeatedly(self):
        assert len(self.interface.exec_calls) > 1
