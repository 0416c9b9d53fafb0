import vedro

from helpers.fake_probe import FakeProbe
from zeroconfig.runtime.descriptors import DOCKER
from zeroconfig.runtime.descriptors import NERDCTL
from zeroconfig.runtime.descriptors import RUNTIMES
from zeroconfig.runtime.discovery import RuntimeDetector


class Scenario(vedro.Scenario):
    subject = 'prefer {expected.name} over running cluster runtimes'

    @vedro.params({'kubectl': 'v1.30.2', 'nerdctl': 'nerdctl version 1.7.6'}, {'kubectl', 'nerdctl'}, NERDCTL)
    @vedro.params({'minikube': 'v1.33.1', 'docker': 'Docker version 27.1.1'}, {'minikube'}, DOCKER)
    def __init__(self, installed, running, expected):
        self.installed = installed
        self.running = running
        self.expected = expected

    async def given_cluster_runtime_ready_next_to_container_engine(self):
        self.probe = FakeProbe(installed=self.installed, running=self.running)

    async def when_user_detects_runtimes(self):
        self.discovery = await RuntimeDetector(probe=self.probe).detect()

    async def then_container_engine_should_be_preferred(self):
        assert self.discovery.preferred.runtime == self.expected

    async def and_statuses_should_keep_priority_order(self):
        assert [status.runtime for status in self.discovery.statuses] == list(RUNTIMES)
        assert [status.runtime for status in self.discovery.statuses if status.preferred] == [self.expected]

    async def when_user_runs_doctor(self):
        self.statuses = await RuntimeDetector(probe=self.probe).doctor()

    async def then_doctor_should_mark_same_runtime(self):
        assert [status.runtime for status in self.statuses] == list(RUNTIMES)
        assert [status.runtime for status in self.statuses if status.preferred] == [self.expected]
