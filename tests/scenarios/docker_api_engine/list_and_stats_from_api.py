import vedro

from contexts.stub_docker_client import docker_api_engine
from contexts.stub_docker_client import stub_docker_client
from helpers.fake_engine import default_snapshot


class Scenario(vedro.Scenario):
    async def given_engine_with_project_containers(self):
        self.client = stub_docker_client()
        self.client.add_container('demo_postgres', labels={'zeroconfig.project': 'demo'})
        self.client.add_container('demo_redis', state='exited')
        self.client.api.snapshot = default_snapshot()
        self.interface = docker_api_engine(self.client)

    async def when_user_lists_project_containers(self):
        self.state = await self.interface.list_containers('demo')

    async def then_names_should_lose_leading_slash(self):
        assert [(container.name, container.state) for container in self.state] == [
            ('demo_postgres', 'running'),
            ('demo_redis', 'exited'),
        ]
        assert list(self.state)[0].labels == {'zeroconfig.project': 'demo'}

    async def and_all_containers_should_be_filtered_by_name(self):
        assert self.client.api.calls == [('list', True, {'name': 'demo'})]

    async def when_user_reads_stats(self):
        self.stats = await self.interface.stats('demo_postgres')

    async def then_single_snapshot_should_be_requested(self):
        assert self.client.api.calls[-1] == ('stats', 'demo_postgres', False)

    async def and_cpu_percent_should_come_from_snapshot_deltas(self):
        # (300 - 100) / (2000 - 1000) * 2 cpus * 100
        assert round(self.stats.cpu_percent, 2) == 40.0
        assert (self.stats.memory_usage, self.stats.memory_limit) == (256, 1024)
