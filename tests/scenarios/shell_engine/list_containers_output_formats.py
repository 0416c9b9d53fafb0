import vedro

from contexts.stub_engine_cli import shell_engine
from contexts.stub_engine_cli import stub_engine_cli

DOCKER_LINES = '''
  ps*) cat <<'ROWS'
{"ID":"a1","Names":"demo_postgres","Image":"postgres:16","State":"running","Status":"Up 2 minutes","Labels":"zeroconfig.project=demo,zeroconfig.service=postgres"}
{"ID":"b2","Names":"demo_redis","Image":"redis:7","State":"exited","Status":"Exited (0) 5 seconds ago","Labels":""}
ROWS
  exit 0 ;;
'''

PODMAN_ARRAY = '''
  ps*) cat <<'ROWS'
[{"Id":"a1","Names":["demo_postgres"],"Image":"postgres:16","State":"running","Status":"Up 2 minutes",
  "Labels":{"zeroconfig.project":"demo","zeroconfig.service":"postgres"}},
 {"Id":"b2","Names":["demo_redis"],"Image":"redis:7","State":"exited","Status":"Exited (0) 5 seconds ago",
  "Labels":null}]
ROWS
  exit 0 ;;
'''


class Scenario(vedro.Scenario):
    subject = 'list containers from {engine} json output'

    @vedro.params('docker', DOCKER_LINES)
    @vedro.params('podman', PODMAN_ARRAY)
    def __init__(self, engine, branches):
        self.engine = engine
        self.branches = branches

    async def given_engine_with_two_containers(self):
        self.cli = stub_engine_cli(self.branches)
        self.interface = shell_engine(self.cli)

    async def when_user_lists_project_containers(self):
        self.state = await self.interface.list_containers('demo')

    async def then_both_containers_should_be_parsed(self):
        assert [(container.id, container.name, container.state) for container in self.state] == [
            ('a1', 'demo_postgres', 'running'),
            ('b2', 'demo_redis', 'exited'),
        ]

    async def and_labels_should_be_read(self):
        postgres, redis = list(self.state)
        assert postgres.labels == {'zeroconfig.project': 'demo', 'zeroconfig.service': 'postgres'}
        assert redis.labels == {}

    async def and_name_filter_should_be_passed(self):
        assert self.cli.calls == [['ps', '-a', '--format', 'json', '--filter', 'name=demo']]
