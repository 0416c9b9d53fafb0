import vedro
from vedro import catched

from zeroconfig import ServiceSpec
from zeroconfig.core.ports import PortAllocator
from zeroconfig.errors import PortConflict


class Scenario(vedro.Scenario):
    async def given_allocator_with_fixed_port_service(self):
        self.allocator = PortAllocator(5000)
        self.services = [
            ServiceSpec(name='postgres', version='16'),
            ServiceSpec(name='api', version='latest', port=5001),
            ServiceSpec(name='redis', version='7'),
        ]

    async def when_user_allocates_ports(self):
        self.ports = self.allocator.allocate(self.services)

    async def then_fixed_port_should_be_skipped_by_free_ports(self):
        assert self.ports == {'postgres': 5000, 'api': 5001, 'redis': 5002}

    async def when_service_is_removed_and_new_one_declared(self):
        self.next_ports = self.allocator.allocate([
            ServiceSpec(name='postgres', version='16'),
            ServiceSpec(name='mongodb', version='7'),
            ServiceSpec(name='redis', version='7'),
        ])

    async def then_kept_services_should_keep_ports(self):
        assert self.next_ports == {'postgres': 5000, 'mongodb': 5001, 'redis': 5002}

    async def when_fixed_port_collides_with_allocated_one(self):
        with catched(PortConflict) as self.exc_info:
            self.allocator.allocate([
                ServiceSpec(name='postgres', version='16'),
                ServiceSpec(name='redis', version='7', port=5000),
            ])

    async def then_it_should_fail_with_port_conflict(self):
        assert self.exc_info.type is PortConflict
        assert self.exc_info.value.message == 'Port 5000 of service redis is already allocated to service postgres'

    async def and_previous_allocation_should_be_kept(self):
        assert self.allocator.allocation == self.next_ports
