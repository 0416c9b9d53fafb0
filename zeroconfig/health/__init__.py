from zeroconfig.health.checker import HealthChecker
from zeroconfig.health.checker import HealthState
from zeroconfig.health.checker import HealthStatus

__all__ = ('HealthChecker', 'HealthState', 'HealthStatus')
