from zeroconfig.errors.base import EngineCallError
from zeroconfig.errors.base import ZeroConfigError
from zeroconfig.errors.lifecycle import ContainerCreateFailure
from zeroconfig.errors.lifecycle import ContainerNotFound
from zeroconfig.errors.lifecycle import ContainerOperationFailure
from zeroconfig.errors.lifecycle import CredentialIOError
from zeroconfig.errors.lifecycle import EngineUnavailable
from zeroconfig.errors.lifecycle import ExecFailure
from zeroconfig.errors.lifecycle import HealthCheckTimeout
from zeroconfig.errors.lifecycle import ImagePullFailure
from zeroconfig.errors.lifecycle import NetworkCreateFailure
from zeroconfig.errors.lifecycle import PortConflict
from zeroconfig.errors.lifecycle import ProjectFileError
from zeroconfig.errors.lifecycle import ServiceNotDeclared
from zeroconfig.errors.lifecycle import UnsupportedServiceType

__all__ = (
    'ZeroConfigError', 'EngineCallError',
    'EngineUnavailable', 'ImagePullFailure', 'NetworkCreateFailure', 'ContainerCreateFailure',
    'ContainerNotFound', 'ContainerOperationFailure', 'ExecFailure', 'HealthCheckTimeout',
    'CredentialIOError', 'PortConflict', 'UnsupportedServiceType', 'ServiceNotDeclared', 'ProjectFileError',
)
