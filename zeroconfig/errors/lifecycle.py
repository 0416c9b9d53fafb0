from zeroconfig.errors.base import ZeroConfigError


class EngineUnavailable(ZeroConfigError):
    ...


class ImagePullFailure(ZeroConfigError):
    ...


class NetworkCreateFailure(ZeroConfigError):
    ...


class ContainerCreateFailure(ZeroConfigError):
    ...


class ContainerNotFound(ZeroConfigError):
    ...


class ContainerOperationFailure(ZeroConfigError):
    ...


class ExecFailure(ZeroConfigError):
    ...


class HealthCheckTimeout(ZeroConfigError):
    ...


class CredentialIOError(ZeroConfigError):
    ...


class PortConflict(ZeroConfigError):
    ...


class UnsupportedServiceType(ZeroConfigError):
    ...


class ServiceNotDeclared(ZeroConfigError):
    ...


class ProjectFileError(ZeroConfigError):
    ...
