from zeroconfig.client.zeroconfig_client import ZeroConfigClient
from zeroconfig.core.backup import BackupManager
from zeroconfig.core.config import Config
from zeroconfig.core.container_data_types import ServiceSpec
from zeroconfig.core.engine import Engine
from zeroconfig.core.orchestrator import ContainerOrchestrator
from zeroconfig.credentials import CredentialStore
from zeroconfig.health import HealthChecker
from zeroconfig.runtime.discovery import RuntimeDetector
from zeroconfig.version import get_version

__version__ = get_version()
__all__ = (
    'ZeroConfigClient', 'Engine', 'ContainerOrchestrator', 'BackupManager',
    'Config', 'ServiceSpec', 'CredentialStore', 'HealthChecker', 'RuntimeDetector',
)
