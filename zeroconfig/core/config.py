import os
from pathlib import Path


class Config:
    def __init__(self):
        self.project_root: Path = Path(os.environ.get('ZEROCONFIG_PROJECT_ROOT', os.getcwd()))
        self.project: str = os.environ.get('ZEROCONFIG_PROJECT', self.project_root.name)
        assert self.project, 'unset ZEROCONFIG_PROJECT'
        self.base_port: int = int(os.environ.get('ZEROCONFIG_BASE_PORT', 5000))
        self.credentials_file_name: str = os.environ.get('ZEROCONFIG_CREDENTIALS_FILE', '.zeroconfig.env')
        self.credentials_file_path: Path = self.project_root / self.credentials_file_name
        self.backups_path: Path = self.project_root / os.environ.get('ZEROCONFIG_BACKUPS_DIRECTORY',
                                                                      '.zeroconfig/backups')
        self.project_file_path: Path = self.project_root / os.environ.get('ZEROCONFIG_PROJECT_FILE', 'zero.yml')
        self.stop_timeout: int = int(os.environ.get('ZEROCONFIG_STOP_TIMEOUT', 10))
        self.health_check_interval: float = float(os.environ.get('ZEROCONFIG_HEALTH_CHECK_INTERVAL', 2))
        self.health_check_timeout: float = float(os.environ.get('ZEROCONFIG_HEALTH_CHECK_TIMEOUT', 60))
        self.wait_healthy_on_start = bool(os.environ.get('ZEROCONFIG_WAIT_HEALTHY', False))
        self.verbose_engine_commands = bool(os.environ.get('ZEROCONFIG_VERBOSE_ENGINE_COMMANDS', False))
        self.docker_host: str | None = os.environ.get('DOCKER_HOST')
        self.server_port: int = int(os.environ.get('PORT', 80))
