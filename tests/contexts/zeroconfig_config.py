import os
from pathlib import Path

import vedro

from config import Config
from zeroconfig.core.config import Config as ZeroConfigConfig


def _restore_environ(previous: dict[str, str | None]):
    for key, value in previous.items():
        if value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = value


def zeroconfig_config(root: Path, **env: str) -> ZeroConfigConfig:
    envs = {
        'ZEROCONFIG_PROJECT_ROOT': str(root),
        'ZEROCONFIG_PROJECT': Config.PROJECT,
        'ZEROCONFIG_BASE_PORT': str(Config.BASE_PORT),
        'ZEROCONFIG_HEALTH_CHECK_INTERVAL': str(Config.HEALTH_CHECK_INTERVAL),
    } | env

    vedro.defer(_restore_environ, {key: os.environ.get(key) for key in envs})
    os.environ.update(envs)
    return ZeroConfigConfig()
