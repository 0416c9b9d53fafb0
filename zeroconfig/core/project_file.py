from pathlib import Path

import yaml

from zeroconfig.core.container_data_types import ServiceSpec
from zeroconfig.errors import ProjectFileError


def _service_spec(name: str, declaration) -> ServiceSpec:
    if isinstance(declaration, (str, int, float)):
        return ServiceSpec(name=name, version=str(declaration))
    if not isinstance(declaration, dict) or 'version' not in declaration:
        raise ProjectFileError(f"Service '{name}' should declare a version")

    environment = declaration.get('environment') or {}
    if not isinstance(environment, dict):
        raise ProjectFileError(f"Service '{name}' environment should be a mapping")
    volumes = declaration.get('volumes') or []
    if not isinstance(volumes, list):
        raise ProjectFileError(f"Service '{name}' volumes should be a list")

    port = declaration.get('port')
    return ServiceSpec(
        name=name,
        version=str(declaration['version']),
        environment={key: str(value) for key, value in environment.items()},
        volumes=tuple(str(volume) for volume in volumes),
        command=declaration.get('command'),
        port=int(port) if isinstance(port, (int, str)) and str(port).isdigit() else None,
    )


def parse_services(content: str) -> list[ServiceSpec]:
    try:
        document = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        raise ProjectFileError(f"Can't parse project file:\n{e}") from e
    if not isinstance(document, dict):
        raise ProjectFileError('Project file should be a mapping with `services` section')

    services = document.get('services') or {}
    if not isinstance(services, dict):
        raise ProjectFileError('`services` section should map service names to versions')
    return [_service_spec(str(name), declaration) for name, declaration in services.items()]


def load_services(path: Path) -> list[ServiceSpec]:
    if not path.exists():
        raise ProjectFileError(f'Project file {path} does not exist')
    return parse_services(path.read_text(encoding='utf-8'))
