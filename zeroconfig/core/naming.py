NETWORK_PREFIX = 'zeroconfig'


def container_name(project: str, service: str) -> str:
    return f'{project}_{service}'


def network_name(project: str) -> str:
    return f'{NETWORK_PREFIX}_{project}'


def belongs_to_project(project: str, name: str) -> bool:
    name = name.lstrip('/')
    return name == project or name.startswith((f'{project}_', f'{project}-'))


def matches_service(project: str, service: str, name: str) -> bool:
    name = name.lstrip('/')
    return (
        name == container_name(project, service)
        or name == service
        or name.endswith(f'-{service}')
    )
