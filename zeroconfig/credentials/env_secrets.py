from typing import Callable
from typing import Mapping
from typing import NamedTuple

from zeroconfig.credentials import generator
from zeroconfig.credentials.store import CredentialStore

AUTO_GENERATE = 'auto-generate'


class SecretKind(NamedTuple):
    suffix: str
    generate: Callable[[], str]


# first matching suffix wins, extend here to add a new secret kind
SECRET_KINDS: tuple[SecretKind, ...] = (
    SecretKind('_JWT_SECRET', generator.jwt_secret),
    SecretKind('_SECRET_KEY', generator.jwt_secret),
    SecretKind('_JWT', generator.jwt_secret),
    SecretKind('_API_KEY', generator.api_key),
    SecretKind('_PASSWORD', generator.db_password),
    SecretKind('_PASS', generator.db_password),
    SecretKind('_UUID', generator.uuid4),
)


def default_secret() -> str:
    return generator.random_alphanumeric(32)


def secret_generator_for(env_key: str) -> Callable[[], str]:
    key = env_key.upper()
    for kind in SECRET_KINDS:
        if key.endswith(kind.suffix) or key == kind.suffix.lstrip('_'):
            return kind.generate
    return default_secret


def credential_key(service: str, env_key: str) -> str:
    return f'{service}_{env_key}'


async def resolve_declared_env(service: str, environment: Mapping[str, str],
                               store: CredentialStore) -> dict[str, str]:
    resolved = {}
    for key, value in environment.items():
        if value == AUTO_GENERATE:
            value = await store.get_or_generate(credential_key(service, key), secret_generator_for(key))
        resolved[key] = value
    return resolved


def connection_string(service_type: str, host: str, port: int, database: str = '',
                      user: str = '', password: str = '') -> str:
    match service_type:
        case 'postgres' | 'postgresql':
            return f'postgresql://{user}:{password}@{host}:{port}/{database}'
        case 'mysql':
            return f'mysql://{user}:{password}@{host}:{port}/{database}'
        case 'mongo' | 'mongodb':
            return f'mongodb://{user}:{password}@{host}:{port}/{database}'
        case 'redis':
            return f'redis://{host}:{port}'
        case 'rabbitmq':
            return f'amqp://{user}:{password}@{host}:{port}'
        case _:
            return f'{service_type}://{host}:{port}'
