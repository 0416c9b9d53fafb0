"""
Finite, explicit per-service tables.

Images and container ports are looked up by exact service name. Credential
injection, health probes and backup tools are keyed by service type, which
is recognized by exact name or substring (`mongodb` -> `mongo`).
"""
from typing import NamedTuple

DEFAULT_CONTAINER_PORT = 8080
DEFAULT_USER = 'zeroconfig'
DEFAULT_DATABASE = 'zeroconfig'

# service name -> image template, `{version}` is the declared tag
SERVICE_IMAGES: dict[str, str] = {
    'postgres': 'postgres:{version}',
    'redis': 'redis:{version}',
    'mongodb': 'mongo:{version}',
    'mongo': 'mongo:{version}',
    'mysql': 'mysql:{version}',
    'kafka': 'confluentinc/cp-kafka:{version}',
    'rabbitmq': 'rabbitmq:{version}-management',
    'elasticsearch': 'elasticsearch:{version}',
    'minio': 'minio/minio:{version}',
    'localstack': 'localstack/localstack:{version}',
}

SERVICE_PORTS: dict[str, int] = {
    'postgres': 5432,
    'redis': 6379,
    'mongodb': 27017,
    'mongo': 27017,
    'mysql': 3306,
    'kafka': 9092,
    'rabbitmq': 5672,
    'elasticsearch': 9200,
    'minio': 9000,
    'localstack': 4566,
}

# order matters for substring recognition: first match wins
SERVICE_TYPES: tuple[str, ...] = (
    'postgres',
    'mysql',
    'mongo',
    'rabbitmq',
    'redis',
    'elasticsearch',
    'kafka',
    'minio',
    'localstack',
)


def get_service_type(service_name: str) -> str | None:
    if service_name in SERVICE_TYPES:
        return service_name
    for service_type in SERVICE_TYPES:
        if service_type in service_name:
            return service_type
    return None


def get_service_image(service_name: str, version: str) -> str:
    if service_name in SERVICE_IMAGES:
        return SERVICE_IMAGES[service_name].format(version=version)
    return f'{service_name}:{version}'


def get_container_port(service_name: str) -> int:
    return SERVICE_PORTS.get(service_name, DEFAULT_CONTAINER_PORT)


class CredentialRule(NamedTuple):
    secret_env: str
    static_env: dict[str, str]


CREDENTIAL_RULES: dict[str, CredentialRule] = {
    'postgres': CredentialRule('POSTGRES_PASSWORD', {
        'POSTGRES_USER': DEFAULT_USER,
        'POSTGRES_DB': DEFAULT_DATABASE,
    }),
    'mysql': CredentialRule('MYSQL_ROOT_PASSWORD', {
        'MYSQL_DATABASE': DEFAULT_DATABASE,
    }),
    'mongo': CredentialRule('MONGO_INITDB_ROOT_PASSWORD', {
        'MONGO_INITDB_ROOT_USERNAME': DEFAULT_USER,
    }),
    'rabbitmq': CredentialRule('RABBITMQ_DEFAULT_PASS', {
        'RABBITMQ_DEFAULT_USER': DEFAULT_USER,
    }),
}

# readiness probe binaries, success markers are matched in probe output
HEALTH_PROBES: dict[str, list[str]] = {
    'postgres': ['pg_isready', '-U', DEFAULT_USER],
    'redis': ['redis-cli', 'ping'],
    'mongo': ['mongosh', '--quiet', '--eval', "db.adminCommand('ping')"],
    'mysql': ['mysqladmin', 'ping', '-h', 'localhost'],
    'rabbitmq': ['rabbitmq-diagnostics', 'ping'],
    'elasticsearch': ['curl', '-f', 'http://localhost:9200/_cluster/health'],
}
HEALTHY_MARKERS: tuple[str, ...] = ('accepting connections', 'PONG', 'is alive', 'ready', 'ok: 1', 'succeeded')


class BackupTool(NamedTuple):
    extension: str
    dump: str
    restore: str  # `{file}` is the in-container path of the restored dump


BACKUP_TOOLS: dict[str, BackupTool] = {
    'postgres': BackupTool(
        extension='dump',
        dump=f'pg_dump -U {DEFAULT_USER} -Fc {DEFAULT_DATABASE}',
        restore=f'pg_restore -U {DEFAULT_USER} -d {DEFAULT_DATABASE} --clean --if-exists {{file}}',
    ),
    'mysql': BackupTool(
        extension='sql',
        dump='mysqldump -uroot -p"$MYSQL_ROOT_PASSWORD" --all-databases',
        restore='mysql -uroot -p"$MYSQL_ROOT_PASSWORD" < {file}',
    ),
    'mongo': BackupTool(
        extension='archive',
        dump=f'mongodump --archive -u {DEFAULT_USER} -p "$MONGO_INITDB_ROOT_PASSWORD" --authenticationDatabase admin',
        restore=f'mongorestore --archive={{file}} --drop -u {DEFAULT_USER} -p "$MONGO_INITDB_ROOT_PASSWORD" '
                f'--authenticationDatabase admin',
    ),
}
