"""Stateless secret generation, all randomness comes from `secrets` (OS CSPRNG)."""
import base64
import hashlib
import secrets
import string
import uuid

ALPHANUMERIC = string.ascii_uppercase + string.ascii_lowercase + string.digits

JWT_SECRET_LENGTH = 64
API_KEY_LENGTH = 32
DB_PASSWORD_LENGTH = 24


def random_alphanumeric(length: int) -> str:
    return ''.join(secrets.choice(ALPHANUMERIC) for _ in range(length))


def random_hex(length: int) -> str:
    """Hex encoding of `length` random bytes (2 * length characters)."""
    return secrets.token_hex(length)


def random_base64(length: int) -> str:
    """Standard base64 encoding of `length` random bytes."""
    return base64.b64encode(secrets.token_bytes(length)).decode('ascii')


def jwt_secret() -> str:
    return random_alphanumeric(JWT_SECRET_LENGTH)


def api_key() -> str:
    return random_alphanumeric(API_KEY_LENGTH)


def db_password() -> str:
    return random_alphanumeric(DB_PASSWORD_LENGTH)


def uuid4() -> str:
    return str(uuid.uuid4())


def sha256_hex(value: str) -> str:
    return hashlib.sha256(value.encode('utf-8')).hexdigest()
