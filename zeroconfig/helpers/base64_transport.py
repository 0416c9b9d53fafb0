"""
Base64 transport for payloads pushed through `sh -c` inside containers.

Standard alphabet with padding: the container side decodes with `base64 -d`.
"""
import base64
from typing import Iterator

# multiple of 4 so every chunk decodes on its own
CHUNK_SIZE = 64 * 1024


def base64_encode(data: bytes) -> str:
    return base64.b64encode(data).decode('ascii')


def base64_decode(encoded: str) -> bytes:
    return base64.b64decode(''.join(encoded.split()))


def base64_chunks(encoded: str, chunk_size: int = CHUNK_SIZE) -> Iterator[str]:
    if chunk_size <= 0 or chunk_size % 4:
        raise ValueError(f'chunk size should be a positive multiple of 4, got {chunk_size}')
    return (encoded[offset:offset + chunk_size] for offset in range(0, len(encoded), chunk_size))
