"""Content fingerprints for cache keys.

xxhash for speed; SHA256 where a stable cryptographic digest is wanted.
Structured values are canonicalized with orjson (sorted keys) before hashing.
"""

from enum import Enum
from typing import Any, Protocol
import hashlib

import orjson
import xxhash


class Algorithm(str, Enum):
    """Supported hash algorithms."""

    XXHASH64 = "xxhash64"  # Fast, non-cryptographic (cache keys)
    SHA256 = "sha256"


class Hasher(Protocol):
    """Protocol for hash implementations."""

    def digest(self, data: bytes) -> str:
        """Compute hex digest of data."""
        ...


class XXHasher:
    def digest(self, data: bytes) -> str:
        return xxhash.xxh64(data).hexdigest()


class SHA256Hasher:
    def digest(self, data: bytes) -> str:
        return hashlib.sha256(data).hexdigest()


def create_hasher(algorithm: Algorithm = Algorithm.XXHASH64) -> Hasher:
    """
    Create hasher instance.

    Args:
        algorithm: Hash algorithm to use

    Returns:
        Hasher instance

    Raises:
        ValueError: If the algorithm is unknown
    """
    if algorithm == Algorithm.XXHASH64:
        return XXHasher()
    if algorithm == Algorithm.SHA256:
        return SHA256Hasher()
    raise ValueError(f"Unknown algorithm: {algorithm}")


def hash_bytes(
    data: bytes, algorithm: Algorithm = Algorithm.XXHASH64, truncate: int | None = None
) -> str:
    """Hash bytes to a hex digest, optionally truncated."""
    digest = create_hasher(algorithm).digest(data)
    return digest[:truncate] if truncate else digest


def hash_string(
    text: str, algorithm: Algorithm = Algorithm.XXHASH64, truncate: int | None = None
) -> str:
    """
    Hash string to hex digest.

    Examples:
        >>> len(hash_string("test"))
        16
        >>> len(hash_string("test", Algorithm.SHA256, truncate=16))
        16
    """
    return hash_bytes(text.encode("utf-8"), algorithm, truncate)


def hash_fields(*fields: str, algorithm: Algorithm = Algorithm.XXHASH64) -> str:
    """Hash several fields together, separated by a null byte."""
    return hash_string("\x00".join(fields), algorithm)


def fingerprint(value: Any, algorithm: Algorithm = Algorithm.XXHASH64) -> str:
    """
    Fingerprint an arbitrary JSON-compatible value.

    Keys are sorted so that equal mappings hash equally regardless of
    insertion order.
    """
    canonical = orjson.dumps(value, option=orjson.OPT_SORT_KEYS | orjson.OPT_NON_STR_KEYS)
    return hash_bytes(canonical, algorithm)


__all__ = [
    "Algorithm",
    "Hasher",
    "create_hasher",
    "hash_string",
    "hash_bytes",
    "hash_fields",
    "fingerprint",
]
