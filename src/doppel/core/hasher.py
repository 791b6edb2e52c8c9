"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements file content hashing with pluggable algorithms.

Every calculator streams the file in chunks and returns the 64-bit digest
as 16 uppercase hex digits. Unreadable files produce an empty string, which
the rest of the pipeline treats as "not hashed".
"""

import logging
from typing import Optional

import xxhash

from doppel.core.interfaces import HashCalculator
from doppel.core.models import HashAlgorithmName

logger = logging.getLogger(__name__)

FNV1A_64_OFFSET_BASIS = 0xCBF29CE484222325
FNV1A_64_PRIME = 0x100000001B3
_MASK_64 = 0xFFFFFFFFFFFFFFFF

READ_CHUNK_SIZE = 64 * 1024


def fnv1a_64(data: bytes, seed: int = FNV1A_64_OFFSET_BASIS) -> int:
    """
    Folds `data` into a running 64-bit FNV-1a state.
    Pass the previous return value as `seed` to hash a stream chunk by chunk.
    """
    h = seed
    prime = FNV1A_64_PRIME
    mask = _MASK_64
    for byte in data:
        h = ((h ^ byte) * prime) & mask
    return h


def format_digest(value: int) -> str:
    return f"{value:016X}"


class FNV1AHashCalculator(HashCalculator):
    """
    64-bit FNV-1a over the raw bytes of a file.
    Non-cryptographic: chosen for speed, collisions are accepted as a risk.
    """

    def __init__(self, chunk_size: int = READ_CHUNK_SIZE):
        self.chunk_size = chunk_size

    def calculate_hash(self, file_path: str) -> str:
        h = FNV1A_64_OFFSET_BASIS
        try:
            with open(file_path, 'rb') as f:
                while True:
                    chunk = f.read(self.chunk_size)
                    if not chunk:
                        break
                    h = fnv1a_64(chunk, h)
        except OSError as e:
            logger.debug(f"Could not hash {file_path}: {e}")
            return ""
        return format_digest(h)


# Use the same way to implement and use any other hashing algorithm
class XXHashCalculator(HashCalculator):
    """
    xxHash64 digest, much faster than pure-Python FNV-1a on large trees.
    """

    def __init__(self, chunk_size: int = READ_CHUNK_SIZE):
        self.chunk_size = chunk_size

    def calculate_hash(self, file_path: str) -> str:
        hasher = xxhash.xxh64()
        try:
            with open(file_path, 'rb') as f:
                for chunk in iter(lambda: f.read(self.chunk_size), b''):
                    hasher.update(chunk)
        except OSError as e:
            logger.debug(f"Could not hash {file_path}: {e}")
            return ""
        return hasher.hexdigest().upper()


def create_hash_calculator(algorithm: Optional[HashAlgorithmName] = None) -> HashCalculator:
    """Returns the calculator for `algorithm` (FNV-1a when not given)."""
    if algorithm is None or algorithm == HashAlgorithmName.FNV1A:
        return FNV1AHashCalculator()
    if algorithm == HashAlgorithmName.XXHASH:
        return XXHashCalculator()
    raise ValueError(f"Unsupported hash algorithm: {algorithm}")
