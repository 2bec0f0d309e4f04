"""MurmurHash3 (x86, 32-bit) used to index object member names."""

from __future__ import annotations

from functools import lru_cache
from typing import Final

_MASK: Final = 0xFFFFFFFF
_C1: Final = 0xCC9E2D51
_C2: Final = 0x1B873593


def _rotl(x: int, r: int) -> int:
    return ((x << r) | (x >> (32 - r))) & _MASK


def _fmix(h: int) -> int:
    h ^= h >> 16
    h = (h * 0x85EBCA6B) & _MASK
    h ^= h >> 13
    h = (h * 0xC2B2AE35) & _MASK
    h ^= h >> 16
    return h


def murmur3_32(data: bytes, seed: int = 0) -> int:
    """
    Computes the MurmurHash3 x86_32 digest of ``data``.

    Returns an unsigned 32-bit integer.
    """
    length = len(data)
    h = seed & _MASK
    tail_start = length - (length & 3)

    for i in range(0, tail_start, 4):
        k = int.from_bytes(data[i : i + 4], "little")
        k = (k * _C1) & _MASK
        k = _rotl(k, 15)
        k = (k * _C2) & _MASK

        h ^= k
        h = _rotl(h, 13)
        h = (h * 5 + 0xE6546B64) & _MASK

    k = 0
    tail = length & 3
    if tail == 3:
        k ^= data[tail_start + 2] << 16
    if tail >= 2:
        k ^= data[tail_start + 1] << 8
    if tail >= 1:
        k ^= data[tail_start]
        k = (k * _C1) & _MASK
        k = _rotl(k, 15)
        k = (k * _C2) & _MASK
        h ^= k

    h ^= length
    return _fmix(h)


@lru_cache(maxsize=4096)
def key_hash(key: str) -> int:
    """
    Hashes an object member name.

    Case- and order-sensitive. Member lookup compares these hashes only,
    so two distinct names with the same hash are indistinguishable.
    """
    if not isinstance(key, str):
        raise TypeError(f"keys must be str, not {type(key).__name__}")
    return murmur3_32(key.encode("utf-8", "surrogatepass"))
