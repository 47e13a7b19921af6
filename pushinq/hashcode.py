"""
deterministic 64-bit hash codes for equality comparers.

compute() never raises for unhashable values (lists, dicts, mutable dataclasses),
which is what lets the *_by operators work on elements python's set cannot hold.
values that compare equal with == hash equal for every type handled explicitly below.
"""
import numpy as np
from typing import Any

MASK = 0xFFFFFFFFFFFFFFFF

_FNV_OFFSET = 0xCBF29CE484222325
_FNV_PRIME = 0x100000001B3

SEED = 17
MULTIPLIER = 31


def _fnv1a(data: bytes) -> int:
    h = _FNV_OFFSET
    for byte in data:
        h ^= byte
        h = (h * _FNV_PRIME) & MASK
    return h


def _int_bytes(value: int) -> bytes:
    return (value & MASK).to_bytes(8, 'little')


def compute(value: Any) -> int:
    """hash a single value to an unsigned 64-bit integer"""
    if value is None:
        return _fnv1a(b'nil')
    # numpy scalars compare equal to python numbers but are not int/float subclasses
    if isinstance(value, np.generic):
        value = value.item()
    # bool and integral floats must hash like the int they equal
    if isinstance(value, (bool, int)):
        return _fnv1a(_int_bytes(int(value)))
    if isinstance(value, float):
        if value.is_integer():
            return _fnv1a(_int_bytes(int(value)))
        return _fnv1a(np.float64(value).tobytes())
    if isinstance(value, str):
        return _fnv1a(value.encode('utf-8'))
    if isinstance(value, (bytes, bytearray)):
        return _fnv1a(bytes(value))
    if isinstance(value, (tuple, list)):
        return combine_hashes(*(compute(v) for v in value))
    if isinstance(value, (set, frozenset)):
        # order-insensitive, equal sets iterate in different orders
        return combine_hashes(sum(compute(v) for v in value) & MASK)
    if isinstance(value, dict):
        return combine_hashes(sum(combine_hashes(compute(k), compute(v)) for k, v in value.items()) & MASK)
    try:
        return hash(value) & MASK
    except TypeError:
        # unhashable with no better identity: fall back to its printed form
        return _fnv1a(repr(value).encode('utf-8'))


def combine(*values: Any) -> int:
    """hash several values into one code, order-sensitive"""
    return combine_hashes(*(compute(v) for v in values))


def combine_hashes(*hashes: int) -> int:
    """fold precomputed hash codes into one, order-sensitive"""
    h = SEED
    for value in hashes:
        h = (h * MULTIPLIER + value) & MASK
    return h
