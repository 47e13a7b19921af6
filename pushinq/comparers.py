from . import hashcode
from .types import *


class EqualityComparer(Generic[T]):
    """
    an equals/hash capability for elements without usable built-in equality.
    contract: equals(a, b) implies hash(a) == hash(b).
    """
    __slots__ = ('equals', 'hash')

    def __init__(self, equals: Callable[[T, T], bool], hash: Callable[[T], int]):
        self.equals = equals
        self.hash = hash

    def __repr__(self) -> str:
        return f"EqualityComparer(equals={self.equals!r}, hash={self.hash!r})"


def default() -> EqualityComparer[Any]:
    """== equality with hashcode.compute, which also accepts unhashable values"""
    return EqualityComparer(lambda a, b: a == b, hashcode.compute)


def by_field(field_selector: KeySelector[T, K]) -> EqualityComparer[T]:
    """two elements are equal when the selected fields are equal"""
    return EqualityComparer(
        lambda a, b: field_selector(a) == field_selector(b),
        lambda item: hashcode.compute(field_selector(item))
    )


def composite(*comparers: EqualityComparer[T]) -> EqualityComparer[T]:
    """equal only when every comparer agrees"""
    def equals(a: T, b: T) -> bool:
        return all(c.equals(a, b) for c in comparers)

    def hash_item(item: T) -> int:
        return hashcode.combine_hashes(*(c.hash(item) for c in comparers))

    return EqualityComparer(equals, hash_item)


def custom(equals: Callable[[T, T], bool], hash: Optional[Callable[[T], int]] = None) -> EqualityComparer[T]:
    """
    wraps a plain equality function. without a hash every element lands in
    the same bucket, which stays correct but degrades lookups to linear scans.
    """
    return EqualityComparer(equals, hash if hash is not None else (lambda item: 0))


# --- ordering comparers ---

def natural(a: Any, b: Any) -> int:
    """three-way comparison using < and >"""
    if a < b: return -1
    if a > b: return 1
    return 0


def by_key(key_selector: KeySelector[T, K], cmp: Comparer[K] = natural) -> Comparer[T]:
    """compare elements by a selected key"""
    return lambda a, b: cmp(key_selector(a), key_selector(b))


def reverse(cmp: Comparer[T]) -> Comparer[T]:
    """invert a comparer"""
    return lambda a, b: cmp(b, a)
