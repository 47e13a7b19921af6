from .comparers import EqualityComparer
from .types import *


class _Bucket(Generic[T]):
    __slots__ = ('item', 'others')

    def __init__(self, item: T):
        self.item = item
        self.others: List[T] = []


class HashSet(Generic[T]):
    """
    membership set driven by an external equality comparer instead of __hash__/__eq__.
    items whose hashes collide but are not equal share a bucket: the first one
    is the bucket's representative, the rest go to its overflow list.
    """

    def __init__(self, comparer: EqualityComparer[T]):
        self._comparer = comparer
        self._buckets: Dict[int, _Bucket[T]] = {}
        self._size = 0

    def _find(self, bucket: _Bucket[T], item: T) -> bool:
        equals = self._comparer.equals
        if equals(item, bucket.item):
            return True
        return any(equals(item, other) for other in bucket.others)

    def add(self, item: T) -> bool:
        """insert item unless an equal one is present. returns true if it was inserted."""
        code = self._comparer.hash(item)
        bucket = self._buckets.get(code)
        if bucket is None:
            self._buckets[code] = _Bucket(item)
        elif self._find(bucket, item):
            return False
        else:
            bucket.others.append(item)
        self._size += 1
        return True

    def contains(self, item: T) -> bool:
        """true if an equal item was previously added"""
        bucket = self._buckets.get(self._comparer.hash(item))
        return bucket is not None and self._find(bucket, item)

    def __contains__(self, item: T) -> bool:
        return self.contains(item)

    def __len__(self) -> int:
        return self._size


class NativeSet(set):
    """python set whose add reports whether the item was new, matching HashSet.add"""

    def add(self, item: Any) -> bool:
        if item in self:
            return False
        super().add(item)
        return True
