from __future__ import annotations
import typing
from .. import comparers
from ..comparers import EqualityComparer
from ..types import *

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable


class _GroupingBuilder(Generic[K, T]):
    """collects groups in first-key order, matching keys through an equality comparer"""

    def __init__(self, comparer: EqualityComparer[K]):
        self._comparer = comparer
        self._order: List[Group[K, T]] = []
        self._lookup: Dict[int, List[Group[K, T]]] = {}

    def add(self, key: K, item: T) -> None:
        bucket = self._lookup.setdefault(self._comparer.hash(key), [])
        for group in bucket:
            if self._comparer.equals(group.key, key):
                group.items.append(item)
                return
        group = Group(key, [item])
        bucket.append(group)
        self._order.append(group)

    def result(self) -> List[Group[K, T]]:
        return self._order


class GroupingAccessor(Generic[T]):
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def group_by(self, key_selector: KeySelector[T, K],
                 comparer: Optional[EqualityComparer[K]] = None) -> 'Enumerable[Group[K, T]]':
        """
        group elements by a key, in order of each key's first appearance.
        keys are matched with the comparer (== and hashcode.compute by default),
        so unhashable keys such as lists or dicts work too.
        """
        from ..enumerable import Enumerable
        source = self._enumerable._source()
        if source is None or key_selector is None:
            return Enumerable(None)
        key_comparer = comparer or comparers.default()

        def group_data(visit: Visitor[Group[K, T]]) -> None:
            builder: _GroupingBuilder[K, T] = _GroupingBuilder(key_comparer)
            source(lambda item: builder.add(key_selector(item), item) or True)
            for group in builder.result():
                if not visit(group):
                    return
        return Enumerable(group_data)
