from __future__ import annotations
import logging
import typing
from ..comparers import EqualityComparer
from ..hash_set import HashSet, NativeSet
from ..types import *

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable

logger = logging.getLogger(__name__)


def _buffer(producer: Producer[T], members: Any) -> None:
    """drain a producer into a membership set"""
    producer(lambda item: members.add(item) or True)


class SetAccessor(Generic[T]):
    """
    provides set-theoretic operations: distinct, union, intersection and difference.
    each comes in two flavours: the plain one relies on python's hash/==
    (elements must be hashable), the *_by one takes an EqualityComparer and
    works for any element type. a *_by call without a comparer yields nothing.
    """
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    # --- distinct ---

    def _distinct(self, new_seen: Callable[[], Any], key_selector: Optional[KeySelector[T, K]] = None) -> 'Enumerable[T]':
        from ..enumerable import Enumerable
        source = self._enumerable._source()
        if source is None:
            return Enumerable(None)
        key_of = key_selector or (lambda item: item)

        def distinct_data(visit: Visitor[T]) -> None:
            seen = new_seen()
            source(lambda item: visit(item) if seen.add(key_of(item)) else True)
        return Enumerable(distinct_data)

    def distinct(self, key_selector: Optional[KeySelector[T, K]] = None) -> 'Enumerable[T]':
        """return distinct elements (or elements with distinct keys). preserves order of first appearance."""
        return self._distinct(NativeSet, key_selector)

    def distinct_by(self, comparer: Optional[EqualityComparer[T]]) -> 'Enumerable[T]':
        """return elements distinct under the comparer, in order of first appearance."""
        from ..enumerable import Enumerable
        if comparer is None:
            return Enumerable(None)
        return self._distinct(lambda: HashSet(comparer))

    # --- union ---

    def _union(self, other: Any, new_seen: Callable[[], Any]) -> 'Enumerable[T]':
        from ..enumerable import Enumerable
        from ..factories import to_producer
        first, second = self._enumerable._source(), to_producer(other)
        if first is None and second is None:
            return Enumerable(None)

        def union_data(visit: Visitor[T]) -> None:
            seen = new_seen()
            stopped = False

            def step(item: T) -> bool:
                nonlocal stopped
                if not seen.add(item):
                    return True
                if not visit(item):
                    stopped = True
                    return False
                return True

            if first is not None:
                first(step)
            if not stopped and second is not None:
                second(step)
        return Enumerable(union_data)

    def union(self, other: Any) -> 'Enumerable[T]':
        """return the order-preserving union of two sequences (distinct elements)."""
        return self._union(other, NativeSet)

    def union_by(self, other: Any, comparer: Optional[EqualityComparer[T]]) -> 'Enumerable[T]':
        """order-preserving union, with equality decided by the comparer."""
        from ..enumerable import Enumerable
        if comparer is None:
            return Enumerable(None)
        return self._union(other, lambda: HashSet(comparer))

    # --- intersect / except ---

    def _filter_against(self, other: Any, new_set: Callable[[], Any], keep_members: bool) -> 'Enumerable[T]':
        """
        shared engine of intersect and except. the other sequence is drained
        into a membership set once per run, before this sequence is streamed;
        a second set makes sure each qualifying element is yielded only once.
        """
        from ..enumerable import Enumerable
        from ..factories import to_producer
        first, second = self._enumerable._source(), to_producer(other)
        if first is None or (second is None and keep_members):
            return Enumerable(None)

        def set_filter_data(visit: Visitor[T]) -> None:
            members = new_set()
            if second is not None:
                _buffer(second, members)
            logger.debug("%s buffered %d element(s) from the second sequence",
                         'intersect' if keep_members else 'except', len(members))
            yielded = new_set()

            def step(item: T) -> bool:
                if (item in members) != keep_members:
                    return True
                if not yielded.add(item):
                    return True
                return visit(item)
            first(step)
        return Enumerable(set_filter_data)

    def intersect(self, other: Any) -> 'Enumerable[T]':
        """distinct elements of this sequence that also occur in the other, in first-occurrence order."""
        return self._filter_against(other, NativeSet, keep_members=True)

    def intersect_by(self, other: Any, comparer: Optional[EqualityComparer[T]]) -> 'Enumerable[T]':
        """intersect, with equality decided by the comparer."""
        from ..enumerable import Enumerable
        if comparer is None:
            return Enumerable(None)
        return self._filter_against(other, lambda: HashSet(comparer), keep_members=True)

    def except_(self, other: Any) -> 'Enumerable[T]':
        """distinct elements of this sequence that do not occur in the other (set difference)."""
        return self._filter_against(other, NativeSet, keep_members=False)

    def except_by(self, other: Any, comparer: Optional[EqualityComparer[T]]) -> 'Enumerable[T]':
        """set difference, with equality decided by the comparer."""
        from ..enumerable import Enumerable
        if comparer is None:
            return Enumerable(None)
        return self._filter_against(other, lambda: HashSet(comparer), keep_members=False)

    # --- membership ---

    def contains(self, value: T, comparer: Optional[EqualityComparer[T]] = None) -> bool:
        """true if the sequence holds an element equal to value. stops at the first match."""
        source = self._enumerable._unordered_source()
        if source is None:
            return False
        equals = comparer.equals if comparer is not None else (lambda a, b: a == b)
        found = False

        def step(item: T) -> bool:
            nonlocal found
            if equals(item, value):
                found = True
                return False
            return True

        source(step)
        return found
