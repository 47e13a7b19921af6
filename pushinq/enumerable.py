from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from functools import cmp_to_key
from .comparers import natural
from .types import *

# --- core functionality ---
from .extensions.core import _CoreOperations

# --- accessors ---
from .extensions.set import SetAccessor
from .extensions.grouping import GroupingAccessor
from .extensions.stats import StatsAccessor
from .extensions.terminal import TerminalAccessor

logger = logging.getLogger(__name__)

# --- abstract base class ---

class IEnumerable(ABC, Generic[T]):
    @abstractmethod
    def _source(self) -> Optional[Producer[T]]:
        """get the producer that pushes elements in their final order, or None if absent"""
        pass

# --- base enumerable implementation ---

class _BaseEnumerable(IEnumerable[T]):
    def __init__(self, producer: Optional[Producer[T]]):
        """init with a producer that pushes elements to a visitor when called"""
        self._producer = producer

    def _source(self) -> Optional[Producer[T]]:
        return self._producer

    def _unordered_source(self) -> Optional[Producer[T]]:
        """same elements as _source, in any order. used by terminals that only count."""
        return self._source()

    def __call__(self, visitor: Visitor[T]) -> None:
        """
        run the enumeration: visitor is called once per element until the
        elements run out or it returns false. every call starts over.
        """
        producer = self._source()
        if producer is not None:
            producer(visitor)

    def __iter__(self) -> Iterator[T]:
        # materializes, like iterating any other enumerable
        return iter(self.to.list())

    def __len__(self) -> int:
        return self.to.count()

# --- main enumerable class ---

class Enumerable(
    _BaseEnumerable[T],
    _CoreOperations[T]
):
    """a lazy, push-driven, linq-inspired sequence."""
    def __init__(self, producer: Optional[Producer[T]]):
        super().__init__(producer)
        # --- initialize accessors ---
        self.set = SetAccessor(self)
        self.group = GroupingAccessor(self)
        self.stats = StatsAccessor(self)
        self.to = TerminalAccessor(self)

# --- ordered enumerable class ---

class SortLevel(NamedTuple):
    """one rule of a sort chain: how to pick the key, how to compare keys, which direction"""
    key_selector: Optional[KeySelector[Any, Any]]
    comparer: Optional[Comparer[Any]]
    descending: bool


class OrderedEnumerable(Enumerable[T]):
    """
    represents a sorted sequence, allowing for subsequent orderings.
    adding levels never touches the source; every run buffers the source and
    sorts it once, stably, using the whole chain.
    """

    def __init__(self, source: Optional[Producer[T]], sort_levels: Tuple[SortLevel, ...]):
        super().__init__(self._sorted_data if source is not None else None)
        self._unsorted = source
        self._sort_levels = sort_levels

    def _unordered_source(self) -> Optional[Producer[T]]:
        return self._unsorted

    def _build_comparison(self) -> Callable[[Tuple, Tuple], int]:
        """compare (keys, item) pairs level by level; the first non-zero level wins"""
        levels = [(level.comparer or natural, level.descending) for level in self._sort_levels]

        def compare(a: Tuple, b: Tuple) -> int:
            for i, (cmp, is_descending) in enumerate(levels):
                result = cmp(a[0][i], b[0][i])
                if result != 0:
                    return -result if is_descending else result
            return 0
        return compare

    def _sorted_data(self, visit: Visitor[T]) -> None:
        items: List[T] = []

        def buffer(item: T) -> bool:
            items.append(item)
            return True

        self._unsorted(buffer)
        if not items:
            return

        logger.debug("sorting %d buffered items by %d level(s)", len(items), len(self._sort_levels))
        # each key selector runs once per element, not once per comparison
        selectors = [level.key_selector or (lambda x: x) for level in self._sort_levels]
        keyed = [(tuple(select(item) for select in selectors), item) for item in items]
        # python's sort is stable, so full ties keep their input order
        keyed.sort(key=cmp_to_key(self._build_comparison()))

        for _, item in keyed:
            if not visit(item):
                return

    def _with_level(self, level: SortLevel) -> 'OrderedEnumerable[T]':
        return OrderedEnumerable(self._unsorted, self._sort_levels + (level,))

    def then_by(self, key_selector: Optional[KeySelector[T, K]] = None,
                comparer: Optional[Comparer[K]] = None) -> 'OrderedEnumerable[T]':
        """secondary sort ascending"""
        return self._with_level(SortLevel(key_selector, comparer, False))

    def then_by_descending(self, key_selector: Optional[KeySelector[T, K]] = None,
                           comparer: Optional[Comparer[K]] = None) -> 'OrderedEnumerable[T]':
        """secondary sort descending"""
        return self._with_level(SortLevel(key_selector, comparer, True))
