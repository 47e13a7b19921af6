from __future__ import annotations
import logging
import typing
import numpy as np
import pandas as pd
from ..comparers import EqualityComparer
from ..hash_set import HashSet
from ..types import *

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable

logger = logging.getLogger(__name__)


def _single_of(producer: Optional[Producer[T]]) -> SingleResult[T]:
    """look at no more than two elements to tell none, one and many apart"""
    if producer is None:
        return SingleResult(None, Outcome.NO_ELEMENTS)
    found: List[T] = []

    def step(item: T) -> bool:
        found.append(item)
        # a second element settles it, ask for no more
        return len(found) < 2

    producer(step)
    if not found:
        return SingleResult(None, Outcome.NO_ELEMENTS)
    if len(found) > 1:
        return SingleResult(None, Outcome.MULTIPLE_ELEMENTS)
    return SingleResult(found[0], Outcome.SUCCESS)


class TerminalAccessor(Generic[T]):
    """
    operations that drive the sequence and return a concrete value.
    nothing here raises for an absent or empty source: lookups report
    (value, found) pairs or a SingleResult instead.
    """
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    # --- conversions ---

    def list(self) -> List[T]:
        """convert to list"""
        result: List[T] = []
        self._enumerable(lambda item: result.append(item) or True)
        return result

    def array(self) -> np.ndarray:
        """convert to numpy array"""
        return np.array(self.list())

    def set(self) -> Set[T]:
        """convert to set"""
        result: Set[T] = set()
        source = self._enumerable._unordered_source()
        if source is not None:
            source(lambda item: result.add(item) or True)
        return result

    def dict(self, key_selector: KeySelector[T, K],
             value_selector: Optional[Selector[T, V]] = None) -> Dict[K, V]:
        """convert to dictionary. later elements overwrite earlier ones with the same key."""
        if key_selector is None:
            return {}
        val_sel = value_selector if value_selector else lambda item: item
        result: Dict[K, V] = {}

        def step(item: T) -> bool:
            result[key_selector(item)] = val_sel(item)
            return True

        self._enumerable(step)
        return result

    def batch(self, size: int) -> List[List[T]]:
        """split into consecutive lists of 'size' elements; the last one may be shorter"""
        if size <= 0:
            return []
        batches: List[List[T]] = []
        current: List[T] = []

        def step(item: T) -> bool:
            nonlocal current
            current.append(item)
            if len(current) == size:
                batches.append(current)
                current = []
            return True

        self._enumerable(step)
        if current:
            batches.append(current)
        return batches

    def pandas(self) -> pd.Series:
        """convert to pandas series"""
        return pd.Series(self.list())

    def df(self) -> pd.DataFrame:
        """convert to pandas dataframe"""
        return pd.DataFrame(self.list())

    def for_each(self, action: Callable[[T], Any]) -> None:
        """run action on every element, for its side effects"""
        if action is None:
            return
        self._enumerable(lambda item: action(item) or True)

    # --- counting ---

    def count(self, predicate: Optional[Predicate[T]] = None) -> int:
        """count elements"""
        source = self._enumerable._unordered_source()
        if source is None:
            return 0
        total = 0

        def step(item: T) -> bool:
            nonlocal total
            if predicate is None or predicate(item):
                total += 1
            return True

        source(step)
        return total

    def long_count(self, predicate: Optional[Predicate[T]] = None) -> int:
        """same as count; python ints do not overflow"""
        return self.count(predicate)

    def any(self, predicate: Optional[Predicate[T]] = None) -> bool:
        """check if any element satisfies condition. consumes elements only up to the first match."""
        source = self._enumerable._unordered_source()
        if source is None:
            return False
        found = False

        def step(item: T) -> bool:
            nonlocal found
            if predicate is None or predicate(item):
                found = True
                return False
            return True

        source(step)
        return found

    def all(self, predicate: Predicate[T]) -> bool:
        """check if all elements satisfy condition. true for an empty sequence, false without a predicate."""
        if predicate is None:
            return False
        source = self._enumerable._unordered_source()
        if source is None:
            return True
        result = True

        def step(item: T) -> bool:
            nonlocal result
            if not predicate(item):
                result = False
                return False
            return True

        source(step)
        return result

    # --- element selection ---

    def element_at(self, index: int) -> Tuple[Optional[T], bool]:
        """(element, True) for the element at index, (None, False) if there is none"""
        if index < 0:
            return None, False
        current = 0
        result: Tuple[Optional[T], bool] = (None, False)

        def step(item: T) -> bool:
            nonlocal current, result
            if current == index:
                result = (item, True)
                return False
            current += 1
            return True

        self._enumerable(step)
        return result

    def first_or_default(self, default: Optional[T] = None) -> Optional[T]:
        """get first element or default"""
        value, found = self.element_at(0)
        return value if found else default

    def first_or_none(self) -> Optional[T]:
        """get first element or None"""
        return self.first_or_default(None)

    def last_or_default(self, default: Optional[T] = None) -> Optional[T]:
        """get last element or default. drives the whole sequence."""
        found = False
        last = default

        def step(item: T) -> bool:
            nonlocal found, last
            found, last = True, item
            return True

        self._enumerable(step)
        return last if found else default

    def last_or_none(self) -> Optional[T]:
        """get last element or None"""
        return self.last_or_default(None)

    def single(self) -> SingleResult[T]:
        """
        the sole element of the sequence, as SingleResult(value, outcome).
        outcome is NO_ELEMENTS for an empty or absent sequence and
        MULTIPLE_ELEMENTS as soon as a second element shows up; production
        stops there, so infinite sources are fine.
        """
        # ordering cannot change how many elements there are, so skip the sort
        result = _single_of(self._enumerable._unordered_source())
        logger.debug("single resolved to %s", result.outcome.value)
        return result

    def single_or_default(self, default: Optional[T] = None) -> Optional[T]:
        """the sole element, or default when there are none or several"""
        result = self.single()
        return result.value if result.ok else default

    def single_by(self, comparer: Optional[EqualityComparer[T]]) -> SingleResult[T]:
        """
        like single, but elements equal under the comparer count once,
        so [a, a, a] succeeds with a. stops at the second distinct element.
        """
        source = self._enumerable._unordered_source()
        if source is None or comparer is None:
            return SingleResult(None, Outcome.NO_ELEMENTS)
        seen = HashSet(comparer)
        first: List[T] = []

        def step(item: T) -> bool:
            if not seen.add(item):
                return True
            first.append(item)
            return len(seen) < 2

        source(step)
        if not first:
            return SingleResult(None, Outcome.NO_ELEMENTS)
        if len(seen) > 1:
            return SingleResult(None, Outcome.MULTIPLE_ELEMENTS)
        return SingleResult(first[0], Outcome.SUCCESS)
