from __future__ import annotations
import typing
import math
from enum import Enum
import numpy as np
from ..comparers import natural
from ..types import *

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable


class NumericKind(Enum):
    """numeric type an average's selected keys are read as"""
    INT = 'int'
    INT64 = 'int64'
    FLOAT = 'float32'
    FLOAT64 = 'float64'

    @property
    def is_integral(self) -> bool:
        return self in (NumericKind.INT, NumericKind.INT64)


_COERCIONS: Dict[NumericKind, Callable[[Any], Union[int, float]]] = {
    NumericKind.INT: int,
    NumericKind.INT64: lambda v: int(np.int64(v)),
    NumericKind.FLOAT: lambda v: float(np.float32(v)),
    NumericKind.FLOAT64: lambda v: float(np.float64(v)),
}


class _RunningSum:
    """
    sum and count of a stream of numbers without losing precision:
    integers accumulate exactly in a python int, floats use neumaier
    compensated summation.
    """
    __slots__ = ('_integral', '_total', '_compensation', 'count')

    def __init__(self, integral: bool):
        self._integral = integral
        self._total: Union[int, float] = 0 if integral else 0.0
        self._compensation = 0.0
        self.count = 0

    def add(self, value: Union[int, float]) -> None:
        self.count += 1
        if self._integral:
            self._total += value
            return
        t = self._total + value
        if not math.isfinite(t):
            # inf and overflow are sticky; the compensation would only turn them into nan
            self._total = t
            return
        if abs(self._total) >= abs(value):
            self._compensation += (self._total - t) + value
        else:
            self._compensation += (value - t) + self._total
        self._total = t

    @property
    def total(self) -> Union[int, float]:
        if self._integral or not math.isfinite(self._total):
            return self._total
        return self._total + self._compensation

    def mean(self) -> float:
        # int / int is correctly rounded, even for sums beyond 2**53
        return self.total / self.count


class StatsAccessor(Generic[T]):
    """numeric reductions. every one returns a neutral value instead of raising on empty input."""

    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def _accumulate(self, selector: Selector[T, Any], kind: NumericKind) -> Optional[_RunningSum]:
        source = self._enumerable._unordered_source()
        if source is None or selector is None:
            return None
        coerce = _COERCIONS[kind]
        acc = _RunningSum(kind.is_integral)
        source(lambda item: acc.add(coerce(selector(item))) or True)
        return acc

    # --- averages ---

    def average(self, selector: Selector[T, Union[int, float]],
                kind: NumericKind = NumericKind.FLOAT64) -> Tuple[float, bool]:
        """
        (mean, True) of the selected keys, read as the given numeric kind.
        (0.0, False) when the source or selector is missing or there are no elements.
        visits every element once and calls the selector once per element.
        """
        acc = self._accumulate(selector, kind)
        if acc is None or acc.count == 0:
            return 0.0, False
        return acc.mean(), True

    def average_int(self, selector: Selector[T, int]) -> Tuple[float, bool]:
        return self.average(selector, NumericKind.INT)

    def average_int64(self, selector: Selector[T, int]) -> Tuple[float, bool]:
        return self.average(selector, NumericKind.INT64)

    def average_float(self, selector: Selector[T, float]) -> Tuple[float, bool]:
        return self.average(selector, NumericKind.FLOAT)

    def average_float64(self, selector: Selector[T, float]) -> Tuple[float, bool]:
        return self.average(selector, NumericKind.FLOAT64)

    # --- sums ---

    def sum_int(self, selector: Selector[T, int]) -> int:
        """exact integer sum of the selected keys; 0 when there is nothing to sum"""
        acc = self._accumulate(selector, NumericKind.INT)
        return acc.total if acc is not None else 0

    def sum_float(self, selector: Selector[T, float]) -> float:
        """compensated float sum of the selected keys; 0.0 when there is nothing to sum"""
        acc = self._accumulate(selector, NumericKind.FLOAT64)
        return acc.total if acc is not None else 0.0

    # --- extremes ---

    def _extreme_key(self, selector: Selector[T, K], sign: int) -> Tuple[Optional[K], bool]:
        source = self._enumerable._unordered_source()
        if source is None or selector is None:
            return None, False
        found = False
        best: Optional[K] = None

        def step(item: T) -> bool:
            nonlocal found, best
            key = selector(item)
            if not found or natural(key, best) * sign > 0:
                found, best = True, key
            return True

        source(step)
        return best, found

    def min(self, selector: Selector[T, K]) -> Tuple[Optional[K], bool]:
        """(smallest selected key, True), or (None, False) for an empty sequence"""
        return self._extreme_key(selector, -1)

    def max(self, selector: Selector[T, K]) -> Tuple[Optional[K], bool]:
        """(largest selected key, True), or (None, False) for an empty sequence"""
        return self._extreme_key(selector, 1)

    def _extreme_by(self, comparer: Comparer[T], sign: int) -> Tuple[Optional[T], bool]:
        source = self._enumerable._unordered_source()
        if source is None or comparer is None:
            return None, False
        found = False
        best: Optional[T] = None

        def step(item: T) -> bool:
            nonlocal found, best
            # strict comparison: the first of several equal extremes wins
            if not found or comparer(item, best) * sign > 0:
                found, best = True, item
            return True

        source(step)
        return best, found

    def min_by(self, comparer: Comparer[T]) -> Tuple[Optional[T], bool]:
        """(element the comparer ranks lowest, True), or (None, False)"""
        return self._extreme_by(comparer, -1)

    def max_by(self, comparer: Comparer[T]) -> Tuple[Optional[T], bool]:
        """(element the comparer ranks highest, True), or (None, False)"""
        return self._extreme_by(comparer, 1)

    def _extreme_bool(self, selector: Predicate[T], decisive: bool) -> Tuple[bool, bool]:
        source = self._enumerable._unordered_source()
        if source is None or selector is None:
            return False, False
        found = False
        result = not decisive

        def step(item: T) -> bool:
            nonlocal found, result
            found = True
            if bool(selector(item)) == decisive:
                result = decisive
                return False
            return True

        source(step)
        return result, found

    def min_bool(self, selector: Predicate[T]) -> Tuple[bool, bool]:
        """min of boolean keys; stops at the first False since nothing is smaller"""
        return self._extreme_bool(selector, False)

    def max_bool(self, selector: Predicate[T]) -> Tuple[bool, bool]:
        """max of boolean keys; stops at the first True since nothing is larger"""
        return self._extreme_bool(selector, True)
