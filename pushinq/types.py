from enum import Enum
from typing import (
    TypeVar, Generic, Callable, Iterator, Iterable, Any, Optional, Union,
    Dict, List, Tuple, Set, Type, NamedTuple
)

T = TypeVar('T')
U = TypeVar('U')
K = TypeVar('K')
V = TypeVar('V')

Visitor = Callable[[T], bool]
Producer = Callable[[Visitor[T]], None]
Predicate = Callable[[T], bool]
Selector = Callable[[T], U]
KeySelector = Callable[[T], K]
Comparer = Callable[[T, T], int]
Accumulator = Callable[[U, T], U]


class Outcome(Enum):
    """what a single-element lookup found"""
    SUCCESS = 'success'
    NO_ELEMENTS = 'no_elements'
    MULTIPLE_ELEMENTS = 'multiple_elements'


class SingleResult(Generic[T]):
    """
    encapsulates the result of single() and single_by().
    unpacks as a (value, outcome) pair; value is None unless the outcome is success.
    """

    def __init__(self, value: Optional[T], outcome: Outcome):
        self.value = value
        self.outcome = outcome

    @property
    def ok(self) -> bool: return self.outcome is Outcome.SUCCESS

    @property
    def error(self) -> Optional[ValueError]:
        from .errors import ERR_NO_ELEMENTS, ERR_MULTIPLE_ELEMENTS
        if self.outcome is Outcome.NO_ELEMENTS: return ERR_NO_ELEMENTS
        if self.outcome is Outcome.MULTIPLE_ELEMENTS: return ERR_MULTIPLE_ELEMENTS
        return None

    def unwrap(self) -> T:
        """return the value, raising the matching error if there was not exactly one element"""
        error = self.error
        if error is not None:
            # fresh instance so tracebacks never accumulate on the shared one
            raise type(error)()
        return self.value

    def __iter__(self) -> Iterator[Any]:
        yield self.value
        yield self.outcome

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, SingleResult):
            return self.value == other.value and self.outcome is other.outcome
        if isinstance(other, tuple) and len(other) == 2:
            return (self.value, self.outcome) == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"SingleResult(value={self.value!r}, outcome={self.outcome.value})"


class Group(Generic[K, T]):
    """a key with every element that mapped to it, in source order"""

    def __init__(self, key: K, items: List[T]):
        self.key = key
        self.items = items

    def __len__(self) -> int: return len(self.items)

    def __iter__(self) -> Iterator[T]: return iter(self.items)

    def __repr__(self) -> str:
        return f"Group(key={self.key!r}, items={len(self.items)})"
