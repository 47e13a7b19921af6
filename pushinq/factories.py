import typing
import logging
from .types import *

if typing.TYPE_CHECKING:
    from .enumerable import Enumerable

logger = logging.getLogger(__name__)


def _iterate(data: Iterable[T]) -> Producer[T]:
    """producer that walks an iterable, stopping as soon as the visitor declines"""
    def produce(visit: Visitor[T]) -> None:
        for item in data:
            if not visit(item):
                return
    return produce


def to_producer(source: Any) -> Optional[Producer[Any]]:
    """
    normalize an operand to a producer. accepts an enumerable, any iterable,
    a bare producer callable, or None (the absent enumeration). anything
    else is treated as absent too, so query operations never raise on it.
    """
    from .enumerable import Enumerable
    if source is None:
        return None
    if isinstance(source, Enumerable):
        return source._source()
    if isinstance(source, Iterable):
        return _iterate(source)
    if callable(source):
        return source
    logger.debug("treating non-enumerable %s operand as absent", type(source).__name__)
    return None


def from_iterable(data: Optional[Iterable[T]]) -> 'Enumerable[T]':
    """create enumerable from iterable. one-shot iterators only produce on the first run."""
    from .enumerable import Enumerable
    if data is None:
        return Enumerable(None)
    return Enumerable(_iterate(data))


def from_producer(producer: Optional[Producer[T]]) -> 'Enumerable[T]':
    """
    wrap a push-style producer. the wrapper refuses to forward elements
    after the visitor has asked to stop, even if the producer keeps going.
    """
    from .enumerable import Enumerable
    if producer is None:
        return Enumerable(None)

    def guarded(visit: Visitor[T]) -> None:
        stopped = False

        def step(item: T) -> bool:
            nonlocal stopped
            if stopped:
                return False
            if not visit(item):
                stopped = True
                return False
            return True

        producer(step)

    return Enumerable(guarded)


def from_range(start: int, count: int) -> 'Enumerable[int]':
    """create enumerable from range"""
    return from_iterable(range(start, start + max(count, 0)))


def repeat(item: T, count: int) -> 'Enumerable[T]':
    """create enumerable with repeated item"""
    from .enumerable import Enumerable

    def repeat_data(visit: Visitor[T]) -> None:
        for _ in range(count):
            if not visit(item):
                return
    return Enumerable(repeat_data)


def empty() -> 'Enumerable[Any]':
    """create empty enumerable"""
    from .enumerable import Enumerable
    return Enumerable(lambda visit: None)


def generate(generator_func: Callable[[], T], count: Optional[int] = None) -> 'Enumerable[T]':
    """
    generate sequence using a function. without a count the sequence is
    infinite and must be bounded downstream (take, first_or_default, any...).
    """
    from .enumerable import Enumerable

    def generate_data(visit: Visitor[T]) -> None:
        produced = 0
        while count is None or produced < count:
            produced += 1
            if not visit(generator_func()):
                return
    return Enumerable(generate_data)

# --- aliases ---
pushinq = from_iterable
P = from_iterable
p = from_iterable
