from __future__ import annotations
import typing
from collections import deque
from ..types import *

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable, OrderedEnumerable


class _CoreOperations(Generic[T]):
    """
    lazy combinators. each one captures its upstream producer and returns a new
    enumerable whose producer forwards the downstream visitor's stop signal
    straight back upstream, so production halts the moment a consumer is satisfied.
    """

    def where(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """filter elements based on a predicate"""
        from ..enumerable import Enumerable
        source = self._source()
        if source is None or predicate is None:
            return Enumerable(None)

        def filter_data(visit: Visitor[T]) -> None:
            source(lambda item: visit(item) if predicate(item) else True)
        return Enumerable(filter_data)

    def select(self: 'Enumerable[T]', selector: Selector[T, U]) -> 'Enumerable[U]':
        """project each element to a new form"""
        from ..enumerable import Enumerable
        source = self._source()
        if source is None or selector is None:
            return Enumerable(None)

        def map_data(visit: Visitor[U]) -> None:
            source(lambda item: visit(selector(item)))
        return Enumerable(map_data)

    def select_with_index(self: 'Enumerable[T]', selector: Callable[[T, int], U]) -> 'Enumerable[U]':
        """project each element to a new form, using the element's index"""
        from ..enumerable import Enumerable
        source = self._source()
        if source is None or selector is None:
            return Enumerable(None)

        def map_with_index_data(visit: Visitor[U]) -> None:
            index = 0

            def step(item: T) -> bool:
                nonlocal index
                result = selector(item, index)
                index += 1
                return visit(result)
            source(step)
        return Enumerable(map_with_index_data)

    def select_many(self: 'Enumerable[T]', selector: Selector[T, Iterable[U]]) -> 'Enumerable[U]':
        """project and flatten sequences"""
        from ..enumerable import Enumerable
        source = self._source()
        if source is None or selector is None:
            return Enumerable(None)

        def flat_map_data(visit: Visitor[U]) -> None:
            def step(item: T) -> bool:
                children = selector(item)
                if children is None:
                    return True
                for child in children:
                    if not visit(child):
                        return False
                return True
            source(step)
        return Enumerable(flat_map_data)

    def order_by(self: 'Enumerable[T]', key_selector: Optional[KeySelector[T, K]] = None,
                 comparer: Optional[Comparer[K]] = None) -> 'OrderedEnumerable[T]':
        """sort elements by a key. without a key the elements themselves are compared."""
        from ..enumerable import OrderedEnumerable, SortLevel
        return OrderedEnumerable(self._source(), (SortLevel(key_selector, comparer, False),))

    def order_by_descending(self: 'Enumerable[T]', key_selector: Optional[KeySelector[T, K]] = None,
                            comparer: Optional[Comparer[K]] = None) -> 'OrderedEnumerable[T]':
        """sort elements by a key in descending order"""
        from ..enumerable import OrderedEnumerable, SortLevel
        return OrderedEnumerable(self._source(), (SortLevel(key_selector, comparer, True),))

    def take(self: 'Enumerable[T]', count: int) -> 'Enumerable[T]':
        """take the first 'count' elements"""
        from ..enumerable import Enumerable
        source = self._source()
        if source is None or count <= 0:
            return Enumerable(None)

        def take_data(visit: Visitor[T]) -> None:
            remaining = count

            def step(item: T) -> bool:
                nonlocal remaining
                remaining -= 1
                # stop upstream right after the last wanted element
                return visit(item) and remaining > 0
            source(step)
        return Enumerable(take_data)

    def skip(self: 'Enumerable[T]', count: int) -> 'Enumerable[T]':
        """skip the first 'count' elements"""
        from ..enumerable import Enumerable
        source = self._source()
        if source is None:
            return Enumerable(None)
        if count <= 0:
            return Enumerable(source)

        def skip_data(visit: Visitor[T]) -> None:
            skipped = 0

            def step(item: T) -> bool:
                nonlocal skipped
                if skipped < count:
                    skipped += 1
                    return True
                return visit(item)
            source(step)
        return Enumerable(skip_data)

    def take_while(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """take elements while predicate is true"""
        from ..enumerable import Enumerable
        source = self._source()
        if source is None or predicate is None:
            return Enumerable(None)

        def take_while_data(visit: Visitor[T]) -> None:
            source(lambda item: predicate(item) and visit(item))
        return Enumerable(take_while_data)

    def skip_while(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """skip elements while predicate is true"""
        from ..enumerable import Enumerable
        source = self._source()
        if source is None:
            return Enumerable(None)
        if predicate is None:
            return Enumerable(source)

        def skip_while_data(visit: Visitor[T]) -> None:
            skipping = True

            def step(item: T) -> bool:
                nonlocal skipping
                if skipping and predicate(item):
                    return True
                skipping = False
                return visit(item)
            source(step)
        return Enumerable(skip_while_data)

    def take_last(self: 'Enumerable[T]', count: int) -> 'Enumerable[T]':
        """take the last 'count' elements. buffers at most 'count' elements."""
        from ..enumerable import Enumerable
        source = self._source()
        if source is None or count <= 0:
            return Enumerable(None)

        def take_last_data(visit: Visitor[T]) -> None:
            window: deque = deque(maxlen=count)
            source(lambda item: window.append(item) or True)
            for item in window:
                if not visit(item):
                    return
        return Enumerable(take_last_data)

    def skip_last(self: 'Enumerable[T]', count: int) -> 'Enumerable[T]':
        """skip the last 'count' elements, streaming everything older than the window"""
        from ..enumerable import Enumerable
        source = self._source()
        if source is None:
            return Enumerable(None)
        if count <= 0:
            return Enumerable(source)

        def skip_last_data(visit: Visitor[T]) -> None:
            window: deque = deque()

            def step(item: T) -> bool:
                window.append(item)
                if len(window) <= count:
                    return True
                return visit(window.popleft())
            source(step)
        return Enumerable(skip_last_data)

    def concat(self: 'Enumerable[T]', other: Any) -> 'Enumerable[T]':
        """concatenate with another sequence, preserving all elements and order."""
        from ..enumerable import Enumerable
        from ..factories import to_producer
        first, second = self._source(), to_producer(other)
        if first is None and second is None:
            return Enumerable(None)

        def concat_data(visit: Visitor[T]) -> None:
            stopped = False

            def step(item: T) -> bool:
                nonlocal stopped
                if not visit(item):
                    stopped = True
                    return False
                return True

            if first is not None:
                first(step)
            if not stopped and second is not None:
                second(step)
        return Enumerable(concat_data)

    def append(self: 'Enumerable[T]', element: T) -> 'Enumerable[T]':
        """appends a value to the end of the sequence"""
        return self.concat([element])

    def prepend(self: 'Enumerable[T]', element: T) -> 'Enumerable[T]':
        """adds a value to the beginning of the sequence"""
        from ..factories import from_iterable
        return from_iterable([element]).concat(self)

    def default_if_empty(self: 'Enumerable[T]', default_value: T) -> 'Enumerable[T]':
        """returns the elements of a sequence, or a default value in a singleton collection if the sequence is empty"""
        from ..enumerable import Enumerable
        source = self._source()

        def default_data(visit: Visitor[T]) -> None:
            has_elements = False

            def step(item: T) -> bool:
                nonlocal has_elements
                has_elements = True
                return visit(item)

            if source is not None:
                source(step)
            if not has_elements:
                visit(default_value)
        return Enumerable(default_data)

    def of_type(self: 'Enumerable[T]', type_filter: Type[U]) -> 'Enumerable[U]':
        """filters the elements of a sequence based on a specified type"""
        # syntactic sugar over where(), but clearer about intent
        return self.where(lambda item: isinstance(item, type_filter))
