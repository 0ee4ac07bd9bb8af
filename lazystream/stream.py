"""
A stream is a lazily built, singly linked chain of cells.

A Stream wraps a thunk that produces its first cell, either EMPTY or a
Cell(value, next) whose `next` thunk produces the tail Stream. Nothing is
computed when a stream is constructed; combinators return new streams whose
cells are computed from their sources on demand.

Memoizing streams (the default) compute every cell at most once, so `tail()`
of the same stream always returns the identical successor and a one-shot
source is read once per element. Every realized cell stays alive as long as
some stream above it is referenced. Iterate with `for` or `drop` rather than
holding on to the head when traversing long streams.

Ephemeral streams (`memo=False`) do not cache their tail links: every
`tail()` runs the link again and returns a fresh Stream, so nothing past the
current stream is kept. Each Stream object still computes its own head cell
once, so is_empty(), head() and tail() on one stream agree and a one-shot
source is read once per element during a head/tail walk.

Strict operations (to_list, fold, sum) refuse streams flagged infinite with
InfiniteStreamError; on an unbounded stream that is not flagged (for example
a filter that stops matching) they do not terminate unless
config.STRICT_LIMIT is set.
"""

import logging
import operator
from collections.abc import Sequence

from . import config
from .cells import Cell, EMPTY
from .errors import EmptyStreamError, InfiniteStreamError, UnboundStreamError
from .thunk import EVALUATED, Thunk, make_thunk

log = logging.getLogger(__name__)

_END = object()


def _pack(*values):
    return values


def _expect_stream(value):
    if not isinstance(value, Stream):
        raise TypeError("stream tail must be a Stream, not {}".format(type(value).__name__))
    return value


class _Slot:
    """Write-once box holding a stream defined in terms of itself"""

    __slots__ = ('_stream',)

    def __init__(self):
        self._stream = None

    def set(self, stream):
        if self._stream is not None:
            raise ValueError("slot is already bound")
        self._stream = stream

    def get(self):
        if self._stream is None:
            raise UnboundStreamError("stream forced before its recursive definition returned")
        return self._stream


class Stream:
    __slots__ = ('_thunk', 'is_memoized', 'is_infinite', '__weakref__')

    def __init__(self, cell_producer, memo=None, infinite=False):
        memo = config.resolve_memo(memo)
        # the head cell is cached per stream; `memo` governs the tail links
        self._thunk = Thunk(cell_producer)
        self.is_memoized = memo
        self.is_infinite = infinite

    # construction

    @classmethod
    def empty(cls):
        return _EMPTY_STREAM

    @classmethod
    def cons(cls, value, tail, memo=None, infinite=False):
        """Stream of `value` followed by `tail`.

        `tail` is a Stream or a zero-argument function returning one. The
        function is not called before the tail is first requested, so it may
        refer to the stream being defined.
        """
        memo = config.resolve_memo(memo)
        if isinstance(tail, Stream):
            next_thunk = make_thunk(lambda: tail, memo)
        else:
            next_thunk = make_thunk(lambda: _expect_stream(tail()), memo)
        cell = Cell(value, next_thunk)
        return cls(lambda: cell, memo, infinite)

    @classmethod
    def defer(cls, factory, memo=None, infinite=False):
        """Stream whose cells are those of `factory()`, called on first access"""
        return cls(lambda: _expect_stream(factory())._cell(), memo, infinite)

    @classmethod
    def recursive(cls, definition, memo=None, infinite=False):
        """Build a stream that refers to itself.

        `definition` receives a forward reference to the stream it returns.
        The forward reference may be captured by tail thunks but must not be
        forced inside `definition` itself:

            fibs = Stream.recursive(lambda fibs: Stream.cons(
                1, lambda: Stream.cons(1, lambda: fibs.zip_with(add, fibs.tail()))))
        """
        slot = _Slot()
        forward = cls(lambda: slot.get()._cell(), memo, infinite)
        stream = definition(forward)
        if stream is forward:
            raise ValueError("recursive definition returned its own forward reference")
        slot.set(_expect_stream(stream))
        if infinite:
            stream.is_infinite = True
        return stream

    @classmethod
    def generate(cls, seed, step, memo=None):
        """Infinite stream of values from repeatedly applying `step`.

        step(state) returns (value, next_state); it is applied once per
        element, when that element is first forced.
        """
        memo = config.resolve_memo(memo)

        def cell():
            value, state = step(seed)
            return Cell(value, make_thunk(lambda: cls.generate(state, step, memo), memo))

        return cls(cell, memo, infinite=True)

    @classmethod
    def unfold(cls, producer, memo=None):
        """Stream read from an external producer.

        A producer is a zero-argument function returning (value, next_producer),
        or None when exhausted. Each producer is called at most once on a
        memoizing stream, exactly when its element is first forced.
        """
        memo = config.resolve_memo(memo)

        def cell():
            step = producer()
            if step is None:
                return EMPTY
            value, next_producer = step
            return Cell(value, make_thunk(lambda: cls.unfold(next_producer, memo), memo))

        return cls(cell, memo)

    @classmethod
    def from_iterable(cls, iterable, memo=None):
        """Stream of the items of `iterable`.

        Sequences are indexed and can back ephemeral streams. Other iterables
        are advanced once per element; an ephemeral stream over a one-shot
        iterator sees different items on every traversal.
        """
        if isinstance(iterable, Sequence):
            return cls._from_sequence(iterable, 0, memo)

        iterator = iter(iterable)

        def step():
            value = next(iterator, _END)
            if value is _END:
                return None
            return value, step

        return cls.unfold(step, memo)

    @classmethod
    def _from_sequence(cls, values, index, memo):
        def producer(i=index):
            if i >= len(values):
                return None
            return values[i], lambda: producer(i + 1)

        return cls.unfold(producer, memo)

    @classmethod
    def of(cls, *values, memo=None):
        return cls._from_sequence(values, 0, memo)

    @classmethod
    def from_range(cls, start=0, stop=None, step=1, memo=None):
        if step == 0:
            raise ValueError("from_range() step must not be zero")
        if stop is None:
            return cls.generate(start, lambda n: (n, n + step), memo)

        def counter(n):
            def producer():
                if (step > 0 and n >= stop) or (step < 0 and n <= stop):
                    return None
                return n, counter(n + step)
            return producer

        return cls.unfold(counter(start), memo)

    @classmethod
    def iterate(cls, seed, func, memo=None):
        """seed, func(seed), func(func(seed)), ..."""
        return cls.generate(seed, lambda x: (x, func(x)), memo)

    @classmethod
    def repeat(cls, value, memo=None):
        return cls.recursive(lambda same: cls.cons(value, same, memo), memo, infinite=True)

    # access

    def _cell(self):
        return self._thunk.force()

    def is_empty(self):
        return self._cell() is EMPTY

    def head(self):
        cell = self._cell()
        if cell is EMPTY:
            raise EmptyStreamError('head')
        return cell.value

    def tail(self):
        cell = self._cell()
        if cell is EMPTY:
            raise EmptyStreamError('tail')
        return cell.next.force()

    def nth(self, n):
        if n < 0:
            raise IndexError("nth() index must be non-negative")
        rest = self.drop(n)
        if rest.is_empty():
            raise EmptyStreamError('nth')
        return rest.head()

    def realized_length(self):
        """Number of cells already computed, without forcing anything"""
        seen = set()
        stream = self
        while _is_evaluated(stream._thunk):
            cell = stream._thunk.force()
            # cyclic streams (repeat) reach a cell twice
            if cell is EMPTY or id(cell) in seen:
                break
            seen.add(id(cell))
            if not _is_evaluated(cell.next):
                break
            stream = cell.next.force()
        return len(seen)

    def __iter__(self):
        return _walk(self)

    # combinators

    def _derive(self, cell_producer, infinite=False):
        return Stream(cell_producer, self.is_memoized, infinite)

    def _lazy_tail(self, cell, transform):
        return make_thunk(lambda: transform(cell.next.force()), self.is_memoized)

    def map(self, func):
        def cell():
            source = self._cell()
            if source is EMPTY:
                return EMPTY
            return Cell(func(source.value), self._lazy_tail(source, lambda rest: rest.map(func)))

        return self._derive(cell, self.is_infinite)

    def filter(self, predicate):
        """Stream of the elements satisfying `predicate`.

        Finding the next match forces as many source cells as it takes. On
        an infinite source whose elements match only finitely often this
        never returns.
        """

        def cell():
            stream = self
            while True:
                source = stream._cell()
                if source is EMPTY:
                    return EMPTY
                if predicate(source.value):
                    return Cell(source.value, self._lazy_tail(source, lambda rest: rest.filter(predicate)))
                stream = source.next.force()

        return self._derive(cell, self.is_infinite)

    def zip_with(self, func, *others):
        streams = (self,) + others

        def cell():
            sources = []
            for stream in streams:
                source = stream._cell()
                if source is EMPTY:
                    return EMPTY
                sources.append(source)

            def rest():
                tails = [source.next.force() for source in sources]
                return tails[0].zip_with(func, *tails[1:])

            return Cell(func(*[source.value for source in sources]), make_thunk(rest, self.is_memoized))

        return self._derive(cell, all(stream.is_infinite for stream in streams))

    def zip(self, *others):
        """Stream of tuples; as long as the shortest input"""
        return self.zip_with(_pack, *others)

    def take(self, n):
        """The first `n` elements; never forces more than `n` source cells"""
        if n < 0:
            raise ValueError("take() count must be non-negative")
        if n == 0:
            return _EMPTY_STREAM

        def cell():
            source = self._cell()
            if source is EMPTY:
                return EMPTY
            if n == 1:
                return Cell(source.value, make_thunk(Stream.empty, self.is_memoized))
            return Cell(source.value, self._lazy_tail(source, lambda rest: rest.take(n - 1)))

        return self._derive(cell)

    def drop(self, n):
        """The stream after the first `n` elements.

        Unlike the other combinators this forces the skipped cells right away.
        Dropping past the end gives the empty stream.
        """
        if n < 0:
            raise ValueError("drop() count must be non-negative")
        stream = self
        for _ in range(n):
            cell = stream._cell()
            if cell is EMPTY:
                break
            stream = cell.next.force()
        return stream

    def take_while(self, predicate):
        def cell():
            source = self._cell()
            if source is EMPTY or not predicate(source.value):
                return EMPTY
            return Cell(source.value, self._lazy_tail(source, lambda rest: rest.take_while(predicate)))

        return self._derive(cell)

    def drop_while(self, predicate):
        def cell():
            stream = self
            while True:
                source = stream._cell()
                if source is EMPTY or not predicate(source.value):
                    return source
                stream = source.next.force()

        return self._derive(cell, self.is_infinite)

    def scan(self, init, combine):
        """init, combine(init, x0), combine(combine(init, x0), x1), ..."""

        def cell():
            def rest():
                source = self._cell()
                if source is EMPTY:
                    return _EMPTY_STREAM
                return source.next.force().scan(combine(init, source.value), combine)

            return Cell(init, make_thunk(rest, self.is_memoized))

        return self._derive(cell, self.is_infinite)

    def concat(self, other):
        _expect_stream(other)

        def cell():
            source = self._cell()
            if source is EMPTY:
                return other._cell()
            return Cell(source.value, self._lazy_tail(source, lambda rest: rest.concat(other)))

        return self._derive(cell, self.is_infinite or other.is_infinite)

    def interleave(self, other):
        """Alternate elements of both streams, continuing with the longer one.

        Unlike concat, every element of `other` is reached even when self is
        infinite.
        """
        _expect_stream(other)

        def cell():
            source = self._cell()
            if source is EMPTY:
                return other._cell()
            return Cell(source.value, self._lazy_tail(source, other.interleave))

        return self._derive(cell, self.is_infinite or other.is_infinite)

    def flat_map(self, func):
        """Interleave the streams func(x) for every element x"""

        def cell():
            stream = self
            while True:
                source = stream._cell()
                if source is EMPTY:
                    return EMPTY
                inner = _expect_stream(func(source.value))
                if not inner.is_empty():
                    rest = self._lazy_tail(source, lambda tail: tail.flat_map(func))
                    return inner.interleave(Stream.defer(rest.force, self.is_memoized))._cell()
                stream = source.next.force()

        return self._derive(cell)

    # strict operations

    def _strict(self, operation):
        if self.is_infinite:
            raise InfiniteStreamError(operation)
        limit = config.STRICT_LIMIT
        traversed = 0
        stream = self
        while True:
            cell = stream._cell()
            if cell is EMPTY:
                return
            if limit is not None and traversed >= limit:
                log.debug("%s() gave up after %d cells", operation, traversed)
                raise InfiniteStreamError(operation, limit)
            yield cell.value
            traversed += 1
            stream = cell.next.force()

    def fold(self, init, combine):
        result = init
        for value in self._strict('fold'):
            result = combine(result, value)
        return result

    def sum(self, start=0):
        return self.fold(start, operator.add)

    def to_list(self):
        return list(self._strict('to_list'))

    def __repr__(self):
        if _is_evaluated(self._thunk):
            if self._thunk.force() is EMPTY:
                return '<Stream empty>'
            return '<Stream realized={}>'.format(self.realized_length())
        return '<Stream unforced{}>'.format(' infinite' if self.is_infinite else '')


def _is_evaluated(thunk):
    return thunk.is_memoized and thunk.state is EVALUATED


def _walk(stream):
    while True:
        cell = stream._cell()
        if cell is EMPTY:
            return
        yield cell.value
        stream = cell.next.force()


_EMPTY_STREAM = Stream(lambda: EMPTY, memo=True)
_EMPTY_STREAM._cell()
