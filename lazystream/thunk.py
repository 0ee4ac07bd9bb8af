"""
A thunk is an explicit deferred computation: a zero-argument producer that
runs only when the thunk is forced.

Two kinds share one interface (`force()`, calling the thunk, `is_realized`):

Thunk
    runs the producer at most once and caches the outcome. A producer that
    raises has its exception cached too; every later force re-raises it and
    the producer is never retried. Only `Exception` subclasses are cached, so
    a KeyboardInterrupt during evaluation leaves the thunk unevaluated.

EphemeralThunk
    runs the producer on every force and remembers nothing.
"""

import logging
import threading

from .errors import ReentrantForceError

log = logging.getLogger(__name__)

UNEVALUATED = 'unevaluated'
IN_PROGRESS = 'in progress'
EVALUATED = 'evaluated'
FAILED = 'failed'


class Thunk:
    """Memoizing, at-most-once deferred computation"""

    __slots__ = ('_producer', '_state', '_value', '_error', '_traceback', '_lock')

    is_memoized = True

    def __init__(self, producer):
        if not callable(producer):
            raise TypeError("thunk producer must be callable, not {}".format(type(producer).__name__))
        self._producer = producer
        self._state = UNEVALUATED
        self._value = None
        self._error = None
        self._traceback = None
        self._lock = threading.RLock()

    def __call__(self):
        return self.force()

    @property
    def state(self):
        return self._state

    @property
    def is_realized(self):
        return self._state is EVALUATED or self._state is FAILED

    def force(self):
        if self._state is EVALUATED:
            return self._value

        # other threads wait here; the forcing thread re-enters and is caught below
        with self._lock:
            if self._state is EVALUATED:
                return self._value
            if self._state is FAILED:
                raise self._error.with_traceback(self._traceback)
            if self._state is IN_PROGRESS:
                raise ReentrantForceError("thunk forced while its producer is running: {!r}".format(self._producer))

            self._state = IN_PROGRESS
            try:
                value = self._producer()
            except Exception as error:
                log.debug("thunk producer %r failed: %r", self._producer, error)
                self._state = FAILED
                self._error = error
                self._traceback = error.__traceback__
                self._producer = None
                raise
            except BaseException:
                self._state = UNEVALUATED
                raise

            self._value = value
            self._state = EVALUATED
            self._producer = None
            return value

    def __repr__(self):
        if self._state is EVALUATED:
            return 'Thunk(= {!r})'.format(self._value)
        if self._state is FAILED:
            return 'Thunk(! {!r})'.format(self._error)
        return 'Thunk({})'.format(self._state)


class EphemeralThunk:
    """Deferred computation that is recomputed on every force"""

    __slots__ = ('_producer',)

    is_memoized = False
    is_realized = False

    def __init__(self, producer):
        if not callable(producer):
            raise TypeError("thunk producer must be callable, not {}".format(type(producer).__name__))
        self._producer = producer

    def __call__(self):
        return self.force()

    def force(self):
        return self._producer()

    def __repr__(self):
        return 'EphemeralThunk({!r})'.format(self._producer)


def make_thunk(producer, memo=True):
    if memo:
        return Thunk(producer)
    return EphemeralThunk(producer)


def delay(memo=True):
    """Decorator that replaces a zero-argument function by a thunk of it.

    For example:
        @delay()
        def answer():
            return compute()

    makes `answer` a Thunk; `answer.force()` runs compute() once.
    """

    def decorator(producer):
        return make_thunk(producer, memo)

    return decorator


def is_thunk(obj):
    return isinstance(obj, (Thunk, EphemeralThunk))
