"""Lazy, memoizing, possibly infinite streams"""

from .cells import Cell, EMPTY
from .config import configure, reset_config
from .errors import (StreamError, EmptyStreamError, InfiniteStreamError,
                     ReentrantForceError, UnboundStreamError)
from .sieve import sieve, primes
from .stream import Stream
from .thunk import Thunk, EphemeralThunk, delay, make_thunk

__all__ = [
    'Cell', 'EMPTY',
    'configure', 'reset_config',
    'StreamError', 'EmptyStreamError', 'InfiniteStreamError', 'ReentrantForceError', 'UnboundStreamError',
    'sieve', 'primes',
    'Stream',
    'Thunk', 'EphemeralThunk', 'delay', 'make_thunk',
]
