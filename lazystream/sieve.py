"""
Sieve of Eratosthenes over streams.

`sieve` keeps one list of the primes found so far and tests each candidate
against it in a loop, so the call depth stays constant however many primes
are consumed. `nested_sieve` is the classic composition that stacks one
filter per prime; forcing its n-th prime goes n filters deep.
"""

import logging
from itertools import islice

from .stream import Stream

log = logging.getLogger(__name__)


def sieve(candidates):
    """Primes among `candidates`, an ascending stream of integers >= 2.

    Each element is kept when no earlier kept element divides it, which is
    exactly what stacking `filter(lambda x: x % p != 0)` per head would keep.
    """
    found = []

    def next_prime(stream, count):
        def cell():
            rest = stream
            while not rest.is_empty():
                candidate = rest.head()
                rest = rest.tail()
                # an ephemeral stream may recompute; only the first `count` primes apply here
                if all(candidate % prime != 0 for prime in islice(found, count)):
                    if len(found) == count:
                        found.append(candidate)
                        log.debug("sieve: prime #%d is %r", count + 1, candidate)
                    return Stream.cons(candidate, lambda: next_prime(rest, count + 1),
                                       memo=candidates.is_memoized)._cell()
            return Stream.empty()._cell()

        return Stream(cell, candidates.is_memoized, candidates.is_infinite)

    return next_prime(candidates, 0)


def primes(memo=None):
    return sieve(Stream.from_range(2, memo=memo))


def nested_sieve(candidates):
    """sieve(s) = cons(head(s), sieve(filter(not divisible by head(s), tail(s))))"""

    def build():
        if candidates.is_empty():
            return Stream.empty()
        prime = candidates.head()
        return Stream.cons(prime, lambda: nested_sieve(candidates.tail().filter(lambda x: x % prime != 0)),
                           memo=candidates.is_memoized)

    return Stream.defer(build, candidates.is_memoized, candidates.is_infinite)
