"""
Numeric streams in the style of SICP 3.5: partial sums, power series and
sequence acceleration.

A power series a0 + a1 x + a2 x**2 + ... is represented by the stream of its
coefficients. Coefficients are exact sympy Rationals so that series can be
compared against sympy's own expansions.
"""

import operator
from itertools import islice

import sympy as sy

from .stream import Stream


def integers(start=1):
    return Stream.from_range(start)


def add_streams(first, *others):
    return first.zip_with(lambda *values: sum(values[1:], values[0]), *others)


def mul_streams(first, second):
    return first.zip_with(operator.mul, second)


def scale(stream, factor):
    return stream.map(lambda x: x * factor)


def partial_sums(stream):
    """s0, s0 + s1, s0 + s1 + s2, ..."""
    return Stream.defer(lambda: stream.scan(sy.Integer(0), operator.add).tail(),
                        stream.is_memoized, stream.is_infinite)


def integrate_series(coefficients):
    """Coefficients of the integral, without the constant term"""
    return coefficients.zip_with(lambda a, n: a / sy.Integer(n), integers(1))


def mul_series(first, second):
    """Cauchy product; coefficient n is sum(a[k] * b[n - k] for k in 0..n)"""

    def coefficient(n=0):
        a = list(islice(first, n + 1))
        b = list(islice(second, n + 1))
        if n > len(a) + len(b) - 2:
            return None
        terms = [a[k] * b[n - k] for k in range(max(0, n - len(b) + 1), min(n, len(a) - 1) + 1)]
        return sum(terms[1:], terms[0]), lambda: coefficient(n + 1)

    product = Stream.unfold(coefficient, first.is_memoized)
    product.is_infinite = first.is_infinite and second.is_infinite
    return product


def exp_series():
    """e**x = 1 + integral of e**x"""
    return Stream.recursive(lambda exp: Stream.cons(sy.Integer(1), lambda: integrate_series(exp)),
                            infinite=True)


def cosine_series():
    def define(cosine):
        sine = Stream.cons(sy.Integer(0), lambda: integrate_series(cosine))
        return Stream.cons(sy.Integer(1), lambda: scale(integrate_series(sine), -1))

    return Stream.recursive(define, infinite=True)


def sine_series():
    return Stream.cons(sy.Integer(0), lambda: integrate_series(cosine_series()), infinite=True)


def fibonacci():
    return Stream.recursive(
        lambda fibs: Stream.cons(1, lambda: Stream.cons(1, lambda: fibs.zip_with(operator.add, fibs.tail()))),
        infinite=True)


def pi_summands(n=1):
    """1 - 1/3 + 1/5 - ..., as exact terms"""
    return Stream.generate((n, 1), lambda state: (sy.Rational(state[1], state[0]), (state[0] + 2, -state[1])))


def pi_stream():
    return scale(partial_sums(pi_summands()), 4)


def euler_transform(stream):
    def transform(s0, s1, s2):
        denominator = s0 - 2 * s1 + s2
        if denominator == 0:
            return s2
        return s2 - (s2 - s1) ** 2 / denominator

    def build():
        rest = stream.tail()
        return stream.zip_with(transform, rest, rest.tail())

    return Stream.defer(build, stream.is_memoized, stream.is_infinite)


def accelerated_sequence(transform, stream):
    """Heads of stream, transform(stream), transform(transform(stream)), ..."""
    return Stream.iterate(stream, transform).map(Stream.head)


def to_polynomial(series, symbol, n):
    """sympy expression of the first n terms of a power series"""
    return sy.Add(*[coefficient * symbol ** k for k, coefficient in enumerate(series.take(n))])
