import math
import sys

import pytest
import sympy as sy

from lazystream.errors import InfiniteStreamError
from lazystream.series import (integers, add_streams, mul_streams, scale, partial_sums, integrate_series,
                               mul_series, exp_series, sine_series, cosine_series, fibonacci, pi_summands,
                               pi_stream, euler_transform, accelerated_sequence, to_polynomial)
from lazystream.stream import Stream

x = sy.Symbol('x')


def assert_same_polynomial(a, b):
    assert sy.expand(a - b) == 0


def test_integers():
    assert integers().take(3).to_list() == [1, 2, 3]
    assert integers(0).take(3).to_list() == [0, 1, 2]


def test_add_and_mul_streams():
    assert add_streams(integers(), integers(), integers()).take(3).to_list() == [3, 6, 9]
    assert mul_streams(integers(), integers()).take(4).to_list() == [1, 4, 9, 16]


def test_scale():
    assert scale(Stream.of(1, 2), 3).to_list() == [3, 6]


def test_partial_sums():
    assert partial_sums(integers()).take(5).to_list() == [1, 3, 6, 10, 15]
    assert partial_sums(Stream.of(1, 2, 3)).to_list() == [1, 3, 6]
    assert partial_sums(Stream.empty()).is_empty()


def test_partial_sums_is_lazy():
    calls = []
    stream = partial_sums(Stream.generate(1, lambda n: (calls.append(n) or n, n + 1)))
    assert calls == []
    assert stream.head() == 1


def test_integrate_series():
    # integral of 1 + x + x**2 is x + x**2/2 + x**3/3
    assert integrate_series(Stream.repeat(1)).take(3).to_list() == [1, sy.Rational(1, 2), sy.Rational(1, 3)]


def test_exp_series_matches_sympy():
    expected = sy.series(sy.exp(x), x, 0, 8).removeO()
    assert_same_polynomial(to_polynomial(exp_series(), x, 8), expected)


def test_sine_and_cosine_match_sympy():
    assert_same_polynomial(to_polynomial(sine_series(), x, 9), sy.series(sy.sin(x), x, 0, 9).removeO())
    assert_same_polynomial(to_polynomial(cosine_series(), x, 9), sy.series(sy.cos(x), x, 0, 9).removeO())


def test_sin_squared_plus_cos_squared_is_one():
    sine, cosine = sine_series(), cosine_series()
    one = add_streams(mul_series(sine, sine), mul_series(cosine, cosine))
    assert one.take(6).to_list() == [1, 0, 0, 0, 0, 0]


def test_mul_series_of_exponentials():
    # e**x * e**x = e**(2x)
    product = mul_series(exp_series(), exp_series())
    assert product.take(8).to_list() == [sy.Integer(2) ** n / sy.factorial(n) for n in range(8)]
    assert product.is_infinite


def test_mul_series_finite():
    # (1 + x)**2
    assert mul_series(Stream.of(1, 1), Stream.of(1, 1)).to_list() == [1, 2, 1]
    assert mul_series(Stream.of(1, 2, 3), Stream.of(1)).to_list() == [1, 2, 3]
    assert mul_series(Stream.empty(), Stream.of(1)).is_empty()


def test_mul_series_deep_coefficient():
    # 1/(1 - x)**2 = sum((n + 1) * x**n)
    n = sys.getrecursionlimit() + 500
    assert mul_series(Stream.repeat(1), Stream.repeat(1)).nth(n) == n + 1


def test_mul_series_of_exponentials_deep_coefficient():
    assert mul_series(exp_series(), exp_series()).nth(450) == sy.Integer(2) ** 450 / sy.factorial(450)


def test_series_are_infinite():
    with pytest.raises(InfiniteStreamError):
        exp_series().to_list()
    with pytest.raises(InfiniteStreamError):
        sine_series().sum()


def test_fibonacci_matches_sympy():
    assert fibonacci().take(30).to_list() == [sy.fibonacci(n) for n in range(1, 31)]


def test_pi_summands():
    assert pi_summands().take(3).to_list() == [1, sy.Rational(-1, 3), sy.Rational(1, 5)]


def test_pi_stream_converges_slowly():
    estimate = pi_stream().nth(20)
    assert abs(float(estimate) - math.pi) < 0.1
    assert abs(float(estimate) - math.pi) > 1e-3


def test_euler_transform_accelerates():
    estimate = euler_transform(pi_stream()).nth(20)
    assert abs(float(estimate) - math.pi) < 1e-4


def test_accelerated_sequence():
    estimates = accelerated_sequence(euler_transform, pi_stream()).take(6).to_list()
    assert abs(float(estimates[-1]) - math.pi) < 1e-8
    assert estimates[0] == 4


def test_to_polynomial():
    assert to_polynomial(Stream.of(1, 2, 3), x, 3) == 1 + 2 * x + 3 * x ** 2
    assert to_polynomial(Stream.of(1, 2, 3), x, 0) == 0
