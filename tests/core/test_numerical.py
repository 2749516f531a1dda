from fractions import Fraction

import numpy
import pytest

from quanta.core import numerical


def test_collapse():
    """Rationals with unit denominator become integers."""
    result = numerical.collapse(Fraction(4, 2))
    assert result == 2 and isinstance(result, int)
    assert numerical.collapse(Fraction(1, 2)) == Fraction(1, 2)
    assert numerical.collapse(2.5) == 2.5


def test_normalize():
    """Convert supported numbers into scalar types."""
    cases = [
        (1, 1, int),
        (True, 1, int),
        (Fraction(6, 3), 2, int),
        (Fraction(1, 3), Fraction(1, 3), Fraction),
        (1.5, 1.5, float),
        (1+2j, 1+2j, complex),
        (numpy.float64(1.5), 1.5, float),
        (numpy.int32(4), 4, int),
        (numpy.array(3), 3, int),
    ]
    for value, expected, rtype in cases:
        result = numerical.normalize(value)
        assert result == expected
        assert isinstance(result, rtype)
    with pytest.raises(TypeError):
        numerical.normalize('1')


def test_divide():
    """Division keeps exact values exact."""
    assert numerical.divide(1, 3) == Fraction(1, 3)
    result = numerical.divide(6, 3)
    assert result == 2 and isinstance(result, int)
    assert numerical.divide(1.0, 4) == 0.25
    assert numerical.divide(Fraction(1, 2), Fraction(1, 4)) == 2


def test_multiply():
    """Multiplication collapses integral rationals."""
    result = numerical.multiply(Fraction(1, 3), 3)
    assert result == 1 and isinstance(result, int)
    assert numerical.multiply(2, 3, 4) == 24
    assert numerical.multiply() == 1


def test_literal():
    """Parse numeric literals into the narrowest scalar."""
    assert numerical.literal('3') == 3
    assert numerical.literal('-3') == -3
    assert numerical.literal('1/2') == Fraction(1, 2)
    assert numerical.literal('4/2') == 2
    result = numerical.literal('2.0')
    assert result == 2 and isinstance(result, int)
    assert numerical.literal('1e3') == 1000
    assert numerical.literal('2.5') == 2.5
    with pytest.raises(ValueError):
        numerical.literal('two')
    for text in ('1e400', '-1e400', 'inf', 'nan'):
        with pytest.raises(ValueError):
            numerical.literal(text)


def test_equal_and_compare():
    """Comparisons with inexact values happen in floating point."""
    assert numerical.equal(Fraction(1, 1000), 0.001)
    assert numerical.equal(Fraction(1, 2), Fraction(2, 4))
    assert not numerical.equal(1, 2)
    assert numerical.equal(1, 1+0j)
    assert numerical.compare(1, 2) == -1
    assert numerical.compare(Fraction(1, 2), 0.5) == 0
    assert numerical.compare(3, 2.5) == 1


def test_hashable():
    """Equal scalars have equal hashes."""
    assert hash(numerical.hashable(Fraction(1, 2))) == hash(numerical.hashable(0.5))
    assert hash(numerical.hashable(2)) == hash(numerical.hashable(2.0))


def test_root():
    """Compute exact roots where possible."""
    assert numerical.root(4, 2) == 2
    assert numerical.root(Fraction(1, 1000000), 2) == Fraction(1, 1000)
    assert numerical.root(27, 3) == 3
    assert numerical.root(-8, 3) == -2
    assert numerical.root(2, 2) == pytest.approx(1.41421356)
    assert isinstance(numerical.root(-4, 2), complex)
    assert numerical.root(-4, 2) == pytest.approx(2j)


def test_power():
    """Raise scalars to integral powers."""
    assert numerical.power(2, 3) == 8
    assert numerical.power(2, -2) == Fraction(1, 4)
    assert numerical.power(Fraction(1, 2), 2) == Fraction(1, 4)


def test_format_scalar():
    """Format scalars for display."""
    assert numerical.format_scalar(1) == '1'
    assert numerical.format_scalar(Fraction(1, 2)) == '1/2'
    assert numerical.format_scalar(6.5) == '6.5'
    assert numerical.format_scalar(1+2j) == '1+2i'
    assert numerical.format_scalar(1-2j) == '1-2i'
