"""Rules for the numeric scalar of a unit.

A scalar is an `int`, a `fractions.Fraction`, a `float`, or a `complex`.
Exact literals stay exact; floating-point values appear only when the input
or a conversion factor is itself inexact.
"""

import fractions
import math
import numbers
import typing

import numpy


Scalar = typing.Union[int, fractions.Fraction, float, complex]


EXACT = (int, fractions.Fraction)


def collapse(value: Scalar) -> Scalar:
    """Convert a rational with unit denominator into an integer."""
    if isinstance(value, fractions.Fraction) and value.denominator == 1:
        return value.numerator
    return value


def normalize(value: typing.Any) -> Scalar:
    """Convert `value` into one of the supported scalar types.

    Parameters
    ----------
    value : number
        Any real or complex number, including numpy scalars and
        zero-dimensional arrays.

    Returns
    -------
    int, `fractions.Fraction`, float, or complex

    Raises
    ------
    TypeError
        The value is not a number.
    """
    if isinstance(value, numpy.ndarray) and value.ndim == 0:
        value = value[()]
    if isinstance(value, numpy.generic):
        value = value.item()
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, fractions.Fraction):
        return collapse(value)
    if isinstance(value, (int, float, complex)):
        return value
    if isinstance(value, numbers.Rational):
        return collapse(fractions.Fraction(value.numerator, value.denominator))
    if isinstance(value, numbers.Real):
        return float(value)
    if isinstance(value, numbers.Complex):
        return complex(value)
    raise TypeError(f"Can't use {value!r} as a numerical scalar") from None


def divide(a: Scalar, b: Scalar) -> Scalar:
    """Divide `a` by `b`, keeping exact values exact."""
    if isinstance(a, EXACT) and isinstance(b, EXACT):
        return collapse(fractions.Fraction(a) / fractions.Fraction(b))
    return a / b


def multiply(*values: Scalar) -> Scalar:
    """Compute the product of `values`, keeping exact values exact."""
    result = 1
    for value in values:
        result = result * value
    return collapse(result)


def literal(string: str) -> Scalar:
    """Convert a real-valued numeric literal into a scalar.

    Integer literals become `int`, rational literals (``p/q``) become
    `fractions.Fraction`, and decimal or scientific literals become `float`
    unless they represent an integral value, in which case they become `int`.
    """
    text = string.strip()
    if '/' in text:
        numerator, denominator = text.split('/', 1)
        return collapse(
            fractions.Fraction(int(numerator), int(denominator))
        )
    try:
        return int(text)
    except ValueError:
        value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"Numeric literal {string!r} is not finite") from None
    if value.is_integer():
        return int(value)
    return value


def equal(a: Scalar, b: Scalar) -> bool:
    """True if two scalars represent the same number.

    Comparisons that involve an inexact value happen in floating point, so
    that ``Fraction(1, 1000)`` equals ``0.001``.
    """
    if isinstance(a, complex) or isinstance(b, complex):
        return complex(a) == complex(b)
    if isinstance(a, float) or isinstance(b, float):
        return float(a) == float(b)
    return a == b


def compare(a: Scalar, b: Scalar) -> int:
    """Return -1, 0, or 1 as `a` is less than, equal to, or greater than `b`."""
    if isinstance(a, float) or isinstance(b, float):
        a, b = float(a), float(b)
    if a == b:
        return 0
    return -1 if a < b else 1


def hashable(value: Scalar):
    """The hash-compatible form of `value` used by `equal`."""
    if isinstance(value, complex):
        return value
    if isinstance(value, EXACT):
        try:
            return float(value)
        except OverflowError:
            return value
    return value


def is_zero(value: Scalar) -> bool:
    """True if `value` is numerically zero."""
    return value == 0


def iroot(value: int, n: int) -> typing.Optional[int]:
    """The exact integer `n`th root of a non-negative integer, if any."""
    if value < 0:
        return None
    if value in (0, 1):
        return value
    guess = int(round(value ** (1.0 / n)))
    for candidate in (guess - 1, guess, guess + 1):
        if candidate >= 0 and candidate ** n == value:
            return candidate
    return None


def root(value: Scalar, n: int) -> Scalar:
    """Compute the `n`th root of `value`.

    Perfect powers of exact values give exact results. A negative real value
    has a real root when `n` is odd and a principal complex root when `n` is
    even.
    """
    if isinstance(value, complex):
        return value ** (1 / n)
    if value < 0:
        if n % 2:
            return -root(-value, n)
        return complex(value) ** (1 / n)
    if isinstance(value, EXACT):
        exact = fractions.Fraction(value)
        numerator = iroot(exact.numerator, n)
        denominator = iroot(exact.denominator, n)
        if numerator is not None and denominator is not None:
            return collapse(fractions.Fraction(numerator, denominator))
    if n == 2:
        return float(numpy.sqrt(float(value)))
    if n == 3:
        return float(numpy.cbrt(float(value)))
    return float(value) ** (1.0 / n)


def power(value: Scalar, n: int) -> Scalar:
    """Raise `value` to the integral power `n`."""
    if n < 0:
        return divide(1, power(value, -n))
    return collapse(value ** n)


def format_scalar(value: Scalar) -> str:
    """Format a scalar for display.

    Rationals print as ``p/q``, complex values as ``a+bi``, and everything
    else with the ``%g`` conversion.
    """
    if isinstance(value, fractions.Fraction):
        return str(value)
    if isinstance(value, complex):
        return f"{value.real:g}{value.imag:+g}i"
    return '%g' % value


def sign(value: Scalar) -> int:
    """The sign of a real value."""
    return (value > 0) - (value < 0)
