"""Mathematical functions of units.

Each function here is also registered as the implementation of the
corresponding `numpy` universal function, so ``numpy.sqrt(u)`` and
``functions.sqrt(u)`` are equivalent for a unit ``u``.
"""

import typing

import numpy

from quanta.core import exceptions
from quanta.core.unit import Unit


def _radians(x) -> float:
    """The value of an angle or unitless number, in radians."""
    if not isinstance(x, Unit):
        return float(x)
    if x.kind == 'angle':
        return float(x.convert_to(x._token_unit('<radian>')).scalar)
    if x.unitless:
        return float(x.scalar)
    raise exceptions.InvalidOperation(
        f"Argument must be an angle or unitless, not {x.units!r}"
    ) from None


def _unitless(x) -> float:
    """The value of a unitless unit or plain number."""
    if not isinstance(x, Unit):
        return float(x)
    if not x.unitless:
        raise exceptions.InvalidOperation(
            f"Argument must be unitless, not {x.units!r}"
        ) from None
    return float(x.scalar)


def _angle(value, like: Unit=None) -> Unit:
    """Create an angle in radians."""
    if like is None:
        return Unit(float(value), numerator=['<radian>'])
    return like._new(float(value), ('<radian>',), ('<1>',))


@Unit.implements(numpy.sqrt)
def sqrt(x: Unit) -> Unit:
    """The square root of `x`."""
    return x.root(2)


@Unit.implements(numpy.cbrt)
def cbrt(x: Unit) -> Unit:
    """The cube root of `x`."""
    return x.root(3)


@Unit.implements(numpy.sin)
def sin(x) -> float:
    """The sine of an angle."""
    return float(numpy.sin(_radians(x)))


@Unit.implements(numpy.cos)
def cos(x) -> float:
    """The cosine of an angle."""
    return float(numpy.cos(_radians(x)))


@Unit.implements(numpy.tan)
def tan(x) -> float:
    """The tangent of an angle."""
    return float(numpy.tan(_radians(x)))


@Unit.implements(numpy.sinh)
def sinh(x) -> float:
    """The hyperbolic sine of an angle."""
    return float(numpy.sinh(_radians(x)))


@Unit.implements(numpy.cosh)
def cosh(x) -> float:
    """The hyperbolic cosine of an angle."""
    return float(numpy.cosh(_radians(x)))


@Unit.implements(numpy.tanh)
def tanh(x) -> float:
    """The hyperbolic tangent of an angle."""
    return float(numpy.tanh(_radians(x)))


@Unit.implements(numpy.arcsin)
def asin(x) -> Unit:
    """The inverse sine of a unitless value, in radians."""
    return _angle(numpy.arcsin(_unitless(x)), _like(x))


@Unit.implements(numpy.arccos)
def acos(x) -> Unit:
    """The inverse cosine of a unitless value, in radians."""
    return _angle(numpy.arccos(_unitless(x)), _like(x))


@Unit.implements(numpy.arctan)
def atan(x) -> Unit:
    """The inverse tangent of a unitless value, in radians."""
    return _angle(numpy.arctan(_unitless(x)), _like(x))


@Unit.implements(numpy.hypot)
def hypot(x: Unit, y: Unit) -> Unit:
    """The hypotenuse of a right triangle with legs `x` and `y`.

    The result has the units of `x`.

    Raises
    ------
    `~exceptions.IncompatibleDimensions`
        The arguments have different dimensions.
    """
    x, y = _pair(x, y)
    value = numpy.hypot(float(x.scalar), float(y.convert_to(x).scalar))
    return x._new(float(value), x.numerator, x.denominator)


@Unit.implements(numpy.arctan2)
def atan2(y: Unit, x: Unit) -> Unit:
    """The angle, in radians, of the point (`x`, `y`).

    Raises
    ------
    `~exceptions.IncompatibleDimensions`
        The arguments have different dimensions.
    """
    y, x = _pair(y, x)
    value = numpy.arctan2(float(y.base_scalar), float(x.base_scalar))
    return _angle(value, y)


def _pair(a, b) -> typing.Tuple[Unit, Unit]:
    """Convert two arguments into compatible units."""
    like = _like(a, b)
    a = a if isinstance(a, Unit) else like._new_from(a)
    b = b if isinstance(b, Unit) else like._new_from(b)
    if not a.compatible(b):
        raise exceptions.IncompatibleDimensions(a, b)
    return a, b


def _like(*args) -> typing.Optional[Unit]:
    """The first argument that is a unit, if any."""
    return next((arg for arg in args if isinstance(arg, Unit)), None)


def _operator(name: str, reflected: str):
    """Create a `numpy` binary function that defers to unit operators."""
    def method(a, b):
        if isinstance(a, Unit):
            return getattr(a, name)(b)
        return getattr(b, reflected)(a)
    method.__name__ = name.strip('_')
    method.__doc__ = f"Called for numpy.{method.__name__}(a, b)."
    return method


_OPERATORS = {
    numpy.add: ('__add__', '__radd__'),
    numpy.subtract: ('__sub__', '__rsub__'),
    numpy.multiply: ('__mul__', '__rmul__'),
    numpy.true_divide: ('__truediv__', '__rtruediv__'),
}

for _ufunc, _names in _OPERATORS.items():
    Unit.implements(_ufunc)(_operator(*_names))


@Unit.implements(numpy.power)
def power(x: Unit, p) -> Unit:
    """Called for numpy.power(x, p)."""
    if not isinstance(x, Unit):
        raise exceptions.InvalidOperation("Cannot raise a number to a unit power")
    return x ** p


@Unit.implements(numpy.negative)
def negative(x: Unit) -> Unit:
    """Called for numpy.negative(x)."""
    return -x


@Unit.implements(numpy.absolute)
def absolute(x: Unit) -> Unit:
    """Called for numpy.absolute(x)."""
    return abs(x)
