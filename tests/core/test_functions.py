import math

import numpy
import pytest

from quanta.core import exceptions
from quanta.core import functions


def test_roots(unit):
    """Compute square and cube roots."""
    assert functions.sqrt(unit('4 m^2')) == unit('2 m')
    assert functions.cbrt(unit('27 m^3')) == unit('3 m')
    assert numpy.sqrt(unit('4 m^2')) == unit('2 m')
    with pytest.raises(exceptions.InvalidOperation):
        numpy.sqrt(unit('4 m'))


def test_trigonometric(unit):
    """Evaluate trigonometric functions of angles."""
    assert functions.sin(unit('90 deg')) == pytest.approx(1.0)
    assert functions.cos(unit('0 rad')) == pytest.approx(1.0)
    assert functions.tan(unit('45 deg')) == pytest.approx(1.0)
    assert numpy.sin(unit('0.5 rad')) == pytest.approx(math.sin(0.5))
    assert functions.sin(unit(0.5)) == pytest.approx(math.sin(0.5))
    assert functions.sinh(unit('1 rad')) == pytest.approx(math.sinh(1))
    assert functions.cosh(unit('1 rad')) == pytest.approx(math.cosh(1))
    assert functions.tanh(unit('1 rad')) == pytest.approx(math.tanh(1))
    with pytest.raises(exceptions.InvalidOperation):
        functions.sin(unit('1 m'))


def test_inverse_trigonometric(unit):
    """Inverse functions return angles in radians."""
    angle = functions.atan(unit(1))
    assert angle.units == 'rad'
    assert angle.scalar == pytest.approx(math.pi / 4)
    assert functions.asin(unit(1)).scalar == pytest.approx(math.pi / 2)
    assert functions.acos(unit(1)).scalar == pytest.approx(0.0)
    with pytest.raises(exceptions.InvalidOperation):
        functions.atan(unit('1 m'))


def test_hypot(unit):
    """Compute the hypotenuse in the units of the first leg."""
    result = functions.hypot(unit('3 m'), unit('400 cm'))
    assert result.units == 'm'
    assert result == unit('5 m')
    with pytest.raises(exceptions.IncompatibleDimensions):
        functions.hypot(unit('3 m'), unit('4 s'))


def test_atan2(unit):
    """Compute the angle of a point."""
    angle = functions.atan2(unit('1 m'), unit('100 cm'))
    assert angle.units == 'rad'
    assert angle.scalar == pytest.approx(math.pi / 4)
    with pytest.raises(exceptions.IncompatibleDimensions):
        functions.atan2(unit('1 m'), unit('1 s'))


def test_numpy_operators(unit):
    """Numpy arithmetic defers to unit arithmetic."""
    assert numpy.multiply(unit('2 m'), 3) == unit('6 m')
    assert numpy.add(unit('2 m'), unit('1 m')) == unit('3 m')
    assert numpy.true_divide(unit('6 m'), unit('2 s')) == unit('3 m/s')
    assert numpy.power(unit('2 m'), 2) == unit('4 m^2')
    assert numpy.negative(unit('2 m')) == unit('-2 m')
    assert numpy.absolute(unit('-2 m')) == unit('2 m')
    assert numpy.float64(2) * unit('3 m') == unit('6 m')
