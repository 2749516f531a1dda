import pytest

from quanta.core import exceptions
from quanta.core import signature


def test_encode():
    """Each dimension contributes its power times a power of 20."""
    assert signature.encode([1] + [0] * 9) == 1
    assert signature.encode([0, 1] + [0] * 8) == 20
    assert signature.encode([1, -1] + [0] * 8) == -19
    assert signature.encode([1, -2, 0, 1] + [0] * 6) == 7961


def test_vector(ctx):
    """Count the net power of each dimension."""
    definitions = ctx.registry
    result = signature.vector(
        ['<meter>', '<kilogram>'],
        ['<second>', '<second>'],
        definitions,
    )
    assert result == [1, -2, 0, 1, 0, 0, 0, 0, 0, 0]
    assert signature.vector(['<each>'], ['<1>'], definitions) == [0] * 10


def test_vector_range(ctx):
    """Reject powers that would overflow the encoding."""
    with pytest.raises(exceptions.InvalidUnitSpecification):
        signature.vector(['<meter>'] * 20, ['<1>'], ctx.registry)
    result = signature.vector(['<meter>'] * 19, ['<1>'], ctx.registry)
    assert result[0] == 19


def test_kind():
    """Look up the kind of known signatures."""
    assert signature.kind(0) == 'unitless'
    assert signature.kind(1) == 'length'
    assert signature.kind(-19) == 'speed'
    assert signature.kind(7961) == 'force'
    assert signature.kind(400) == 'temperature'
    assert signature.kind(312058) == 'conductance'
    assert signature.kind(-312058) == 'resistance'
    assert signature.kind(12345) is None
