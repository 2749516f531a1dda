"""Dimensional signatures and the kinds they represent.

A signature encodes the net power of each base dimension of a unit as a
single integer: the power of the dimension at position ``i`` of `VECTOR`
contributes ``power * 20**i``.
"""

import typing

from quanta.core import exceptions
from quanta.core import registry


VECTOR = (
    'length',
    'time',
    'temperature',
    'mass',
    'current',
    'substance',
    'luminosity',
    'currency',
    'information',
    'angle',
)
"""The base dimensions, in signature order."""

BASE = 20
"""The radix of the signature encoding."""


KINDS = {
    -312078: 'elastance',
    -312058: 'resistance',
    -312038: 'inductance',
    -152040: 'magnetism',
    -152038: 'magnetism',
    -152058: 'potential',
    -7997: 'specific_volume',
    -79: 'snap',
    -59: 'jolt',
    -39: 'acceleration',
    -38: 'radiation',
    -20: 'frequency',
    -19: 'speed',
    -18: 'viscosity',
    -17: 'volumetric_flow',
    -1: 'wavenumber',
    0: 'unitless',
    1: 'length',
    2: 'area',
    3: 'volume',
    20: 'time',
    400: 'temperature',
    7941: 'yank',
    7942: 'power',
    7959: 'pressure',
    7961: 'force',
    7962: 'energy',
    7979: 'viscosity',
    7981: 'momentum',
    7982: 'angular_momentum',
    7997: 'density',
    7998: 'area_density',
    8000: 'mass',
    152020: 'radiation_exposure',
    159999: 'magnetism',
    160000: 'current',
    160020: 'charge',
    312058: 'conductance',
    312078: 'capacitance',
    3199980: 'activity',
    3199997: 'molar_concentration',
    3200000: 'substance',
    63999998: 'illuminance',
    64000000: 'luminous_power',
    1280000000: 'currency',
    25600000000: 'information',
    511999999980: 'angular_velocity',
    512000000000: 'angle',
}
"""The kind of quantity that each known signature represents."""


def vector(
    numerator: typing.Iterable[str],
    denominator: typing.Iterable[str],
    definitions: registry.Registry,
) -> typing.List[int]:
    """Compute the net power of each base dimension.

    Parameters
    ----------
    numerator, denominator : iterable of tokens
        The base-unit tokens of a unit.

    definitions : `~registry.Registry`
        The registry that defines each token's kind.

    Raises
    ------
    `~exceptions.InvalidUnitSpecification`
        The net power of some dimension is outside the open interval
        (-20, 20).
    """
    powers = [0] * len(VECTOR)
    for tokens, step in ((numerator, 1), (denominator, -1)):
        for token in tokens:
            if (index := _index(token, definitions)) is not None:
                powers[index] += step
    if any(abs(p) >= BASE for p in powers):
        raise exceptions.InvalidUnitSpecification(
            "Power out of range (-20 < net power of a unit < 20)"
        ) from None
    return powers


def encode(powers: typing.Sequence[int]) -> int:
    """Convert a dimension vector into its integer signature."""
    return sum(p * BASE**i for i, p in enumerate(powers))


def kind(value: int) -> typing.Optional[str]:
    """The kind of quantity with the given signature, if known."""
    return KINDS.get(value)


def _index(token: str, definitions: registry.Registry) -> typing.Optional[int]:
    """The position of the dimension of `token` in `VECTOR`, if any."""
    if token == registry.UNITY:
        return None
    definition = definitions.definition(token)
    if definition is None or definition.kind not in VECTOR:
        return None
    return VECTOR.index(definition.kind)
