import datetime
import enum
import fractions
import math
import numbers
import re
import typing

import numpy

from quanta.core import context as contexts
from quanta.core import exceptions
from quanta.core import iterables
from quanta.core import numerical
from quanta.core import signature as signatures
from quanta.core.registry import UNITY


MAX_DEPTH = 32
"""The maximum nesting of definitions during reduction to base units."""

_ONE = (UNITY,)

_TO_KELVIN = {
    '<tempK>': lambda t: t,
    '<tempC>': lambda t: t + 273.15,
    '<tempF>': lambda t: (t + 459.67) * fractions.Fraction(5, 9),
    '<tempR>': lambda t: t * fractions.Fraction(5, 9),
}

_FROM_KELVIN = {
    '<tempK>': lambda k: k,
    '<tempC>': lambda k: k - 273.15,
    '<tempF>': lambda k: k * fractions.Fraction(9, 5) - 459.67,
    '<tempR>': lambda k: k * fractions.Fraction(9, 5),
}

_DEGREES = {
    '<tempK>': ('<kelvin>', 'degK'),
    '<tempC>': ('<celsius>', 'degC'),
    '<tempF>': ('<fahrenheit>', 'degF'),
    '<tempR>': ('<rankine>', 'degR'),
}

_PRINTF = re.compile(r'^(?P<format>%[-+.\w#]+)\s*(?P<unit>.*)$')

_CONVERSION = re.compile(r'^(?P<unit>.+)\s(?:in|to|as)\s(?P<target>.+)$')


class Compound(enum.Enum):
    """Output formats that split a value between two units."""

    FEET = 'feet-inches'
    POUNDS = 'pounds-ounces'
    STONE = 'stone-pounds'

    @classmethod
    def lookup(cls, target) -> typing.Optional['Compound']:
        """The member that `target` names, if any."""
        if isinstance(target, cls):
            return target
        if isinstance(target, str):
            for member in cls:
                if target.strip() == member.value:
                    return member


class Terms(typing.NamedTuple):
    """A scalar with numerator and denominator tokens."""

    scalar: numerical.Scalar
    numerator: typing.Tuple[str, ...]
    denominator: typing.Tuple[str, ...]


def atoms(
    tokens: typing.Iterable[str],
    prefixes: typing.Container[str],
) -> typing.List[typing.Tuple[str, ...]]:
    """Group tokens so that each prefix stays with the unit it modifies.

    The identity token never appears in the result.
    """
    result, current = [], []
    for token in tokens:
        if token == UNITY:
            continue
        current.append(token)
        if token not in prefixes:
            result.append(tuple(current))
            current = []
    if current:
        result.append(tuple(current))
    return result


def eliminate_terms(
    scalar: numerical.Scalar,
    numerator: typing.Iterable[str],
    denominator: typing.Iterable[str],
    prefixes: typing.Container[str],
) -> Terms:
    """Cancel units that appear in both the numerator and denominator.

    Parameters
    ----------
    scalar : number
        The numerical coefficient, passed through unchanged.

    numerator, denominator : iterable of tokens
        The unit tokens to simplify.

    prefixes : container of tokens
        The tokens that are prefixes. A prefix and the unit that follows it
        cancel as a single term.

    Returns
    -------
    `Terms`
        The simplified terms. Either side is ``('<1>',)`` if no units remain
        on it. Surviving terms keep the order of their first appearance.
    """
    combined = {}
    for tokens, step in ((numerator, 1), (denominator, -1)):
        for atom in atoms(tokens, prefixes):
            combined[atom] = combined.get(atom, 0) + step
    top = [t for atom, n in combined.items() if n > 0 for t in atom * n]
    bottom = [t for atom, n in combined.items() if n < 0 for t in atom * -n]
    return Terms(
        numerical.collapse(scalar),
        tuple(top) or _ONE,
        tuple(bottom) or _ONE,
    )


def reduce_terms(
    numerator: typing.Iterable[str],
    denominator: typing.Iterable[str],
    definitions,
) -> Terms:
    """Express tokens in terms of base units.

    Every token is replaced by its definition until only base tokens remain.
    Prefix and unit scalars accumulate in the returned scalar.

    Raises
    ------
    `~exceptions.InvalidUnitSpecification`
        A token is unknown or definitions nest more than `MAX_DEPTH` levels
        (for example, because two units are defined in terms of each other).
    """
    factor = 1
    top, bottom = [], []

    def expand(tokens: typing.Iterable[str], step: int, depth: int):
        nonlocal factor
        if depth > MAX_DEPTH:
            raise exceptions.InvalidUnitSpecification(
                f"Definitions nest more than {MAX_DEPTH} levels deep"
                " (is a definition cyclic?)",
                ' '.join(tokens),
            ) from None
        for token in tokens:
            if token == UNITY:
                continue
            definition = definitions.definition(token)
            if definition is None:
                raise exceptions.UnrecognizedUnit(token)
            if definition.base:
                (top if step > 0 else bottom).append(token)
                continue
            if step > 0:
                factor = numerical.multiply(factor, definition.scalar)
            else:
                factor = numerical.divide(factor, definition.scalar)
            if definition.prefix:
                continue
            expand(definition.numerator, step, depth + 1)
            expand(definition.denominator, -step, depth + 1)

    expand(numerator, 1, 0)
    expand(denominator, -1, 0)
    return eliminate_terms(factor, top, bottom, definitions.prefix_values)


Instance = typing.TypeVar('Instance', bound='Unit')


class Unit(iterables.ReprStrMixin):
    """A number with a physical unit.

    Instances are immutable. All arithmetic returns new instances.

    Parameters
    ----------
    *args
        One of the following:

        - a string in the unit mini-language (e.g., ``'5.6 kg*m/s^2'``)
        - a number and a unit string (e.g., ``5.6, 'kg*m/s^2'``)
        - an existing unit, to copy
        - a bare number, for a unitless value
        - a `datetime.datetime` (seconds since the epoch), a
          `datetime.date` (days since 0001-01-01, counting that day as 1),
          or a `datetime.timedelta` (seconds)
        - a number, when `numerator` or `denominator` is given
        - a list or tuple of any of the above argument forms (e.g.,
          ``[1, 'kg']``)

    numerator, denominator : iterable of tokens, optional
        Explicit unit tokens (e.g., ``['<meter>']``).

    signature : int, optional
        The precomputed signature for explicit tokens.

    context : `~context.Context`, optional
        The context that owns the definitions and caches for this unit.
        Defaults to the context of a copied unit or the shared context.

    Examples
    --------
    Create a speed and convert it to another unit:

    >>> v = Unit('10 m/s')
    >>> v.convert_to('km/h')
    unit.Unit(36 km/h)
    """

    @typing.overload
    def __init__(self, string: str, *, context=None) -> None: ...

    @typing.overload
    def __init__(
        self,
        scalar: numbers.Number,
        units: str,
        *,
        context=None,
    ) -> None: ...

    @typing.overload
    def __init__(
        self,
        scalar: numbers.Number,
        *,
        numerator: typing.Iterable[str]=None,
        denominator: typing.Iterable[str]=None,
        signature: int=None,
        context=None,
    ) -> None: ...

    @typing.overload
    def __init__(self: Instance, instance: Instance, *, context=None) -> None: ...

    def __init__(
        self,
        *args,
        numerator=None,
        denominator=None,
        signature=None,
        context=None,
    ) -> None:
        if context is None and args and isinstance(args[0], Unit):
            context = args[0].context
        self._context = context or contexts.default()
        self._signature = None
        self._base_scalar = None
        self._base = None
        self._units = None
        self._output = {}
        if numerator is not None or denominator is not None:
            self._init_from_terms(
                args[0] if args else 1,
                numerator,
                denominator,
                signature,
            )
        else:
            self._init_from_args(*args)
        self._validate()

    def _init_from_terms(self, scalar, numerator, denominator, signature):
        """Initialize from a scalar and explicit tokens."""
        self._scalar = self._normalize(scalar)
        self._numerator = tuple(numerator or ()) or _ONE
        self._denominator = tuple(denominator or ()) or _ONE
        self._signature = signature

    def _init_from_args(self, *args):
        """Initialize from positional arguments."""
        if not args:
            raise exceptions.InvalidUnitSpecification("No unit specified")
        if len(args) == 2:
            scalar, units = args
            if isinstance(units, Unit):
                units = units.units
            if not isinstance(units, str):
                raise exceptions.InvalidUnitSpecification(
                    f"Invalid unit specification {units!r}"
                ) from None
            parsed = self._context.parser.parse(units)
            return self._init_from_terms(
                numerical.multiply(self._normalize(scalar), parsed.scalar),
                parsed.numerator,
                parsed.denominator,
                None,
            )
        if len(args) in (3, 4):
            return self._init_from_terms(*args, *[None] * (4 - len(args)))
        if len(args) > 4:
            raise exceptions.InvalidUnitSpecification(
                f"Invalid unit specification {args!r}"
            ) from None
        arg = args[0]
        if isinstance(arg, (list, tuple)):
            return self._init_from_args(*arg)
        if isinstance(arg, Unit):
            self._scalar = arg.scalar
            self._numerator = arg.numerator
            self._denominator = arg.denominator
            if arg.context is self._context:
                self._signature = arg._signature
                self._base_scalar = arg._base_scalar
            return
        if isinstance(arg, str):
            parsed = self._context.parser.parse(arg)
            return self._init_from_terms(*parsed, None)
        if isinstance(arg, datetime.datetime):
            return self._init_from_terms(arg.timestamp(), ['<second>'], None, None)
        if isinstance(arg, datetime.date):
            return self._init_from_terms(arg.toordinal(), ['<day>'], None, None)
        if isinstance(arg, datetime.timedelta):
            return self._init_from_terms(
                arg.total_seconds(), ['<second>'], None, None
            )
        self._init_from_terms(arg, None, None, None)

    def _normalize(self, scalar) -> numerical.Scalar:
        """Convert a numeric argument into a scalar."""
        try:
            return numerical.normalize(scalar)
        except TypeError:
            raise exceptions.InvalidUnitSpecification(
                f"Invalid unit specification {scalar!r}"
            ) from None

    def _validate(self) -> None:
        """Check invariants that depend on the definitions."""
        self.signature
        if self.is_temperature and not isinstance(self.scalar, complex):
            if self.base_scalar < 0:
                raise exceptions.InvalidUnitSpecification(
                    "Temperatures must not be less than absolute zero",
                    str(self),
                )

    @property
    def context(self):
        """The context that owns this unit's definitions."""
        return self._context

    @property
    def scalar(self) -> numerical.Scalar:
        """The numerical coefficient of this unit."""
        return self._scalar

    @property
    def numerator(self) -> typing.Tuple[str, ...]:
        """The tokens in the numerator."""
        return self._numerator

    @property
    def denominator(self) -> typing.Tuple[str, ...]:
        """The tokens in the denominator."""
        return self._denominator

    @property
    def units(self) -> str:
        """The label of this unit, without the scalar.

        Repeated terms appear once, with an exponent. The label of a unitless
        value is the empty string.
        """
        if self._units is None:
            self._units = self._label()
        return self._units

    def _label(self) -> str:
        """Build the unit label from display names."""
        if self.unitless:
            return ''
        prefixes = self._context.registry.prefix_values
        def join(tokens):
            names = [
                ''.join(self._display(t) for t in atom)
                for atom in atoms(tokens, prefixes)
            ]
            return '*'.join(
                name if n == 1 else f"{name}^{n}"
                for name, n in iterables.tally(names).items()
            )
        top = join(self.numerator) or '1'
        if bottom := join(self.denominator):
            return f"{top}/{bottom}"
        return top

    def _display(self, token: str) -> str:
        """The display name of a token."""
        if (definition := self._context.registry.definition(token)) is None:
            return token.strip('<>')
        return definition.display_name

    @property
    def signature(self) -> int:
        """The integer encoding of this unit's dimensions."""
        if self._signature is None:
            base = self if self.is_base else self._reduced()
            vector = signatures.vector(
                base.numerator,
                base.denominator,
                self._context.registry,
            )
            self._signature = signatures.encode(vector)
        return self._signature

    @property
    def kind(self) -> typing.Optional[str]:
        """The kind of quantity this unit represents, if known."""
        return signatures.kind(self.signature)

    @property
    def unitless(self) -> bool:
        """True if this unit has no dimensions or units."""
        return self.numerator == _ONE and self.denominator == _ONE

    @property
    def is_base(self) -> bool:
        """True if this unit contains only base tokens."""
        definitions = self._context.registry
        for token in (*self.numerator, *self.denominator):
            if token == UNITY:
                continue
            definition = definitions.definition(token)
            if definition is None or not (definition.base or definition.unity):
                return False
        return True

    @property
    def is_temperature(self) -> bool:
        """True if this unit is a point on a temperature scale."""
        return (
            len(self.numerator) == 1
            and self.numerator[0] in _TO_KELVIN
            and self.denominator == _ONE
        )

    @property
    def is_degree(self) -> bool:
        """True if this unit has the dimensions of temperature."""
        return self.kind == 'temperature'

    @property
    def temperature_scale(self) -> typing.Optional[str]:
        """The degree unit of this temperature's scale (e.g., ``'degC'``)."""
        if self.is_temperature:
            return _DEGREES[self.numerator[0]][1]

    @property
    def zero(self) -> bool:
        """True if the value in base units is zero."""
        return numerical.is_zero(self.base_scalar)

    @property
    def base_scalar(self) -> numerical.Scalar:
        """The scalar of this unit after conversion to base units."""
        if self._base_scalar is None:
            if self.is_temperature:
                value = _TO_KELVIN[self.numerator[0]](self.scalar)
            elif self.is_base:
                value = self.scalar
            else:
                value = numerical.multiply(self.scalar, self._factor)
            self._base_scalar = numerical.collapse(value)
        return self._base_scalar

    @property
    def _factor(self) -> numerical.Scalar:
        """The value of one of this unit in base units."""
        return 1 if self.is_base else self._reduced().scalar

    def _reduced(self) -> 'Unit':
        """The scalar=1 form of this unit in base units."""
        if self._base is not None:
            return self._base
        key = f"{' '.join(self.numerator)}/{' '.join(self.denominator)}"
        cache = self._context.base_cache
        if (cached := cache.get(key)) is None:
            terms = reduce_terms(
                self.numerator,
                self.denominator,
                self._context.registry,
            )
            cached = self._new(*terms)
            with self._context.lock:
                cache.set(key, cached)
        self._base = cached
        return cached

    def to_base(self) -> 'Unit':
        """Convert this unit into base units.

        A point on a temperature scale converts to ``tempK``.
        """
        if self.is_base:
            return self
        if self.is_temperature:
            return self._new(self.base_scalar, ('<tempK>',), _ONE)
        reduced = self._reduced()
        return self._new(
            numerical.multiply(self.scalar, reduced.scalar),
            reduced.numerator,
            reduced.denominator,
            signature=reduced.signature,
        )

    base = property(to_base)

    def convert_to(self, target) -> 'Unit':
        """Express this unit in the units of `target`.

        Parameters
        ----------
        target : string or `Unit`
            The new units. Only the units of `target` matter, not its scalar.

        Raises
        ------
        `~exceptions.IncompatibleDimensions`
            The target has different dimensions.
        `~exceptions.InvalidUnitSpecification`
            The target is not a unit.
        """
        if target is None:
            return self
        target = self._target(target)
        if target.is_temperature:
            if not self.is_degree:
                raise exceptions.IncompatibleDimensions(
                    self, target,
                    message=f"Receiver is not a temperature unit ({self.units!r})",
                )
            value = _FROM_KELVIN[target.numerator[0]](self.base_scalar)
            return self._new(value, target.numerator, target.denominator)
        if (
            self.numerator == target.numerator
            and self.denominator == target.denominator
        ):
            return self
        if not self.compatible(target):
            raise exceptions.IncompatibleDimensions(self, target)
        value = numerical.divide(
            numerical.multiply(self.scalar, self._factor),
            target._factor,
        )
        return self._new(
            value,
            target.numerator,
            target.denominator,
            signature=target.signature,
        )

    to = convert_to

    def __rshift__(self, other):
        """Called for self >> other."""
        return self.convert_to(other)

    def _target(self, target) -> 'Unit':
        """Convert a conversion target into a unit."""
        if isinstance(target, Unit):
            return target
        if isinstance(target, str) and target.strip():
            return self._new_from(target.strip())
        raise exceptions.InvalidUnitSpecification(
            f"Unknown target units {target!r}"
        ) from None

    def compatible(self, other) -> bool:
        """True if `other` has the same dimensions as this unit."""
        try:
            other = self._coerce(other)
        except exceptions.UnitError:
            return False
        return other is not None and self.signature == other.signature

    def same(self, other) -> bool:
        """True if `other` has the same scalar and units as this unit."""
        return (
            isinstance(other, Unit)
            and numerical.equal(self.scalar, other.scalar)
            and self.units == other.units
        )

    def inverse(self) -> 'Unit':
        """The reciprocal of this unit."""
        return self._new(1, _ONE, _ONE) / self

    def succ(self) -> 'Unit':
        """The next unit in a sequence of whole numbers (e.g., 2 m -> 3 m).

        Raises
        ------
        `~exceptions.InvalidOperation`
            The scalar is not an integer.
        """
        return self._new(self._integral() + 1, self.numerator, self.denominator)

    def pred(self) -> 'Unit':
        """The previous unit in a sequence of whole numbers."""
        return self._new(self._integral() - 1, self.numerator, self.denominator)

    def _integral(self) -> int:
        """The scalar of this unit as an `int`, if it has an integral value."""
        scalar = self.scalar
        if isinstance(scalar, numbers.Integral):
            return int(scalar)
        if isinstance(scalar, float) and scalar.is_integer():
            return int(scalar)
        raise exceptions.InvalidOperation("Non Integer Scalar")

    def power(self, n: int) -> 'Unit':
        """Raise this unit to an integral power."""
        if self.is_temperature:
            raise exceptions.InvalidOperation(
                "Cannot raise a temperature to a power"
            )
        if not isinstance(n, numbers.Integral):
            raise exceptions.InvalidOperation("Exponent must be an integer")
        n = int(n)
        if n == 0:
            return self._new(1, _ONE, _ONE)
        if n == 1:
            return self
        if n < 0:
            return self.inverse().power(-n)
        terms = eliminate_terms(
            numerical.power(self.scalar, n),
            self.numerator * n,
            self.denominator * n,
            self._context.registry.prefix_values,
        )
        return self._new(*terms)

    def root(self, n: int) -> 'Unit':
        """Compute the `n`th root of this unit.

        Raises
        ------
        `~exceptions.InvalidOperation`
            The exponent of some unit is not divisible by `n`, `n` is zero or
            not an integer, or this unit is a temperature.
        """
        if self.is_temperature:
            raise exceptions.InvalidOperation(
                "Cannot take the root of a temperature"
            )
        if not isinstance(n, numbers.Integral):
            raise exceptions.InvalidOperation("Exponent must be an integer")
        n = int(n)
        if n == 0:
            raise exceptions.InvalidOperation("0th root undefined")
        if n == 1:
            return self
        if n < 0:
            return self.root(-n).inverse()
        base = self.to_base()
        vector = signatures.vector(
            base.numerator,
            base.denominator,
            self._context.registry,
        )
        if any(p % n for p in vector):
            raise exceptions.InvalidOperation(f"Illegal root ({self.units!r})")
        for candidate in (self, base):
            if (terms := candidate._divide_terms(n)) is not None:
                return self._new(
                    numerical.root(candidate.scalar, n),
                    *terms,
                )
        raise exceptions.InvalidOperation(f"Illegal root ({self.units!r})")

    def _divide_terms(self, n: int):
        """Divide the count of each term by `n`, if possible."""
        prefixes = self._context.registry.prefix_values
        result = []
        for tokens in (self.numerator, self.denominator):
            counts = iterables.tally(atoms(tokens, prefixes))
            if any(count % n for count in counts.values()):
                return None
            result.append(
                tuple(
                    t for atom, count in counts.items()
                    for t in atom * (count // n)
                ) or _ONE
            )
        return result

    def to_s(self, target=None) -> str:
        """Format this unit as a string.

        Parameters
        ----------
        target : optional
            One of the following:

            - `None`, for the default format
            - a unit string, to convert before formatting
            - a printf-style format string, optionally followed by a unit
              (e.g., ``'%0.2f in'``)
            - a strftime-style format string, to format a duration as a time
              of day (e.g., ``'%H:%M:%S'``)
            - a `Compound` member or its value (e.g., ``Compound.FEET`` or
              ``'feet-inches'``)
        """
        key = (target, self._context.config.separator)
        if key not in self._output:
            self._output[key] = self._format(target)
        return self._output[key]

    def _format(self, target) -> str:
        """Create the string for `to_s`."""
        separator = self._context.config.separator
        if target is None:
            scalar = numerical.format_scalar(self.scalar)
            return f"{scalar}{separator}{self.units}".strip()
        if compound := Compound.lookup(target):
            return self._format_compound(compound)
        if not isinstance(target, str):
            raise exceptions.InvalidUnitSpecification(
                f"Unknown format {target!r}"
            ) from None
        text = target.strip()
        if match := _PRINTF.match(text):
            try:
                if unit := match['unit']:
                    return self.convert_to(unit).to_s(match['format'])
                scalar = match['format'] % self.scalar
                return f"{scalar}{separator}{self.units}".strip()
            except (ValueError, TypeError):
                return self._format_time(text)
        return self.convert_to(text).to_s()

    def _format_compound(self, compound: Compound) -> str:
        """Split this unit between two units."""
        if compound is Compound.FEET:
            total = round(self.convert_to(self._token_unit('<inch>')).scalar)
            feet, inches = divmod(abs(total), 12)
            return f"{'-' if total < 0 else ''}{feet}'{inches}\""
        if compound is Compound.POUNDS:
            total = round(self.convert_to(self._token_unit('<ounce>')).scalar)
            pounds, ounces = divmod(abs(total), 16)
            return f"{'-' if total < 0 else ''}{pounds} lbs, {ounces} oz"
        total = round(self.convert_to(self._token_unit('<pound>')).scalar)
        stone, pounds = divmod(abs(total), 14)
        return f"{'-' if total < 0 else ''}{stone} stone, {pounds} lb"

    def _format_time(self, fmt: str) -> str:
        """Format this duration as a time of day."""
        seconds = self.convert_to(self._token_unit('<second>')).scalar
        moment = datetime.datetime(1, 1, 1) + datetime.timedelta(
            seconds=float(seconds)
        )
        return moment.strftime(fmt)

    def _get_display(self) -> str:
        return self.to_s()

    def __format__(self, spec: str) -> str:
        return self.to_s(spec or None)

    def __hash__(self) -> int:
        return hash(numerical.hashable(self.base_scalar))

    def __bool__(self) -> bool:
        return not self.zero

    def __eq__(self, other) -> bool:
        """Called for self == other."""
        if _is_number(other) and numerical.normalize(other) == 0:
            return self.zero
        try:
            other = self._coerce(other)
        except exceptions.UnitError:
            return False
        if other is None:
            return NotImplemented
        if other.zero:
            return self.zero
        if not self.compatible(other):
            return False
        return numerical.equal(self.base_scalar, other.base_scalar)

    def _compare(self, other) -> typing.Optional[int]:
        """Compare base scalars, or return `None` for unsupported types."""
        if _is_number(other) and numerical.normalize(other) == 0:
            if not self.is_temperature:
                return numerical.compare(self.base_scalar, 0)
        other = self._coerce(other)
        if other is None:
            return None
        if not self.compatible(other):
            raise exceptions.IncompatibleDimensions(self, other)
        return numerical.compare(self.base_scalar, other.base_scalar)

    def __lt__(self, other) -> bool:
        """Called for self < other."""
        result = self._compare(other)
        return NotImplemented if result is None else result < 0

    def __le__(self, other) -> bool:
        """Called for self <= other."""
        result = self._compare(other)
        return NotImplemented if result is None else result <= 0

    def __gt__(self, other) -> bool:
        """Called for self > other."""
        result = self._compare(other)
        return NotImplemented if result is None else result > 0

    def __ge__(self, other) -> bool:
        """Called for self >= other."""
        result = self._compare(other)
        return NotImplemented if result is None else result >= 0

    def __add__(self, other):
        """Called for self + other."""
        if isinstance(other, datetime.date):
            raise exceptions.InvalidOperation(
                "Dates and times are fixed points in time"
                " and cannot be added to a unit"
            )
        if (other := self._coerce(other)) is None:
            return NotImplemented
        if self.zero and not self.is_temperature:
            return other
        if other.zero and not other.is_temperature:
            return self
        if not self.compatible(other):
            raise exceptions.IncompatibleDimensions(self, other)
        if self.is_temperature and other.is_temperature:
            raise exceptions.IncompatibleDimensions(
                self, other, message="Cannot add two temperatures"
            )
        if self.is_temperature:
            return self._shift(other)
        if other.is_temperature:
            return other._shift(self)
        return self._rescaled(self.base_scalar + other.base_scalar)

    def __radd__(self, other):
        """Called for other + self.

        Adding a duration to a date or time gives a new date or time.
        """
        if isinstance(other, datetime.date):
            return other + self.to_timedelta()
        if (other := self._coerce(other)) is None:
            return NotImplemented
        return other + self

    def __sub__(self, other):
        """Called for self - other."""
        if isinstance(other, datetime.date):
            raise exceptions.InvalidOperation(
                "Dates and times are fixed points in time"
                " and cannot be subtracted from a unit"
            )
        if (other := self._coerce(other)) is None:
            return NotImplemented
        if other.is_temperature and not self.is_temperature:
            if not self.compatible(other):
                raise exceptions.IncompatibleDimensions(self, other)
            raise exceptions.IncompatibleDimensions(
                self, other,
                message=(
                    "Cannot subtract a temperature"
                    " from a differential degree unit"
                ),
            )
        if self.zero and not self.is_temperature:
            return -other
        if other.zero and not other.is_temperature:
            return self
        if not self.compatible(other):
            raise exceptions.IncompatibleDimensions(self, other)
        if self.is_temperature and other.is_temperature:
            difference = self.base_scalar - other.base_scalar
            degrees = self._new(difference, ('<kelvin>',), _ONE)
            return degrees.convert_to(self._degree_unit())
        if self.is_temperature:
            kelvin = self.base_scalar - other.base_scalar
            point = self._new(kelvin, ('<tempK>',), _ONE)
            return point.convert_to(self)
        return self._rescaled(self.base_scalar - other.base_scalar)

    def __rsub__(self, other):
        """Called for other - self."""
        if isinstance(other, datetime.date):
            return other - self.to_timedelta()
        if (other := self._coerce(other)) is None:
            return NotImplemented
        return other - self

    def __mul__(self, other):
        """Called for self * other."""
        if (other := self._coerce(other)) is None:
            return NotImplemented
        if self.is_temperature or other.is_temperature:
            raise exceptions.InvalidOperation("Cannot multiply by temperatures")
        terms = eliminate_terms(
            numerical.multiply(self.scalar, other.scalar),
            self.numerator + other.numerator,
            self.denominator + other.denominator,
            self._context.registry.prefix_values,
        )
        return self._new(*terms)

    def __rmul__(self, other):
        """Called for other * self."""
        if (other := self._coerce(other)) is None:
            return NotImplemented
        return other * self

    def __truediv__(self, other):
        """Called for self / other."""
        if (other := self._coerce(other)) is None:
            return NotImplemented
        if other.zero:
            raise exceptions.DivisionByZero(other)
        if self.is_temperature or other.is_temperature:
            raise exceptions.InvalidOperation("Cannot divide with temperatures")
        terms = eliminate_terms(
            numerical.divide(self.scalar, other.scalar),
            self.numerator + other.denominator,
            self.denominator + other.numerator,
            self._context.registry.prefix_values,
        )
        return self._new(*terms)

    def __rtruediv__(self, other):
        """Called for other / self."""
        if (other := self._coerce(other)) is None:
            return NotImplemented
        return other / self

    def __pow__(self, other):
        """Called for self ** other.

        A rational exponent ``p/q`` raises to the power ``p`` and then takes
        the ``q``th root. A float exponent must be integral or the reciprocal
        of an integer from 1 to 9.
        """
        if self.is_temperature:
            raise exceptions.InvalidOperation(
                "Cannot raise a temperature to a power"
            )
        if isinstance(other, (numpy.generic, numpy.ndarray)):
            other = numerical.normalize(other)
        if isinstance(other, fractions.Fraction):
            return self.power(other.numerator).root(other.denominator)
        if isinstance(other, numbers.Integral):
            return self.power(int(other))
        if isinstance(other, complex):
            raise exceptions.InvalidOperation(
                "Exponentiation of complex numbers is not supported"
            )
        if isinstance(other, float):
            if other.is_integer():
                return self.power(int(other))
            if other != 0:
                n = round(1 / other)
                if 1 <= abs(n) <= 9 and math.isclose(1 / other, n):
                    return self.root(n)
            raise exceptions.InvalidOperation(
                "Not an n-th root (1..9), use 1/n"
            )
        raise exceptions.InvalidOperation(f"Invalid exponent {other!r}")

    def __divmod__(self, other):
        """Called for divmod(self, other).

        The quotient is a number and the remainder has the units of `self`.
        """
        if (other := self._coerce(other)) is None:
            return NotImplemented
        if not self.compatible(other):
            raise exceptions.IncompatibleDimensions(self, other)
        if other.zero:
            raise exceptions.DivisionByZero(other)
        quotient, remainder = divmod(
            self.scalar,
            other.convert_to(self).scalar,
        )
        return numerical.collapse(quotient), self._new(
            remainder, self.numerator, self.denominator
        )

    def __mod__(self, other):
        """Called for self % other."""
        result = self.__divmod__(other)
        return result if result is NotImplemented else result[1]

    def __neg__(self):
        """Called for -self."""
        return self._new(-self.scalar, self.numerator, self.denominator)

    def __pos__(self):
        """Called for +self."""
        return self

    def __abs__(self):
        """Called for abs(self)."""
        return self._new(abs(self.scalar), self.numerator, self.denominator)

    def __round__(self, ndigits: int=None):
        """Called for round(self)."""
        return self._new(
            round(self.scalar, ndigits),
            self.numerator,
            self.denominator,
        )

    def __floor__(self):
        """Called for math.floor(self)."""
        return self._new(
            math.floor(self.scalar), self.numerator, self.denominator
        )

    def __ceil__(self):
        """Called for math.ceil(self)."""
        return self._new(
            math.ceil(self.scalar), self.numerator, self.denominator
        )

    def __trunc__(self):
        """Called for math.trunc(self)."""
        return self._new(
            math.trunc(self.scalar), self.numerator, self.denominator
        )

    def __float__(self) -> float:
        return float(self._unitless_scalar(float))

    def __int__(self) -> int:
        return int(self._unitless_scalar(int))

    def __complex__(self) -> complex:
        return complex(self._unitless_scalar(complex))

    def as_fraction(self) -> fractions.Fraction:
        """The scalar of a unitless value as a rational number."""
        return fractions.Fraction(self._unitless_scalar(fractions.Fraction))

    def _unitless_scalar(self, target: type):
        """The scalar, if this unit is unitless."""
        if not self.unitless:
            raise exceptions.InvalidOperation(
                f"Cannot convert {str(self)!r} to {target.__name__}"
                " unless unitless. Use Unit.scalar"
            )
        return self.scalar

    def to_timedelta(self) -> datetime.timedelta:
        """Convert this duration into a `datetime.timedelta`."""
        seconds = self.convert_to(self._token_unit('<second>')).scalar
        return datetime.timedelta(seconds=float(seconds))

    def copy(self) -> 'Unit':
        """Create a copy of this unit."""
        return Unit(self)

    _HANDLED_FUNCTIONS = {}

    def __array_ufunc__(self, ufunc, method, *inputs, **kwargs):
        """Provide support for `numpy` universal functions.

        Only the functions registered via `Unit.implements` are available,
        and only when called directly without keywords.
        """
        if method != '__call__' or kwargs:
            return NotImplemented
        if ufunc in self._HANDLED_FUNCTIONS:
            return self._HANDLED_FUNCTIONS[ufunc](*inputs)
        return NotImplemented

    @classmethod
    def implements(cls, numpy_function):
        """Register a `numpy` function implementation for units.

        Examples
        --------
        Support `numpy.sqrt` by taking the square root of the unit::

            @Unit.implements(numpy.sqrt)
            def sqrt(x: Unit) -> Unit:
                return x.root(2)

        """
        def decorator(func):
            cls._HANDLED_FUNCTIONS[numpy_function] = func
            return func
        return decorator

    def _new(self, scalar, numerator, denominator, signature=None) -> 'Unit':
        """Create a unit that shares this unit's context."""
        return Unit(
            scalar,
            numerator=numerator,
            denominator=denominator,
            signature=signature,
            context=self._context,
        )

    def _new_from(self, *args) -> 'Unit':
        """Create a unit from arguments, in this unit's context."""
        return Unit(*args, context=self._context)

    def _token_unit(self, token: str) -> 'Unit':
        """A unit of one `token`."""
        return self._new(1, (token,), _ONE)

    def _degree_unit(self) -> 'Unit':
        """The degree unit of this temperature's scale."""
        return self._token_unit(_DEGREES[self.numerator[0]][0])

    def _shift(self, degrees: 'Unit') -> 'Unit':
        """Add a temperature difference to this temperature."""
        offset = degrees.convert_to(self._degree_unit()).scalar
        return self._new(
            self.scalar + offset,
            self.numerator,
            self.denominator,
            signature=self._signature,
        )

    def _rescaled(self, base_scalar: numerical.Scalar) -> 'Unit':
        """A unit with these units and the given value in base units."""
        return self._new(
            numerical.divide(base_scalar, self._factor),
            self.numerator,
            self.denominator,
            signature=self._signature,
        )

    def _coerce(self, other) -> typing.Optional['Unit']:
        """Convert `other` into a unit in this context, if possible."""
        if isinstance(other, Unit):
            return other
        if isinstance(other, str):
            return self._new_from(other)
        if _is_number(other):
            return self._new(other, _ONE, _ONE)
        if isinstance(other, datetime.timedelta):
            return self._new_from(other)
        return None


def _is_number(obj) -> bool:
    """True if `obj` is a number that can become a scalar."""
    if isinstance(obj, numpy.ndarray):
        return obj.ndim == 0
    return isinstance(obj, (numbers.Number, numpy.generic))


def parse(string: str, context=None) -> Unit:
    """Create a unit from a string, with an optional conversion suffix.

    The suffix ``in <unit>``, ``to <unit>``, or ``as <unit>`` converts the
    result.

    Examples
    --------
    >>> parse('1 hour in minutes')
    unit.Unit(60 min)
    """
    context = context or contexts.default()
    if isinstance(string, str) and (match := _CONVERSION.match(string.strip())):
        unit = Unit(match['unit'], context=context)
        return unit.convert_to(match['target'].strip())
    return Unit(string, context=context)
