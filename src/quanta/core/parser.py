"""Conversion of unit strings into scalars and unit tokens.

The unit mini-language is ambiguous, so the parser tries a fixed sequence of
stages and accepts the first one that recognizes the string:

1. currency shorthand (``$5``)
2. complex literals (``1+2i m``)
3. rational literals, including mixed fractions (``1 1/2 m``)
4. previously parsed unit labels
5. durations (``1:23:45,200``)
6. compound literals (``6'5"``, ``8 lbs 8 oz``, ``14 st 4 lb``)
7. the general form (``5.6 kg*m/s^2``)
"""

import fractions
import functools
import operator
import re
import typing

from quanta.core import exceptions
from quanta.core import iterables
from quanta.core import numerical
from quanta.core.registry import UNITY


class Parsed(typing.NamedTuple):
    """The result of parsing a unit string."""

    scalar: numerical.Scalar
    numerator: typing.Tuple[str, ...]
    denominator: typing.Tuple[str, ...]


_UNSIGNED = r'(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?'
_NUMBER = rf'[+-]?{_UNSIGNED}'
_AMOUNT = r'\d+(?:\.\d+)?(?:/\d+)?'

_REPLACEMENTS = {
    '°': 'deg',
    '%': 'percent',
    "'": 'feet',
    '"': 'inch',
    '#': 'pound',
}

_CURRENCY = re.compile(
    rf"""
    ^\$\s*(?P<number>{_NUMBER})     # the amount
    \s*(?P<unit>.*)$                # an optional trailing unit
    """,
    re.VERBOSE,
)

_COMPLEX = re.compile(
    rf"""
    ^(?:
        (?P<real>{_NUMBER})(?P<imag>[+-]{_UNSIGNED})    # a+bi
        | (?P<pure>{_NUMBER})                           # bi
    )i\b
    \s*(?P<unit>.*)$
    """,
    re.VERBOSE,
)

_RATIONAL = re.compile(
    r"""
    ^(?:(?P<whole>[+-]?\d+)[ -])?   # the whole part of a mixed fraction
    \(?
    (?P<numerator>[+-]?\d+)
    /
    (?P<denominator>\d+)
    \)?
    \s*(?P<unit>.*)$
    """,
    re.VERBOSE,
)

_POWER_DIVISION = re.compile(r'\^\d+/\d+')

_LEADING = re.compile(rf'^(?P<number>{_NUMBER})?\s*(?P<unit>.*)$')

_DURATION = re.compile(
    r"""
    ^(?P<hours>\d+)?
    :(?P<minutes>\d+)?
    (?::(?P<seconds>\d+(?:\.\d+)?))?
    (?:[:,](?P<microseconds>\d+))?$
    """,
    re.VERBOSE,
)

_FEET_INCHES = re.compile(
    rf"""
    ^(?P<feet>{_AMOUNT})\s*(?:feet|foot|ft)
    \s*,?\s*
    (?P<inches>{_AMOUNT})\s*(?:inches|inch|in)?$
    """,
    re.VERBOSE,
)

_POUNDS_OUNCES = re.compile(
    rf"""
    ^(?P<pounds>{_AMOUNT})\s*(?:pound-mass|pounds|pound|lbs|lbm|lb)
    [\s,]*
    (?P<ounces>{_AMOUNT})\s*(?:ounces|ounce|oz)$
    """,
    re.VERBOSE,
)

_STONE_POUNDS = re.compile(
    rf"""
    ^(?P<stone>{_AMOUNT})\s*(?:stones|stone|st)
    [\s,]*
    (?P<pounds>{_AMOUNT})\s*(?:pounds|pound|lbs|lb)?$
    """,
    re.VERBOSE,
)

_GENERAL = re.compile(
    rf"""
    ^(?P<number>{_NUMBER})?         # an optional coefficient
    \s*(?P<top>[^/]*)               # the numerator expression
    (?:/(?P<bottom>.*))?$           # the optional denominator expression
    """,
    re.VERBOSE,
)

_EXPONENT = re.compile(r'(?P<item>[^\s*/^]+)(?:\^|\*\*)(?P<power>[+-]?\d+)')

_ADJACENT_TOKENS = re.compile(r"<(?P<left>[^<>]+)>\s*(?=<)")

_TOKEN = re.compile(r"(<[^<>]+>)")

_STRAY_NUMBER = re.compile(r'\s[02-9]')

_IGNORED = re.compile(r"""[\d*, "'_^/$]""")

_MAX_POWER = 20


class Parser:
    """A parser bound to the registry and caches of a context.

    Parameters
    ----------
    context : `~context.Context`
        The context that supplies definitions, caches, and the factory used
        to build intermediate units.
    """

    def __init__(self, context) -> None:
        self.context = context

    @property
    def stages(self):
        """The parsing stages, in priority order."""
        return (
            self._currency,
            self._complex,
            self._rational,
            self._cached,
            self._duration,
            self._compound,
            self._general,
        )

    def parse(self, string: str) -> Parsed:
        """Convert `string` into a scalar and unit tokens.

        Raises
        ------
        `~exceptions.InvalidUnitSpecification`
            The string is blank or does not describe a unit.
        """
        if not isinstance(string, str):
            raise exceptions.InvalidUnitSpecification(
                f"Can't parse object of type {type(string)}"
            ) from None
        if not string.strip():
            raise exceptions.InvalidUnitSpecification("No unit specified")
        return self._parse(self.normalize(string), string)

    def normalize(self, string: str) -> str:
        """Replace symbolic shorthand with the equivalent unit names."""
        return iterables.batch_replace(string.strip(), _REPLACEMENTS)

    def _parse(self, text: str, original: str) -> Parsed:
        """Apply each stage to `text` until one succeeds."""
        return iterables.apply(self.stages, text.strip(), original)

    def _scaled(
        self,
        factor: numerical.Scalar,
        rest: str,
        original: str,
    ) -> Parsed:
        """Multiply the parsed remainder of a string by a coefficient."""
        if not rest.strip():
            return Parsed(factor, (UNITY,), (UNITY,))
        parsed = self._parse(rest, original)
        return Parsed(
            numerical.multiply(factor, parsed.scalar),
            parsed.numerator,
            parsed.denominator,
        )

    def _currency(self, text: str, original: str):
        """Rewrite ``$N ...`` as ``N USD ...``."""
        if not (match := _CURRENCY.match(text)):
            return None
        number, unit = match['number'], match['unit'].strip()
        if not unit:
            rewritten = f"{number} USD"
        elif unit.startswith('/'):
            rewritten = f"{number} USD{unit}"
        else:
            rewritten = f"{number} USD*{unit}"
        return self._parse(rewritten, original)

    def _complex(self, text: str, original: str):
        """Parse a complex coefficient and an optional unit."""
        if not (match := _COMPLEX.match(text)):
            return None
        if match['pure'] is not None:
            value = complex(0, float(match['pure']))
        else:
            value = complex(float(match['real']), float(match['imag']))
        return self._scaled(value, match['unit'], original)

    def _rational(self, text: str, original: str):
        """Parse a rational coefficient and an optional unit."""
        if _POWER_DIVISION.search(text):
            return None
        if not (match := _RATIONAL.match(text)):
            return None
        try:
            value = fractions.Fraction(
                int(match['numerator']),
                int(match['denominator']),
            )
        except ZeroDivisionError:
            raise exceptions.InvalidUnitSpecification(
                "Malformed numeric literal (zero denominator)", original
            ) from None
        if whole := match['whole']:
            whole = int(whole)
            sign = -1 if match['whole'].startswith('-') else 1
            value = sign * (abs(whole) + value)
        return self._scaled(numerical.collapse(value), match['unit'], original)

    def _cached(self, text: str, original: str):
        """Reuse the tokens of a previously parsed unit label."""
        match = _LEADING.match(text)
        label = match['unit'].strip()
        if not label:
            return None
        if (prototype := self.context.cache.get(label)) is None:
            return None
        number = match['number']
        try:
            scalar = numerical.literal(number) if number else 1
        except ValueError:
            raise exceptions.InvalidUnitSpecification(
                "Malformed numeric literal", original
            ) from None
        return Parsed(
            numerical.multiply(scalar, prototype.scalar),
            prototype.numerator,
            prototype.denominator,
        )

    def _duration(self, text: str, original: str):
        """Parse a duration of the form ``H:M:S,u``."""
        if ':' not in text:
            return None
        if not (match := _DURATION.match(text)):
            raise exceptions.InvalidUnitSpecification(
                "Invalid duration", original
            ) from None
        parts = [
            (match[key], token) for key, token in (
                ('hours', '<hour>'),
                ('minutes', '<minute>'),
                ('seconds', '<second>'),
                ('microseconds', '<micro><second>'),
            )
        ]
        if all(value is None for value, _ in parts):
            raise exceptions.InvalidUnitSpecification(
                "Invalid duration", original
            ) from None
        total = self._sum(
            [(value or '0', token) for value, token in parts]
        )
        self.context.config.logger.debug("Parsed %r as a duration", original)
        return total

    def _compound(self, text: str, original: str):
        """Parse a sum of two units, such as feet and inches."""
        forms = (
            (_FEET_INCHES, ('feet', '<foot>'), ('inches', '<inch>')),
            (_POUNDS_OUNCES, ('pounds', '<pound>'), ('ounces', '<ounce>')),
            (_STONE_POUNDS, ('stone', '<stone>'), ('pounds', '<pound>')),
        )
        for pattern, *groups in forms:
            if match := pattern.match(text):
                self.context.config.logger.debug(
                    "Parsed %r as a compound literal", original
                )
                return self._sum(
                    [(match[group], token) for group, token in groups]
                )

    def _sum(self, parts: typing.List[typing.Tuple[str, str]]) -> Parsed:
        """Add amounts of units, expressed in the first unit."""
        build = self.context.unit
        units = [
            build(
                numerical.literal(amount),
                numerator=re.findall(r'<[^<>]+>', token),
            )
            for amount, token in parts
        ]
        total = functools.reduce(operator.add, units)
        result = total.convert_to(units[0])
        return Parsed(result.scalar, result.numerator, result.denominator)

    def _general(self, text: str, original: str) -> Parsed:
        """Parse the general algebraic form of a unit."""
        string = _ADJACENT_TOKENS.sub(self._join_tokens, text)
        if string.count('/') > 1:
            raise exceptions.InvalidUnitSpecification(
                "Unit not recognized (more than one '/')", original
            ) from None
        if _STRAY_NUMBER.search(string):
            raise exceptions.UnrecognizedUnit(original)
        if not (match := _GENERAL.match(string)):
            raise exceptions.UnrecognizedUnit(original)
        number = match['number']
        top, bottom = self._expand(
            match['top'] or '',
            match['bottom'] or '',
            original,
        )
        pattern = self.context.registry.pattern
        words = _TOKEN.sub(' ', f"{top} {bottom}")
        residue = _IGNORED.sub('', pattern.sub('', words))
        if residue:
            raise exceptions.UnrecognizedUnit(original, residue)
        try:
            scalar = numerical.literal(number) if number else 1
        except ValueError:
            raise exceptions.InvalidUnitSpecification(
                "Malformed numeric literal", original
            ) from None
        numerator = self._tokenize(top, original) or [UNITY]
        denominator = self._tokenize(bottom, original) or [UNITY]
        self._remember(string, numerator, denominator)
        return Parsed(scalar, tuple(numerator), tuple(denominator))

    def _join_tokens(self, match: re.Match) -> str:
        """Multiply adjacent explicit tokens, unless the first is a prefix."""
        definition = self.context.registry.definition(f"<{match['left']}>")
        if definition is not None and definition.prefix:
            return f"<{match['left']}>"
        return f"<{match['left']}>*"

    def _expand(self, top: str, bottom: str, original: str):
        """Replace powers with repeated terms.

        A negative power moves the repeated term to the other side of the
        division.
        """
        moved = {'top': [], 'bottom': []}

        def replace(side: str, other: str):
            def repl(match: re.Match) -> str:
                item, power = match['item'], int(match['power'])
                if abs(power) >= _MAX_POWER:
                    raise exceptions.InvalidUnitSpecification(
                        "Power out of range (-20 < net power of a unit < 20)",
                        original,
                    ) from None
                if power < 0:
                    moved[other].extend([item] * -power)
                    return ' '
                return f" {' '.join([item] * power)} "
            return repl

        top = _EXPONENT.sub(replace('top', 'bottom'), top)
        bottom = _EXPONENT.sub(replace('bottom', 'top'), bottom)
        return (
            ' '.join([top, *moved['top']]),
            ' '.join([bottom, *moved['bottom']]),
        )

    def _tokenize(self, expression: str, original: str) -> typing.List[str]:
        """Convert an expression into a flat list of unit tokens.

        Explicit tokens (e.g., ``<kilo><meter>``) must name a definition, and
        each explicit prefix must precede a unit.
        """
        definitions = self.context.registry
        tokens = []
        for i, piece in enumerate(_TOKEN.split(expression)):
            if i % 2:
                if piece == UNITY:
                    continue
                if (definition := definitions.definition(piece)) is None:
                    raise exceptions.UnrecognizedUnit(original, piece)
                tokens.append(definition.token)
                continue
            for prefix, unit in definitions.pattern.findall(piece):
                if prefix:
                    tokens.append(definitions.prefix_map[prefix])
                tokens.append(definitions.unit_map[unit])
        prefixes = definitions.prefix_values
        for token, following in zip(tokens, [*tokens[1:], None]):
            if token in prefixes and (following is None or following in prefixes):
                raise exceptions.UnrecognizedUnit(original, token)
        return tokens

    def _remember(
        self,
        string: str,
        numerator: typing.List[str],
        denominator: typing.List[str],
    ) -> None:
        """Cache a prototype for the unit part of `string`."""
        label = _LEADING.match(string)['unit'].strip()
        cache = self.context.cache
        if not label or label in cache or cache.should_skip(label):
            return
        prototype = self.context.unit(
            1,
            numerator=numerator,
            denominator=denominator,
        )
        with self.context.lock:
            cache.set(label, prototype)
