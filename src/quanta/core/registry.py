import collections.abc
import copy
import re
import typing

from quanta.core import configuration
from quanta.core import exceptions
from quanta.core import iterables
from quanta.core import numerical


UNITY = '<1>'
"""The token of the dimensionless identity unit."""


_TOKEN = re.compile(r'^<[^<>]+>$')


def tokenize(name: str) -> str:
    """Convert a unit name into its canonical bracketed token."""
    name = name.strip()
    return name if _TOKEN.match(name) else f"<{name}>"


class Definition(iterables.ReprStrMixin):
    """The definition of a single unit or prefix.

    A definition states that one of the named unit equals `scalar` times the
    product of the tokens in `numerator` divided by the product of the tokens
    in `denominator`. Every attribute except the name may be changed after
    construction; `Registry.define` validates the result before accepting it.

    Parameters
    ----------
    name : string
        The unit's name, with or without angle brackets.

    aliases : iterable of strings, optional
        The strings that refer to this unit in the unit mini-language. The
        first alias is the display name. The bare name is always an alias.

    scalar : number, default=1
        The conversion factor to the numerator and denominator units.

    kind : string, optional
        The dimension category of this unit, or ``'prefix'``.

    numerator, denominator : iterable of tokens, optional
        The units in terms of which this unit is defined. Missing or empty
        values become ``['<1>']``.

    display_name : string, optional
        An explicit display name. It becomes the first alias.
    """

    def __init__(
        self,
        name: str,
        aliases: typing.Iterable[str]=None,
        scalar: numerical.Scalar=1,
        kind: str=None,
        numerator: typing.Iterable[str]=None,
        denominator: typing.Iterable[str]=None,
        display_name: str=None,
    ) -> None:
        if not isinstance(name, str) or not name.strip('<> '):
            raise exceptions.InvalidUnitSpecification(
                "Unit definition requires a name"
            ) from None
        self._token = tokenize(name)
        self._aliases = list(aliases or [])
        self.scalar = scalar
        self.kind = kind
        self.numerator = numerator
        self.denominator = denominator
        if display_name is not None:
            self.display_name = display_name
        self.validate()

    @classmethod
    def from_unit(cls, name: str, unit, **kwargs):
        """Define `name` as equivalent to an existing unit.

        The unit is reduced to base units, so the new definition does not
        depend on the definitions of intermediate units.
        """
        base = unit.to_base()
        return cls(
            name,
            scalar=base.scalar,
            kind=unit.kind,
            numerator=base.numerator,
            denominator=base.denominator,
            **kwargs,
        )

    @property
    def token(self) -> str:
        """The canonical bracketed token (e.g., ``'<meter>'``)."""
        return self._token

    @property
    def name(self) -> str:
        """The unit's name, without angle brackets."""
        return self._token[1:-1]

    @property
    def aliases(self) -> typing.List[str]:
        """All strings that refer to this unit, display name first."""
        return iterables.unique([*self._aliases, self.name])

    @aliases.setter
    def aliases(self, new: typing.Iterable[str]):
        self._aliases = list(new)

    @property
    def display_name(self) -> str:
        """The alias used when formatting units."""
        return self.aliases[0]

    @display_name.setter
    def display_name(self, new: str):
        self._aliases = [new, *(a for a in self._aliases if a != new)]

    @property
    def numerator(self) -> typing.List[str]:
        """The tokens in the numerator of this definition."""
        return self._numerator

    @numerator.setter
    def numerator(self, new: typing.Optional[typing.Iterable[str]]):
        self._numerator = list(new or []) or [UNITY]

    @property
    def denominator(self) -> typing.List[str]:
        """The tokens in the denominator of this definition."""
        return self._denominator

    @denominator.setter
    def denominator(self, new: typing.Optional[typing.Iterable[str]]):
        self._denominator = list(new or []) or [UNITY]

    @property
    def prefix(self) -> bool:
        """True if this definition is a prefix."""
        return self.kind == 'prefix'

    @property
    def base(self) -> bool:
        """True if this definition is a base unit."""
        return (
            self.scalar == 1
            and self.numerator == [self.token]
            and self.denominator == [UNITY]
        )

    @property
    def unity(self) -> bool:
        """True if this definition is a prefix with unit scalar."""
        return self.prefix and self.scalar == 1

    def validate(self):
        """Raise an exception if this definition is inconsistent."""
        for alias in self.aliases:
            if not isinstance(alias, str) or not alias.strip():
                raise exceptions.InvalidUnitSpecification(
                    f"Invalid alias {alias!r}", self.token
                ) from None
        try:
            self.scalar = numerical.normalize(self.scalar)
        except TypeError:
            raise exceptions.InvalidUnitSpecification(
                f"Invalid scalar {self.scalar!r}", self.token
            ) from None
        for token in (*self.numerator, *self.denominator):
            if not isinstance(token, str) or not _TOKEN.match(token):
                raise exceptions.InvalidUnitSpecification(
                    f"Invalid token {token!r}", self.token
                ) from None
        return self

    def copy(self):
        """Create an independent copy of this definition."""
        new = copy.copy(self)
        new._aliases = list(self._aliases)
        new._numerator = list(self._numerator)
        new._denominator = list(self._denominator)
        return new

    def _get_display(self) -> str:
        return f"{self.token}, aliases={self.aliases}, kind={self.kind!r}"


Record = typing.Union[Definition, typing.Mapping[str, typing.Any]]

UnitValue = typing.Tuple[numerical.Scalar, typing.Tuple[str, ...], typing.Tuple[str, ...]]


class Registry(collections.abc.Mapping):
    """The collection of known units and prefixes.

    A registry maps canonical tokens to definitions, maps every alias of a
    prefix or unit to its token, and builds the regular expression that
    scans unit expressions for (prefix, unit) pairs.

    Parameters
    ----------
    definitions : iterable, optional
        Definition instances or mappings of `Definition` arguments to load,
        in order.

    config : `~configuration.Configuration`, optional
        The configuration that supplies the logger. Defaults to the shared
        configuration.
    """

    _mutable = ('aliases', 'display_name', 'scalar', 'kind', 'numerator', 'denominator')

    def __init__(
        self,
        definitions: typing.Iterable[Record]=None,
        config: configuration.Configuration=None,
    ) -> None:
        self.config = config or configuration.shared()
        self._definitions: typing.Dict[str, Definition] = {}
        self._prefix_map: typing.Dict[str, str] = {}
        self._unit_map: typing.Dict[str, str] = {}
        self._subscribers = []
        self._pattern = None
        self._prefix_values = None
        self._unit_values = None
        for record in definitions or ():
            self._insert(self._coerce(record))
        self.config.logger.debug("Loaded %d definitions", len(self))

    def __len__(self) -> int:
        return len(self._definitions)

    def __iter__(self) -> typing.Iterator[str]:
        return iter(self._definitions)

    def __getitem__(self, key: str) -> Definition:
        """Look up a definition by token, name, or alias."""
        if (definition := self.definition(key)) is not None:
            return definition
        raise KeyError(f"No definition for {key!r}") from None

    def __contains__(self, key) -> bool:
        return isinstance(key, str) and self.definition(key) is not None

    def subscribe(self, callback: typing.Callable[[], typing.Any]):
        """Call `callback` with no arguments after every mutation."""
        self._subscribers.append(callback)
        return callback

    def define(self, record: Record) -> Definition:
        """Add a definition, replacing any with the same name."""
        definition = self._insert(self._coerce(record))
        self.config.logger.info("Defined %s", definition.token)
        self._invalidate()
        return definition

    def redefine(
        self,
        name: str,
        mutator: typing.Callable[[Definition], typing.Any]=None,
        **changes
    ) -> Definition:
        """Change an existing definition.

        Parameters
        ----------
        name : string
            The token, name, or alias of the definition to change.

        mutator : callable, optional
            A function that accepts a copy of the current definition and
            modifies it in place.

        **changes
            New values of definition attributes (``aliases``,
            ``display_name``, ``scalar``, ``kind``, ``numerator``,
            ``denominator``), applied after `mutator`.
        """
        current = self.definition(name)
        if current is None:
            raise exceptions.UnrecognizedUnit(name)
        if mutator is None and not changes:
            raise exceptions.InvalidUnitSpecification(
                "Redefining a unit requires a mutator or new attribute values",
                name,
            )
        if unknown := set(changes) - set(self._mutable):
            raise exceptions.InvalidUnitSpecification(
                f"Can't redefine attribute(s) {sorted(unknown)}", name
            )
        updated = current.copy()
        if mutator is not None:
            mutator(updated)
        for attr, value in changes.items():
            setattr(updated, attr, value)
        self._remove(current.token)
        try:
            self._insert(updated)
        except exceptions.UnitError:
            self._insert(current)
            raise
        self.config.logger.info("Redefined %s", updated.token)
        self._invalidate()
        return updated

    def undefine(self, name: str) -> None:
        """Remove a definition, if it exists."""
        if (definition := self.definition(name)) is None:
            return
        self._remove(definition.token)
        self.config.logger.info("Undefined %s", definition.token)
        self._invalidate()

    def definition(self, name: str) -> typing.Optional[Definition]:
        """Find a definition by token, name, or alias."""
        if not isinstance(name, str):
            return None
        key = name.strip()
        if key in self._definitions:
            return self._definitions[key]
        if (token := tokenize(key)) in self._definitions:
            return self._definitions[token]
        for aliases in (self._unit_map, self._prefix_map):
            if key in aliases:
                return self._definitions[aliases[key]]

    def defined(self, name: str) -> bool:
        """True if `name` refers to a known unit or prefix."""
        return self.definition(name) is not None

    @property
    def prefix_map(self) -> typing.Dict[str, str]:
        """The mapping from prefix alias to prefix token."""
        return self._prefix_map

    @property
    def unit_map(self) -> typing.Dict[str, str]:
        """The mapping from unit alias to unit token."""
        return self._unit_map

    @property
    def prefix_values(self) -> typing.Dict[str, numerical.Scalar]:
        """The scalar value of each prefix token."""
        if self._prefix_values is None:
            self._prefix_values = {
                token: definition.scalar
                for token, definition in self._definitions.items()
                if definition.prefix
            }
        return self._prefix_values

    @property
    def unit_values(self) -> typing.Dict[str, UnitValue]:
        """The scalar, numerator, and denominator of each unit token."""
        if self._unit_values is None:
            self._unit_values = {
                token: (
                    definition.scalar,
                    tuple(definition.numerator),
                    tuple(definition.denominator),
                )
                for token, definition in self._definitions.items()
                if not definition.prefix
            }
        return self._unit_values

    @property
    def pattern(self) -> typing.Pattern[str]:
        """The regular expression that matches one (prefix, unit) pair.

        The expression has two groups: the (possibly empty) prefix alias and
        the unit alias. Aliases appear longest first, so that a short alias
        that begins a longer one never shadows the longer match, and the
        prefix group is lazy, so that a whole unit alias wins over a
        prefix-unit split of the same characters.
        """
        if self._pattern is None:
            prefixes = _alternatives(self._prefix_map)
            units = _alternatives(self._unit_map)
            self._pattern = re.compile(
                rf"((?:{prefixes})??)({units})\b"
            )
        return self._pattern

    def _coerce(self, record: Record) -> Definition:
        """Create a definition from `record`, if necessary."""
        if isinstance(record, Definition):
            return record
        if isinstance(record, typing.Mapping):
            return Definition(**record)
        raise exceptions.InvalidUnitSpecification(
            f"Can't create a definition from {record!r}"
        ) from None

    def _insert(self, definition: Definition) -> Definition:
        """Store a validated definition and index its aliases."""
        definition.validate()
        token = definition.token
        aliases = self._prefix_map if definition.prefix else self._unit_map
        for alias in definition.aliases:
            owner = aliases.get(alias)
            if owner is not None and owner != token:
                raise exceptions.InvalidUnitSpecification(
                    f"Alias {alias!r} already refers to {owner}", token
                ) from None
        self._remove(token)
        self._definitions[token] = definition
        aliases.update({alias: token for alias in definition.aliases})
        return definition

    def _remove(self, token: str) -> None:
        """Remove a definition and its aliases without notification."""
        if self._definitions.pop(token, None) is None:
            return
        for aliases in (self._prefix_map, self._unit_map):
            for alias in [a for a, t in aliases.items() if t == token]:
                del aliases[alias]

    def _invalidate(self) -> None:
        """Reset derived state and notify subscribers."""
        self._pattern = None
        self._prefix_values = None
        self._unit_values = None
        for callback in self._subscribers:
            callback()


def _alternatives(aliases: typing.Iterable[str]) -> str:
    """Join aliases into a longest-first regular-expression alternation."""
    ordered = sorted(aliases, key=lambda a: (-len(a), a))
    return '|'.join(re.escape(alias) for alias in ordered)
