"""The definitions, caches, and settings that units share.

Every unit belongs to a context. The shared default context loads the
built-in definitions on first use. Separate contexts are fully independent,
which makes them useful for isolating custom definitions.
"""

import threading
import typing

from quanta.core import cache
from quanta.core import configuration
from quanta.core import definitions as builtin
from quanta.core import parser
from quanta.core import registry


class Context:
    """A registry of definitions with the caches that depend on it.

    Parameters
    ----------
    definitions : iterable, optional
        The definitions to load in place of the built-in definitions.

    extra : iterable, optional
        Additional definitions to load after the others.

    config : `~configuration.Configuration`, optional
        The settings for this context. Defaults to the shared configuration.
    """

    def __init__(
        self,
        definitions: typing.Iterable[registry.Record]=None,
        extra: typing.Iterable[registry.Record]=None,
        config: configuration.Configuration=None,
    ) -> None:
        self.config = config or configuration.shared()
        self.lock = threading.RLock()
        records = [*(definitions or builtin.DEFINITIONS), *(extra or ())]
        self.registry = registry.Registry(records, config=self.config)
        self.cache = cache.Cache('units', config=self.config)
        self.base_cache = cache.Cache('base units', config=self.config)
        self.parser = parser.Parser(self)
        self.registry.subscribe(self.clear_cache)

    def unit(self, *args, **kwargs):
        """Create a unit that belongs to this context."""
        from quanta.core import unit
        return unit.Unit(*args, context=self, **kwargs)

    def parse(self, string: str):
        """Create a unit from a string with an optional conversion suffix."""
        from quanta.core import unit
        return unit.parse(string, context=self)

    def define(
        self,
        name: typing.Union[str, registry.Record],
        unit=None,
        **attributes
    ) -> registry.Definition:
        """Add a new unit definition.

        Parameters
        ----------
        name : string, `~registry.Definition`, or mapping
            The name of the new unit, or a complete definition.

        unit : string or `~unit.Unit`, optional
            A unit that equals one of the new unit. The definition uses its
            scalar and base-unit tokens.

        **attributes
            Further `~registry.Definition` arguments (e.g., ``aliases``).

        Examples
        --------
        >>> context.define('jiffy', '1/100 s', aliases=['jiffy', 'jiffies'])
        """
        if unit is not None:
            record = registry.Definition.from_unit(
                name,
                self.unit(unit),
                **attributes,
            )
        elif isinstance(name, str):
            record = registry.Definition(name, **attributes)
        else:
            record = name
        with self.lock:
            return self.registry.define(record)

    def redefine(self, name: str, mutator=None, **changes) -> registry.Definition:
        """Change an existing unit definition.

        A `unit` keyword replaces the scalar, numerator, and denominator with
        those of the given unit in base units.
        """
        if (unit := changes.pop('unit', None)) is not None:
            base = self.unit(unit).to_base()
            changes.update(
                scalar=base.scalar,
                numerator=base.numerator,
                denominator=base.denominator,
            )
        with self.lock:
            return self.registry.redefine(name, mutator, **changes)

    def undefine(self, name: str) -> None:
        """Remove a unit definition, if it exists."""
        with self.lock:
            self.registry.undefine(name)

    def definition(self, name: str) -> typing.Optional[registry.Definition]:
        """The definition of `name`, if any."""
        return self.registry.definition(name)

    def defined(self, name: str) -> bool:
        """True if `name` refers to a known unit or prefix."""
        return self.registry.defined(name)

    def clear_cache(self) -> None:
        """Remove all cached units."""
        with self.lock:
            self.cache.clear()
            self.base_cache.clear()

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}({len(self.registry)} definitions)"


_DEFAULT = None


def default() -> Context:
    """The context used when none is given explicitly."""
    global _DEFAULT
    if _DEFAULT is None:
        _DEFAULT = Context()
    return _DEFAULT
