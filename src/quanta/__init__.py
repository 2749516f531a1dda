import logging

from quanta.core import configuration
from quanta.core import context as _context
from quanta.core import functions
from quanta.core import temporal
from quanta.core.configuration import configure
from quanta.core.context import Context
from quanta.core.exceptions import (
    UnitError,
    InvalidUnitSpecification,
    UnrecognizedUnit,
    IncompatibleDimensions,
    InvalidOperation,
    DivisionByZero,
    ConfigurationError,
)
from quanta.core.unit import Compound, Unit, parse


# read version from installed package
from importlib.metadata import version
__version__ = version("quanta")


logging.getLogger(__name__).addHandler(logging.NullHandler())


def define(name, unit=None, **attributes):
    """Add a unit definition to the shared context."""
    return _context.default().define(name, unit, **attributes)


def redefine(name, mutator=None, **changes):
    """Change a unit definition in the shared context."""
    return _context.default().redefine(name, mutator, **changes)


def undefine(name):
    """Remove a unit definition from the shared context, if it exists."""
    return _context.default().undefine(name)


def definition(name):
    """The definition of `name` in the shared context, if any."""
    return _context.default().definition(name)


def defined(name) -> bool:
    """True if `name` is a known unit or prefix in the shared context."""
    return _context.default().defined(name)


def clear_cache():
    """Remove all cached units from the shared context."""
    return _context.default().clear_cache()
