import typing


class UnitError(Exception):
    """Base class for errors raised by this package."""


class InvalidUnitSpecification(UnitError, ValueError):
    """The given unit or definition is not valid."""

    def __init__(self, message: str, string: str=None) -> None:
        self.message = message
        self.string = string

    def __str__(self) -> str:
        if self.string is None:
            return self.message
        return f"{self.string!r}: {self.message}"


class UnrecognizedUnit(InvalidUnitSpecification):
    """Some part of a unit string does not match a known unit."""

    def __init__(self, string: str, fragment: str=None) -> None:
        self.string = string
        self.fragment = fragment

    def __str__(self) -> str:
        if self.fragment and self.fragment != self.string:
            return (
                f"{self.string!r} Unit not recognized"
                f" (could not interpret {self.fragment!r})"
            )
        return f"{self.string!r} Unit not recognized"


class IncompatibleDimensions(UnitError, ValueError):
    """The operands of an operation have different dimensions."""

    def __init__(
        self,
        this: typing.Any=None,
        that: typing.Any=None,
        message: str=None,
    ) -> None:
        self.this = this
        self.that = that
        self.message = message

    def __str__(self) -> str:
        if self.message:
            return self.message
        return (
            f"Incompatible units ({_label(self.this)!r}"
            f" not compatible with {_label(self.that)!r})"
        )


class InvalidOperation(UnitError, ValueError):
    """The requested operation is not defined for these operands."""


class DivisionByZero(UnitError, ZeroDivisionError):
    """Attempted to divide by a zero-valued unit or number."""

    def __init__(self, divisor: typing.Any=None) -> None:
        self.divisor = divisor

    def __str__(self) -> str:
        if self.divisor is None:
            return "Divide by zero"
        return f"Divide by zero ({self.divisor})"


class ConfigurationError(UnitError, ValueError):
    """A configuration value is not valid."""


def _label(obj: typing.Any) -> str:
    """The display string of a unit, or the string form of anything else."""
    units = getattr(obj, 'units', None)
    return str(obj) if units is None else units
