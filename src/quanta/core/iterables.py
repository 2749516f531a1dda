import collections
import typing


T = typing.TypeVar('T')


class ReprStrMixin:
    """A mixin class that provides support for `__repr__` and `__str__`."""

    def __str__(self) -> str:
        """A simplified representation of this object."""
        return self._get_display()

    def __repr__(self) -> str:
        """An unambiguous representation of this object."""
        module = f"{self.__module__.replace('quanta.core.', '')}."
        name = self.__class__.__qualname__
        return f"{module}{name}({self})"

    def _get_display(self) -> str:
        """Helper method for `__str__` and `__repr__`."""
        return object.__repr__(self)


def unique(items: typing.Iterable[T]) -> typing.List[T]:
    """Remove repeated items while preserving order."""
    collection = []
    for item in items:
        if item not in collection:
            collection.append(item)
    return collection


def tally(items: typing.Iterable[T]) -> typing.Dict[T, int]:
    """Count occurrences of each item, in order of first appearance."""
    counts = collections.Counter()
    order = []
    for item in items:
        if item not in counts:
            order.append(item)
        counts[item] += 1
    return {item: counts[item] for item in order}


def batch_replace(string: str, replacement: typing.Mapping[str, str]) -> str:
    """Replace substrings in a string based on a mapping."""
    for old, new in replacement.items():
        string = string.replace(old, new)
    return string


R = typing.TypeVar('R')
def apply(
    methods: typing.Iterable[typing.Callable[..., R]],
    *args,
    **kwargs,
) -> typing.Optional[R]:
    """Apply the given methods until one returns a non-null result."""
    gen = (method(*args, **kwargs) for method in methods)
    return next((match for match in gen if match is not None), None)

