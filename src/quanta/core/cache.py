import re
import typing

from quanta.core import configuration
from quanta.core import iterables


_SPECIAL = re.compile(
    r"""
    temp[CFRK]                      # temperature scale points
    | deg[CFRK]                     # temperature differences
    | \d\s*(?:'|ft|feet)\s*\d       # feet and inches
    | (?:\#|lbs?|pounds?)[\s,]*\d   # pounds and ounces
    | \d\s*(?:st|stones?)\b         # stone and pounds
    | %                             # percent
    | :                             # durations
    | \d\s*[+-]?\s*\d*\.?\d*i\b     # complex numbers
    | \+/-                          # uncertainties
    """,
    re.VERBOSE,
)


class Cache(iterables.ReprStrMixin):
    """A store of scalar=1 prototype units, keyed by unit label.

    Entries are cleared in full whenever the owning registry changes.
    """

    def __init__(
        self,
        name: str='units',
        config: configuration.Configuration=None,
    ) -> None:
        self.name = name
        self.config = config or configuration.shared()
        self._store = {}

    def get(self, key: str):
        """The prototype unit for `key`, if available."""
        if not isinstance(key, str):
            return None
        return self._store.get(key.strip())

    def set(self, key: str, value) -> None:
        """Store `value` under `key`, unless `key` is a special literal."""
        if not isinstance(key, str) or self.should_skip(key):
            return
        self._store[key.strip()] = value

    def clear(self) -> None:
        """Remove all entries."""
        if self._store:
            self.config.logger.debug(
                "Clearing %d entries from %s cache", len(self._store), self.name
            )
        self._store.clear()

    def keys(self) -> typing.KeysView[str]:
        """The labels with cached prototypes."""
        return self._store.keys()

    def __contains__(self, key) -> bool:
        return isinstance(key, str) and key.strip() in self._store

    def __len__(self) -> int:
        return len(self._store)

    def should_skip(self, key: str) -> bool:
        """True if `key` must never be cached."""
        return not key.strip() or bool(_SPECIAL.search(key))

    def _get_display(self) -> str:
        return f"{self.name!r}, {len(self)} entries"
