"""Process-wide settings that control formatting and diagnostics.

The shared configuration reads an optional ``quanta.ini`` file on first use.
The file may contain a ``[quanta]`` section with the keys ``separator`` (a
boolean) and ``logger`` (the name of a logger to use).
"""

import configparser
import logging
import os
import pathlib
import typing

from quanta.core import exceptions


FILENAME = 'quanta.ini'
"""The name of the optional configuration file."""

SECTION = 'quanta'
"""The section of the configuration file that this package reads."""


def search_paths() -> typing.List[pathlib.Path]:
    """The directories to search for a configuration file, in order."""
    home = pathlib.Path('~').expanduser()
    paths = [
        pathlib.Path.cwd(), # The current working directory
        home, # The user's home directory
        home / '.config', # Linux standard (local)
        '/etc/quanta', # Linux standard (global)
        os.environ.get('QUANTA_INI'), # A known environment variable
        pathlib.Path(__file__).parent.parent, # The package top
    ]
    return [pathlib.Path(path) for path in paths if path]


def search(
    paths: typing.Iterable[pathlib.Path],
    file: str,
) -> typing.Optional[pathlib.Path]:
    """Search `paths` for `file`.

    Parameters
    ----------
    paths : iterable of path-like
        The paths to search, in the order given.

    file : string
        The name of the file to locate.

    Returns
    -------
    path or `None`
        The full path to the file, if found.
    """
    for p in paths:
        path = pathlib.Path(p).expanduser().resolve()
        if path.is_file() and path.name == file:
            return path
        if path.is_dir():
            test = path / file
            if test.is_file():
                return test


class Configuration:
    """Settings read by the formatting and parsing code.

    Parameters
    ----------
    separator : bool, default=True
        If true, separate the scalar from the unit label with a space when
        formatting a unit.

    logger : `logging.Logger`, optional
        The logger that receives diagnostic messages. Defaults to the
        package logger.
    """

    def __init__(
        self,
        separator: bool=True,
        logger: logging.Logger=None,
    ) -> None:
        self._separator = None
        self._logger = None
        self.separator = separator
        self.logger = logger

    @property
    def separator(self) -> str:
        """The string between the scalar and the unit label."""
        return self._separator

    @separator.setter
    def separator(self, value: bool):
        if not isinstance(value, bool):
            raise exceptions.ConfigurationError(
                "configuration 'separator' may only be true or false"
            ) from None
        self._separator = ' ' if value else ''

    @property
    def logger(self) -> logging.Logger:
        """The logger that receives diagnostic messages."""
        return self._logger

    @logger.setter
    def logger(self, value: typing.Optional[logging.Logger]):
        if value is None:
            value = logging.getLogger('quanta')
        if not isinstance(value, logging.Logger):
            raise exceptions.ConfigurationError(
                f"configuration 'logger' must be a logging.Logger, not {type(value)}"
            ) from None
        self._logger = value

    def update(self, **settings) -> 'Configuration':
        """Change one or more settings by name."""
        for key, value in settings.items():
            if key not in ('separator', 'logger'):
                raise exceptions.ConfigurationError(
                    f"Unknown configuration setting {key!r}"
                ) from None
            setattr(self, key, value)
        return self

    def reset(self) -> 'Configuration':
        """Restore the default settings."""
        self.separator = True
        self.logger = None
        return self

    def read(self, path: typing.Union[str, os.PathLike]) -> 'Configuration':
        """Update settings from the ``[quanta]`` section of an INI file."""
        parser = configparser.ConfigParser()
        parser.read(path)
        if not parser.has_section(SECTION):
            return self
        section = parser[SECTION]
        if 'separator' in section:
            try:
                self.separator = section.getboolean('separator')
            except ValueError:
                raise exceptions.ConfigurationError(
                    "configuration 'separator' may only be true or false"
                ) from None
        if 'logger' in section:
            self.logger = logging.getLogger(section['logger'])
        self.logger.debug("Read configuration from %s", path)
        return self

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}"
            f"(separator={self.separator!r}, logger={self.logger.name!r})"
        )


_SHARED = None


def shared() -> Configuration:
    """The configuration used when none is given explicitly."""
    global _SHARED
    if _SHARED is None:
        _SHARED = Configuration()
        if path := search(search_paths(), FILENAME):
            _SHARED.read(path)
    return _SHARED


def configure(**settings) -> Configuration:
    """Update the shared configuration.

    Examples
    --------
    Print units without a space between the scalar and the unit::

        >>> quanta.configure(separator=False)
    """
    return shared().update(**settings)
