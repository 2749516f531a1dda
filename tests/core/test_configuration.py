import logging
import pathlib

import pytest

from quanta.core import configuration
from quanta.core import exceptions


def test_defaults():
    """A new configuration has the default settings."""
    config = configuration.Configuration()
    assert config.separator == ' '
    assert config.logger is logging.getLogger('quanta')


def test_separator():
    """The separator setting accepts only booleans."""
    config = configuration.Configuration(separator=False)
    assert config.separator == ''
    config.separator = True
    assert config.separator == ' '
    with pytest.raises(exceptions.ConfigurationError):
        config.separator = 'yes'
    with pytest.raises(exceptions.ConfigurationError):
        configuration.Configuration(separator=1)


def test_logger():
    """The logger setting accepts any logger."""
    logger = logging.getLogger('custom')
    config = configuration.Configuration(logger=logger)
    assert config.logger is logger
    with pytest.raises(exceptions.ConfigurationError):
        config.logger = print


def test_update_and_reset():
    """Change settings by name, then restore the defaults."""
    config = configuration.Configuration()
    config.update(separator=False, logger=logging.getLogger('other'))
    assert config.separator == ''
    assert config.logger.name == 'other'
    with pytest.raises(exceptions.ConfigurationError):
        config.update(color='red')
    config.reset()
    assert config.separator == ' '
    assert config.logger.name == 'quanta'


def test_read(tmp_path: pathlib.Path):
    """Read settings from an INI file."""
    path = tmp_path / configuration.FILENAME
    path.write_text("[quanta]\nseparator = false\nlogger = quanta.file\n")
    config = configuration.Configuration().read(path)
    assert config.separator == ''
    assert config.logger.name == 'quanta.file'


def test_read_invalid(tmp_path: pathlib.Path):
    """Reject non-boolean separators in a file."""
    path = tmp_path / configuration.FILENAME
    path.write_text("[quanta]\nseparator = sometimes\n")
    with pytest.raises(exceptions.ConfigurationError):
        configuration.Configuration().read(path)


def test_read_other_section(tmp_path: pathlib.Path):
    """Ignore files without the package section."""
    path = tmp_path / configuration.FILENAME
    path.write_text("[other]\nseparator = false\n")
    config = configuration.Configuration().read(path)
    assert config.separator == ' '


def test_search(tmp_path: pathlib.Path):
    """Find a configuration file in a list of directories."""
    path = tmp_path / configuration.FILENAME
    path.write_text("[quanta]\n")
    empty = tmp_path / 'empty'
    empty.mkdir()
    assert configuration.search([empty, tmp_path], configuration.FILENAME) == path.resolve()
    assert configuration.search([empty], configuration.FILENAME) is None


def test_search_paths(monkeypatch, tmp_path: pathlib.Path):
    """Include the environment variable directory and the package top."""
    monkeypatch.setenv('QUANTA_INI', str(tmp_path))
    assert tmp_path in configuration.search_paths()
    paths = configuration.search_paths()
    assert paths[-1] == pathlib.Path(configuration.__file__).parent.parent
    assert paths[-1].name == 'quanta'
