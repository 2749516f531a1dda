import logging

import pytest

from quanta.core import configuration
from quanta.core import context


@pytest.fixture
def config() -> configuration.Configuration:
    """An independent configuration with default settings."""
    return configuration.Configuration(logger=logging.getLogger('quanta.test'))


@pytest.fixture
def ctx(config: configuration.Configuration) -> context.Context:
    """A context with the built-in definitions and empty caches.

    Tests that define, redefine, or undefine units should use this fixture
    so that their changes do not leak into the shared context.
    """
    return context.Context(config=config)


@pytest.fixture
def unit(ctx: context.Context):
    """A factory for units in the test context."""
    return ctx.unit
