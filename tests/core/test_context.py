import logging

import pytest

import quanta
from quanta.core import context
from quanta.core import exceptions


def test_independent_contexts(config):
    """Definitions in one context do not affect another."""
    this = context.Context(config=config)
    that = context.Context(config=config)
    this.define('jiffy', '1/100 s')
    assert this.defined('jiffy')
    assert not that.defined('jiffy')
    assert this.unit('1 jiffy').context is this
    with pytest.raises(exceptions.InvalidUnitSpecification):
        that.unit('1 jiffy')


def test_extra_definitions(config):
    """Load additional definitions at creation."""
    extra = [
        {'name': 'smoot', 'aliases': ['smoot'], 'scalar': 67, 'kind': 'length', 'numerator': ['<inch>']},
    ]
    ctx = context.Context(extra=extra, config=config)
    assert ctx.unit('1 smoot').convert_to('in').scalar == 67


def test_custom_definitions(config):
    """Replace the built-in definitions."""
    definitions = [
        {'name': 'meter', 'aliases': ['m'], 'kind': 'length', 'numerator': ['<meter>']},
    ]
    ctx = context.Context(definitions=definitions, config=config)
    assert ctx.unit('2 m').scalar == 2
    with pytest.raises(exceptions.InvalidUnitSpecification):
        ctx.unit('1 s')


def test_default_context():
    """The shared context is created once."""
    assert context.default() is context.default()
    assert quanta.Unit('1 m').context is context.default()


def test_clear_cache(ctx):
    """Remove cached units on request."""
    ctx.unit('1 ft/s').to_base()
    assert len(ctx.cache) > 0
    assert len(ctx.base_cache) > 0
    ctx.clear_cache()
    assert len(ctx.cache) == 0
    assert len(ctx.base_cache) == 0


def test_logging(ctx, caplog):
    """Changes to definitions are logged."""
    with caplog.at_level(logging.INFO, logger='quanta.test'):
        ctx.define('jiffy', '1/100 s')
        ctx.redefine('jiffy', scalar=2)
        ctx.undefine('jiffy')
    assert "Defined <jiffy>" in caplog.text
    assert "Redefined <jiffy>" in caplog.text
    assert "Undefined <jiffy>" in caplog.text


def test_package_functions():
    """Manage definitions in the shared context."""
    try:
        quanta.define('blink', '1/3 s', aliases=['blink', 'blinks'])
        assert quanta.defined('blinks')
        assert quanta.definition('blink').scalar == quanta.parse('1/3 s').scalar
        assert quanta.Unit('3 blinks').convert_to('s') == quanta.Unit('1 s')
        quanta.redefine('blink', scalar=1)
        assert quanta.parse('2 blinks in s').scalar == 2
    finally:
        quanta.undefine('blink')
    assert not quanta.defined('blink')
    quanta.clear_cache()
