import pytest

from quanta.core import cache


@pytest.fixture
def store(config):
    """An empty cache."""
    return cache.Cache('test', config=config)


def test_set_and_get(store: cache.Cache):
    """Store and retrieve entries by label."""
    store.set('m/s', 'speed')
    assert store.get('m/s') == 'speed'
    assert store.get(' m/s ') == 'speed'
    assert 'm/s' in store
    assert len(store) == 1
    assert list(store.keys()) == ['m/s']
    assert store.get('kg') is None
    assert store.get(1) is None


def test_special_keys(store: cache.Cache):
    """Never cache labels that need special parsing."""
    special = [
        'tempC',
        'degF',
        "6'5",
        'lbs 8 oz',
        '14 st',
        '%',
        '1:30',
        '1+2i',
        '1 +/- 0.1',
        '',
    ]
    for key in special:
        assert store.should_skip(key), key
        store.set(key, 'value')
    assert len(store) == 0
    for key in ['m', 'kg*m/s^2', 'ft', 'lbs', 'in']:
        assert not store.should_skip(key), key


def test_clear(store: cache.Cache, caplog):
    """Clearing removes all entries."""
    store.set('m', 1)
    store.set('s', 2)
    with caplog.at_level('DEBUG', logger='quanta.test'):
        store.clear()
    assert len(store) == 0
    assert "Clearing 2 entries from test cache" in caplog.text


def test_display(store: cache.Cache):
    """The cache has a descriptive representation."""
    assert repr(store) == "cache.Cache('test', 0 entries)"
