from quanta.core import iterables


def test_unique():
    """Test the function that extracts unique items while preserving order."""
    cases = {
        'a': ['a'],
        ('a', 'b'): ['a', 'b'],
        ('a', 'b', 'a'): ['a', 'b'],
        ('a', 'b', 'a', 'c'): ['a', 'b', 'c'],
        ('a', 'b', 'b', 'a', 'c'): ['a', 'b', 'c'],
    }
    for items, expected in cases.items():
        assert iterables.unique(items) == expected


def test_tally():
    """Test counting items in order of first appearance."""
    result = iterables.tally(['m', 's', 'm', 'kg', 's', 'm'])
    assert result == {'m': 3, 's': 2, 'kg': 1}
    assert list(result) == ['m', 's', 'kg']
    assert iterables.tally([]) == {}


def test_batch_replace():
    """Test replacing multiple characters in a string."""
    these = {'a': 'A', 'c': 'C'}
    string = 'abcd'
    expected = 'AbCd'
    assert iterables.batch_replace(string, these) == expected


def test_apply():
    """Test applying functions until one produces a result."""
    methods = [lambda x: None, lambda x: x + 1, lambda x: x + 2]
    assert iterables.apply(methods, 1) == 2
    assert iterables.apply([lambda x: None], 1) is None
    assert iterables.apply([lambda x: 0, lambda x: 1], 1) == 0


def test_repr_str_mixin():
    """Test the mixin that provides __repr__ and __str__."""
    class Thing(iterables.ReprStrMixin):
        def _get_display(self):
            return 'thing'
    thing = Thing()
    assert str(thing) == 'thing'
    assert repr(thing).endswith('Thing(thing)')
