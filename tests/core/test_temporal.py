import datetime

import pytest

from quanta.core import exceptions
from quanta.core import temporal


NOON = datetime.datetime(2020, 1, 1, 12)


def test_to_datetime(unit):
    """Interpret a duration as the time since the epoch."""
    assert temporal.to_datetime(unit(NOON)) == NOON


def test_to_date(unit):
    """Interpret a duration as the number of days since 0001-01-01."""
    day = datetime.date(2020, 1, 1)
    assert temporal.to_date(unit(day)) == day
    assert temporal.to_date(unit('2 d')) == datetime.date(1, 1, 2)


def test_before_and_after(unit):
    """Shift points in time by durations."""
    assert temporal.before(unit('1 h'), NOON) == datetime.datetime(2020, 1, 1, 11)
    assert temporal.after(unit('30 min'), NOON) == datetime.datetime(2020, 1, 1, 12, 30)
    day = datetime.date(2020, 1, 1)
    assert temporal.after(unit('2 d'), day) == datetime.date(2020, 1, 3)
    with pytest.raises(exceptions.InvalidOperation):
        temporal.before(unit('1 h'), 'noon')
    with pytest.raises(exceptions.IncompatibleDimensions):
        temporal.before(unit('1 m'), NOON)


def test_ago(unit):
    """Shift the current time into the past."""
    expected = datetime.datetime.now() - datetime.timedelta(hours=1)
    result = temporal.ago(unit('1 h'))
    assert abs(result - expected) < datetime.timedelta(seconds=5)


def test_since_and_until(unit):
    """Measure time between a point in time and now."""
    later = datetime.datetime(2020, 1, 1, 13)
    elapsed = temporal.since(unit('min'), NOON, now=later)
    assert elapsed.units == 'min'
    assert elapsed == unit('60 min')
    remaining = temporal.until(unit('h'), datetime.datetime(2020, 1, 2), now=NOON)
    assert remaining == unit('12 h')
    days = temporal.since(unit('d'), datetime.date(2020, 1, 1), now=datetime.date(2020, 1, 11))
    assert days == unit('10 d')
