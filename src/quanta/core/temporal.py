"""Conversions between durations and points in time.

Units represent time spans. These functions relate them to the fixed points
in time that `datetime` represents.
"""

import datetime
import typing

from quanta.core import exceptions
from quanta.core.unit import Unit


Moment = typing.Union[datetime.datetime, datetime.date]


def to_datetime(
    unit: Unit,
    tz: datetime.tzinfo=None,
) -> datetime.datetime:
    """Interpret a duration as the time since the Unix epoch."""
    seconds = unit.convert_to(unit._token_unit('<second>')).scalar
    return datetime.datetime.fromtimestamp(float(seconds), tz=tz)


def to_date(unit: Unit) -> datetime.date:
    """Interpret a duration as the number of days since 0001-01-01.

    The fractional part of a day does not contribute.
    """
    days = unit.convert_to(unit._token_unit('<day>')).scalar
    return datetime.date.fromordinal(int(days))


def before(unit: Unit, moment: Moment=None) -> Moment:
    """The point in time `unit` before `moment`.

    Parameters
    ----------
    unit : `~unit.Unit`
        A duration.

    moment : `datetime.datetime` or `datetime.date`, optional
        The reference point in time. Defaults to now.
    """
    return _check(moment) - unit.to_timedelta()


def after(unit: Unit, moment: Moment=None) -> Moment:
    """The point in time `unit` after `moment`."""
    return _check(moment) + unit.to_timedelta()


def ago(unit: Unit) -> datetime.datetime:
    """The point in time `unit` before now."""
    return before(unit)


def since(unit: Unit, moment: Moment, now: Moment=None) -> Unit:
    """The time elapsed from `moment` to now, in the units of `unit`."""
    return _elapsed(_check(moment), _now(moment, now), unit)


def until(unit: Unit, moment: Moment, now: Moment=None) -> Unit:
    """The time remaining from now to `moment`, in the units of `unit`."""
    return _elapsed(_now(moment, now), _check(moment), unit)


def _elapsed(start: Moment, end: Moment, unit: Unit) -> Unit:
    """The time from `start` to `end`, in the units of `unit`."""
    difference = unit._new_from(end - start)
    return difference.convert_to(unit)


def _now(moment: Moment, now: typing.Optional[Moment]) -> Moment:
    """The current time, with the same type and time zone as `moment`."""
    if now is not None:
        return now
    if isinstance(moment, datetime.datetime):
        return datetime.datetime.now(tz=moment.tzinfo)
    return datetime.date.today()


def _check(moment: typing.Optional[Moment]) -> Moment:
    """Ensure that `moment` is a point in time."""
    if moment is None:
        return datetime.datetime.now()
    if not isinstance(moment, datetime.date):
        raise exceptions.InvalidOperation(
            f"Must specify a date or datetime, not {type(moment)}"
        ) from None
    return moment
