"""Conversions between epoch-millisecond timestamps (UTC) and dates."""

from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def epoch_millis_to_datetime(millis: int) -> datetime:
    """Raises ``OverflowError`` when *millis* falls outside the datetime range."""
    return EPOCH + timedelta(milliseconds=millis)


def date_to_epoch_millis(value: date) -> int:
    return calendar.timegm(value.timetuple()) * 1000


def first_date_at_or_after(millis: int) -> date:
    """Earliest date whose midnight (UTC) is not before *millis*."""
    moment = epoch_millis_to_datetime(millis)
    day = moment.date()
    if moment > datetime.combine(day, time.min, tzinfo=timezone.utc):
        day += timedelta(days=1)
    return day


def last_date_at_or_before(millis: int) -> date:
    """Latest date whose midnight (UTC) is not after *millis*."""
    return epoch_millis_to_datetime(millis).date()
