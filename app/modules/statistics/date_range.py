# app/modules/statistics/date_range.py
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import NamedTuple, Optional

from app.core.exceptions import ValidationError


class DateRangeKey(str, Enum):
    today = "today"
    week = "week"
    month = "month"
    year = "year"
    custom = "custom"


class DateRange(NamedTuple):
    start: datetime
    end: datetime  # exclusivo


def _midnight(day: date, now: datetime) -> datetime:
    return datetime.combine(day, time.min, tzinfo=now.tzinfo)


def resolve_date_range(
    key: DateRangeKey,
    now: datetime,
    custom_start: Optional[date] = None,
    custom_end: Optional[date] = None
) -> Optional[DateRange]:
    """
    Traducir el período elegido a [inicio, fin) en la zona horaria de `now`.

    - today: medianoche a medianoche
    - week: domingo a domingo de la semana actual
    - month / year: límites de calendario
    - custom: fin + 1 día para incluir completo el día final

    Un período personalizado sin ambas fechas devuelve None (estado vacío).
    """
    today = now.date()

    if key == DateRangeKey.today:
        start = _midnight(today, now)
        return DateRange(start, _midnight(today + timedelta(days=1), now))

    if key == DateRangeKey.week:
        sunday = today - timedelta(days=(today.weekday() + 1) % 7)
        return DateRange(_midnight(sunday, now), _midnight(sunday + timedelta(days=7), now))

    if key == DateRangeKey.month:
        first = today.replace(day=1)
        if first.month == 12:
            next_first = first.replace(year=first.year + 1, month=1)
        else:
            next_first = first.replace(month=first.month + 1)
        return DateRange(_midnight(first, now), _midnight(next_first, now))

    if key == DateRangeKey.year:
        return DateRange(
            _midnight(date(today.year, 1, 1), now),
            _midnight(date(today.year + 1, 1, 1), now)
        )

    if key == DateRangeKey.custom:
        if custom_start is None or custom_end is None:
            return None
        if custom_start > custom_end:
            raise ValidationError("La fecha inicial debe ser anterior o igual a la final")
        return DateRange(
            _midnight(custom_start, now),
            _midnight(custom_end + timedelta(days=1), now)
        )

    return None
