# app/shared/clock.py
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from app.config.settings import settings


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def local_timezone() -> ZoneInfo:
    return ZoneInfo(settings.timezone)


def as_utc(value: datetime) -> datetime:
    """Los motores sin soporte de zona horaria (SQLite) devuelven fechas naive en UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_local(value: datetime, tz: ZoneInfo = None) -> datetime:
    return as_utc(value).astimezone(tz or local_timezone())


def local_to_utc(value: datetime, tz: ZoneInfo = None) -> datetime:
    """Fechas sin zona ingresadas por el usuario se interpretan en hora local"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=tz or local_timezone())
    return value.astimezone(timezone.utc)
