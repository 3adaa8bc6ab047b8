"""
Relógio injetável - todo "agora" do núcleo passa por aqui
"""
from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Agora em UTC (timezone-aware)"""
    return datetime.now(tz=timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Datetime naive é tratado como UTC; aware é convertido para UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def truncate_to_millis(value: datetime) -> datetime:
    """Descarta microssegundos abaixo do milissegundo (precisão do cache persistido)"""
    return value.replace(microsecond=value.microsecond - value.microsecond % 1000)
