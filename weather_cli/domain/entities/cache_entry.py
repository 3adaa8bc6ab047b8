"""
CacheEntry Entity - Resultado de clima com o instante em que foi buscado
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from weather_cli.domain.entities.weather_result import WeatherResult

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class CacheEntry:
    """Entrada do cache, indexada pela chave normalizada da localidade"""
    key: str
    fetched_at: datetime  # sempre timezone-aware (UTC)
    payload: WeatherResult

    def age(self, now: datetime) -> timedelta:
        """Idade da entrada relativa a `now`"""
        return now - self.fetched_at

    def is_fresh(self, now: datetime, max_age: timedelta) -> bool:
        """
        Verifica se a entrada ainda está dentro da janela de validade

        Fronteira inclusiva do lado "velho": idade == max_age já expirou.
        """
        return self.age(now) < max_age

    @property
    def fetched_at_millis(self) -> int:
        """Timestamp em epoch milissegundos (formato persistido), truncado"""
        return (self.fetched_at - EPOCH) // timedelta(milliseconds=1)

    @staticmethod
    def datetime_from_millis(millis: float) -> datetime:
        """Converte epoch milissegundos em datetime UTC"""
        return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
