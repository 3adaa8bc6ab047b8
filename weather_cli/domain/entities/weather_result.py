"""
WeatherResult Entity - Clima atual de uma localidade (payload do cache)
"""
import math
from dataclasses import dataclass, field
from typing import Any, Dict

from weather_cli.domain.constants import WeatherCondition, Wind


@dataclass(frozen=True)
class WeatherResult:
    """Entidade Clima Atual (unidades métricas)"""
    name: str
    country: str
    temperature: float  # °C
    feels_like: float  # °C
    description: str  # ex: "clear sky"
    condition_code: int  # weather[0].id do OpenWeather
    wind_speed: float  # m/s
    wind_direction: float  # graus 0-360
    humidity: float  # %
    pressure: float  # hPa
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)  # resposta original do provider

    @property
    def condition_category(self) -> str:
        """Categoria da condição (thunderstorm, rain, clear...)"""
        return WeatherCondition.category_for(self.condition_code)

    @property
    def cardinal_direction(self) -> str:
        """
        Converte a direção do vento em ponto cardeal (N, NE, E...)

        Arredondamento half-up, como Math.round: 22.5° -> NE
        """
        sector = int(math.floor(self.wind_direction / Wind.SECTOR_DEGREES + 0.5))
        return Wind.CARDINAL_POINTS[sector % len(Wind.CARDINAL_POINTS)]
