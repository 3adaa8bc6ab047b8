"""Input Port: Resolver clima atual de uma localidade"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from weather_cli.domain.entities.weather_result import WeatherResult


class IResolveWeatherUseCase(ABC):
    """Interface do caso de uso lookup-or-fetch"""

    @abstractmethod
    def resolve(self, location_query: str, now: Optional[datetime] = None) -> WeatherResult:
        """Retorna o clima da localidade, do cache (se fresco) ou do provider"""
        pass
