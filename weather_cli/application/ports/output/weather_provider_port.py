"""Weather Provider Port - Capacidade de buscar o clima atual remotamente"""
from abc import ABC, abstractmethod

from weather_cli.domain.entities.weather_result import WeatherResult


class IWeatherProvider(ABC):
    """
    Interface para provedores de clima atual.
    Implementação real: OpenWeatherMap; testes substituem por fakes.
    """

    @abstractmethod
    def fetch_current_weather(self, location_query: str) -> WeatherResult:
        """
        Busca o clima atual de uma localidade (uma única requisição, sem retries)

        Args:
            location_query: Nome da cidade

        Returns:
            WeatherResult com a resposta original em `raw`

        Raises:
            LocationNotFoundException: Localidade desconhecida
            InvalidCredentialException: API key rejeitada
            ProviderUnavailableException: Falha de rede, timeout ou status inesperado
            MalformedResponseException: Corpo inválido
        """
        pass

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Nome do provider (ex: 'OpenWeather')"""
        pass
