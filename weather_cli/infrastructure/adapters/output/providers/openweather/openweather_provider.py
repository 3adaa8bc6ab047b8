"""OpenWeather Provider - Clima atual via OpenWeatherMap Current Weather API 2.5"""
from typing import Optional

import requests

from weather_cli.application.ports.output.weather_provider_port import IWeatherProvider
from weather_cli.domain.constants import API
from weather_cli.domain.entities.weather_result import WeatherResult
from weather_cli.domain.exceptions import (
    InvalidCredentialException,
    LocationNotFoundException,
    MalformedResponseException,
    ProviderUnavailableException,
)
from weather_cli.infrastructure.adapters.output.providers.openweather.mappers import OpenWeatherDataMapper
from weather_cli.shared.config.logger_config import get_logger
from weather_cli.shared.tracing import trace_operation

logger = get_logger(child=True)


class OpenWeatherProvider(IWeatherProvider):
    """
    Provider para OpenWeatherMap /data/2.5/weather

    Características:
    - Uma única requisição GET por chamada, sem retries
    - Unidades configuráveis (padrão: métricas)
    - Classificação de erro pelo status HTTP (404, 401, demais)
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = API.OPENWEATHER_BASE_URL,
        timeout: float = API.HTTP_TIMEOUT,
        units: str = API.UNITS_METRIC,
        session: Optional[requests.Session] = None
    ):
        """
        Inicializa provider

        Args:
            api_key: OpenWeather API key (já validada pelo Settings)
            base_url: Endpoint de clima atual
            timeout: Timeout da requisição em segundos
            units: Sistema de unidades enviado ao OpenWeather (metric, imperial)
            session: Sessão requests opcional (padrão: módulo requests)

        Raises:
            ValueError: Se API key vazia
        """
        if not api_key:
            raise ValueError("OPENWEATHER_API_KEY não configurada")

        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.units = units
        self.http = session or requests

    @property
    def provider_name(self) -> str:
        return "OpenWeather"

    @trace_operation("openweather.fetch_current_weather")
    def fetch_current_weather(self, location_query: str) -> WeatherResult:
        """
        Busca clima atual por nome de cidade

        Args:
            location_query: Nome da cidade (codificado na query string pelo requests)

        Returns:
            WeatherResult mapeado da resposta
        """
        params = {
            'q': location_query,
            'appid': self.api_key,
            'units': self.units
        }

        try:
            response = self.http.get(self.base_url, params=params, timeout=self.timeout)
        except requests.Timeout as e:
            raise ProviderUnavailableException(
                f"Request timed out after {self.timeout}s",
                details={"location": location_query, "reason": "timeout"}
            ) from e
        except requests.RequestException as e:
            raise ProviderUnavailableException(
                str(e) or type(e).__name__,
                details={"location": location_query, "reason": type(e).__name__}
            ) from e

        self._raise_for_status(response, location_query)

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseException(
                "Error parsing JSON response",
                details={"location": location_query}
            ) from e

        result = OpenWeatherDataMapper.map_current_weather(data)
        logger.debug("OpenWeather response mapped", location=location_query, city_name=result.name)
        return result

    @staticmethod
    def _raise_for_status(response: requests.Response, location_query: str) -> None:
        """Converte status HTTP de erro na exceção de domínio correspondente"""
        status = response.status_code
        if 200 <= status < 300:
            return

        if status == API.STATUS_NOT_FOUND:
            raise LocationNotFoundException(location_query, details={"status_code": status})

        if status == API.STATUS_UNAUTHORIZED:
            raise InvalidCredentialException(
                "Invalid API key. Please update your API key.",
                details={"status_code": status}
            )

        raise ProviderUnavailableException(
            f"Request failed with status code {status}",
            details={"location": location_query, "status_code": status}
        )
