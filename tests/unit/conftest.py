"""
Configurações e fixtures compartilhadas para testes unitários
"""
import os
import sys
import copy
from datetime import datetime, timezone

import pytest

# Garantir que o pacote weather_cli esteja no PYTHONPATH
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from weather_cli.application.ports.output.weather_provider_port import IWeatherProvider
from weather_cli.domain.entities.weather_result import WeatherResult
from weather_cli.infrastructure.adapters.cache.json_file_cache_store import JsonFileCacheStore
from weather_cli.infrastructure.adapters.output.providers.openweather.mappers import OpenWeatherDataMapper
from weather_cli.shared.config.settings import Settings

PARIS_PAYLOAD = {
    'coord': {'lon': 2.3488, 'lat': 48.8534},
    'weather': [{'id': 800, 'main': 'Clear', 'description': 'clear sky', 'icon': '01d'}],
    'main': {'temp': 18.5, 'feels_like': 17.9, 'humidity': 55, 'pressure': 1016},
    'wind': {'speed': 3.1, 'deg': 90},
    'sys': {'country': 'FR'},
    'name': 'Paris',
    'cod': 200
}


class FakeWeatherProvider(IWeatherProvider):
    """Provider em memória: conta chamadas e devolve payloads ou lança erros"""

    def __init__(self, payloads=None, error=None):
        self.payloads = payloads or {}
        self.error = error
        self.calls = []

    @property
    def provider_name(self) -> str:
        return "Fake"

    def fetch_current_weather(self, location_query: str) -> WeatherResult:
        self.calls.append(location_query)
        if self.error is not None:
            raise self.error
        payload = self.payloads.get(location_query.casefold(), PARIS_PAYLOAD)
        return OpenWeatherDataMapper.map_current_weather(copy.deepcopy(payload))


@pytest.fixture
def paris_payload():
    return copy.deepcopy(PARIS_PAYLOAD)


@pytest.fixture
def make_payload():
    """
    Factory fixture para payloads do OpenWeather

    Usage:
        def test_something(make_payload):
            payload = make_payload(name='Lisbon', country='PT', condition_code=500)
    """
    def _make(
        name: str = 'Paris',
        country: str = 'FR',
        temp: float = 18.5,
        feels_like: float = 17.9,
        humidity: int = 55,
        pressure: int = 1016,
        condition_code: int = 800,
        description: str = 'clear sky',
        wind_speed: float = 3.1,
        wind_deg: float = 90
    ) -> dict:
        return {
            'weather': [{'id': condition_code, 'description': description}],
            'main': {'temp': temp, 'feels_like': feels_like, 'humidity': humidity, 'pressure': pressure},
            'wind': {'speed': wind_speed, 'deg': wind_deg},
            'sys': {'country': country},
            'name': name
        }

    return _make


@pytest.fixture
def fake_provider():
    return FakeWeatherProvider()


@pytest.fixture
def cache_file(tmp_path):
    return tmp_path / 'weather_cache.json'


@pytest.fixture
def cache_store(cache_file):
    return JsonFileCacheStore(cache_file)


@pytest.fixture
def base_time():
    return datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def settings(cache_file):
    return Settings(api_key='test-key', cache_file=cache_file)
