from weather_cli.domain.entities.weather_result import WeatherResult
from weather_cli.domain.entities.cache_entry import CacheEntry

__all__ = ['WeatherResult', 'CacheEntry']
