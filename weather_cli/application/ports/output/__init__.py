from weather_cli.application.ports.output.cache_store_port import ICacheStore
from weather_cli.application.ports.output.weather_provider_port import IWeatherProvider

__all__ = ['ICacheStore', 'IWeatherProvider']
