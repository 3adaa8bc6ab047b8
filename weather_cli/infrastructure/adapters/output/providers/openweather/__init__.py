from weather_cli.infrastructure.adapters.output.providers.openweather.openweather_provider import OpenWeatherProvider

__all__ = ['OpenWeatherProvider']
