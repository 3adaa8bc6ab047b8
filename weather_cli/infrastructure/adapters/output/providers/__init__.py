from weather_cli.infrastructure.adapters.output.providers.openweather import OpenWeatherProvider

__all__ = ['OpenWeatherProvider']
