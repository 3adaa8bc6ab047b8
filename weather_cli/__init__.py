"""weather-cli: clima atual de uma cidade via OpenWeatherMap, com cache local"""

__version__ = "1.0.0"
