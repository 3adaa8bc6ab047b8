"""
Weather Presenter - Formata o WeatherResult para o terminal
"""
from typing import List

from weather_cli.domain.constants import WeatherCondition
from weather_cli.domain.entities.weather_result import WeatherResult


class WeatherPresenter:
    """Resumo legível do clima atual"""

    RULE_WIDTH = 40

    CONDITION_SYMBOLS = {
        WeatherCondition.THUNDERSTORM: '⚡',
        WeatherCondition.DRIZZLE: '🌦',
        WeatherCondition.RAIN: '🌧',
        WeatherCondition.SNOW: '❄',
        WeatherCondition.ATMOSPHERE: '🌫',
        WeatherCondition.CLEAR: '☀',
        WeatherCondition.CLOUDS: '☁',
    }

    @staticmethod
    def capitalize_first_letter(text: str) -> str:
        """Só a primeira letra: "clear sky" -> "Clear sky" """
        return text[:1].upper() + text[1:]

    @staticmethod
    def format_number(value: float) -> str:
        """18.0 -> "18", 18.5 -> "18.5" (igual ao JSON de origem)"""
        return str(int(value)) if float(value).is_integer() else str(value)

    @classmethod
    def symbol_for(cls, weather: WeatherResult) -> str:
        return cls.CONDITION_SYMBOLS[weather.condition_category]

    @classmethod
    def render(cls, weather: WeatherResult) -> str:
        """
        Monta o texto completo exibido pelo CLI

        Returns:
            Bloco multi-linha (sem newline final)
        """
        num = cls.format_number
        condition = cls.capitalize_first_letter(weather.description)

        lines: List[str] = [
            "",
            f"Weather for {weather.name}, {weather.country}",
            "=" * cls.RULE_WIDTH,
            f"Temperature: {num(weather.temperature)}°C (Feels like: {num(weather.feels_like)}°C)",
            f"Condition: {condition}",
            f"Wind: {num(weather.wind_speed)} m/s, {weather.cardinal_direction} ({num(weather.wind_direction)}°)",
            f"Humidity: {num(weather.humidity)}%",
            f"Pressure: {num(weather.pressure)} hPa",
            "",
            f"Current weather: {cls.symbol_for(weather)} {condition}",
        ]
        return "\n".join(lines)
