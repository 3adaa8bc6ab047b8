"""
OpenWeather Data Mapper - Transforma a resposta /data/2.5/weather em WeatherResult
LOCALIZAÇÃO: infrastructure (conhece o formato da API externa)
"""
from typing import Any, Dict, Sequence, Tuple

from weather_cli.domain.entities.weather_result import WeatherResult
from weather_cli.domain.exceptions import MalformedResponseException

_NUMBER_TYPES = (int, float)


class OpenWeatherDataMapper:
    """
    Mapper entre o JSON do OpenWeather e a entidade WeatherResult

    Campos obrigatórios: name, sys.country, main.temp, main.feels_like,
    main.humidity, main.pressure, weather[0].description, weather[0].id,
    wind.speed, wind.deg
    """

    @staticmethod
    def _require(data: Any, path: Sequence[Any], expected: Tuple[type, ...]) -> Any:
        """Navega `path` em `data` e valida o tipo final"""
        current = data
        for step in path:
            try:
                current = current[step]
            except (KeyError, IndexError, TypeError):
                raise MalformedResponseException(
                    "Malformed weather response: missing field",
                    details={"field": OpenWeatherDataMapper._path_str(path)}
                )

        # bool é subclasse de int mas nunca é um valor válido aqui
        if isinstance(current, bool) or not isinstance(current, expected):
            raise MalformedResponseException(
                "Malformed weather response: unexpected type",
                details={
                    "field": OpenWeatherDataMapper._path_str(path),
                    "type": type(current).__name__
                }
            )
        return current

    @staticmethod
    def _path_str(path: Sequence[Any]) -> str:
        parts = []
        for step in path:
            if isinstance(step, int):
                parts[-1] = f"{parts[-1]}[{step}]"
            else:
                parts.append(step)
        return ".".join(parts)

    @staticmethod
    def map_current_weather(data: Any) -> WeatherResult:
        """
        Mapeia a resposta do endpoint de clima atual para WeatherResult

        Args:
            data: JSON decodificado da API

        Returns:
            WeatherResult com `raw` apontando para a resposta original

        Raises:
            MalformedResponseException: Se a resposta não tem o formato esperado
        """
        if not isinstance(data, dict):
            raise MalformedResponseException(
                "Malformed weather response: expected a JSON object",
                details={"type": type(data).__name__}
            )

        require = OpenWeatherDataMapper._require
        return WeatherResult(
            name=require(data, ('name',), (str,)),
            country=require(data, ('sys', 'country'), (str,)),
            temperature=float(require(data, ('main', 'temp'), _NUMBER_TYPES)),
            feels_like=float(require(data, ('main', 'feels_like'), _NUMBER_TYPES)),
            description=require(data, ('weather', 0, 'description'), (str,)),
            condition_code=int(require(data, ('weather', 0, 'id'), (int,))),
            wind_speed=float(require(data, ('wind', 'speed'), _NUMBER_TYPES)),
            wind_direction=float(require(data, ('wind', 'deg'), _NUMBER_TYPES)),
            humidity=float(require(data, ('main', 'humidity'), _NUMBER_TYPES)),
            pressure=float(require(data, ('main', 'pressure'), _NUMBER_TYPES)),
            raw=data
        )

    @staticmethod
    def to_provider_payload(result: WeatherResult) -> Dict[str, Any]:
        """
        Formato persistido no cache: a resposta original quando disponível,
        senão reconstrói o subconjunto de campos conhecido
        """
        if result.raw:
            return result.raw

        return {
            'name': result.name,
            'sys': {'country': result.country},
            'main': {
                'temp': result.temperature,
                'feels_like': result.feels_like,
                'humidity': result.humidity,
                'pressure': result.pressure
            },
            'weather': [{'id': result.condition_code, 'description': result.description}],
            'wind': {'speed': result.wind_speed, 'deg': result.wind_direction}
        }
