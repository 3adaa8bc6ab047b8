"""
Domain Constants - Todas as constantes da aplicação centralizadas
Valores padrão; o Settings pode sobrescrever via ambiente
"""


class API:
    """Constantes da API OpenWeatherMap"""

    OPENWEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5/weather"
    API_KEY_PLACEHOLDER = "YOUR_OPENWEATHERMAP_API_KEY"
    API_KEY_SIGNUP_URL = "https://openweathermap.org/api"

    UNITS_METRIC = "metric"
    HTTP_TIMEOUT = 10  # segundos

    # Status HTTP com classificação própria
    STATUS_UNAUTHORIZED = 401
    STATUS_NOT_FOUND = 404


class Cache:
    """Constantes do cache em arquivo"""

    FILE_NAME = ".weather_cache.json"
    EXPIRY_SECONDS = 30 * 60  # 30 minutos
    JSON_INDENT = 2

    # Campos do documento persistido
    FIELD_TIMESTAMP = "timestamp"  # epoch em milissegundos
    FIELD_DATA = "data"


class WeatherCondition:
    """
    Categorias de condição a partir do código OpenWeather (weather[0].id)

    Faixas oficiais:
    2xx tempestade, 3xx garoa, 5xx chuva, 6xx neve,
    7xx atmosfera (névoa, fumaça...), 800 céu limpo, 80x nuvens
    """

    THUNDERSTORM = "thunderstorm"
    DRIZZLE = "drizzle"
    RAIN = "rain"
    SNOW = "snow"
    ATMOSPHERE = "atmosphere"
    CLEAR = "clear"
    CLOUDS = "clouds"

    CLEAR_CODE = 800

    _RANGES = (
        (200, 300, THUNDERSTORM),
        (300, 400, DRIZZLE),
        (500, 600, RAIN),
        (600, 700, SNOW),
        (700, 800, ATMOSPHERE),
    )

    @classmethod
    def category_for(cls, condition_code: int) -> str:
        """Retorna a categoria para um código de condição"""
        for lower, upper, category in cls._RANGES:
            if lower <= condition_code < upper:
                return category
        if condition_code == cls.CLEAR_CODE:
            return cls.CLEAR
        return cls.CLOUDS


class Wind:
    """Rosa dos ventos de 8 pontos"""

    CARDINAL_POINTS = ('N', 'NE', 'E', 'SE', 'S', 'SW', 'W', 'NW')
    SECTOR_DEGREES = 45
