"""
Configurações centralizadas da aplicação
Lidas do ambiente uma única vez e passadas explicitamente aos componentes
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from weather_cli.domain.constants import API, Cache
from weather_cli.domain.exceptions import ConfigurationError
from weather_cli.shared.config.logger_config import DEFAULT_LOG_LEVEL, resolve_log_level


def _int_from_env(env: Mapping[str, str], name: str, default: int) -> int:
    """Lê inteiro positivo do ambiente; valor inválido volta ao padrão"""
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def default_cache_file() -> Path:
    """~/.weather_cache.json"""
    return Path.home() / Cache.FILE_NAME


@dataclass(frozen=True)
class Settings:
    """Configuração explícita do CLI (credencial, endpoint, cache, timeouts)"""
    api_key: str = API.API_KEY_PLACEHOLDER
    base_url: str = API.OPENWEATHER_BASE_URL
    units: str = API.UNITS_METRIC
    cache_file: Path = None
    cache_expiry_seconds: int = Cache.EXPIRY_SECONDS
    http_timeout_seconds: int = API.HTTP_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self):
        if self.cache_file is None:
            object.__setattr__(self, 'cache_file', default_cache_file())

    @classmethod
    def from_environment(cls, env: Optional[Mapping[str, str]] = None) -> 'Settings':
        """
        Monta Settings a partir de variáveis de ambiente

        Variáveis:
            OPENWEATHER_API_KEY, OPENWEATHER_BASE_URL, WEATHER_CACHE_FILE,
            WEATHER_CACHE_TTL_SECONDS, WEATHER_HTTP_TIMEOUT, LOG_LEVEL
        """
        if env is None:
            env = os.environ

        cache_file = env.get('WEATHER_CACHE_FILE')
        return cls(
            api_key=env.get('OPENWEATHER_API_KEY', API.API_KEY_PLACEHOLDER).strip(),
            base_url=env.get('OPENWEATHER_BASE_URL') or API.OPENWEATHER_BASE_URL,
            cache_file=Path(cache_file).expanduser() if cache_file else default_cache_file(),
            cache_expiry_seconds=_int_from_env(env, 'WEATHER_CACHE_TTL_SECONDS', Cache.EXPIRY_SECONDS),
            http_timeout_seconds=_int_from_env(env, 'WEATHER_HTTP_TIMEOUT', API.HTTP_TIMEOUT),
            log_level=resolve_log_level(env.get('LOG_LEVEL'))
        )

    def has_valid_api_key(self) -> bool:
        return bool(self.api_key) and self.api_key != API.API_KEY_PLACEHOLDER

    def require_api_key(self) -> str:
        """
        Retorna a API key ou falha antes de qualquer chamada de rede

        Raises:
            ConfigurationError: Se a chave está vazia ou ainda é o placeholder
        """
        if not self.has_valid_api_key():
            raise ConfigurationError(
                "API key not configured. Set the OPENWEATHER_API_KEY environment variable.",
                details={"signup_url": API.API_KEY_SIGNUP_URL}
            )
        return self.api_key
