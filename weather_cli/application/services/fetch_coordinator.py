"""
Fetch Coordinator - Decide entre servir do cache ou buscar no provider
Dono da política de expiração e da gravação do resultado no cache
"""
from datetime import datetime, timedelta
from typing import Callable, Optional

from weather_cli.application.ports.input.resolve_weather_port import IResolveWeatherUseCase
from weather_cli.application.ports.output.cache_store_port import ICacheStore
from weather_cli.application.ports.output.weather_provider_port import IWeatherProvider
from weather_cli.domain.constants import Cache
from weather_cli.domain.entities.cache_entry import CacheEntry
from weather_cli.domain.entities.weather_result import WeatherResult
from weather_cli.domain.exceptions import CacheIOException, FetchError
from weather_cli.shared.config.logger_config import get_logger
from weather_cli.shared.tracing import trace_operation
from weather_cli.shared.utils.clock import Clock, ensure_utc, truncate_to_millis, utc_now
from weather_cli.shared.utils.validators import LocationValidator

logger = get_logger(child=True)


class FetchCoordinator(IResolveWeatherUseCase):
    """Lookup-or-fetch com cache em arquivo e janela de validade fixa"""

    def __init__(
        self,
        cache_store: ICacheStore,
        weather_provider: IWeatherProvider,
        expiry_window: timedelta = timedelta(seconds=Cache.EXPIRY_SECONDS),
        clock: Clock = utc_now,
        on_cache_hit: Optional[Callable[[CacheEntry], None]] = None
    ):
        """
        Args:
            on_cache_hit: Notificado com a entrada servida do cache (ex: aviso no terminal)
        """
        self.cache_store = cache_store
        self.weather_provider = weather_provider
        self.expiry_window = expiry_window
        self.clock = clock
        self.on_cache_hit = on_cache_hit

    @staticmethod
    def normalize_key(location_query: str) -> str:
        return LocationValidator.normalize_key(location_query)

    @trace_operation("fetch_coordinator.resolve")
    def resolve(self, location_query: str, now: Optional[datetime] = None) -> WeatherResult:
        """
        Resolve o clima atual de uma localidade

        Flow:
        1. Normaliza a consulta em chave de cache (case-fold)
        2. "Agora" truncado em milissegundos (mesma precisão do timestamp persistido)
        3. Carrega o cache; entrada com idade < janela é devolvida sem rede
        4. MISS ou expirado: uma única chamada ao provider
        5. Grava a nova entrada (falha de escrita só gera warning)

        Args:
            location_query: Nome da cidade como digitado pelo usuário
            now: Instante de referência (usa o clock injetado se None)

        Returns:
            WeatherResult do cache ou recém-buscado

        Raises:
            ValueError: Consulta vazia
            FetchError: Qualquer falha da busca remota (propaga sem retry)
        """
        cache_key = self.normalize_key(location_query)
        now = truncate_to_millis(ensure_utc(now if now is not None else self.clock()))

        entries = self.cache_store.load()
        cached = entries.get(cache_key)
        if cached is not None:
            if cached.is_fresh(now, self.expiry_window):
                logger.info(
                    "Using cached data",
                    cache_key=cache_key,
                    fetched_at=cached.fetched_at.isoformat()
                )
                if self.on_cache_hit is not None:
                    self.on_cache_hit(cached)
                return cached.payload
            logger.info("Cache EXPIRED", cache_key=cache_key, age_seconds=cached.age(now).total_seconds())
        else:
            logger.info("Cache MISS", cache_key=cache_key)

        location = LocationValidator.validate(location_query)
        try:
            result = self.weather_provider.fetch_current_weather(location)
        except FetchError as e:
            logger.warning(
                "Weather fetch failed",
                cache_key=cache_key,
                error_type=type(e).__name__,
                error=e.message,
                provider=self.weather_provider.provider_name
            )
            raise

        entries[cache_key] = CacheEntry(key=cache_key, fetched_at=now, payload=result)
        self._persist(entries, cache_key)

        logger.info(
            "Weather fetched successfully",
            cache_key=cache_key,
            provider=self.weather_provider.provider_name
        )
        return result

    def _persist(self, entries, cache_key: str) -> bool:
        """Grava o mapeamento inteiro; falha vira warning (resultado continua válido)"""
        try:
            self.cache_store.save(entries)
        except CacheIOException as e:
            logger.warning("Fetched but not cached", cache_key=cache_key, error=e.message, details=e.details)
            return False
        logger.debug("Cache SET", cache_key=cache_key)
        return True
