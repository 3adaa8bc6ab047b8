"""
Output Adapter: Cache Store em arquivo JSON único
Persiste as respostas do OpenWeather por chave normalizada

Estrutura do documento:
{
    "paris": {
        "timestamp": 1700593200000,  # epoch em milissegundos
        "data": { ... resposta completa da API ... }
    }
}
"""
import json
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict, Optional

from weather_cli.application.ports.output.cache_store_port import ICacheStore
from weather_cli.domain.constants import Cache
from weather_cli.domain.entities.cache_entry import CacheEntry
from weather_cli.domain.exceptions import CacheIOException, MalformedResponseException
from weather_cli.infrastructure.adapters.output.providers.openweather.mappers import OpenWeatherDataMapper
from weather_cli.shared.config.logger_config import get_logger

logger = get_logger(child=True)


class JsonFileCacheStore(ICacheStore):
    """
    Cache em arquivo JSON (pretty-printed, UTF-8)

    O arquivo é a única fonte de verdade: cada operação lê/escreve o documento
    inteiro, sem estado em memória entre chamadas. Sem lock entre processos;
    escritores concorrentes: o último vence.
    """

    def __init__(self, cache_file: Path):
        """
        Args:
            cache_file: Caminho do documento (ex: ~/.weather_cache.json)
        """
        self.cache_file = Path(cache_file)

    def load(self) -> Dict[str, CacheEntry]:
        """
        Lê o documento persistido (fail-soft)

        Returns:
            Entradas válidas; {} se o arquivo não existe, não pode ser lido
            ou não é um objeto JSON
        """
        try:
            with open(self.cache_file, 'r', encoding='utf-8') as f:
                document = json.load(f)
        except FileNotFoundError:
            logger.debug("Cache file not found", cache_file=str(self.cache_file))
            return {}
        except (OSError, ValueError) as e:
            # ValueError cobre JSONDecodeError e UnicodeDecodeError
            logger.warning("Error reading cache file", cache_file=str(self.cache_file), error=str(e))
            return {}

        if not isinstance(document, dict):
            logger.warning(
                "Ignoring cache file with unexpected format",
                cache_file=str(self.cache_file),
                type=type(document).__name__
            )
            return {}

        entries = {}
        for key, item in document.items():
            entry = self._entry_from_document(key, item)
            if entry is not None:
                entries[key] = entry
        return entries

    def save(self, entries: Dict[str, CacheEntry]) -> None:
        """
        Serializa o mapeamento inteiro e sobrescreve o arquivo

        Raises:
            CacheIOException: Falha de escrita ou dado não serializável
        """
        document = {key: self._entry_to_document(entry) for key, entry in entries.items()}
        try:
            content = json.dumps(document, indent=Cache.JSON_INDENT, ensure_ascii=False)
            self.cache_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.cache_file, 'w', encoding='utf-8') as f:
                f.write(content)
        except (OSError, TypeError, ValueError) as e:
            raise CacheIOException(
                "Error writing cache file",
                details={"cache_file": str(self.cache_file), "error": str(e)}
            ) from e

        logger.debug("Cache file written", cache_file=str(self.cache_file), entries=len(entries))

    def clear(self) -> bool:
        """
        Remove o arquivo de cache

        Returns:
            True se removido, False se não existia
        """
        try:
            self.cache_file.unlink()
        except FileNotFoundError:
            logger.debug("No cache file to clear", cache_file=str(self.cache_file))
            return False
        except OSError as e:
            raise CacheIOException(
                "Error deleting cache file",
                details={"cache_file": str(self.cache_file), "error": str(e)}
            ) from e

        logger.info("Cache cleared", cache_file=str(self.cache_file))
        return True

    def evict_stale(self, now: datetime, max_age: timedelta) -> int:
        """
        Remove entradas expiradas e regrava o arquivo se algo mudou

        Returns:
            Número de entradas removidas
        """
        entries = self.load()
        fresh = {key: entry for key, entry in entries.items() if entry.is_fresh(now, max_age)}
        removed = len(entries) - len(fresh)

        if removed:
            self.save(fresh)
            logger.info("Cache EVICT", removed=removed, remaining=len(fresh))
        return removed

    @staticmethod
    def _entry_to_document(entry: CacheEntry) -> Dict[str, Any]:
        return {
            Cache.FIELD_TIMESTAMP: entry.fetched_at_millis,
            Cache.FIELD_DATA: OpenWeatherDataMapper.to_provider_payload(entry.payload)
        }

    @staticmethod
    def _entry_from_document(key: str, item: Any) -> Optional[CacheEntry]:
        """Converte um item do documento; item inválido é descartado com log"""
        if not isinstance(item, dict):
            logger.warning("Skipping invalid cache entry", cache_key=key, reason="not an object")
            return None

        timestamp = item.get(Cache.FIELD_TIMESTAMP)
        if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
            logger.warning("Skipping invalid cache entry", cache_key=key, reason="invalid timestamp")
            return None

        try:
            fetched_at = CacheEntry.datetime_from_millis(timestamp)
            payload = OpenWeatherDataMapper.map_current_weather(item.get(Cache.FIELD_DATA))
        except (OverflowError, OSError, ValueError) as e:
            logger.warning("Skipping invalid cache entry", cache_key=key, reason=str(e))
            return None
        except MalformedResponseException as e:
            logger.warning("Skipping invalid cache entry", cache_key=key, reason=e.message, details=e.details)
            return None

        return CacheEntry(key=key, fetched_at=fetched_at, payload=payload)
