"""
Output Port: Interface para o Cache Store
Define contrato para implementações de cache persistente (arquivo JSON, etc.)
"""
from datetime import datetime, timedelta
from typing import Dict, Protocol

from weather_cli.domain.entities.cache_entry import CacheEntry


class ICacheStore(Protocol):
    """Interface para o armazenamento do cache (chaves opacas)"""

    def load(self) -> Dict[str, CacheEntry]:
        """
        Lê o documento persistido

        Returns:
            Mapeamento chave -> CacheEntry. Arquivo ausente, ilegível ou
            corrompido resulta em {} (nunca lança exceção)
        """
        ...

    def save(self, entries: Dict[str, CacheEntry]) -> None:
        """
        Sobrescreve o documento inteiro com `entries` (sem merge)

        Raises:
            CacheIOException: Se a escrita falhar
        """
        ...

    def clear(self) -> bool:
        """
        Remove o documento persistido

        Returns:
            True se havia cache e foi removido, False se não existia

        Raises:
            CacheIOException: Se a remoção falhar
        """
        ...

    def evict_stale(self, now: datetime, max_age: timedelta) -> int:
        """
        Remove entradas com idade >= max_age

        Returns:
            Quantidade de entradas removidas

        Raises:
            CacheIOException: Se a escrita falhar
        """
        ...
