from weather_cli.infrastructure.adapters.cache.json_file_cache_store import JsonFileCacheStore

__all__ = ['JsonFileCacheStore']
