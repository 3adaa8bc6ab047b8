"""
Input Adapter: Command-line interface
weather [city] [--clear-cache] [--prune-cache] [--verbose | --debug]
"""
import argparse
import sys
from datetime import timedelta
from typing import List, Optional

from weather_cli import __version__
from weather_cli.application.ports.output.weather_provider_port import IWeatherProvider
from weather_cli.application.services.fetch_coordinator import FetchCoordinator
from weather_cli.domain.entities.cache_entry import CacheEntry
from weather_cli.domain.exceptions import DomainException
from weather_cli.infrastructure.adapters.cache.json_file_cache_store import JsonFileCacheStore
from weather_cli.infrastructure.adapters.input.exception_handler_service import (
    ExceptionHandlerService,
    ExitCode,
)
from weather_cli.infrastructure.adapters.input.weather_presenter import WeatherPresenter
from weather_cli.infrastructure.adapters.output.providers.openweather import OpenWeatherProvider
from weather_cli.shared.config.logger_config import set_log_level
from weather_cli.shared.config.settings import Settings
from weather_cli.shared.utils.clock import Clock, ensure_utc, truncate_to_millis, utc_now

CACHE_NOTICE_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="weather",
        description="Command-line weather information tool"
    )
    parser.add_argument(
        "city",
        nargs="*",
        help="City name to get weather information for"
    )
    parser.add_argument(
        "--clear-cache",
        action="store_true",
        help="Clear cached weather data"
    )
    parser.add_argument(
        "--prune-cache",
        action="store_true",
        help="Remove expired entries from the cache"
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show informational logs on stderr"
    )
    verbosity.add_argument(
        "--debug",
        action="store_true",
        help="Show debug logs on stderr"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    return parser


def announce_cache_hit(entry: CacheEntry) -> None:
    """Avisa em stdout que o resumo veio do cache (horário local da busca)"""
    fetched_at = entry.fetched_at.astimezone().strftime(CACHE_NOTICE_TIME_FORMAT)
    print(f"Using cached data from {fetched_at}")


def build_coordinator(
    settings: Settings,
    weather_provider: Optional[IWeatherProvider] = None,
    clock: Clock = utc_now
) -> FetchCoordinator:
    """
    Monta o FetchCoordinator com as dependências reais

    Raises:
        ConfigurationError: Se a API key não está configurada
    """
    api_key = settings.require_api_key()
    if weather_provider is None:
        weather_provider = OpenWeatherProvider(
            api_key=api_key,
            base_url=settings.base_url,
            timeout=settings.http_timeout_seconds,
            units=settings.units
        )

    return FetchCoordinator(
        cache_store=JsonFileCacheStore(settings.cache_file),
        weather_provider=weather_provider,
        expiry_window=timedelta(seconds=settings.cache_expiry_seconds),
        clock=clock,
        on_cache_hit=announce_cache_hit
    )


def clear_cache(settings: Settings) -> int:
    if JsonFileCacheStore(settings.cache_file).clear():
        print("Cache cleared successfully.")
    else:
        print("No cache found.")
    return ExitCode.SUCCESS


def prune_cache(settings: Settings, clock: Clock = utc_now) -> int:
    removed = JsonFileCacheStore(settings.cache_file).evict_stale(
        now=truncate_to_millis(ensure_utc(clock())),
        max_age=timedelta(seconds=settings.cache_expiry_seconds)
    )
    noun = "entry" if removed == 1 else "entries"
    print(f"Removed {removed} stale cache {noun}.")
    return ExitCode.SUCCESS


def main(
    argv: Optional[List[str]] = None,
    settings: Optional[Settings] = None,
    weather_provider: Optional[IWeatherProvider] = None,
    clock: Clock = utc_now
) -> int:
    """
    Ponto de entrada do console script `weather`

    Returns:
        Exit code (0 sucesso/ajuda/limpeza, 1 qualquer falha)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if settings is None:
        settings = Settings.from_environment()

    if args.debug:
        set_log_level("DEBUG")
    elif args.verbose:
        set_log_level("INFO")
    else:
        set_log_level(settings.log_level)

    handler = ExceptionHandlerService()
    try:
        if args.clear_cache:
            return clear_cache(settings)

        if args.prune_cache:
            return prune_cache(settings, clock)

        city = " ".join(args.city).strip()
        if not city:
            parser.print_help()
            return ExitCode.SUCCESS

        coordinator = build_coordinator(settings, weather_provider, clock)
        weather = coordinator.resolve(city)
    except (DomainException, ValueError) as e:
        return handler.handle(e)
    except Exception as e:
        return handler.handle_unexpected_error(e)

    print(WeatherPresenter.render(weather))
    return ExitCode.SUCCESS


if __name__ == '__main__':
    sys.exit(main())
