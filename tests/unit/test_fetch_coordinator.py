"""
Testes Unitários - FetchCoordinator (lookup-or-fetch com cache em arquivo)
"""
import json
from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from tests.unit.conftest import FakeWeatherProvider
from weather_cli.application.services.fetch_coordinator import FetchCoordinator
from weather_cli.domain.entities.cache_entry import CacheEntry
from weather_cli.domain.exceptions import (
    CacheIOException,
    InvalidCredentialException,
    LocationNotFoundException,
    ProviderUnavailableException,
)
from weather_cli.infrastructure.adapters.output.providers.openweather.mappers import OpenWeatherDataMapper

WINDOW = timedelta(minutes=30)


@pytest.fixture
def coordinator(cache_store, fake_provider, base_time):
    return FetchCoordinator(
        cache_store=cache_store,
        weather_provider=fake_provider,
        expiry_window=WINDOW,
        clock=lambda: base_time
    )


@pytest.fixture
def seeded_store(cache_store, paris_payload):
    """Grava uma entrada 'paris' buscada em `fetched_at`"""
    def _seed(fetched_at):
        entry = CacheEntry(
            key='paris',
            fetched_at=fetched_at,
            payload=OpenWeatherDataMapper.map_current_weather(paris_payload)
        )
        cache_store.save({'paris': entry})
        return entry
    return _seed


class TestKeyNormalization:
    """Chave de cache é case-insensitive"""

    @pytest.mark.parametrize("query", ["Paris", "PARIS", "paris", "pArIs", "  Paris  "])
    def test_queries_differing_in_case_share_key(self, query):
        assert FetchCoordinator.normalize_key(query) == "paris"

    def test_case_variants_hit_same_entry(self, coordinator, fake_provider, base_time):
        first = coordinator.resolve("Paris", now=base_time)
        second = coordinator.resolve("PARIS", now=base_time + timedelta(minutes=1))

        assert first == second
        assert fake_provider.calls == ["Paris"]

    def test_blank_query_rejected_before_any_access(self, coordinator, fake_provider, cache_file):
        with pytest.raises(ValueError):
            coordinator.resolve("   ")

        assert fake_provider.calls == []
        assert not cache_file.exists()


class TestFreshnessWindow:
    """Política de expiração (30 minutos, fronteira inclusiva no lado expirado)"""

    def test_fresh_entry_served_without_network(self, cache_store, seeded_store, base_time):
        entry = seeded_store(base_time - timedelta(minutes=10))
        provider = FakeWeatherProvider(error=ProviderUnavailableException("should not be called"))
        coordinator = FetchCoordinator(cache_store, provider, expiry_window=WINDOW)

        result = coordinator.resolve("Paris", now=base_time)

        assert result == entry.payload
        assert result.raw == entry.payload.raw
        assert provider.calls == []

    def test_entry_just_inside_window_is_fresh(self, coordinator, fake_provider, seeded_store, base_time):
        seeded_store(base_time - WINDOW + timedelta(seconds=1))

        coordinator.resolve("Paris", now=base_time)

        assert fake_provider.calls == []

    def test_entry_exactly_at_window_is_stale(self, coordinator, fake_provider, seeded_store, base_time):
        seeded_store(base_time - WINDOW)

        coordinator.resolve("Paris", now=base_time)

        assert fake_provider.calls == ["Paris"]

    def test_stale_entry_is_refetched_and_overwritten(self, coordinator, fake_provider, cache_store, seeded_store, base_time):
        seeded_store(base_time - timedelta(hours=3))

        coordinator.resolve("Paris", now=base_time)

        assert fake_provider.calls == ["Paris"]
        assert cache_store.load()['paris'].fetched_at == base_time

    def test_clock_used_when_now_not_given(self, cache_store, fake_provider, seeded_store, base_time):
        seeded_store(base_time - timedelta(minutes=5))
        clock = MagicMock(return_value=base_time)
        coordinator = FetchCoordinator(cache_store, fake_provider, expiry_window=WINDOW, clock=clock)

        coordinator.resolve("Paris")

        clock.assert_called_once_with()
        assert fake_provider.calls == []

    def test_naive_now_treated_as_utc(self, coordinator, fake_provider, seeded_store, base_time):
        seeded_store(base_time - timedelta(minutes=5))

        coordinator.resolve("Paris", now=base_time.replace(tzinfo=None))

        assert fake_provider.calls == []

    def test_sub_millisecond_fetch_time_expires_exactly_at_window(self, coordinator, fake_provider, cache_store, base_time):
        fetched_at = base_time + timedelta(microseconds=999600)
        coordinator.resolve("Paris", now=fetched_at)

        assert cache_store.load()['paris'].fetched_at == base_time + timedelta(milliseconds=999)

        coordinator.resolve("Paris", now=fetched_at + WINDOW + timedelta(microseconds=100))

        assert fake_provider.calls == ["Paris", "Paris"]

    def test_sub_millisecond_fetch_time_fresh_just_before_window(self, coordinator, fake_provider, base_time):
        fetched_at = base_time + timedelta(microseconds=999600)
        coordinator.resolve("Paris", now=fetched_at)

        coordinator.resolve("Paris", now=fetched_at + WINDOW - timedelta(milliseconds=1))

        assert fake_provider.calls == ["Paris"]


class TestFetchAndPersist:
    """MISS: busca única no provider e gravação no cache"""

    def test_paris_scenario(self, coordinator, fake_provider, cache_file, base_time, paris_payload):
        """Paris: grava em 'paris', reconsulta imediata usa cache, 31 min depois busca de novo"""
        result = coordinator.resolve("Paris", now=base_time)

        document = json.loads(cache_file.read_text(encoding='utf-8'))
        assert list(document.keys()) == ['paris']
        assert document['paris']['timestamp'] == int(base_time.timestamp() * 1000)
        assert document['paris']['data'] == paris_payload
        assert result.name == 'Paris'
        assert result.country == 'FR'
        assert result.temperature == 18.5
        assert result.condition_code == 800

        again = coordinator.resolve("Paris", now=base_time)
        assert again == result
        assert again.raw == result.raw
        assert fake_provider.calls == ["Paris"]

        coordinator.resolve("Paris", now=base_time + timedelta(minutes=31))
        assert fake_provider.calls == ["Paris", "Paris"]

    def test_fetch_merges_with_existing_entries(self, coordinator, cache_store, seeded_store, base_time):
        seeded_store(base_time - timedelta(minutes=5))

        coordinator.resolve("Lisbon", now=base_time)

        assert set(cache_store.load().keys()) == {'paris', 'lisbon'}

    def test_provider_receives_query_as_typed(self, coordinator, fake_provider, base_time):
        coordinator.resolve("  São Paulo ", now=base_time)

        assert fake_provider.calls == ["São Paulo"]

    def test_not_found_propagates_and_writes_nothing(self, cache_store, cache_file, base_time):
        provider = FakeWeatherProvider(error=LocationNotFoundException("Atlantis"))
        coordinator = FetchCoordinator(cache_store, provider, expiry_window=WINDOW)

        with pytest.raises(LocationNotFoundException) as exc_info:
            coordinator.resolve("Atlantis", now=base_time)

        assert exc_info.value.location_query == "Atlantis"
        assert not cache_file.exists()

    def test_fetch_error_keeps_existing_cache_untouched(self, cache_store, cache_file, seeded_store, base_time):
        seeded_store(base_time - timedelta(hours=1))
        before = cache_file.read_text(encoding='utf-8')
        provider = FakeWeatherProvider(error=InvalidCredentialException("bad key"))
        coordinator = FetchCoordinator(cache_store, provider, expiry_window=WINDOW)

        with pytest.raises(InvalidCredentialException):
            coordinator.resolve("Paris", now=base_time)

        assert cache_file.read_text(encoding='utf-8') == before

    def test_no_retry_on_provider_failure(self, cache_store, base_time):
        provider = FakeWeatherProvider(error=ProviderUnavailableException("timeout"))
        coordinator = FetchCoordinator(cache_store, provider, expiry_window=WINDOW)

        with pytest.raises(ProviderUnavailableException):
            coordinator.resolve("Paris", now=base_time)

        assert provider.calls == ["Paris"]

    def test_save_failure_still_returns_result(self, fake_provider, base_time):
        """Falha de escrita: 'buscado mas não cacheado', sem erro para o chamador"""
        store = MagicMock()
        store.load.return_value = {}
        store.save.side_effect = CacheIOException("Error writing cache file", details={"error": "disk full"})
        coordinator = FetchCoordinator(store, fake_provider, expiry_window=WINDOW)

        result = coordinator.resolve("Paris", now=base_time)

        assert result.name == 'Paris'
        store.save.assert_called_once()
        saved = store.save.call_args[0][0]
        assert saved['paris'].fetched_at == base_time

    def test_corrupted_cache_behaves_as_miss(self, coordinator, fake_provider, cache_file, base_time):
        cache_file.write_text('not json at all', encoding='utf-8')

        result = coordinator.resolve("Paris", now=base_time)

        assert result.name == 'Paris'
        assert fake_provider.calls == ["Paris"]
        assert 'paris' in json.loads(cache_file.read_text(encoding='utf-8'))

    def test_cache_loaded_fresh_on_every_resolve(self, coordinator, fake_provider, cache_store, base_time):
        coordinator.resolve("Paris", now=base_time)
        cache_store.clear()

        coordinator.resolve("Paris", now=base_time)

        assert fake_provider.calls == ["Paris", "Paris"]


class TestCacheHitNotification:
    """Callback on_cache_hit recebe a entrada servida do cache"""

    def test_callback_receives_fresh_entry(self, cache_store, fake_provider, seeded_store, base_time):
        entry = seeded_store(base_time - timedelta(minutes=10))
        on_cache_hit = MagicMock()
        coordinator = FetchCoordinator(cache_store, fake_provider, expiry_window=WINDOW, on_cache_hit=on_cache_hit)

        coordinator.resolve("Paris", now=base_time)

        on_cache_hit.assert_called_once_with(entry)

    def test_callback_not_called_on_miss_or_expired(self, cache_store, fake_provider, seeded_store, base_time):
        on_cache_hit = MagicMock()
        coordinator = FetchCoordinator(cache_store, fake_provider, expiry_window=WINDOW, on_cache_hit=on_cache_hit)

        coordinator.resolve("London", now=base_time)
        seeded_store(base_time - WINDOW)
        coordinator.resolve("Paris", now=base_time)

        on_cache_hit.assert_not_called()
        assert fake_provider.calls == ["London", "Paris"]
