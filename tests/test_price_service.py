"""Tests for price loading with cache staleness and fallback"""

from datetime import datetime, timedelta

import pytest

from portfolio_app.services.cache_service import FileCacheService
from portfolio_app.services.price_service import PriceService
from tests.builders import make_etf, make_portfolio, make_prices
from tests.stubs import StubPriceClient, fresh_prices


@pytest.fixture
def cache(tmp_path):
    return FileCacheService(tmp_path / "cache", ttl_hours=24)


@pytest.fixture
def portfolio():
    return make_portfolio([make_etf("isin1"), make_etf("isin2", data_source="justetf")])


@pytest.fixture
def client():
    return StubPriceClient({"isin1": fresh_prices(10), "isin2": fresh_prices(20)})


@pytest.fixture
def service(cache, client):
    requested_sources = []

    def factory(data_source):
        requested_sources.append(data_source)
        return client

    price_service = PriceService(cache, factory)
    price_service.requested_sources = requested_sources
    return price_service


def stale_prices(price):
    return make_prices(price, timestamp=datetime.now() - timedelta(days=3))


@pytest.mark.asyncio
async def test_fetches_and_caches(service, cache, client, portfolio):
    prices = await service.load_prices(portfolio)

    assert {isin: record.price for isin, record in prices.items()} == {"isin1": 10, "isin2": 20}
    assert sorted(client.requests) == ["isin1", "isin2"]
    assert cache.get_prices("isin1") == prices["isin1"]
    assert sorted(service.requested_sources) == ["borsaitaliana", "justetf"]


@pytest.mark.asyncio
async def test_fresh_cache_is_used(service, cache, client, portfolio):
    cache.save_prices("isin1", fresh_prices(5))

    prices = await service.load_prices(portfolio)

    assert prices["isin1"].price == 5
    assert client.requests == ["isin2"]


@pytest.mark.asyncio
async def test_forced_refresh_ignores_fresh_cache(service, cache, client, portfolio):
    cache.save_prices("isin1", fresh_prices(5))

    prices = await service.load_prices(portfolio, force_refresh=True)

    assert prices["isin1"].price == 10
    assert cache.get_prices("isin1").price == 10


@pytest.mark.asyncio
async def test_stale_cache_is_refreshed(service, cache, portfolio):
    cache.save_prices("isin1", stale_prices(5))

    prices = await service.load_prices(portfolio)

    assert prices["isin1"].price == 10


@pytest.mark.asyncio
async def test_falls_back_to_cache_on_error(service, cache, client, portfolio):
    client.failing.add("isin1")
    cache.save_prices("isin1", stale_prices(5))

    prices = await service.load_prices(portfolio)

    assert prices["isin1"].price == 5
    assert prices["isin2"].price == 20


@pytest.mark.asyncio
async def test_missing_prices_are_left_out(service, client, portfolio):
    client.failing.add("isin1")

    prices = await service.load_prices(portfolio)

    assert list(prices) == ["isin2"]


@pytest.mark.asyncio
async def test_offline_uses_cache_only(service, cache, client, portfolio):
    cache.save_prices("isin1", stale_prices(5))

    prices = await service.load_prices(portfolio, offline=True)

    assert list(prices) == ["isin1"]
    assert client.requests == []


@pytest.mark.asyncio
async def test_close_closes_clients(service, client, portfolio):
    await service.load_prices(portfolio)
    await service.close()
    assert client.closed
