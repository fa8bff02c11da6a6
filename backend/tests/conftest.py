"""Shared fixtures: a fake REST Countries upstream and an ASGI test client.

The fake serves a small dataset through httpx.MockTransport, so no test
touches the network. Cache regions and the rate limiter are reset per test.
"""

import copy
import os

# Never point tests at the real provider
os.environ.setdefault("RESTCOUNTRIES_BASE_URL", "https://restcountries.test/v3.1")

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

import utils.http_client as http_client_module
from main import app
from routers import countries as countries_router
from services import directory_service, resolver_service
from country_data import BASE_URL, COUNTRIES, FakeUpstream


def _all_caches():
    return (directory_service.cache, resolver_service.cache, resolver_service.paths_cache)


@pytest.fixture
async def upstream(monkeypatch):
    fake = FakeUpstream(copy.deepcopy(COUNTRIES))
    mock_client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(fake.handler))
    monkeypatch.setattr(http_client_module, "_client", mock_client)
    for cache in _all_caches():
        cache.clear()
    countries_router.limiter.reset()

    yield fake

    for cache in _all_caches():
        await cache.wait_idle()
        cache.clear()
    await mock_client.aclose()


@pytest.fixture
async def client(upstream):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
