"""Unit tests for the per-domain store configuration cache."""

import asyncio

from folio.errors import StorageFailure
from folio.tenancy.cache import DomainConfigCache, StoreConfig

DEFAULT = StoreConfig(url="https://default.supabase.co", anon_key="default-key")
CUSTOM = StoreConfig(url="https://acme.supabase.co", anon_key="acme-key", is_custom=True)


class CountingLookup:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    async def __call__(self, domain):
        self.calls.append(domain)
        if self.error is not None:
            raise self.error
        return self.result


def test_empty_domain_uses_default_without_lookup():
    lookup = CountingLookup(CUSTOM)
    cache = DomainConfigCache(lookup, DEFAULT)
    assert asyncio.run(cache.get("")) is DEFAULT
    assert asyncio.run(cache.get(None)) is DEFAULT
    assert lookup.calls == []


def test_custom_config_cached():
    lookup = CountingLookup(CUSTOM)
    cache = DomainConfigCache(lookup, DEFAULT)
    assert asyncio.run(cache.get("acme.com")) == CUSTOM
    assert asyncio.run(cache.get("acme.com")) == CUSTOM
    assert lookup.calls == ["acme.com"]
    assert "acme.com" in cache
    assert len(cache) == 1


def test_missing_config_caches_default():
    lookup = CountingLookup(None)
    cache = DomainConfigCache(lookup, DEFAULT)
    assert asyncio.run(cache.get("plain.com")) is DEFAULT
    asyncio.run(cache.get("plain.com"))
    assert lookup.calls == ["plain.com"]


def test_failed_lookup_not_cached():
    """A storage error answers with the default but is retried next time."""
    lookup = CountingLookup(error=StorageFailure("down"))
    cache = DomainConfigCache(lookup, DEFAULT)
    assert asyncio.run(cache.get("acme.com")) is DEFAULT
    assert "acme.com" not in cache

    lookup.error = None
    lookup.result = CUSTOM
    assert asyncio.run(cache.get("acme.com")) == CUSTOM
    assert lookup.calls == ["acme.com", "acme.com"]


def test_clear():
    lookup = CountingLookup(CUSTOM)
    cache = DomainConfigCache(lookup, DEFAULT)
    asyncio.run(cache.get("acme.com"))
    cache.clear()
    assert len(cache) == 0
    asyncio.run(cache.get("acme.com"))
    assert len(lookup.calls) == 2


def test_configured():
    assert CUSTOM.configured
    assert not StoreConfig(url="", anon_key="").configured
    assert not StoreConfig(url="https://x.supabase.co", anon_key="").configured
