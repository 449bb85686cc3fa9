"""Per-domain object-store configuration cache."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from folio.errors import StorageFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreConfig:
    """Where a domain's files live."""

    url: str
    anon_key: str
    is_custom: bool = False

    @property
    def configured(self) -> bool:
        return bool(self.url and self.anon_key)


StoreConfigLookup = Callable[[str], Awaitable[StoreConfig | None]]


class DomainConfigCache:
    """
    Lazily populated map of raw domain string -> StoreConfig.

    Entries are never invalidated; bindings change rarely and a restart clears
    the cache. Lookups that fail on storage errors are not cached.
    """

    def __init__(self, lookup: StoreConfigLookup, default: StoreConfig):
        self._lookup = lookup
        self._default = default
        self._entries: dict[str, StoreConfig] = {}

    @property
    def default(self) -> StoreConfig:
        return self._default

    async def get(self, domain: str | None) -> StoreConfig:
        if not domain:
            return self._default
        cached = self._entries.get(domain)
        if cached is not None:
            return cached
        try:
            config = await self._lookup(domain)
        except StorageFailure as exc:
            logger.error("Store config lookup failed for %s: %s", domain, exc)
            return self._default
        if config is None:
            logger.info("Using default store config for domain: %s", domain)
            config = self._default
        else:
            logger.info("Using custom store config for domain: %s", domain)
        self._entries[domain] = config
        return config

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, domain: str) -> bool:
        return domain in self._entries

    def __len__(self) -> int:
        return len(self._entries)
