from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Callable, Protocol

from app.core.errors import UpstreamError
from app.core.logging import get_logger
from app.services.providers.quote_api import parse_rates
from app.services.providers.types import ConversionRates, ExchangeQuote

DEFAULT_TTL_SECONDS = 60

logger = get_logger()


class QuoteProvider(Protocol):
    async def fetch_quotes(self) -> dict[str, ExchangeQuote]: ...


class RateSource(Protocol):
    caching: bool
    ttl_seconds: int

    async def get_rates(self) -> ConversionRates: ...


@dataclass
class RateCacheEntry:
    quotes: dict[str, ExchangeQuote]
    rates: ConversionRates
    expires_at: float


class DirectRateSource:
    caching = False
    ttl_seconds = 0

    def __init__(self, provider: QuoteProvider) -> None:
        self.provider = provider

    async def get_rates(self) -> ConversionRates:
        quotes = await self.provider.fetch_quotes()
        return parse_rates(quotes)


class RateCache:
    """Caches the last fetched rates for ``ttl_seconds``.

    The lock is held across the freshness check and the upstream fetch, so a
    miss makes every concurrent caller wait for the single refresh in flight.
    A failed refresh leaves the previous entry untouched.
    """

    caching = True

    def __init__(
        self,
        provider: QuoteProvider,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.provider = provider
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._entry: RateCacheEntry | None = None
        self._lock = asyncio.Lock()

    @property
    def expires_at(self) -> float | None:
        return self._entry.expires_at if self._entry else None

    def is_fresh(self) -> bool:
        return self._entry is not None and self.clock() < self._entry.expires_at

    def invalidate(self) -> None:
        self._entry = None

    async def get_rates(self) -> ConversionRates:
        async with self._lock:
            if self.is_fresh():
                logger.debug("rate_cache_hit", expires_at=self._entry.expires_at)
                return self._entry.rates

            logger.info("rate_cache_miss")
            try:
                quotes = await self.provider.fetch_quotes()
                rates = parse_rates(quotes)
            except UpstreamError as exc:
                logger.warning("rate_cache_refresh_failed", error=str(exc), error_type=type(exc).__name__)
                raise

            self._entry = RateCacheEntry(quotes=quotes, rates=rates, expires_at=self.clock() + self.ttl_seconds)
            logger.info("rate_cache_refreshed", usd=rates.usd, eur=rates.eur, expires_at=self._entry.expires_at)
            return rates
