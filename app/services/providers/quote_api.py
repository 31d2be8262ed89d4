from __future__ import annotations

import httpx
from pydantic import TypeAdapter, ValidationError

from app.core.errors import QuoteMissingError, QuoteParseError, UpstreamPayloadError
from app.services.numbers import parse_decimal
from app.services.providers.http_client import get_json
from app.services.providers.types import ConversionRates, ExchangeQuote

USD_PAIR = "USDBRL"
EUR_PAIR = "EURBRL"

_quotes_adapter = TypeAdapter(dict[str, ExchangeQuote])


class AwesomeApiQuoteProvider:
    """Fetches the latest USD-BRL and EUR-BRL quotes in a single request."""

    def __init__(self, url: str, timeout_seconds: float, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.url = url
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    async def fetch_quotes(self) -> dict[str, ExchangeQuote]:
        payload = await get_json(self.url, timeout=self.timeout_seconds, transport=self.transport)
        try:
            return _quotes_adapter.validate_python(payload)
        except ValidationError as exc:
            raise UpstreamPayloadError(f"unexpected quote API response shape: {exc.error_count()} error(s)") from exc


def parse_bid(quotes: dict[str, ExchangeQuote], pair: str) -> float:
    quote = quotes.get(pair)
    if quote is None or quote.bid is None:
        raise QuoteMissingError(f"quote API response has no bid for {pair}")
    try:
        return parse_decimal(quote.bid)
    except ValueError as exc:
        raise QuoteParseError(f"error converting {pair} bid {quote.bid!r} to float") from exc


def parse_rates(quotes: dict[str, ExchangeQuote]) -> ConversionRates:
    return ConversionRates(usd=parse_bid(quotes, USD_PAIR), eur=parse_bid(quotes, EUR_PAIR))
