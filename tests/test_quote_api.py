import httpx
import pytest

from app.core.errors import (
    QuoteMissingError,
    QuoteParseError,
    UpstreamPayloadError,
    UpstreamUnavailableError,
)
from app.services.providers.quote_api import AwesomeApiQuoteProvider, parse_rates
from app.services.providers.types import ExchangeQuote

URL = "https://quotes.test/last/USD-BRL,EUR-BRL"

AWESOME_PAYLOAD = {
    "USDBRL": {
        "code": "USD",
        "codein": "BRL",
        "name": "Dólar Americano/Real Brasileiro",
        "high": "5.0300",
        "low": "4.9800",
        "bid": "5.0123",
        "ask": "5.0130",
    },
    "EURBRL": {
        "code": "EUR",
        "codein": "BRL",
        "name": "Euro/Real Brasileiro",
        "bid": "5.4567",
        "ask": "5.4600",
    },
}


def provider_for(handler):
    return AwesomeApiQuoteProvider(URL, timeout_seconds=1.0, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_fetch_quotes_decodes_pairs_and_ignores_extra_fields():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=AWESOME_PAYLOAD)

    quotes = await provider_for(handler).fetch_quotes()

    assert len(seen) == 1
    assert seen[0].method == "GET"
    assert seen[0].url.host == "quotes.test"
    assert quotes["USDBRL"] == ExchangeQuote(code="USD", bid="5.0123")
    rates = parse_rates(quotes)
    assert rates.usd == pytest.approx(5.0123)
    assert rates.eur == pytest.approx(5.4567)


@pytest.mark.asyncio
async def test_network_failure_is_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamUnavailableError, match="error requesting quote API"):
        await provider_for(handler).fetch_quotes()


@pytest.mark.asyncio
async def test_timeout_is_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(UpstreamUnavailableError, match="ReadTimeout"):
        await provider_for(handler).fetch_quotes()


@pytest.mark.asyncio
async def test_error_status_is_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, text="Too Many Requests")

    with pytest.raises(UpstreamUnavailableError, match="429"):
        await provider_for(handler).fetch_quotes()


@pytest.mark.asyncio
async def test_non_json_body_is_payload_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>oops</html>")

    with pytest.raises(UpstreamPayloadError, match="decoding"):
        await provider_for(handler).fetch_quotes()


@pytest.mark.asyncio
async def test_unexpected_shape_is_payload_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=["USDBRL", "EURBRL"])

    with pytest.raises(UpstreamPayloadError, match="shape"):
        await provider_for(handler).fetch_quotes()


def test_parse_rates_requires_bid():
    quotes = {"USDBRL": ExchangeQuote(code="USD"), "EURBRL": ExchangeQuote(code="EUR", bid="6")}
    with pytest.raises(QuoteMissingError, match="USDBRL"):
        parse_rates(quotes)


@pytest.mark.parametrize("bid", ["abc", "", "nan", "inf", " 5.00 ", "1_0"])
def test_parse_rates_rejects_non_numeric_bid(bid):
    quotes = {"USDBRL": ExchangeQuote(code="USD", bid="5"), "EURBRL": ExchangeQuote(code="EUR", bid=bid)}
    with pytest.raises(QuoteParseError, match="EURBRL"):
        parse_rates(quotes)
