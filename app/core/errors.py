from __future__ import annotations


class UpstreamError(Exception):
    """Base class for failures while obtaining rates from the quote API."""


class UpstreamUnavailableError(UpstreamError):
    pass


class UpstreamPayloadError(UpstreamError):
    pass


class QuoteMissingError(UpstreamError):
    pass


class QuoteParseError(UpstreamError):
    pass
