from __future__ import annotations

from fastapi import Request

from app.services.rate_cache import RateSource


def get_rate_source(request: Request) -> RateSource:
    return request.app.state.rate_source
