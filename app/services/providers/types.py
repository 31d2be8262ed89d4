from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel


class ExchangeQuote(BaseModel):
    code: str = ""
    bid: str | None = None


@dataclass(frozen=True)
class ConversionRates:
    usd: float
    eur: float
