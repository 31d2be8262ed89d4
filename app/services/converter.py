from __future__ import annotations

from dataclasses import dataclass

from app.services.numbers import parse_decimal
from app.services.providers.types import ConversionRates


class InvalidAmountError(ValueError):
    pass


@dataclass(frozen=True)
class ConvertedAmounts:
    dolar: str
    euro: str


def parse_amount(raw: str | None) -> float:
    if raw is None:
        raise InvalidAmountError("missing BRL value")
    try:
        return parse_decimal(raw)
    except ValueError as exc:
        raise InvalidAmountError(f"invalid BRL value {raw!r}") from exc


def convert(amount: float, rates: ConversionRates) -> ConvertedAmounts:
    return ConvertedAmounts(dolar=f"{amount * rates.usd:.2f}", euro=f"{amount * rates.eur:.2f}")
