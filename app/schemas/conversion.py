from __future__ import annotations

from pydantic import BaseModel


class ConversionResponse(BaseModel):
    dolar: str
    euro: str
