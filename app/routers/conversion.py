from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from pydantic import TypeAdapter, ValidationError
from starlette.requests import ClientDisconnect

from app.core.deps import get_rate_source
from app.core.errors import UpstreamError
from app.core.logging import get_logger
from app.schemas.conversion import ConversionResponse
from app.services.converter import InvalidAmountError, convert, parse_amount
from app.services.rate_cache import RateSource

router = APIRouter(tags=["conversion"])
logger = get_logger()

_request_adapter = TypeAdapter(dict[str, str | None])


@router.post("/convertamoeda", response_model=ConversionResponse)
async def convert_amount(request: Request, response: Response, rates_source: RateSource = Depends(get_rate_source)):
    try:
        body = await request.body()
    except ClientDisconnect as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="error reading request body") from exc

    try:
        payload = _request_adapter.validate_json(body)
    except ValidationError as exc:
        logger.info("conversion_rejected", reason="invalid_json")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="error parsing request JSON") from exc

    try:
        amount = parse_amount(payload.get("real"))
    except InvalidAmountError as exc:
        logger.info("conversion_rejected", reason=str(exc))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="invalid BRL value") from exc

    try:
        rates = await rates_source.get_rates()
    except UpstreamError as exc:
        logger.error("conversion_failed", error=str(exc), error_type=type(exc).__name__)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc

    if rates_source.caching:
        response.headers["Cache-Control"] = f"public, max-age={rates_source.ttl_seconds}"

    result = convert(amount, rates)
    return ConversionResponse(dolar=result.dolar, euro=result.euro)
