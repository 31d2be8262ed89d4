from __future__ import annotations

from typing import Any

import httpx

from app.core.errors import UpstreamPayloadError, UpstreamUnavailableError


async def get_json(
    url: str,
    timeout: float,
    params: dict[str, Any] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Any:
    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        try:
            response = await client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise UpstreamUnavailableError(
                f"quote API returned status {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamUnavailableError(f"error requesting quote API: {exc!r}") from exc

    try:
        return response.json()
    except ValueError as exc:
        raise UpstreamPayloadError(f"error decoding quote API JSON response: {exc}") from exc
