import logging
from typing import Any

import httpx

from app.config import settings
from app.fetchers.errors import NetworkFailure

logger = logging.getLogger(__name__)


def new_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=settings.http_timeout)


async def get_json(client: httpx.AsyncClient, url: str) -> dict[str, Any]:
    logger.info("GET %s", url)
    try:
        resp = await client.get(url)
        resp.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise NetworkFailure(url, f"HTTP {exc.response.status_code}") from exc
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise NetworkFailure(url, f"{type(exc).__name__}: {exc}") from exc

    try:
        body = resp.json()
    except ValueError as exc:
        raise NetworkFailure(url, "response body is not valid JSON") from exc

    if not isinstance(body, dict):
        raise NetworkFailure(url, f"expected a JSON object, got {type(body).__name__}")
    return body
