"""REST Countries API client (https://restcountries.com, v3.1, no API key)."""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from utils.http_client import get_client

logger = logging.getLogger(__name__)

DIRECTORY_FIELDS = ("name", "cca3", "flags")
CODE_FIELDS = ("cca3",)


class UpstreamError(Exception):
    """The country data provider could not be reached or refused the request."""


async def fetch_all(fields: tuple[str, ...]) -> Any:
    """List every country, projected to `fields`.

    Returns the decoded JSON body as-is (callers check its shape), or None
    when the body is not JSON. Raises UpstreamError on transport failure
    or a non-success status.
    """
    client = get_client()
    try:
        response = await client.get("/all", params={"fields": ",".join(fields)})
    except httpx.HTTPError as e:
        raise UpstreamError(f"Country list request failed: {e}") from e

    if response.is_error:
        logger.warning(
            "Country list returned %s: %.200s", response.status_code, response.text,
            extra={"status_code": response.status_code},
        )
        raise UpstreamError(f"Country list returned status {response.status_code}")

    try:
        return response.json()
    except ValueError:
        logger.warning("Country list body is not JSON: %.200s", response.text)
        return None


async def fetch_by_code(code: str) -> list | None:
    """Look up one country by its three-letter code.

    Returns the upstream array (normally one element), or None when the
    provider reports failure or the body is not an array. Raises
    UpstreamError only on transport failure.
    """
    client = get_client()
    try:
        response = await client.get(f"/alpha/{quote(code, safe='')}")
    except httpx.HTTPError as e:
        raise UpstreamError(f"Lookup of {code!r} failed: {e}") from e

    if response.is_error:
        logger.info(
            "Lookup of %s returned %s", code, response.status_code,
            extra={"code": code, "status_code": response.status_code},
        )
        return None

    try:
        data = response.json()
    except ValueError:
        logger.warning("Lookup of %s returned a non-JSON body", code, extra={"code": code})
        return None

    if not isinstance(data, list):
        return None
    return data
