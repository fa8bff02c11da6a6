import logging

from pydantic import ValidationError

from config import settings
from models.country import CountryDetail
from services import restcountries_service
from services.cache_service import RevalidatingCache
from services.restcountries_service import UpstreamError

logger = logging.getLogger(__name__)

_CODES_KEY = "codes"

# Detail records and the code list age independently of each other and of
# the directory.
cache = RevalidatingCache(ttl=settings.detail_revalidate_seconds, name="detail")
paths_cache = RevalidatingCache(ttl=settings.directory_revalidate_seconds, name="paths")


async def _load_codes() -> set[str]:
    payload = await restcountries_service.fetch_all(restcountries_service.CODE_FIELDS)
    if not isinstance(payload, list):
        logger.warning("Country code payload is not an array (%s)", type(payload).__name__)
        return set()
    return {
        item["cca3"]
        for item in payload
        if isinstance(item, dict) and isinstance(item.get("cca3"), str)
    }


async def enumerate_keys() -> set[str]:
    """Every country code the provider currently lists; empty when unavailable."""
    try:
        return await _load_codes()
    except UpstreamError as e:
        logger.warning("Country codes unavailable: %s", e)
        return set()


async def get_known_codes() -> set[str]:
    try:
        return await paths_cache.get_or_load(_CODES_KEY, _load_codes)
    except UpstreamError as e:
        logger.warning("Country codes unavailable: %s", e)
        return set()


async def fetch_record(code: str) -> CountryDetail | None:
    """Fetch one country; None when the provider has no usable record."""
    records = await restcountries_service.fetch_by_code(code)
    if not records:
        return None

    raw = records[0]
    if not isinstance(raw, dict):
        return None
    try:
        return CountryDetail.from_api(raw)
    except ValidationError as e:
        logger.warning("Malformed record for %s: %s", code, e, extra={"code": code})
        return None


async def resolve(code: str) -> CountryDetail | None:
    """Resolve a country code to its detail record, or None for not found.

    Codes missing from the known set are looked up on demand unless
    `detail_fallback` is "none". Not-found answers are cached like hits;
    transport failures are not cached.
    """
    code = code.upper()
    if settings.detail_fallback == "none" and code not in await get_known_codes():
        return None

    try:
        return await cache.get_or_load(code, lambda: fetch_record(code))
    except UpstreamError as e:
        logger.warning("Lookup of %s failed: %s", code, e, extra={"code": code})
        return None


async def prerender() -> int:
    """Warm the detail cache for every known code. Returns how many resolved."""
    codes = sorted(await get_known_codes())
    found = 0
    for code in codes:
        if await resolve(code) is not None:
            found += 1
    logger.info("Prerendered %d of %d countries", found, len(codes))
    return found
