import logging
import unicodedata

from pydantic import ValidationError

from config import settings
from models.country import CountrySummary
from services import restcountries_service
from services.cache_service import RevalidatingCache
from services.restcountries_service import UpstreamError

logger = logging.getLogger(__name__)

_DIRECTORY_KEY = "all"

cache = RevalidatingCache(ttl=settings.directory_revalidate_seconds, name="directory")


def collation_key(name: str) -> tuple[str, str]:
    """Sort key that orders names by base letters first, like a locale collator.

    Accents and case only break ties, so "Åland Islands" lands between
    "Afghanistan" and "Albania" rather than after "Zimbabwe".
    """
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), name


async def _load_directory() -> list[CountrySummary]:
    """Fetch and sort the directory; raises UpstreamError so callers can skip caching."""
    payload = await restcountries_service.fetch_all(restcountries_service.DIRECTORY_FIELDS)
    if not isinstance(payload, list):
        logger.warning("Country list payload is not an array (%s)", type(payload).__name__)
        return []

    countries = []
    for raw in payload:
        if not isinstance(raw, dict):
            continue
        try:
            countries.append(CountrySummary.from_api(raw))
        except ValidationError as e:
            logger.warning("Skipping malformed country %r: %s", raw.get("cca3"), e)

    countries.sort(key=lambda c: collation_key(c.common_name))
    return countries


async def fetch_directory() -> list[CountrySummary]:
    """Fetch every country's summary, sorted by common name.

    Never raises: a payload that is not a JSON array, an error status or
    an unreachable provider all yield an empty list.
    """
    try:
        return await _load_directory()
    except UpstreamError as e:
        logger.warning("Directory unavailable: %s", e)
        return []


async def get_directory() -> list[CountrySummary]:
    """Cached directory; an empty list, not cached, when the first load fails."""
    try:
        return await cache.get_or_load(_DIRECTORY_KEY, _load_directory)
    except UpstreamError as e:
        logger.warning("Directory unavailable: %s", e)
        return []


def filter_directory(directory: list[CountrySummary], query: str) -> list[CountrySummary]:
    """Countries whose common name contains `query`, ignoring case, in order."""
    if not query:
        return list(directory)
    needle = query.casefold()
    return [c for c in directory if needle in c.common_name.casefold()]
