from fastapi import APIRouter, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from config import settings
from models.views import CountryView, DirectoryView
from services import directory_service, display_service, resolver_service

router = APIRouter(prefix="/countries", tags=["countries"])

limiter = Limiter(key_func=get_remote_address)


@router.get("", response_model=DirectoryView)
async def list_countries(q: str = ""):
    directory = await directory_service.get_directory()
    matches = directory_service.filter_directory(directory, q)
    return DirectoryView.build(directory, matches, q)


@router.get("/codes", response_model=list[str])
async def list_codes():
    return sorted(await resolver_service.get_known_codes())


@router.get("/{code}", response_model=CountryView)
@limiter.limit(settings.detail_rate_limit)
async def get_country(request: Request, code: str):
    country = await resolver_service.resolve(code)
    if not country:
        raise HTTPException(status_code=404, detail="Country not found")
    return CountryView(country=country, display=display_service.describe(country))
