import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from config import settings
from routers import health, countries
from services import directory_service, resolver_service
from utils.error_handlers import register_error_handlers
from utils.http_client import close_client
from utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)

app = FastAPI(title="Country Explorer", version="0.1.0")

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
register_error_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(countries.router)


@app.get("/")
async def root():
    return {
        "name": "Country Explorer API",
        "version": "0.1.0",
        "endpoints": ["/health", "/countries", "/countries/codes", "/countries/{code}"],
    }


@app.on_event("startup")
async def startup():
    setup_logging(settings.log_level, settings.log_format)
    logger.info("Country Explorer API is running against %s", settings.restcountries_base_url)
    if settings.prerender_on_startup:
        await directory_service.get_directory()
        await resolver_service.prerender()


@app.on_event("shutdown")
async def shutdown():
    for cache in (directory_service.cache, resolver_service.cache, resolver_service.paths_cache):
        await cache.wait_idle()
    await close_client()
