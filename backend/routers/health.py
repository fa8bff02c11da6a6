import time
from fastapi import APIRouter

from services import directory_service, resolver_service

router = APIRouter()

_start_time = time.time()


@router.get("/health")
async def health_check():
    return {
        "status": "ok",
        "uptime_seconds": round(time.time() - _start_time),
        "version": "0.1.0",
        "caches": {
            c.name: c.stats()
            for c in (directory_service.cache, resolver_service.cache, resolver_service.paths_cache)
        },
    }
