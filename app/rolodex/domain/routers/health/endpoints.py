from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

router = APIRouter()


@router.get("", include_in_schema=False)
async def health_check(request: Request) -> JSONResponse:
    """
    Health check reporting whether the store and the cache are reachable.
    """
    store_health = await request.app.state.store.health_check()
    cache_healthy = await request.app.state.cache.health_check()

    healthy = store_health.get("status") == "ok" and cache_healthy

    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "healthy" if healthy else "degraded",
            "store": store_health,
            "cache": {"status": "ok" if cache_healthy else "error"},
        },
    )
