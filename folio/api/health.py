"""Health and metrics endpoints."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text

from folio.auth.middleware import DomainCacheDep, ExecutorDep
from folio.gateway.entities import ENTITIES

router = APIRouter()

VERSION = "0.1.0"


@router.get("/health")
async def health(executor: ExecutorDep):
    """Health check endpoint; 503 when the database does not answer."""
    result = await executor.execute(text("SELECT 1"))
    body = {
        "status": "healthy" if result.success else "unhealthy",
        "database": "connected" if result.success else "disconnected",
        "version": VERSION,
    }
    return JSONResponse(status_code=200 if result.success else 503, content=body)


@router.get("/metrics")
async def metrics(domain_cache: DomainCacheDep):
    """Basic metrics endpoint for observability."""
    return {
        "service": "folio",
        "version": VERSION,
        "cached_domains": len(domain_cache),
        "entities": sorted(ENTITIES),
    }
