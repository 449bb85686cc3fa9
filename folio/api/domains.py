"""Domain lookup endpoints."""

from fastapi import APIRouter, HTTPException, Query, status

from folio.auth.middleware import DomainCacheDep, ExecutorDep
from folio.errors import StorageFailure
from folio.schemas.domains import DomainConfigResponse, DomainUser, DomainUserResponse
from folio.storage.repositories import find_user_by_exact_domain

router = APIRouter()


@router.get("/config", response_model=DomainConfigResponse)
async def get_domain_config(
    domain_cache: DomainCacheDep,
    domain: str = Query(default=""),
):
    """Object-store config for a domain; nulls tell the client to use its defaults."""
    if not domain:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Domain parameter required"
        )
    config = await domain_cache.get(domain)
    if not config.is_custom:
        return DomainConfigResponse()
    return DomainConfigResponse(
        supabase_url=config.url, supabase_anon_key=config.anon_key, is_custom=True
    )


@router.get("/user", response_model=DomainUserResponse)
async def get_domain_user(executor: ExecutorDep, domain: str = Query(default="")):
    """Public profile of the tenant bound to exactly this domain."""
    if not domain:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Domain parameter is required"
        )
    try:
        user = await find_user_by_exact_domain(executor, domain)
    except StorageFailure:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to look up domain"
        ) from None
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Domain not found or inactive"
        )
    return DomainUserResponse(data=DomainUser(**user))
