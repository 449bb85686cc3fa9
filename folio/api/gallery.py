"""Gallery endpoint backed by object storage."""

import logging

from fastapi import APIRouter, HTTPException, Request, status

from folio.auth.middleware import DomainCacheDep, GatewayDep, ResolutionDep
from folio.errors import StorageFailure
from folio.schemas.content import ContentList
from folio.storage.objects import ObjectLister
from folio.tenancy.resolver import RequestContext, extract_host

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=ContentList)
async def list_gallery(
    request: Request,
    resolution: ResolutionDep,
    gateway: GatewayDep,
    domain_cache: DomainCacheDep,
):
    """Images stored under the resolved tenant's prefix, from that domain's store."""
    host = extract_host(RequestContext.from_request(request).raw_domain)
    config = await domain_cache.get(host)
    lister = None
    if config.configured:
        lister = ObjectLister(
            config,
            bucket=request.app.state.settings.storage_images_bucket,
            timeout=request.app.state.settings.storage_timeout,
        )
    try:
        return await gateway.list_gallery(
            resolution.tenant_id, lister, public=not resolution.authenticated
        )
    except StorageFailure:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch gallery"
        ) from None
