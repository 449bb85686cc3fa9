"""Key/value settings endpoints."""

from typing import Any

from fastapi import APIRouter, Body, HTTPException, status

from folio.api.responses import outcome_response
from folio.auth.middleware import GatewayDep, OptionalIdentityDep, ResolutionDep
from folio.errors import StorageFailure
from folio.schemas.content import ContentList

router = APIRouter()


@router.get("", response_model=ContentList)
async def get_settings(resolution: ResolutionDep, gateway: GatewayDep):
    """Settings as one object; demo settings when no tenant resolves."""
    try:
        return await gateway.get_settings(resolution.tenant_id, public=not resolution.authenticated)
    except StorageFailure:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch settings"
        ) from None


@router.put("")
async def update_settings(
    identity: OptionalIdentityDep,
    gateway: GatewayDep,
    body: Any = Body(...),
):
    """Upsert the given keys for the authenticated tenant (body may nest them under "settings")."""
    values = body.get("settings", body) if isinstance(body, dict) else body
    tenant_id = identity.tenant_id if identity is not None else None
    outcome = await gateway.update_settings(tenant_id, values)
    return outcome_response(outcome)
