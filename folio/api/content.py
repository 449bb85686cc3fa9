"""Generic tenant-scoped CRUD endpoints, one router per registered entity."""

import logging
from typing import Any

from fastapi import APIRouter, Body, HTTPException, Query, Request, status
from pydantic import TypeAdapter, ValidationError

from folio.api.responses import outcome_response
from folio.auth.middleware import GatewayDep, OptionalIdentityDep, ResolverDep
from folio.errors import StorageFailure
from folio.gateway.content import WriteOperation
from folio.gateway.entities import EntitySpec
from folio.schemas.content import ContentList, ReorderItem
from folio.tenancy.resolver import RequestContext

logger = logging.getLogger(__name__)

_REORDER_ITEMS = TypeAdapter(list[ReorderItem])


def _tenant(identity) -> str | None:
    return identity.tenant_id if identity is not None else None


def reorder_items(body: Any, key: str) -> list[ReorderItem]:
    """Accept either a bare list or ``{key: [...]}``; raises 400 on anything else."""
    if isinstance(body, dict):
        body = body.get(key, body.get("items"))
    try:
        return _REORDER_ITEMS.validate_python(body or [])
    except ValidationError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Each item needs an id and an integer sort_order",
        ) from None


def content_router(spec: EntitySpec) -> APIRouter:
    """List/create/read/update/delete (and reorder, when sortable) for ``spec``."""
    router = APIRouter()
    entity = spec.name

    @router.get("", response_model=ContentList)
    async def list_content(
        request: Request,
        resolver: ResolverDep,
        gateway: GatewayDep,
        location: str | None = None,
        limit: int | None = Query(default=None, ge=1),
    ):
        """Public (domain-resolved, demo fallback) or dashboard (bearer token) listing."""
        fallback = request.app.state.owner_fallback if spec.owner_fallback else None
        resolution = await resolver.resolve(
            RequestContext.from_request(request), fallback, use_domain=spec.domain_resolution
        )
        filters = {"location": location, "limit": limit}
        try:
            return await gateway.list_for_tenant(
                entity, resolution.tenant_id, filters, public=not resolution.authenticated
            )
        except StorageFailure:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to fetch {entity}",
            ) from None

    @router.post("")
    async def create_content(
        identity: OptionalIdentityDep,
        gateway: GatewayDep,
        payload: dict[str, Any] = Body(...),
    ):
        outcome = await gateway.write_for_tenant(
            entity, _tenant(identity), WriteOperation.CREATE, payload
        )
        return outcome_response(outcome, success_status=status.HTTP_201_CREATED)

    if spec.sortable:

        @router.post("/reorder")
        async def reorder_content(
            identity: OptionalIdentityDep,
            gateway: GatewayDep,
            body: Any = Body(...),
        ):
            key = entity.split("-")[-1]
            outcome = await gateway.reorder(entity, _tenant(identity), reorder_items(body, key))
            return outcome_response(outcome)

    @router.get("/{entity_id}")
    async def get_content(entity_id: str, identity: OptionalIdentityDep, gateway: GatewayDep):
        outcome = await gateway.get_for_tenant(entity, _tenant(identity), entity_id)
        return outcome_response(outcome)

    @router.put("/{entity_id}")
    async def update_content(
        entity_id: str,
        identity: OptionalIdentityDep,
        gateway: GatewayDep,
        payload: dict[str, Any] = Body(...),
    ):
        outcome = await gateway.write_for_tenant(
            entity, _tenant(identity), WriteOperation.UPDATE, payload, entity_id
        )
        return outcome_response(outcome)

    @router.delete("/{entity_id}")
    async def delete_content(entity_id: str, identity: OptionalIdentityDep, gateway: GatewayDep):
        outcome = await gateway.write_for_tenant(
            entity, _tenant(identity), WriteOperation.DELETE, entity_id=entity_id
        )
        return outcome_response(outcome)

    return router
