"""Project-specific endpoints: view counter and image attachments."""

from fastapi import APIRouter, Request, status

from folio.api.responses import outcome_response
from folio.auth.middleware import GatewayDep, OptionalIdentityDep, ResolutionDep
from folio.schemas.content import ProjectImageCreate

router = APIRouter()


@router.post("/{project_id}/view")
async def record_project_view(project_id: str, resolution: ResolutionDep, gateway: GatewayDep):
    """
    Count a view of a project belonging to the resolved tenant.

    The one write open to anonymous visitors: the tenant comes from the
    requesting domain (or a token), and only the counter of that tenant's own
    project can change.
    """
    outcome = await gateway.increment_views(resolution.tenant_id, project_id)
    return outcome_response(outcome)


@router.post("/{project_id}/images")
async def add_project_image(
    project_id: str,
    body: ProjectImageCreate,
    request: Request,
    identity: OptionalIdentityDep,
    gateway: GatewayDep,
):
    tenant_id = identity.tenant_id if identity is not None else None
    outcome = await gateway.add_project_image(
        tenant_id,
        project_id,
        body.model_dump(exclude_none=True),
        default_bucket=request.app.state.settings.storage_images_bucket,
    )
    return outcome_response(outcome, success_status=status.HTTP_201_CREATED)


@router.delete("/{project_id}/images")
async def delete_project_images(project_id: str, identity: OptionalIdentityDep, gateway: GatewayDep):
    tenant_id = identity.tenant_id if identity is not None else None
    outcome = await gateway.delete_project_images(tenant_id, project_id)
    return outcome_response(outcome)
