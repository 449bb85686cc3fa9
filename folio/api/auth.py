"""Authentication endpoints."""

from fastapi import APIRouter, HTTPException, status

from folio.auth.middleware import ExecutorDep, IdentityDep
from folio.errors import StorageFailure
from folio.schemas.domains import DomainUser, DomainUserResponse
from folio.storage.repositories import find_user_by_id

router = APIRouter()


@router.get("/me", response_model=DomainUserResponse)
async def me(identity: IdentityDep, executor: ExecutorDep):
    """Profile of the bearer token's tenant."""
    try:
        user = await find_user_by_id(executor, identity.tenant_id)
    except StorageFailure:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch user"
        ) from None
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return DomainUserResponse(data=DomainUser(**user))
