"""Bearer-token authentication and service dependencies."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import APIKeyHeader

from folio.auth.identity import Identity, IdentityVerifier
from folio.database import QueryExecutor
from folio.gateway.content import ContentGateway
from folio.tenancy.cache import DomainConfigCache
from folio.tenancy.resolver import RequestContext, Resolution, TenantResolver

API_KEY_HEADER = APIKeyHeader(name="Authorization", auto_error=False)


def get_executor(request: Request) -> QueryExecutor:
    return request.app.state.executor


def get_verifier(request: Request) -> IdentityVerifier:
    return request.app.state.verifier


def get_resolver(request: Request) -> TenantResolver:
    return request.app.state.resolver


def get_gateway(request: Request) -> ContentGateway:
    return request.app.state.gateway


def get_domain_cache(request: Request) -> DomainConfigCache:
    return request.app.state.domain_cache


async def get_optional_identity(
    verifier: Annotated[IdentityVerifier, Depends(get_verifier)],
    auth_header: str | None = Depends(API_KEY_HEADER),
) -> Identity | None:
    """Identity of a valid bearer token, None for a missing or invalid one."""
    return verifier.verify_header(auth_header)


async def get_identity(
    identity: Annotated[Identity | None, Depends(get_optional_identity)],
    auth_header: str | None = Depends(API_KEY_HEADER),
) -> Identity:
    """Require a valid bearer token."""
    if identity is None:
        detail = "Invalid token" if auth_header else "Authentication required"
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)
    return identity


async def resolve_request(
    request: Request,
    resolver: Annotated[TenantResolver, Depends(get_resolver)],
) -> Resolution:
    """Auth -> domain resolution, without any caller fallback."""
    return await resolver.resolve(RequestContext.from_request(request))


# Type aliases for dependency injection
ExecutorDep = Annotated[QueryExecutor, Depends(get_executor)]
GatewayDep = Annotated[ContentGateway, Depends(get_gateway)]
ResolverDep = Annotated[TenantResolver, Depends(get_resolver)]
DomainCacheDep = Annotated[DomainConfigCache, Depends(get_domain_cache)]
OptionalIdentityDep = Annotated[Identity | None, Depends(get_optional_identity)]
IdentityDep = Annotated[Identity, Depends(get_identity)]
ResolutionDep = Annotated[Resolution, Depends(resolve_request)]
