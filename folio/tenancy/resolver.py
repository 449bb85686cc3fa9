"""
Request-to-tenant resolution.

Precedence is fixed: a verified bearer token wins, then the requesting domain
(explicit ``domain`` parameter, Origin, Referer), then an optional
caller-supplied fallback. Anything that fails degrades to "no tenant", which
readers turn into demo content and writers into an authentication error.
"""

import logging
import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum

from starlette.requests import Request

from folio.auth.identity import Identity, IdentityVerifier
from folio.database import QueryExecutor
from folio.storage.repositories import DomainBinding, find_user_id_by_email

logger = logging.getLogger(__name__)

DomainLookup = Callable[[str], Awaitable[DomainBinding | None]]
TenantFallback = Callable[[], Awaitable[str | None]]

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)


@dataclass(frozen=True)
class RequestContext:
    """The parts of a request resolution looks at."""

    authorization: str | None = None
    origin: str | None = None
    referer: str | None = None
    domain: str | None = None

    @classmethod
    def from_request(cls, request: Request) -> "RequestContext":
        return cls(
            authorization=request.headers.get("authorization"),
            origin=request.headers.get("origin"),
            referer=request.headers.get("referer"),
            domain=request.query_params.get("domain"),
        )

    @property
    def raw_domain(self) -> str | None:
        return self.domain or self.origin or self.referer


class ResolutionSource(str, Enum):
    AUTH = "auth"
    DOMAIN = "domain"
    FALLBACK = "fallback"
    NONE = "none"


@dataclass(frozen=True)
class Resolution:
    tenant_id: str | None
    source: ResolutionSource
    matched_domain: str | None = None
    identity: Identity | None = None

    @property
    def authenticated(self) -> bool:
        return self.source is ResolutionSource.AUTH


def extract_host(raw: str | None) -> str:
    """Reduce an origin/referer/domain string to ``host[:port]``."""
    if not raw:
        return ""
    value = _SCHEME_RE.sub("", raw.strip())
    for separator in ("/", "?", "#"):
        value = value.split(separator, 1)[0]
    return value.lower()


def domain_variants(host: str, default_port: str = ":3000") -> list[str]:
    """
    Candidate spellings of ``host`` as it may have been stored.

    Order: bare, http://, https://, default port stripped, http:// + stripped.
    Duplicates (e.g. when there is no port to strip) are dropped.
    """
    if not host:
        return []
    stripped = host
    if default_port and host.endswith(default_port):
        stripped = host[: -len(default_port)]
    candidates = [host, f"http://{host}", f"https://{host}", stripped, f"http://{stripped}"]
    return list(dict.fromkeys(candidates))


class TenantResolver:
    """Maps a request to a tenant id, or None. Never raises."""

    def __init__(
        self,
        verifier: IdentityVerifier,
        domain_lookup: DomainLookup,
        default_port: str = ":3000",
    ):
        self._verifier = verifier
        self._domain_lookup = domain_lookup
        self._default_port = default_port

    async def resolve(
        self,
        context: RequestContext,
        fallback: TenantFallback | None = None,
        use_domain: bool = True,
    ) -> Resolution:
        """
        Resolve ``context`` to a tenant.

        With ``use_domain`` False the requesting domain is ignored, so only a
        token or the fallback can name a tenant (for private entities).
        """
        identity = self._verifier.verify_header(context.authorization)
        if identity is not None:
            logger.debug("Resolved tenant %s from bearer token", identity.tenant_id)
            return Resolution(identity.tenant_id, ResolutionSource.AUTH, identity=identity)

        tenant_id, matched = None, None
        if use_domain:
            tenant_id, matched = await self._resolve_domain(context.raw_domain)
        if tenant_id:
            return Resolution(tenant_id, ResolutionSource.DOMAIN, matched_domain=matched)

        if fallback is not None:
            tenant_id = await self._resolve_fallback(fallback)
            if tenant_id:
                logger.debug("Resolved tenant %s from fallback", tenant_id)
                return Resolution(tenant_id, ResolutionSource.FALLBACK)

        logger.info("No tenant resolved for %r", context.raw_domain)
        return Resolution(None, ResolutionSource.NONE)

    async def resolve_tenant(
        self,
        context: RequestContext,
        fallback: TenantFallback | None = None,
        use_domain: bool = True,
    ) -> str | None:
        return (await self.resolve(context, fallback, use_domain)).tenant_id

    async def _resolve_domain(self, raw: str | None) -> tuple[str | None, str | None]:
        host = extract_host(raw)
        if not host:
            logger.debug("No origin or referer on request")
            return None, None
        for variant in domain_variants(host, self._default_port):
            try:
                binding = await self._domain_lookup(variant)
            except Exception:
                logger.exception("Domain lookup failed for %r", variant)
                continue
            if binding is None:
                continue
            if binding.status != 1:
                # Disabled bindings do not exist as far as resolution goes.
                logger.debug("Domain %r is disabled", binding.name)
                continue
            logger.debug("Domain variant %r matched %r", variant, binding.name)
            return binding.user_id, variant
        logger.debug("No enabled domain matched host %r", host)
        return None, None

    async def _resolve_fallback(self, fallback: TenantFallback) -> str | None:
        try:
            return await fallback()
        except Exception:
            logger.exception("Tenant fallback failed")
            return None


def owner_email_fallback(executor: QueryExecutor, email: str) -> TenantFallback | None:
    """Fallback resolving the configured portfolio owner by email; None when unset."""
    if not email:
        return None

    async def fallback() -> str | None:
        return await find_user_id_by_email(executor, email)

    return fallback
