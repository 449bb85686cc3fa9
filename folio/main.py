"""Folio FastAPI application."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from starlette.exceptions import HTTPException

from folio.api.auth import router as auth_router
from folio.api.content import content_router
from folio.api.domains import router as domains_router
from folio.api.gallery import router as gallery_router
from folio.api.health import VERSION
from folio.api.health import router as health_router
from folio.api.projects import router as projects_router
from folio.api.settings import router as settings_router
from folio.auth.identity import IdentityVerifier
from folio.config import Settings, settings
from folio.database import QueryExecutor, async_session_maker
from folio.gateway.content import ContentGateway
from folio.gateway.entities import ENTITIES
from folio.storage.repositories import find_domain_binding, find_store_config
from folio.tenancy.cache import DomainConfigCache, StoreConfig
from folio.tenancy.resolver import TenantResolver, owner_email_fallback

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Every error leaves the API as ``{"success": false, "error": ...}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed query strings and bodies are 400s in the same envelope."""
    message = "Invalid request"
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(
            str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")
        )
        message = f"{field}: {first['msg']}" if field else first["msg"]
    return JSONResponse(status_code=400, content={"success": False, "error": message})


def create_app(
    app_settings: Settings = settings,
    session_maker: async_sessionmaker[AsyncSession] | None = None,
) -> FastAPI:
    """Build the app; tests pass their own settings and session maker."""
    app = FastAPI(
        title="Folio - Multi-tenant Portfolio API",
        description="Resolves requests to portfolio owners and serves their tenant-scoped content",
        version=VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(HTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    executor = QueryExecutor(session_maker or async_session_maker)

    async def domain_lookup(variant: str):
        return await find_domain_binding(executor, variant)

    async def store_config_lookup(domain: str):
        return await find_store_config(executor, domain)

    app.state.settings = app_settings
    app.state.executor = executor
    app.state.verifier = IdentityVerifier(app_settings.jwt_secret, app_settings.jwt_algorithm)
    app.state.resolver = TenantResolver(
        app.state.verifier, domain_lookup, default_port=app_settings.default_dev_port
    )
    app.state.gateway = ContentGateway(executor)
    app.state.domain_cache = DomainConfigCache(
        store_config_lookup,
        default=StoreConfig(url=app_settings.supabase_url, anon_key=app_settings.supabase_anon_key),
    )
    app.state.owner_fallback = owner_email_fallback(executor, app_settings.portfolio_owner_email)

    app.include_router(health_router, tags=["Health"])
    app.include_router(auth_router, prefix="/api/auth", tags=["Auth"])
    app.include_router(settings_router, prefix="/api/settings", tags=["Settings"])
    app.include_router(gallery_router, prefix="/api/gallery", tags=["Gallery"])
    app.include_router(domains_router, prefix="/api/domains", tags=["Domains"])
    app.include_router(projects_router, prefix="/api/projects", tags=["Projects"])
    for spec in ENTITIES.values():
        app.include_router(content_router(spec), prefix=f"/api/{spec.name}", tags=[spec.label])

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {"service": "Folio", "version": VERSION, "docs": "/docs"}

    logger.info("Serving %d content entities", len(ENTITIES))
    return app


app = create_app()
