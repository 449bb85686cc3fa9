"""Domain endpoint schemas."""

from pydantic import BaseModel


class DomainConfigResponse(BaseModel):
    """GET /api/domains/config - null URL/key means "use the default store"."""

    success: bool = True
    supabase_url: str | None = None
    supabase_anon_key: str | None = None
    is_custom: bool = False


class DomainUser(BaseModel):
    id: str
    email: str
    name: str | None = None
    full_name: str | None = None
    avatar_url: str | None = None
    email_verified: int | None = None


class DomainUserResponse(BaseModel):
    success: bool = True
    data: DomainUser
