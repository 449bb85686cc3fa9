"""Response envelopes and request bodies for content endpoints."""

from typing import Any

from pydantic import BaseModel, Field

from folio.errors import ErrorKind


class ContentList(BaseModel):
    """GET /api/{entity} response; ``demo`` tells clients to show a sample-content banner."""

    success: bool = True
    data: Any
    demo: bool = False


class WriteOutcome(BaseModel):
    """Result of a tenant-scoped write."""

    success: bool
    data: Any = None
    error: str | None = None
    message: str | None = None
    kind: ErrorKind | None = Field(default=None, exclude=True)

    @classmethod
    def ok(cls, data: Any = None, message: str | None = None) -> "WriteOutcome":
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(cls, kind: ErrorKind, error: str) -> "WriteOutcome":
        return cls(success=False, error=error, kind=kind)


class ReorderItem(BaseModel):
    id: str
    sort_order: int


class ProjectImageCreate(BaseModel):
    """Metadata of an already uploaded file; url, path and name are checked by the gateway."""

    url: str | None = None
    path: str | None = None
    name: str | None = None
    original_name: str | None = None
    size: int | None = None
    type: str | None = None
    bucket: str | None = None
    order_index: int | None = None
