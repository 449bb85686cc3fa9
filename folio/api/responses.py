"""Shared response helpers."""

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from folio.errors import HTTP_STATUS
from folio.schemas.content import WriteOutcome


def outcome_response(outcome: WriteOutcome, success_status: int = status.HTTP_200_OK) -> JSONResponse:
    """Render a WriteOutcome with the status code its error kind maps to."""
    code = success_status if outcome.success else HTTP_STATUS[outcome.kind]
    body = jsonable_encoder(outcome.model_dump(exclude_none=True))
    return JSONResponse(status_code=code, content=body)
