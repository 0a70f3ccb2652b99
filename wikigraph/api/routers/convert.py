"""Conversion endpoint.

Routes
------
POST /api/convert    Body: {"url": "https://en.wikipedia.org/wiki/..."}

Status codes: 200 on success, 400 when the URL is rejected, 500 when the
fetch, parse or graph write fails.  Fields without a value are left out of
the JSON body.
"""

from __future__ import annotations

import re
from typing import Any, Optional

from fastapi import APIRouter, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from wikigraph.convert import ConversionFailure, ConversionOutcome, convert_page
from wikigraph.errors import Stage

router = APIRouter()

_URL_PATTERN = re.compile(r"^(https?://).+")

_ERROR_PREFIX = {
    Stage.VALIDATION: "",
    Stage.FETCH: "Parsing error: ",
    Stage.PARSE: "Parsing error: ",
    Stage.PERSIST: "Neo4j write error: ",
}


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class ConvertRequest(BaseModel):
    url: str = Field(..., examples=["https://en.wikipedia.org/wiki/Graph_theory"])

    @field_validator("url")
    @classmethod
    def _check_url(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("url must not be blank")
        if not _URL_PATTERN.match(value):
            raise ValueError("url must start with http:// or https://")
        return value


class ConvertSummary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    nodes_created: Optional[int] = None
    relationships_created: Optional[int] = None
    title: Optional[str] = None


class ConvertResponse(BaseModel):
    status: str
    message: Optional[str] = None
    summary: Optional[ConvertSummary] = None

    @classmethod
    def success(cls, summary: ConvertSummary, message: Optional[str] = None) -> "ConvertResponse":
        return cls(status="SUCCESS", message=message, summary=summary)

    @classmethod
    def error(cls, message: str) -> "ConvertResponse":
        return cls(status="ERROR", message=message)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _respond(status_code: int, body: ConvertResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


def _validation_message(exc: RequestValidationError) -> str:
    messages = []
    for err in exc.errors():
        ctx_error = (err.get("ctx") or {}).get("error")
        if ctx_error is not None:
            messages.append(str(ctx_error))
            continue
        field = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        messages.append(f"{field}: {err['msg']}" if field else err["msg"])
    return "; ".join(messages) or "invalid request"


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer malformed convert requests with 400 and an ERROR body."""
    return _respond(400, ConvertResponse.error(_validation_message(exc)))


def outcome_response(outcome: ConversionOutcome) -> JSONResponse:
    """Map a conversion outcome onto the HTTP status and response body."""
    if isinstance(outcome, ConversionFailure):
        status_code = 400 if outcome.stage is Stage.VALIDATION else 500
        return _respond(status_code, ConvertResponse.error(_ERROR_PREFIX[outcome.stage] + outcome.message))

    summary = ConvertSummary(
        nodes_created=outcome.nodes_created,
        relationships_created=outcome.relationships_created,
        title=outcome.title,
    )
    return _respond(200, ConvertResponse.success(summary, message="Conversion completed"))


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ConvertResponse, "description": "Invalid request (URL validation failed)"},
    500: {"model": ConvertResponse, "description": "Error during fetching, parsing or graph writing"},
}


@router.post("/convert", response_model=ConvertResponse, responses=_RESPONSES)
def convert(body: ConvertRequest, request: Request) -> JSONResponse:
    """Parse a Wikipedia page and write it and its article links to Neo4j.

    The URL must use https and its host must be wikipedia.org or a subdomain.
    """
    outcome = convert_page(body.url, request.app.state.driver)
    return outcome_response(outcome)
