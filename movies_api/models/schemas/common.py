from __future__ import annotations
from pydantic import BaseModel

class ErrorResponse(BaseModel):
    error: str
    message: str | None = None

class ErrorEnvelope(BaseModel):
    detail: ErrorResponse
