from typing import Any, Dict

from pydantic import BaseModel, Field


class APIError(BaseModel):
    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class APIErrorResponse(BaseModel):
    error: APIError
