"""Uniform JSON envelope returned by every API route."""

from typing import Any, Optional

from pydantic import BaseModel


class APIResponse(BaseModel):
    """{success, message?, error?, data?}; unset keys are dropped on serialization."""

    success: bool
    message: Optional[str] = None
    error: Optional[str] = None
    data: Optional[Any] = None

    def to_content(self) -> dict:
        return self.model_dump(exclude_none=True)


def ok(message: Optional[str] = None, data: Any = None) -> dict:
    return APIResponse(success=True, message=message, data=data).to_content()


def fail(error: str) -> dict:
    return APIResponse(success=False, error=error).to_content()
