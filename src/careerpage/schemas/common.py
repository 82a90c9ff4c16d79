"""Shared action result schemas."""

from typing import Any

from pydantic import BaseModel


class ActionResult(BaseModel):
    """Success marker returned by mutating actions."""

    success: bool = True


class ErrorResult(BaseModel):
    """Structured failure returned by mutating actions."""

    error: str
    details: Any | None = None
