"""Pydantic schemas for config action requests."""

from typing import Any, Optional

from pydantic import BaseModel, Field


class ConfigActionRequest(BaseModel):
    """
    A mutation request: an action name plus form-style parameters.

    Parameters are kept as posted (strings, numbers) and parsed by the
    action service.
    """

    action: str
    params: dict[str, Any] = Field(default_factory=dict)


class ConfigActionResponse(BaseModel):
    success: bool
    error: Optional[str] = None
