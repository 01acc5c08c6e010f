"""Fetch result data models."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


# Base result wrapper for provider calls
class FetchResult(BaseModel, Generic[T]):
    """Result of a provider call with success/error handling.

    ``success=True`` with ``data=None`` means the call worked but the upstream
    had nothing usable; ``success=False`` means the call itself failed.
    """

    success: bool = Field(..., description="Whether the call completed without fault")
    data: T | None = Field(default=None, description="Call result data")
    error: str | None = Field(default=None, description="Error message if the call failed")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Additional metadata")
