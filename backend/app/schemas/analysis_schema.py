"""Pydantic schemas for the Launchpad HTTP endpoints.

Request fields are Optional on purpose: presence and length checks are
part of the analysis pipeline so that every endpoint reports them with
the same ``{"error": ...}`` body and status.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Requests ─────────────────────────────────────────────────────────────

class LoginRequest(BaseModel):
    key: Optional[str] = Field(default=None, description="Invite code as typed by the user")


class AnalyzeRequest(BaseModel):
    key: Optional[str] = Field(default=None, description="Invite code")
    idea: Optional[str] = Field(default=None, description="Startup idea, at least 3 characters")


class MockupRequest(_CamelModel):
    key: Optional[str] = None
    idea: Optional[str] = None
    startup_name: Optional[str] = Field(default=None, description="Name shown in the mockup")
    app_description: Optional[str] = Field(default=None, description="Main interface description")


# ── Responses ────────────────────────────────────────────────────────────

class LoginResponse(_CamelModel):
    valid: bool
    key_id: Optional[str] = None
    error: Optional[str] = None


class AnalysisRecordResponse(_CamelModel):
    """One history entry. ``data`` is the stored AnalysisData document."""

    id: str
    key_id: str
    idea: str
    data: Dict[str, Any] = Field(default_factory=dict)
    created_at: str = Field(..., description="ISO-8601 creation timestamp (UTC)")


class DeleteResponse(BaseModel):
    success: bool = True


class MockupResponse(_CamelModel):
    image: str = Field(..., description="Base64-encoded image data")
    mime_type: str = "image/png"


class ErrorResponse(BaseModel):
    error: str
    detail: Optional[str] = None
