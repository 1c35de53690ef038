"""Schemas for the parent-student linking endpoints."""

from datetime import datetime
from typing import Any, Literal

from backend.app.schemas.base import CamelModel


class LinkingCodeResponse(CamelModel):
    success: bool = True
    code: str
    expires_at: datetime


class LinkRequestCreate(CamelModel):
    parent_id: str
    code: str


class LinkRequestCreated(CamelModel):
    success: bool = True
    message: str
    request_id: str


class PendingLinkRequest(CamelModel):
    id: str
    parent_id: str
    student_id: str
    status: str
    created_at: datetime
    parent_name: str
    parent_email: str


class LinkDecision(CamelModel):
    status: Literal["approved", "rejected"]


class SuccessResponse(CamelModel):
    success: bool = True


class LinkedStudent(CamelModel):
    id: str
    full_name: str
    avatar: str | None = None
    education_path: dict[str, Any] | None = None
    status: str
