"""User schemas used for registration and responses."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import EmailStr

from backend.app.schemas.base import CamelModel


class EducationPath(CamelModel):
    category: Optional[str] = None
    stage: Optional[str] = None
    branch: Optional[str] = None
    grade: Optional[str] = None


class UserCreate(CamelModel):
    full_name: str
    email: EmailStr
    phone: Optional[str] = None
    role: Literal["ADMIN", "TEACHER", "STUDENT", "PARENT"] = "STUDENT"
    username: Optional[str] = None


class UserRead(CamelModel):
    id: str
    username: str
    full_name: str
    email: EmailStr
    phone: Optional[str] = None
    role: str
    status: str
    avatar: Optional[str] = None
    language: str
    education_path: Optional[EducationPath] = None
    join_date: datetime


class EducationPathUpdate(CamelModel):
    education_path: EducationPath
