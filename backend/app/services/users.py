"""Users collaborator: profile records and display fields."""

import logging
import secrets
from datetime import datetime
from typing import Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backend.app.core.exceptions import NotFound, UserAlreadyExists
from backend.app.core.ids import new_id
from backend.app.core.time import utc_now
from backend.app.models.user import User
from backend.app.schemas.user import EducationPath, UserCreate
from backend.app.services.audit import record_event

logger = logging.getLogger(__name__)

AVATAR_URL_TEMPLATE = "https://api.dicebear.com/7.x/avataaars/svg?seed={seed}"


def _default_username(email: str) -> str:
    return f"{email.split('@')[0]}{secrets.randbelow(1000)}"


def create_user(
    db: Session,
    user_in: UserCreate,
    *,
    id_factory: Callable[[], str] = new_id,
    now: datetime | None = None,
) -> User:
    username = user_in.username or _default_username(user_in.email)
    user = User(
        id=id_factory(),
        username=username,
        full_name=user_in.full_name,
        email=user_in.email,
        phone=user_in.phone,
        role=user_in.role,
        status="active",
        avatar=AVATAR_URL_TEMPLATE.format(seed=username),
        language="ar",
        join_date=now or utc_now(),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise UserAlreadyExists() from exc
    db.refresh(user)

    logger.info("Registered %s user %s", user.role, user.id)
    record_event(db, "User Registration", f"New {user.role} registered: {user.full_name}", user.id, user.username)
    return user


def get_user(db: Session, user_id: str) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFound("User not found")
    return user


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.join_date.asc()).all()


def update_education_path(db: Session, user_id: str, education_path: EducationPath) -> User:
    user = get_user(db, user_id)
    user.education_path = education_path.model_dump()
    db.commit()
    db.refresh(user)
    record_event(db, "Education Path Update", f"User {user.id} education path updated", user.id, user.username)
    return user
