"""Linking code store.

A student holds at most one unused, unexpired code at a time. Issuance
reuses that code when it exists; otherwise it retires the student's stale
rows and inserts a new active one. The partial unique index on
``student_id WHERE is_active`` turns a concurrent double insert into an
integrity error, after which the winner's code is returned.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backend.app.core.exceptions import CodeCollision
from backend.app.models.linking_code import LinkingCode

logger = logging.getLogger(__name__)


def find_valid_for_student(db: Session, student_id: str, now: datetime) -> LinkingCode | None:
    return (
        db.query(LinkingCode)
        .filter(
            LinkingCode.student_id == student_id,
            LinkingCode.used.is_(False),
            LinkingCode.expires_at > now,
        )
        .order_by(LinkingCode.expires_at.desc())
        .first()
    )


def issue(
    db: Session,
    *,
    student_id: str,
    now: datetime,
    ttl: timedelta,
    code_factory: Callable[[], str],
    id_factory: Callable[[], str],
) -> tuple[LinkingCode, bool]:
    """Return the student's valid code, creating one if needed.

    The boolean is True when a new row was inserted. Raises CodeCollision
    when the generated code is already taken by any row.
    """
    existing = find_valid_for_student(db, student_id, now)
    if existing:
        return existing, False

    linking_code = LinkingCode(
        id=id_factory(),
        student_id=student_id,
        code=code_factory(),
        expires_at=now + ttl,
        used=False,
        is_active=True,
        created_at=now,
    )
    try:
        (
            db.query(LinkingCode)
            .filter(
                LinkingCode.student_id == student_id,
                LinkingCode.is_active.is_(True),
                or_(LinkingCode.used.is_(True), LinkingCode.expires_at <= now),
            )
            .update({LinkingCode.is_active: False}, synchronize_session=False)
        )
        db.add(linking_code)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        winner = find_valid_for_student(db, student_id, now)
        if winner:
            logger.info("Concurrent issuance for student %s, reusing code %s", student_id, winner.code)
            return winner, False
        raise CodeCollision() from exc

    db.refresh(linking_code)
    return linking_code, True


def find_valid(db: Session, code: str, now: datetime, *, for_update: bool = False) -> LinkingCode | None:
    query = db.query(LinkingCode).filter(
        LinkingCode.code == code,
        LinkingCode.used.is_(False),
        LinkingCode.expires_at > now,
    )
    if for_update:
        query = query.with_for_update()
    return query.first()


def invalidate_all_for_student(db: Session, student_id: str) -> int:
    """Mark every code of the student used. Runs in the caller's transaction."""
    return (
        db.query(LinkingCode)
        .filter(LinkingCode.student_id == student_id)
        .update({LinkingCode.used: True, LinkingCode.is_active: False}, synchronize_session=False)
    )
