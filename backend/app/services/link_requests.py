"""Link request store: one row per (parent, student) pair, ever."""

from datetime import datetime
from typing import Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, aliased

from backend.app.core.exceptions import DuplicateLink, InvalidTransition, NotFound
from backend.app.models.parent_link import LINK_APPROVED, LINK_PENDING, LINK_REJECTED, ParentStudentLink
from backend.app.models.user import User
from backend.app.schemas.linking import LinkedStudent, PendingLinkRequest

DECISIONS = (LINK_APPROVED, LINK_REJECTED)


def create(
    db: Session,
    *,
    parent_id: str,
    student_id: str,
    now: datetime,
    id_factory: Callable[[], str],
) -> ParentStudentLink:
    """Insert a pending request and flush it. The caller commits."""
    link = ParentStudentLink(
        id=id_factory(),
        parent_id=parent_id,
        student_id=student_id,
        status=LINK_PENDING,
        created_at=now,
    )
    db.add(link)
    try:
        db.flush()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateLink() from exc
    return link


def get(db: Session, link_id: str) -> ParentStudentLink:
    link = db.query(ParentStudentLink).filter(ParentStudentLink.id == link_id).first()
    if not link:
        raise NotFound("Link request not found")
    return link


def set_status(db: Session, link_id: str, status: str, *, now: datetime) -> None:
    """Move a pending request to approved or rejected. Does not commit.

    The update is conditional on the row still being pending, so two
    overlapping decisions cannot both succeed.
    """
    if status not in DECISIONS:
        raise InvalidTransition(f"Unsupported decision '{status}'")
    updated = (
        db.query(ParentStudentLink)
        .filter(ParentStudentLink.id == link_id, ParentStudentLink.status == LINK_PENDING)
        .update(
            {ParentStudentLink.status: status, ParentStudentLink.decided_at: now},
            synchronize_session=False,
        )
    )
    if not updated:
        get(db, link_id)
        raise InvalidTransition()


def list_pending(db: Session, student_id: str) -> list[PendingLinkRequest]:
    rows = (
        db.query(ParentStudentLink, User)
        .join(User, ParentStudentLink.parent_id == User.id)
        .filter(
            ParentStudentLink.student_id == student_id,
            ParentStudentLink.status == LINK_PENDING,
        )
        .order_by(ParentStudentLink.created_at.asc())
        .all()
    )
    return [
        PendingLinkRequest(
            id=link.id,
            parent_id=link.parent_id,
            student_id=link.student_id,
            status=link.status,
            created_at=link.created_at,
            parent_name=parent.full_name,
            parent_email=parent.email,
        )
        for link, parent in rows
    ]


def list_approved_for_parent(db: Session, parent_id: str) -> list[LinkedStudent]:
    student = aliased(User)
    rows = (
        db.query(ParentStudentLink, student)
        .join(student, ParentStudentLink.student_id == student.id)
        .filter(
            ParentStudentLink.parent_id == parent_id,
            ParentStudentLink.status == LINK_APPROVED,
        )
        .order_by(ParentStudentLink.created_at.asc())
        .all()
    )
    return [
        LinkedStudent(
            id=stu.id,
            full_name=stu.full_name,
            avatar=stu.avatar,
            education_path=stu.education_path,
            status=link.status,
        )
        for link, stu in rows
    ]
