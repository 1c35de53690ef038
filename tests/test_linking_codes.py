from datetime import UTC, datetime, timedelta
from itertools import count

import pytest
from sqlalchemy.exc import IntegrityError

from backend.app.core.exceptions import CodeCollision
from backend.app.core.time import ensure_utc
from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine
from backend.app.models.linking_code import LinkingCode
from backend.app.schemas.user import UserCreate
from backend.app.services import linking_codes
from backend.app.services.users import create_user

NOW = datetime(2026, 3, 1, 9, 0, tzinfo=UTC)
TTL = timedelta(hours=24)
_ids = count(1)


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def next_id() -> str:
    return f"id-{next(_ids)}"


def make_student(db, email="student@example.com"):
    return create_user(db, UserCreate(full_name="Student", email=email, role="STUDENT"))


def issue(db, student_id, now=NOW, code="STU-AAAAAA"):
    return linking_codes.issue(
        db,
        student_id=student_id,
        now=now,
        ttl=TTL,
        code_factory=lambda: code,
        id_factory=next_id,
    )


def test_issue_creates_code_expiring_after_ttl(db):
    student = make_student(db)
    linking_code, created = issue(db, student.id)

    assert created is True
    assert linking_code.code == "STU-AAAAAA"
    assert ensure_utc(linking_code.expires_at) == NOW + TTL
    assert linking_code.used is False
    assert linking_code.is_active is True


def test_issue_reuses_valid_code(db):
    student = make_student(db)
    first, _ = issue(db, student.id)
    second, created = issue(db, student.id, now=NOW + timedelta(hours=5), code="STU-BBBBBB")

    assert created is False
    assert second.id == first.id
    assert second.code == "STU-AAAAAA"


def test_issue_after_expiry_retires_old_row(db):
    student = make_student(db)
    old, _ = issue(db, student.id)
    old_id = old.id

    fresh, created = issue(db, student.id, now=NOW + TTL + timedelta(minutes=1), code="STU-BBBBBB")

    assert created is True
    assert fresh.code == "STU-BBBBBB"
    retired = db.query(LinkingCode).filter(LinkingCode.id == old_id).one()
    assert retired.is_active is False
    assert retired.used is False
    assert db.query(LinkingCode).count() == 2


def test_issue_raises_collision_when_code_taken_by_other_student(db):
    first_student = make_student(db, "first@example.com")
    second_student = make_student(db, "second@example.com")
    issue(db, first_student.id, code="STU-SAME22")

    with pytest.raises(CodeCollision):
        issue(db, second_student.id, code="STU-SAME22")

    assert db.query(LinkingCode).filter(LinkingCode.student_id == second_student.id).count() == 0


def test_second_active_row_for_student_is_rejected_by_store(db):
    student = make_student(db)
    issue(db, student.id)

    db.add(
        LinkingCode(
            id=next_id(),
            student_id=student.id,
            code="STU-CCCCCC",
            expires_at=NOW + TTL,
            used=False,
            is_active=True,
        )
    )
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_find_valid_ignores_used_and_expired_codes(db):
    student = make_student(db)
    issue(db, student.id)

    assert linking_codes.find_valid(db, "STU-AAAAAA", NOW).student_id == student.id
    assert linking_codes.find_valid(db, "STU-AAAAAA", NOW + TTL) is None
    assert linking_codes.find_valid(db, "STU-ZZZZZZ", NOW) is None

    linking_codes.invalidate_all_for_student(db, student.id)
    db.commit()
    assert linking_codes.find_valid(db, "STU-AAAAAA", NOW) is None


def test_invalidate_all_for_student_marks_every_row(db):
    student = make_student(db)
    other = make_student(db, "other@example.com")
    issue(db, student.id)
    issue(db, student.id, now=NOW + TTL, code="STU-BBBBBB")
    issue(db, other.id, code="STU-OTHER2")

    updated = linking_codes.invalidate_all_for_student(db, student.id)
    db.commit()

    assert updated == 2
    rows = db.query(LinkingCode).filter(LinkingCode.student_id == student.id).all()
    assert all(row.used and not row.is_active for row in rows)
    assert linking_codes.find_valid(db, "STU-OTHER2", NOW) is not None
