"""Parent-student linking workflow.

A student issues a linking code and shares it out of band. A parent redeems
the code, which creates a pending link request. The student then approves or
rejects the request; approval invalidates every code the student holds.

Redemption does not consume the code, so several parents may hold pending
requests for the same student at once. A (parent, student) pair can only
ever have one request, so a rejected parent cannot ask again.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable

from sqlalchemy.orm import Session

from backend.app.core.exceptions import (
    CodeCollision,
    CodeGenerationFailed,
    DuplicateLink,
    InvalidOrExpiredCode,
    LinkAlreadyExists,
)
from backend.app.core.ids import new_id
from backend.app.core.settings import get_settings
from backend.app.core.time import utc_now
from backend.app.models.linking_code import LinkingCode
from backend.app.models.parent_link import LINK_APPROVED, ParentStudentLink
from backend.app.schemas.linking import LinkedStudent, PendingLinkRequest
from backend.app.services import link_requests, linking_codes
from backend.app.services.audit import record_event
from backend.app.services.code_generator import make_code_factory
from backend.app.services.users import get_user

logger = logging.getLogger(__name__)


class LinkingWorkflow:
    """Orchestrates code issuance, redemption and the student's decision."""

    def __init__(
        self,
        db: Session,
        *,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = new_id,
        code_factory: Callable[[], str] | None = None,
        code_ttl: timedelta | None = None,
        max_attempts: int | None = None,
    ):
        settings = get_settings()
        self.db = db
        self.clock = clock
        self.id_factory = id_factory
        self.code_factory = code_factory or make_code_factory(
            prefix=settings.linking_code_prefix,
            length=settings.linking_code_length,
        )
        self.code_ttl = code_ttl or timedelta(hours=settings.linking_code_ttl_hours)
        self.max_attempts = max_attempts or settings.code_generation_attempts

    def request_code(self, student_id: str) -> LinkingCode:
        """Return the student's valid linking code, issuing a new one if needed.

        Raises:
            NotFound: the student does not exist.
            CodeGenerationFailed: every attempt produced a taken code.
        """
        student = get_user(self.db, student_id)
        now = self.clock()

        for attempt in range(1, self.max_attempts + 1):
            try:
                linking_code, created = linking_codes.issue(
                    self.db,
                    student_id=student.id,
                    now=now,
                    ttl=self.code_ttl,
                    code_factory=self.code_factory,
                    id_factory=self.id_factory,
                )
            except CodeCollision:
                logger.warning("Linking code collision for student %s (attempt %d/%d)", student_id, attempt, self.max_attempts)
                continue

            if created:
                logger.info("Issued linking code for student %s", student_id)
                record_event(self.db, "Linking Code Issued", f"Linking code issued for {student.full_name}", student.id, student.username)
            return linking_code

        logger.error("Giving up on linking code generation for student %s", student_id)
        raise CodeGenerationFailed()

    def redeem_code(self, parent_id: str, code: str) -> ParentStudentLink:
        """Turn a valid linking code into a pending link request.

        Raises:
            NotFound: the parent does not exist.
            InvalidOrExpiredCode: no unused, unexpired code matches.
            LinkAlreadyExists: the parent already requested this student.
        """
        parent = get_user(self.db, parent_id)
        now = self.clock()
        code = code.strip()

        linking_code = linking_codes.find_valid(self.db, code, now)
        if not linking_code:
            raise InvalidOrExpiredCode()
        student_id = linking_code.student_id

        try:
            link = link_requests.create(
                self.db,
                parent_id=parent.id,
                student_id=student_id,
                now=now,
                id_factory=self.id_factory,
            )
            # An approval may have invalidated the code since the lookup above.
            if not linking_codes.find_valid(self.db, code, now, for_update=True):
                raise InvalidOrExpiredCode()
            self.db.commit()
        except DuplicateLink as exc:
            raise LinkAlreadyExists() from exc
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(link)
        logger.info("Parent %s requested link to student %s", parent.id, student_id)
        record_event(self.db, "Link Request", f"{parent.full_name} requested a link to student {student_id}", parent.id, parent.username)
        return link

    def decide(self, request_id: str, decision: str) -> ParentStudentLink:
        """Apply the student's decision in a single transaction.

        Raises:
            NotFound: unknown request id.
            InvalidTransition: the request is not pending or the decision is unknown.
        """
        now = self.clock()
        try:
            link_requests.set_status(self.db, request_id, decision, now=now)
            link = link_requests.get(self.db, request_id)
            if decision == LINK_APPROVED:
                linking_codes.invalidate_all_for_student(self.db, link.student_id)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(link)
        logger.info("Link request %s %s", link.id, link.status)
        record_event(self.db, f"Link {decision.capitalize()}", f"Link request {link.id} from parent {link.parent_id} {decision}", link.student_id, link.student.username)
        return link

    def pending_requests(self, student_id: str) -> list[PendingLinkRequest]:
        return link_requests.list_pending(self.db, student_id)

    def linked_students(self, parent_id: str) -> list[LinkedStudent]:
        return link_requests.list_approved_for_parent(self.db, parent_id)
