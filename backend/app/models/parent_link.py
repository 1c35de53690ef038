"""Parent-student link requests and their approval status."""

from sqlalchemy import Column, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import relationship

from backend.app.core.time import utc_now
from backend.app.db.base_class import Base

LINK_PENDING = "pending"
LINK_APPROVED = "approved"
LINK_REJECTED = "rejected"


class ParentStudentLink(Base):
    __tablename__ = "parent_student_links"

    id = Column(String(32), primary_key=True, index=True)
    parent_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    student_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default=LINK_PENDING)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    decided_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        UniqueConstraint("parent_id", "student_id", name="uq_parent_student_link"),
    )

    parent = relationship("User", back_populates="parent_links", foreign_keys=[parent_id])
    student = relationship("User", back_populates="student_links", foreign_keys=[student_id])
