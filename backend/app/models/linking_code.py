"""Linking codes a student shares with a parent."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, String, text
from sqlalchemy.orm import relationship

from backend.app.core.time import utc_now
from backend.app.db.base_class import Base


class LinkingCode(Base):
    __tablename__ = "linking_codes"

    id = Column(String(32), primary_key=True, index=True)
    student_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    code = Column(String(32), unique=True, index=True, nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    used = Column(Boolean, nullable=False, default=False)
    # The student's current code. Cleared once it expires, is used, or is replaced.
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    __table_args__ = (
        Index(
            "uq_linking_codes_active_student",
            "student_id",
            unique=True,
            sqlite_where=text("is_active = 1"),
            postgresql_where=text("is_active"),
        ),
    )

    student = relationship("User", back_populates="linking_codes", foreign_keys=[student_id])

    def __repr__(self):
        return f"<LinkingCode {self.code}>"
