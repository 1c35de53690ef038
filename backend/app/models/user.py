from sqlalchemy import JSON, Column, DateTime, String
from sqlalchemy.orm import relationship

from backend.app.core.time import utc_now
from backend.app.db.base_class import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, index=True)
    username = Column(String(150), unique=True, index=True, nullable=False)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    phone = Column(String(50), nullable=True)
    role = Column(String(20), nullable=False, default="STUDENT")
    status = Column(String(20), nullable=False, default="active")
    avatar = Column(String(512), nullable=True)
    language = Column(String(10), nullable=False, default="ar")
    # category, stage, branch, grade
    education_path = Column(JSON, nullable=True)
    join_date = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    linking_codes = relationship("LinkingCode", back_populates="student", foreign_keys="LinkingCode.student_id")
    parent_links = relationship("ParentStudentLink", back_populates="parent", foreign_keys="ParentStudentLink.parent_id")
    student_links = relationship("ParentStudentLink", back_populates="student", foreign_keys="ParentStudentLink.student_id")
